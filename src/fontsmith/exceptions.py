"""Exception hierarchy shared by the parser, the route builder and the glue."""

from __future__ import annotations


class FontsmithError(RuntimeError):
    """Base exception for every failure raised by fontsmith."""


class StylesheetError(FontsmithError):
    """Raised when a stylesheet cannot be turned into font faces."""


class StylesheetSyntaxError(StylesheetError):
    """Raised when the CSS itself cannot be parsed."""


class UnknownPropertyError(StylesheetError):
    """Raised when a ``@font-face`` rule declares an unsupported property."""

    def __init__(self, property_name: str) -> None:
        super().__init__(f"unknown @font-face property {property_name!r}")
        self.property = property_name


class MissingPropertyError(StylesheetError):
    """Raised when a ``@font-face`` rule lacks a mandatory property."""

    def __init__(self, property_name: str) -> None:
        super().__init__(f"@font-face rule is missing {property_name!r}")
        self.property = property_name


class InvalidSrcError(StylesheetError):
    """Raised when a ``src`` value does not hold exactly one ``url()``."""

    def __init__(self, value: str) -> None:
        super().__init__(f"invalid src {value!r}")
        self.value = value


class InvalidSrcURLError(StylesheetError):
    """Raised when the URL inside ``src`` cannot be parsed."""

    def __init__(self, url: str) -> None:
        super().__init__(f"invalid src url {url!r}")
        self.url = url


class UnresolvedFormatError(StylesheetError):
    """Raised when neither the URL nor a ``format()`` hint names the format."""

    def __init__(self, url: str) -> None:
        super().__init__(f"unable to determine font format for {url!r}")
        self.url = url


class SubsetMismatchError(StylesheetError):
    """Raised when subset comments cannot be paired with the parsed rules."""

    def __init__(self, markers: int, faces: int) -> None:
        super().__init__(
            f"found {markers} subset comment(s) for {faces} @font-face rule(s)"
        )
        self.markers = markers
        self.faces = faces


class FetchError(FontsmithError):
    """Raised when a remote resource cannot be retrieved."""

    def __init__(self, url: str, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class TLSCertificateError(FetchError):
    """Raised when TLS certificate verification fails during downloads."""


class MissingCredentialsError(FontsmithError):
    """Raised when the catalog is queried without an API key or token."""


class ConfigError(FontsmithError):
    """Raised when configuration data is invalid."""


def exception_messages(exc: BaseException) -> list[str]:
    """Return the collected message chain for an exception and its causes."""
    messages: list[str] = []
    visited: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in visited:
        visited.add(id(current))
        text = str(current).strip()
        if text:
            first_line = text.splitlines()[0].strip()
            if first_line:
                messages.append(first_line)
        current = current.__cause__ or current.__context__
    return messages


def exception_hint(exc: BaseException) -> str | None:
    """Return the most specific message available for an exception chain."""
    messages = exception_messages(exc)
    return messages[-1] if messages else None


__all__ = [
    "ConfigError",
    "FetchError",
    "FontsmithError",
    "InvalidSrcError",
    "InvalidSrcURLError",
    "MissingCredentialsError",
    "MissingPropertyError",
    "StylesheetError",
    "StylesheetSyntaxError",
    "SubsetMismatchError",
    "TLSCertificateError",
    "UnknownPropertyError",
    "UnresolvedFormatError",
    "exception_hint",
    "exception_messages",
]
