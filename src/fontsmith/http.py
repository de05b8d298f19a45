"""HTTP transports used to retrieve stylesheets, catalogs and font files."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
import logging
import ssl
from typing import Protocol, runtime_checkable

import requests
from requests.structures import CaseInsensitiveDict

from fontsmith.exceptions import FetchError, TLSCertificateError


logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class HttpResponse:
    """Status, headers and body of a completed request."""

    status_code: int
    headers: CaseInsensitiveDict = field(default_factory=CaseInsensitiveDict)
    body: bytes = b""

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def content_type(self) -> str | None:
        return self.headers.get("Content-Type")

    def text(self, encoding: str = "utf-8") -> str:
        return self.body.decode(encoding, errors="replace")


@runtime_checkable
class Transport(Protocol):
    """Anything able to GET a URL with a given header set."""

    def fetch(self, url: str, headers: Mapping[str, str] | None = None) -> HttpResponse: ...


def _tls_help(url: str) -> str:
    return (
        "TLS certificate verification failed while downloading "
        f"'{url}'. On macOS run the Python 'Install Certificates.command' "
        "(from the python.org installer). On Windows run 'py -m pip install --upgrade certifi'. "
        "On Linux install your 'ca-certificates' package (apt/yum/apk). "
        "Also check system date/time and any proxy or corporate SSL inspection."
    )


def _is_cert_error(error: BaseException) -> bool:
    current: BaseException | None = error
    visited: set[int] = set()
    while current is not None and id(current) not in visited:
        visited.add(id(current))
        if isinstance(current, ssl.SSLCertVerificationError):
            return True
        for arg in getattr(current, "args", ()):
            if isinstance(arg, ssl.SSLCertVerificationError):
                return True
            reason = getattr(arg, "reason", None)
            if isinstance(reason, ssl.SSLCertVerificationError):
                return True
        current = current.__cause__ or current.__context__
    return "CERTIFICATE_VERIFY_FAILED" in str(error)


class RequestsTransport:
    """Transport backed by a :class:`requests.Session`."""

    def __init__(
        self,
        *,
        session: requests.Session | None = None,
        timeout: float = 30.0,
    ) -> None:
        self._session = session or requests.Session()
        self._timeout = timeout

    def fetch(self, url: str, headers: Mapping[str, str] | None = None) -> HttpResponse:
        try:
            response = self._session.get(url, headers=dict(headers or {}), timeout=self._timeout)
        except requests.exceptions.SSLError as exc:
            if _is_cert_error(exc):
                raise TLSCertificateError(url, _tls_help(url)) from exc
            raise FetchError(url, f"unable to fetch '{url}': {exc}") from exc
        except requests.RequestException as exc:
            raise FetchError(url, f"unable to fetch '{url}': {exc}") from exc
        return HttpResponse(
            status_code=response.status_code,
            headers=CaseInsensitiveDict(response.headers),
            body=response.content,
        )

    def close(self) -> None:
        self._session.close()


class LoggingTransport:
    """Wrap a transport and log every request and response at DEBUG level."""

    def __init__(self, transport: Transport, *, logger_obj: logging.Logger | None = None) -> None:
        self._transport = transport
        self._logger = logger_obj or logger

    def fetch(self, url: str, headers: Mapping[str, str] | None = None) -> HttpResponse:
        self._logger.debug("GET %s", url)
        if headers:
            for name, value in headers.items():
                self._logger.debug("  %s: %s", name, value)
        response = self._transport.fetch(url, headers)
        self._logger.debug(
            "%d %s (%d bytes, %s)",
            response.status_code,
            url,
            len(response.body),
            response.content_type or "no content type",
        )
        return response


def fetch_ok(transport: Transport, url: str, headers: Mapping[str, str] | None = None) -> HttpResponse:
    """Fetch ``url`` and raise :class:`FetchError` unless the status is 200."""
    response = transport.fetch(url, headers)
    if response.status_code != 200:
        raise FetchError(
            url,
            f"status code {response.status_code} != 200 for '{url}'",
            status_code=response.status_code,
        )
    return response


__all__ = [
    "HttpResponse",
    "LoggingTransport",
    "RequestsTransport",
    "Transport",
    "fetch_ok",
]
