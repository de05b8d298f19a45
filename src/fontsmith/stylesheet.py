"""Parse ``@font-face`` stylesheets into structured font faces.

The upstream service annotates each ``@font-face`` rule with a comment naming
the subset it covers::

    /* latin-ext */
    @font-face {
      font-family: 'Roboto';
      font-style: normal;
      font-weight: 400;
      src: url(https://fonts.gstatic.com/s/roboto/v30/KFOmCnqEu92Fr1Mu7GxKOzY.woff2) format('woff2');
      unicode-range: U+0100-02AF, U+0304, U+0308;
    }

Comments are not part of the CSS object model, so subsets are collected from
the raw text and paired with the parsed rules positionally in a separate step
(:func:`pair_subsets`).
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field, replace
import posixpath
import re
from typing import Any
from urllib.parse import urljoin, urlsplit

import tinycss2

from fontsmith.exceptions import (
    InvalidSrcError,
    InvalidSrcURLError,
    MissingPropertyError,
    StylesheetSyntaxError,
    SubsetMismatchError,
    UnknownPropertyError,
    UnresolvedFormatError,
)


SUBSET_RE = re.compile(r"^/\*\s+([a-z0-9-]+)\s+\*/$", re.MULTILINE)
SRC_RE = re.compile(
    r"""^url\(\s*['"]?([^'")]+?)['"]?\s*\)(?:\s+format\(\s*['"]([^'"]+)['"]\s*\))?$""",
    re.MULTILINE,
)
_UNICODE_RANGE_RE = re.compile(r"[Uu]\+[0-9A-Fa-f?]{1,6}(?:-[0-9A-Fa-f]{1,6})?")

DEFAULT_STYLE = "normal"
DEFAULT_WEIGHT = "400"


@dataclass(frozen=True, slots=True)
class FontFace:
    """One parsed ``@font-face`` rule."""

    family: str
    style: str
    weight: str
    src: str
    format: str
    subset: str | None = None
    display: str | None = None
    stretch: str | None = None
    unicode_range: tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-ready mapping keyed by CSS property names."""
        payload: dict[str, Any] = {
            "subset": self.subset,
            "font-family": self.family,
            "font-style": self.style,
            "font-weight": self.weight,
            "font-display": self.display,
            "font-stretch": self.stretch,
            "src": self.src,
            "format": self.format,
            "unicode-range": list(self.unicode_range),
        }
        return {key: value for key, value in payload.items() if value}


def _normalise_newlines(text: str) -> str:
    # Mirrors the preprocessing done by the tinycss2 tokenizer so that
    # source_line/source_column point into the same text. A leading byte
    # order mark is dropped; tinycss2 would read it as a selector.
    text = text.removeprefix("\ufeff")
    return text.replace("\r\n", "\n").replace("\r", "\n").replace("\f", "\n")


class _SourceText:
    """Reconstruct declaration values exactly as they were written."""

    def __init__(self, text: str) -> None:
        self._text = text
        self._line_starts = [0] + [match.end() for match in re.finditer("\n", text)]

    def offset(self, node: Any) -> int:
        return self._line_starts[node.source_line - 1] + node.source_column - 1

    def raw_value(self, nodes: Iterable[Any]) -> str:
        """Return a declaration value with unicode ranges as they were written.

        Unicode ranges lose their zero padding when tinycss2 serializes
        them, so each one is read back from the source text at its own
        position. Every other token is serialized.
        """
        parts = []
        for node in nodes:
            if node.type == "unicode-range":
                match = _UNICODE_RANGE_RE.match(self._text, self.offset(node))
                if match:
                    parts.append(match.group(0))
                    continue
            parts.append(node.serialize())
        return "".join(parts).strip()

    @staticmethod
    def value_text(nodes: Iterable[Any]) -> str:
        return "".join(node.serialize() for node in nodes).strip()


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in {"'", '"'}:
        return value[1:-1]
    return value


def _family_value(nodes: Sequence[Any], source: _SourceText) -> str:
    meaningful = [node for node in nodes if node.type != "whitespace"]
    if len(meaningful) == 1 and meaningful[0].type == "string":
        return meaningful[0].value
    return _unquote(source.value_text(nodes))


def resolve_src_and_format(value: str, *, base_url: str | None = None) -> tuple[str, str]:
    """Return the URL and the file format named by a ``src`` declaration.

    The format comes from the URL's file extension when it has one, and from
    the explicit ``format()`` hint otherwise.
    """
    matches = SRC_RE.findall(value)
    if len(matches) != 1:
        raise InvalidSrcError(value)
    url, hint = matches[0]
    try:
        parts = urlsplit(url)
        _ = parts.port
    except ValueError as exc:
        raise InvalidSrcURLError(url) from exc
    if base_url:
        url = urljoin(base_url, url)

    extension = posixpath.splitext(posixpath.basename(parts.path))[1]
    file_format = extension.lstrip(".").lower() or hint
    if not file_format:
        raise UnresolvedFormatError(url)
    return url, file_format


def find_subsets(css_text: str) -> list[str]:
    """Return the subset comment tokens in document order."""
    return SUBSET_RE.findall(_normalise_newlines(css_text))


def pair_subsets(
    faces: Sequence[FontFace],
    subsets: Sequence[str],
    *,
    strict: bool = True,
) -> list[FontFace]:
    """Attach subset markers to faces by position.

    Without markers the faces are returned untouched. When ``strict`` is set,
    any difference between the number of markers and faces is an error;
    otherwise the first ``len(subsets)`` faces receive a marker each.
    """
    if not subsets:
        return list(faces)
    if strict and len(subsets) != len(faces):
        raise SubsetMismatchError(len(subsets), len(faces))
    paired: list[FontFace] = []
    for index, face in enumerate(faces):
        if index < len(subsets):
            face = replace(face, subset=subsets[index])
        paired.append(face)
    return paired


def _font_face_rules(text: str) -> list[Any]:
    rules = []
    for node in tinycss2.parse_stylesheet(text, skip_comments=True, skip_whitespace=True):
        if node.type == "error":
            raise StylesheetSyntaxError(
                f"line {node.source_line}, column {node.source_column}: {node.message}"
            )
        if node.type == "at-rule" and node.lower_at_keyword == "font-face":
            if node.content is None:
                raise StylesheetSyntaxError(
                    f"line {node.source_line}: @font-face rule without a block"
                )
            rules.append(node)
    return rules


def _parse_rule(rule: Any, source: _SourceText, base_url: str | None) -> FontFace:
    values: dict[str, Any] = {}
    contents = tinycss2.parse_blocks_contents(
        rule.content, skip_comments=True, skip_whitespace=True
    )
    for node in contents:
        if node.type == "error":
            raise StylesheetSyntaxError(
                f"line {node.source_line}, column {node.source_column}: {node.message}"
            )
        if node.type != "declaration":
            raise StylesheetSyntaxError(
                f"line {node.source_line}: unexpected nested rule in @font-face"
            )

        name = node.lower_name
        if name == "font-family":
            values["family"] = _family_value(node.value, source)
        elif name == "font-style":
            values["style"] = source.value_text(node.value)
        elif name == "font-weight":
            values["weight"] = source.value_text(node.value)
        elif name == "font-display":
            values["display"] = source.value_text(node.value)
        elif name == "font-stretch":
            values["stretch"] = source.value_text(node.value)
        elif name == "src":
            values["src"], values["format"] = resolve_src_and_format(
                source.value_text(node.value), base_url=base_url
            )
        elif name == "unicode-range":
            values["unicode_range"] = tuple(
                item.strip()
                for item in source.raw_value(node.value).split(",")
                if item.strip()
            )
        else:
            raise UnknownPropertyError(node.name)

    if not values.get("family"):
        raise MissingPropertyError("font-family")
    if "src" not in values:
        raise MissingPropertyError("src")
    values.setdefault("style", DEFAULT_STYLE)
    values.setdefault("weight", DEFAULT_WEIGHT)
    return FontFace(**values)


def parse_stylesheet(
    css_text: str,
    *,
    base_url: str | None = None,
    strict_subsets: bool = True,
) -> list[FontFace]:
    """Parse every ``@font-face`` rule in ``css_text``.

    Any malformed rule fails the whole parse; there is no partial result.
    ``base_url`` resolves relative ``src`` URLs.
    """
    text = _normalise_newlines(css_text)
    source = _SourceText(text)
    faces = [_parse_rule(rule, source, base_url) for rule in _font_face_rules(text)]
    return pair_subsets(faces, find_subsets(text), strict=strict_subsets)


__all__ = [
    "DEFAULT_STYLE",
    "DEFAULT_WEIGHT",
    "SRC_RE",
    "SUBSET_RE",
    "FontFace",
    "find_subsets",
    "pair_subsets",
    "parse_stylesheet",
    "resolve_src_and_format",
]
