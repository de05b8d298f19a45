"""Self-host web fonts served by Google Fonts.

Architecture
: `parse_stylesheet` turns a CSS response into immutable `FontFace` records,
  pairing the subset comments of the upstream format with the rules they
  annotate.
: `iter_family_stylesheets` groups faces by family, style and weight and
  yields, per family, a regenerated stylesheet plus the content-addressed
  `Route` table mapping new paths to original URLs. `build_routes` feeds the
  same results to a sink callable.
: `WebfontsClient` retrieves catalogs and stylesheets through a pluggable
  `Transport`, optionally backed by an on-disk `ResponseCache`. Publishers in
  `fontsmith.publish` download each routed asset for a directory or the
  preview server.
"""

from __future__ import annotations

from fontsmith.cache import CachingTransport, ResponseCache
from fontsmith.client import Webfont, WebfontsClient
from fontsmith.config import ClientConfig, load_config
from fontsmith.exceptions import (
    ConfigError,
    FetchError,
    FontsmithError,
    InvalidSrcError,
    InvalidSrcURLError,
    MissingCredentialsError,
    MissingPropertyError,
    StylesheetError,
    StylesheetSyntaxError,
    SubsetMismatchError,
    TLSCertificateError,
    UnknownPropertyError,
    UnresolvedFormatError,
)
from fontsmith.http import HttpResponse, LoggingTransport, RequestsTransport, Transport
from fontsmith.publish import DirectoryPublisher, MemoryPublisher, PublishedAsset
from fontsmith.query import Query, build_query
from fontsmith.routes import FamilyStylesheet, Route, build_routes, iter_family_stylesheets
from fontsmith.stylesheet import FontFace, parse_stylesheet, resolve_src_and_format
from fontsmith.version import get_version


__version__ = get_version()

__all__ = [
    "CachingTransport",
    "ClientConfig",
    "ConfigError",
    "DirectoryPublisher",
    "FamilyStylesheet",
    "FetchError",
    "FontFace",
    "FontsmithError",
    "HttpResponse",
    "InvalidSrcError",
    "InvalidSrcURLError",
    "LoggingTransport",
    "MemoryPublisher",
    "MissingCredentialsError",
    "MissingPropertyError",
    "PublishedAsset",
    "Query",
    "RequestsTransport",
    "ResponseCache",
    "Route",
    "StylesheetError",
    "StylesheetSyntaxError",
    "SubsetMismatchError",
    "TLSCertificateError",
    "Transport",
    "UnknownPropertyError",
    "UnresolvedFormatError",
    "Webfont",
    "WebfontsClient",
    "build_query",
    "build_routes",
    "get_version",
    "iter_family_stylesheets",
    "load_config",
    "parse_stylesheet",
    "resolve_src_and_format",
]
