"""Static lookup tables shared by the client and the route builder."""

from __future__ import annotations

from types import MappingProxyType


STYLESHEET_URL = "https://fonts.googleapis.com/css"
CATALOG_URL = "https://www.googleapis.com/webfonts/v1/webfonts"
CHROME_VERSIONS_URL = (
    "https://versionhistory.googleapis.com/v1/chrome/platforms/{platform}/channels/{channel}/versions"
)
CHROME_USER_AGENT = (
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/{version} Safari/537.36"
)

# User agents that force the service to return URLs for a given file type.
USER_AGENTS = MappingProxyType(
    {
        "eot": "Mozilla/4.0 (compatible; MSIE 8.0; Windows NT 6.1; Trident/4.0)",
        "svg": (
            "Mozilla/4.0 (iPad; CPU OS 4_0_1 like Mac OS X) AppleWebKit/534.46 "
            "(KHTML, like Gecko) Version/4.1 Mobile/9A405 Safari/7534.48.3"
        ),
        "ttf": (
            "Mozilla/5.0 (Unknown; Linux x86_64) AppleWebKit/538.1 "
            "(KHTML, like Gecko) Safari/538.1 Daum/4.1"
        ),
        "woff2": "Mozilla/5.0 (Windows NT 6.1; WOW64; rv:40.0) Gecko/20100101 Firefox/40.0",
        "woff": "Mozilla/5.0 (Windows NT 6.1; WOW64; rv:27.0) Gecko/20100101 Firefox/27.0",
    }
)

# Order in which all_font_faces() walks USER_AGENTS.
RETRIEVAL_ORDER = ("eot", "svg", "ttf", "woff2", "woff")

# Order of url() entries in generated src declarations, eot is handled apart.
FORMAT_PREFERENCE = ("woff2", "woff", "ttf", "svg")

# CSS format() hints emitted for each file format.
FORMAT_HINTS = MappingProxyType(
    {
        "eot": "embedded-opentype",
        "woff2": "woff2",
        "woff": "woff",
        "ttf": "truetype",
        "otf": "opentype",
        "svg": "svg",
    }
)

# Reverse lookup for faces whose format came from a format() hint.
FORMAT_ALIASES = MappingProxyType({hint: key for key, hint in FORMAT_HINTS.items()})

CONTENT_TYPES = MappingProxyType(
    {
        "eot": "application/vnd.ms-fontobject",
        "woff2": "font/woff2",
        "woff": "font/woff",
        "ttf": "font/ttf",
        "otf": "font/otf",
        "svg": "image/svg+xml",
    }
)


__all__ = [
    "CATALOG_URL",
    "CHROME_USER_AGENT",
    "CHROME_VERSIONS_URL",
    "CONTENT_TYPES",
    "FORMAT_ALIASES",
    "FORMAT_HINTS",
    "FORMAT_PREFERENCE",
    "RETRIEVAL_ORDER",
    "STYLESHEET_URL",
    "USER_AGENTS",
]
