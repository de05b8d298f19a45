"""On-disk cache for HTTP responses.

Each entry lives in ``<root>/<xx>/<key>.json`` where ``key`` is derived from
the URL and the request headers. Bodies are stored gzip-compressed and
base64-encoded next to the status code and a whitelisted subset of headers.
"""

from __future__ import annotations

import base64
from collections.abc import Callable, Mapping
import gzip
import hashlib
import json
import logging
import os
from pathlib import Path
import tempfile
import time
from typing import Any

from requests.structures import CaseInsensitiveDict

from fontsmith.http import HttpResponse, Transport
from fontsmith.user_dir import get_user_dir


logger = logging.getLogger(__name__)

CACHE_NAMESPACE = "http"
CACHE_SCHEMA_VERSION = 1
DEFAULT_TTL = 24 * 60 * 60
HEADER_WHITELIST = ("Date", "Set-Cookie", "Content-Type", "Location")


def default_cache_dir() -> Path:
    """Return the default response cache directory."""
    return get_user_dir().cache_dir(CACHE_NAMESPACE, create=False)


def cache_key(url: str, headers: Mapping[str, str] | None = None) -> str:
    """Return the cache key of a GET request."""
    digest = hashlib.sha256()
    digest.update(url.encode("utf-8"))
    for name, value in sorted((k.lower(), v) for k, v in (headers or {}).items()):
        digest.update(b"\0")
        digest.update(f"{name}:{value}".encode())
    return digest.hexdigest()


class ResponseCache:
    """Persist HTTP responses on disk with a time-to-live."""

    def __init__(
        self,
        root: Path | None = None,
        *,
        ttl: float = DEFAULT_TTL,
        header_whitelist: tuple[str, ...] = HEADER_WHITELIST,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.root = root or default_cache_dir()
        self.ttl = ttl
        self.header_whitelist = header_whitelist
        self._clock = clock

    def path_for(self, key: str) -> Path:
        return self.root / key[:2] / f"{key}.json"

    def load(self, key: str) -> HttpResponse | None:
        """Return the cached response for ``key`` when present and fresh."""
        path = self.path_for(key)
        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return None
        except (OSError, ValueError):
            logger.debug("discarding unreadable cache entry %s", path)
            return None
        if payload.get("schema") != CACHE_SCHEMA_VERSION:
            return None
        if self._clock() - float(payload.get("stored_at", 0)) > self.ttl:
            return None
        try:
            body = gzip.decompress(base64.b64decode(payload["body"]))
        except (KeyError, ValueError, OSError):
            logger.debug("discarding corrupt cache entry %s", path)
            return None
        return HttpResponse(
            status_code=int(payload["status_code"]),
            headers=CaseInsensitiveDict(payload.get("headers", {})),
            body=body,
        )

    def store(self, key: str, response: HttpResponse) -> None:
        """Persist ``response`` atomically."""
        headers = {
            name: response.headers[name]
            for name in self.header_whitelist
            if name in response.headers
        }
        payload: dict[str, Any] = {
            "schema": CACHE_SCHEMA_VERSION,
            "stored_at": self._clock(),
            "status_code": response.status_code,
            "headers": headers,
            "body": base64.b64encode(gzip.compress(response.body)).decode("ascii"),
        }
        path = self.path_for(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(payload, handle)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise


class CachingTransport:
    """Serve GET requests from a :class:`ResponseCache` before hitting the network.

    Error responses (status >= 400) are passed through without being stored.
    """

    def __init__(self, transport: Transport, cache: ResponseCache | None = None) -> None:
        self._transport = transport
        self.cache = cache or ResponseCache()

    def fetch(self, url: str, headers: Mapping[str, str] | None = None) -> HttpResponse:
        key = cache_key(url, headers)
        cached = self.cache.load(key)
        if cached is not None:
            logger.debug("cache hit %s", url)
            return cached
        response = self._transport.fetch(url, headers)
        if response.status_code < 400:
            self.cache.store(key, response)
        return response


__all__ = [
    "CACHE_NAMESPACE",
    "CACHE_SCHEMA_VERSION",
    "DEFAULT_TTL",
    "HEADER_WHITELIST",
    "CachingTransport",
    "ResponseCache",
    "cache_key",
    "default_cache_dir",
]
