"""Sinks that fetch routed assets and republish them under their new paths."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
import logging
from pathlib import Path

from fontsmith.constants import CONTENT_TYPES
from fontsmith.http import Transport, fetch_ok
from fontsmith.routes import Route


logger = logging.getLogger(__name__)

STYLESHEET_CONTENT_TYPE = "text/css; charset=utf-8"


def stylesheet_name(family: str) -> str:
    """Return the file name of the generated stylesheet for ``family``."""
    return f"{family}.css"


@dataclass(frozen=True, slots=True)
class PublishedAsset:
    """Bytes served for a generated path."""

    content_type: str
    body: bytes


def _download(transport: Transport, route: Route) -> PublishedAsset:
    response = fetch_ok(transport, route.url)
    content_type = response.content_type or CONTENT_TYPES.get(
        route.format, "application/octet-stream"
    )
    return PublishedAsset(content_type=content_type, body=response.body)


class MemoryPublisher:
    """Keep generated stylesheets and downloaded fonts in memory, keyed by path."""

    def __init__(self, transport: Transport, *, prefix: str) -> None:
        self._transport = transport
        self.prefix = prefix
        self.assets: dict[str, PublishedAsset] = {}
        self.families: list[str] = []

    def stylesheet_path(self, family: str) -> str:
        return self.prefix + stylesheet_name(family)

    def __call__(self, family: str, stylesheet: bytes, routes: Sequence[Route]) -> None:
        for route in routes:
            logger.debug("publishing %s from %s", route.path, route.url)
            self.assets[route.path] = _download(self._transport, route)
        self.assets[self.stylesheet_path(family)] = PublishedAsset(
            content_type=STYLESHEET_CONTENT_TYPE, body=stylesheet
        )
        self.families.append(family)

    def get(self, path: str) -> PublishedAsset | None:
        return self.assets.get(path)


class DirectoryPublisher:
    """Write generated stylesheets and downloaded fonts below ``root``.

    Font files are stored under their route name, stylesheets as
    ``<family>.css``. Existing font files are not downloaded again since
    route names are derived from the source URL.
    """

    def __init__(self, root: Path, transport: Transport) -> None:
        self.root = Path(root)
        self._transport = transport
        self.written: list[Path] = []

    def __call__(self, family: str, stylesheet: bytes, routes: Sequence[Route]) -> None:
        self.root.mkdir(parents=True, exist_ok=True)
        for route in routes:
            target = self.root / route.name
            if not target.exists():
                logger.debug("downloading %s to %s", route.url, target)
                target.write_bytes(_download(self._transport, route).body)
            self.written.append(target)
        target = self.root / stylesheet_name(family)
        target.write_bytes(stylesheet)
        self.written.append(target)


__all__ = [
    "STYLESHEET_CONTENT_TYPE",
    "DirectoryPublisher",
    "MemoryPublisher",
    "PublishedAsset",
    "stylesheet_name",
]
