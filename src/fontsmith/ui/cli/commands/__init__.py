"""CLI command implementations exposed via `fontsmith.ui.cli`."""

from __future__ import annotations

from .fonts import export, faces, families
from .serve import serve
from .stylesheet import parse, routes


__all__ = ["export", "faces", "families", "parse", "routes", "serve"]
