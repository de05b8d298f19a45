"""Helpers shared by the CLI commands."""

from __future__ import annotations

from collections.abc import Sequence

from fontsmith.client import WebfontsClient
from fontsmith.stylesheet import FontFace

from .state import get_cli_state


def make_client() -> WebfontsClient:
    """Create a client from the configuration held by the CLI state."""
    return WebfontsClient(get_cli_state().config)


def normalise_prefix(prefix: str) -> str:
    """Return ``prefix`` with a leading and a trailing slash."""
    stripped = prefix.strip("/")
    return f"/{stripped}/" if stripped else "/"


def collect_faces(
    client: WebfontsClient,
    families: Sequence[str],
    *,
    all_formats: bool,
    variants: Sequence[str] | None = None,
    subsets: Sequence[str] | None = None,
    display: str | None = None,
    text: str | None = None,
) -> list[FontFace]:
    """Retrieve the faces of every family, in the order given."""
    options = {
        "variants": variants,
        "subsets": subsets,
        "display": display,
        "text": text,
    }
    faces: list[FontFace] = []
    console = get_cli_state().err_console
    for family in families:
        console.print(f"retrieving: {family}", highlight=False)
        if all_formats:
            faces.extend(client.all_font_faces(family, **options))
        else:
            faces.extend(client.font_faces(family, **options))
    return faces


__all__ = ["collect_faces", "make_client", "normalise_prefix"]
