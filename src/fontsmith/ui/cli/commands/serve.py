"""Implementation of the `fontsmith serve` preview command."""

from __future__ import annotations

from typing import Annotated

import typer
import uvicorn

from fontsmith.publish import MemoryPublisher
from fontsmith.routes import build_routes
from fontsmith.server import DEFAULT_TEXT, create_app
from fontsmith.stylesheet import FontFace

from .._options import PrefixOption
from ..state import emit_warning, get_cli_state
from ..utils import make_client, normalise_prefix


def _parse_listen(value: str) -> tuple[str, int]:
    host, _, port = value.rpartition(":")
    try:
        return host or "0.0.0.0", int(port)  # noqa: S104
    except ValueError as exc:
        raise typer.BadParameter(f"invalid listen address {value!r}") from exc


def serve(
    family: Annotated[
        list[str] | None,
        typer.Argument(
            metavar="[FAMILY]...",
            help="Families to preview. Every catalog family is used when omitted.",
        ),
    ] = None,
    listen: Annotated[str, typer.Option("--listen", "-l", help="Address to listen on.")] = ":9090",
    text: Annotated[str, typer.Option("--text", help="Preview text.")] = DEFAULT_TEXT,
    display: Annotated[str, typer.Option("--display", help="font-display value.")] = "block",
    prefix: PrefixOption = "/_/",
) -> None:
    """Retrieve WOFF2 faces and serve them with a preview page."""
    host, port = _parse_listen(listen)
    client = make_client()
    console = get_cli_state().console

    names = list(family or [])
    if not names:
        catalog = sorted(client.available(), key=lambda font: font.family)
        console.print(f"families: {len(catalog)}", highlight=False)
        names = [font.family for font in catalog]

    faces: list[FontFace] = []
    for name in names:
        face = client.woff2(name, display=display, text=text)
        if face is None:
            emit_warning(f"{name}: no WOFF2 face served, skipped")
            continue
        console.print(f"retrieving: {name} {face.src}", highlight=False)
        faces.append(face)

    resolved_prefix = normalise_prefix(prefix)
    publisher = MemoryPublisher(client.transport, prefix=resolved_prefix)
    build_routes(resolved_prefix, faces, publisher)

    console.print(f"listening: {host}:{port}", highlight=False)
    uvicorn.run(create_app(publisher, text=text), host=host, port=port, log_level="warning")


__all__ = ["serve"]
