"""Offline commands working on a local stylesheet file."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated

import typer

from fontsmith.exceptions import StylesheetError
from fontsmith.publish import stylesheet_name
from fontsmith.routes import iter_family_stylesheets
from fontsmith.stylesheet import FontFace, parse_stylesheet

from .._options import (
    BaseUrlOption,
    JsonOption,
    LenientSubsetsOption,
    PrefixOption,
    StylesheetArgument,
)
from ..presenter import present_faces, present_stylesheets
from ..state import emit_error, get_cli_state
from ..utils import normalise_prefix


def _load_faces(path: Path, base_url: str | None, lenient_subsets: bool) -> list[FontFace]:
    try:
        return parse_stylesheet(
            path.read_text(encoding="utf-8"),
            base_url=base_url,
            strict_subsets=not lenient_subsets,
        )
    except StylesheetError as exc:
        emit_error(f"{path.name}: {exc}", exception=exc)
        raise typer.Exit(code=1) from exc


def parse(
    stylesheet: StylesheetArgument,
    as_json: JsonOption = False,
    base_url: BaseUrlOption = None,
    lenient_subsets: LenientSubsetsOption = False,
) -> None:
    """Print the @font-face rules found in a stylesheet."""
    present_faces(_load_faces(stylesheet, base_url, lenient_subsets), as_json=as_json)


def routes(
    stylesheet: StylesheetArgument,
    prefix: PrefixOption = "/_/",
    output_dir: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Write <family>.css files and a routes.json manifest into this directory.",
            file_okay=False,
            dir_okay=True,
            resolve_path=True,
        ),
    ] = None,
    as_json: JsonOption = False,
    base_url: BaseUrlOption = None,
    lenient_subsets: LenientSubsetsOption = False,
) -> None:
    """Generate self-hosted stylesheets and routes from a stylesheet."""
    faces = _load_faces(stylesheet, base_url, lenient_subsets)
    results = list(iter_family_stylesheets(normalise_prefix(prefix), faces))
    if output_dir is None:
        present_stylesheets(results, as_json=as_json)
        return

    output_dir.mkdir(parents=True, exist_ok=True)
    manifest: dict[str, list[dict[str, str]]] = {}
    for result in results:
        (output_dir / stylesheet_name(result.family)).write_bytes(result.stylesheet)
        manifest[result.family] = [
            {"path": route.path, "url": route.url} for route in result.routes
        ]
    (output_dir / "routes.json").write_text(
        json.dumps(manifest, indent=2) + "\n", encoding="utf-8"
    )
    get_cli_state().console.print(
        f"Wrote {len(results)} stylesheet(s) to {output_dir}", highlight=False
    )


__all__ = ["parse", "routes"]
