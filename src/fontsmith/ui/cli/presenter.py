"""Rich renderers for font faces, routes and catalog entries."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
import json

from rich import box
from rich.table import Table

from fontsmith.client import Webfont
from fontsmith.routes import FamilyStylesheet
from fontsmith.stylesheet import FontFace

from .state import get_cli_state


def _table(title: str) -> Table:
    return Table(title=title, box=box.SQUARE, show_edge=True, header_style="bold cyan")


def present_faces(faces: Sequence[FontFace], *, as_json: bool = False) -> None:
    """Print parsed font faces as a table or as JSON."""
    console = get_cli_state().console
    if as_json:
        console.print_json(json.dumps([face.to_dict() for face in faces]))
        return

    table = _table(f"{len(faces)} font face(s)")
    table.add_column("Family", style="magenta")
    table.add_column("Style")
    table.add_column("Weight")
    table.add_column("Subset", style="green")
    table.add_column("Format")
    table.add_column("Source", overflow="fold")
    for face in faces:
        table.add_row(
            face.family,
            face.style,
            face.weight,
            face.subset or "-",
            face.format,
            face.src,
        )
    console.print(table)


def present_stylesheets(results: Iterable[FamilyStylesheet], *, as_json: bool = False) -> None:
    """Print generated stylesheets and their route tables."""
    console = get_cli_state().console
    results = list(results)
    if as_json:
        payload = [
            {
                "family": result.family,
                "stylesheet": result.stylesheet.decode("utf-8"),
                "routes": [{"path": route.path, "url": route.url} for route in result.routes],
            }
            for result in results
        ]
        console.print_json(json.dumps(payload))
        return

    for result in results:
        console.rule(f"[bold]{result.family}")
        console.print(
            result.stylesheet.decode("utf-8"), markup=False, highlight=False, soft_wrap=True
        )
        table = _table("Routes")
        table.add_column("Path", style="green")
        table.add_column("Source", overflow="fold")
        for route in result.routes:
            table.add_row(route.path, route.url)
        console.print(table)


def present_catalog(fonts: Sequence[Webfont], *, as_json: bool = False) -> None:
    """Print the catalog families."""
    console = get_cli_state().console
    if as_json:
        console.print_json(json.dumps([font.model_dump(by_alias=True) for font in fonts]))
        return

    table = _table(f"{len(fonts)} families")
    table.add_column("Family", style="magenta")
    table.add_column("Category")
    table.add_column("Variants")
    table.add_column("Subsets", style="green")
    for font in fonts:
        table.add_row(
            font.family,
            font.category or "-",
            ", ".join(font.variants) or "-",
            ", ".join(font.subsets) or "-",
        )
    console.print(table)


__all__ = ["present_catalog", "present_faces", "present_stylesheets"]
