"""Shared Typer option definitions for CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer


QUERY_PANEL = "Query"
OUTPUT_PANEL = "Output"

StylesheetArgument = Annotated[
    Path,
    typer.Argument(
        metavar="STYLESHEET",
        help="CSS file holding @font-face rules.",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
        resolve_path=True,
    ),
]

FamiliesArgument = Annotated[
    list[str],
    typer.Argument(metavar="FAMILY...", help="Font family names, e.g. 'Roboto Slab'."),
]

BaseUrlOption = Annotated[
    str | None,
    typer.Option("--base-url", help="Resolve relative src URLs against this URL."),
]

LenientSubsetsOption = Annotated[
    bool,
    typer.Option(
        "--lenient-subsets",
        help="Pair subset comments by position even when their count differs from the rules.",
    ),
]

JsonOption = Annotated[
    bool,
    typer.Option("--json", help="Print machine-readable JSON instead of a table.", rich_help_panel=OUTPUT_PANEL),
]

PrefixOption = Annotated[
    str,
    typer.Option("--prefix", help="Path prefix of the generated font routes.", rich_help_panel=OUTPUT_PANEL),
]

OutputDirOption = Annotated[
    Path,
    typer.Option(
        "--output",
        "-o",
        help="Directory receiving stylesheets and font files.",
        file_okay=False,
        dir_okay=True,
        resolve_path=True,
        rich_help_panel=OUTPUT_PANEL,
    ),
]

VariantOption = Annotated[
    list[str] | None,
    typer.Option("--variant", help="Variant to request (repeatable), e.g. 400 or 700italic.", rich_help_panel=QUERY_PANEL),
]

SubsetOption = Annotated[
    list[str] | None,
    typer.Option("--subset", help="Subset to request (repeatable), e.g. latin-ext.", rich_help_panel=QUERY_PANEL),
]

DisplayOption = Annotated[
    str | None,
    typer.Option("--display", help="font-display value requested from the service.", rich_help_panel=QUERY_PANEL),
]

TextOption = Annotated[
    str | None,
    typer.Option("--text", help="Only request the glyphs needed for this text.", rich_help_panel=QUERY_PANEL),
]

AllFormatsOption = Annotated[
    bool,
    typer.Option(
        "--all-formats/--current-format",
        help="Query once per file format instead of once with the configured user agent.",
        rich_help_panel=QUERY_PANEL,
    ),
]
