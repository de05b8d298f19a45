"""Commands talking to the Google Fonts services."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from fontsmith.publish import DirectoryPublisher
from fontsmith.routes import build_routes

from .._options import (
    AllFormatsOption,
    DisplayOption,
    FamiliesArgument,
    JsonOption,
    OutputDirOption,
    PrefixOption,
    SubsetOption,
    TextOption,
    VariantOption,
)
from ..presenter import present_catalog, present_faces
from ..state import get_cli_state
from ..utils import collect_faces, make_client, normalise_prefix


def families(
    sort: Annotated[
        str | None,
        typer.Option("--sort", help="Catalog ordering: alpha, date, popularity, style or trending."),
    ] = None,
    as_json: JsonOption = False,
) -> None:
    """List the families available from the catalog (requires an API key)."""
    present_catalog(make_client().available(sort=sort), as_json=as_json)


def faces(
    family: FamiliesArgument,
    all_formats: AllFormatsOption = False,
    variant: VariantOption = None,
    subset: SubsetOption = None,
    display: DisplayOption = None,
    text: TextOption = None,
    as_json: JsonOption = False,
) -> None:
    """Print the font faces served for one or more families."""
    collected = collect_faces(
        make_client(),
        family,
        all_formats=all_formats,
        variants=variant,
        subsets=subset,
        display=display,
        text=text,
    )
    present_faces(collected, as_json=as_json)


def export(
    family: FamiliesArgument,
    output_dir: OutputDirOption = Path("webfonts"),
    prefix: PrefixOption = "/_/",
    all_formats: AllFormatsOption = True,
    variant: VariantOption = None,
    subset: SubsetOption = None,
    display: DisplayOption = None,
    text: TextOption = None,
) -> None:
    """Download families and write self-hosted stylesheets and fonts."""
    client = make_client()
    collected = collect_faces(
        client,
        family,
        all_formats=all_formats,
        variants=variant,
        subsets=subset,
        display=display,
        text=text,
    )
    publisher = DirectoryPublisher(output_dir, client.transport)
    build_routes(normalise_prefix(prefix), collected, publisher)
    get_cli_state().console.print(
        f"Wrote {len(publisher.written)} file(s) to {output_dir}", highlight=False
    )


__all__ = ["export", "faces", "families"]
