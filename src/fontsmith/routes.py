"""Regenerate self-hosted stylesheets and asset routes from font faces.

Faces are grouped by family, style and weight. Each group yields one
``@font-face`` block whose ``src`` points at content-addressed routes, so the
same input always produces the same stylesheet and the same route names.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Callable, Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass
import hashlib
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from fontsmith.constants import FORMAT_ALIASES, FORMAT_HINTS, FORMAT_PREFERENCE
from fontsmith.stylesheet import FontFace


TEMPLATES_DIR = Path(__file__).parent / "templates"
ROUTE_HASH_LENGTH = 7

Sink = Callable[[str, bytes, Sequence["Route"]], object]


@dataclass(frozen=True, slots=True)
class Route:
    """A generated path serving the asset found at ``url``."""

    path: str
    url: str
    name: str
    format: str


@dataclass(frozen=True, slots=True)
class FamilyStylesheet:
    """Generated stylesheet and routes for a single font family."""

    family: str
    stylesheet: bytes
    routes: tuple[Route, ...]


def route_name(src: str, file_format: str) -> str:
    """Return the content-derived route identifier for a font source."""
    digest = hashlib.md5(src.encode("utf-8")).hexdigest()  # noqa: S324
    return f"{digest[:ROUTE_HASH_LENGTH]}.{file_format}"


def render_src(paths: Mapping[str, str], indent: str = "  ") -> str:
    """Render the value of a ``src`` declaration for the given format paths."""
    prefix = ""
    eot = paths.get("eot")
    if eot is not None:
        prefix = (
            f"url('{eot}');\n"
            f"{indent}src: url('{eot}?#iefix') format('{FORMAT_HINTS['eot']}'), "
        )
    entries = ["local('')"]
    for file_format in FORMAT_PREFERENCE:
        path = paths.get(file_format)
        if path is not None:
            entries.append(f"url('{path}') format('{FORMAT_HINTS[file_format]}')")
    return prefix + ", ".join(entries)


_ENV = Environment(
    loader=FileSystemLoader(str(TEMPLATES_DIR)),
    autoescape=False,
    keep_trailing_newline=True,
    trim_blocks=True,
    lstrip_blocks=True,
    undefined=StrictUndefined,
)
_ENV.filters["font_src"] = render_src


def _group(faces: Iterable[FontFace]) -> dict[str, dict[str, dict[str, list[FontFace]]]]:
    families: dict[str, dict[str, dict[str, list[FontFace]]]] = defaultdict(
        lambda: defaultdict(lambda: defaultdict(list))
    )
    for face in faces:
        families[face.family][face.style][face.weight].append(face)
    return families


def _first(values: Iterable[str | None]) -> str | None:
    for value in values:
        if value:
            return value
    return None


def _render_group(
    prefix: str,
    family: str,
    style: str,
    weight: str,
    faces: Sequence[FontFace],
) -> tuple[str, list[Route]]:
    routes: list[Route] = []
    paths: dict[str, str] = {}
    for face in faces:
        key = FORMAT_ALIASES.get(face.format, face.format)
        if key in paths:
            continue
        name = route_name(face.src, face.format)
        route = Route(path=prefix + name, url=face.src, name=name, format=face.format)
        routes.append(route)
        paths[key] = route.path

    block = _ENV.get_template("stylesheet.css.jinja").render(
        family=family,
        style=style,
        weight=weight,
        display=_first(face.display for face in faces),
        stretch=_first(face.stretch for face in faces),
        paths=paths,
    )
    return block, routes


def iter_family_stylesheets(prefix: str, faces: Iterable[FontFace]) -> Iterator[FamilyStylesheet]:
    """Yield one :class:`FamilyStylesheet` per family, in family name order.

    Styles and weights are ordered as strings, so ``"1000"`` sorts before
    ``"200"``. Within a style/weight group only the first face of each format
    is routed.
    """
    families = _group(faces)
    for family in sorted(families):
        blocks: list[str] = []
        routes: list[Route] = []
        styles = families[family]
        for style in sorted(styles):
            weights = styles[style]
            for weight in sorted(weights):
                block, group_routes = _render_group(prefix, family, style, weight, weights[weight])
                blocks.append(block)
                routes.extend(group_routes)
        yield FamilyStylesheet(
            family=family,
            stylesheet="".join(blocks).encode("utf-8"),
            routes=tuple(routes),
        )


def build_routes(prefix: str, faces: Iterable[FontFace], sink: Sink) -> None:
    """Call ``sink(family, stylesheet, routes)`` for every family.

    An exception raised by the sink stops processing and propagates as is.
    """
    for result in iter_family_stylesheets(prefix, faces):
        sink(result.family, result.stylesheet, result.routes)


__all__ = [
    "ROUTE_HASH_LENGTH",
    "FamilyStylesheet",
    "Route",
    "Sink",
    "build_routes",
    "iter_family_stylesheets",
    "render_src",
    "route_name",
]
