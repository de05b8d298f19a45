"""Preview server exposing published stylesheets and fonts."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from fastapi import FastAPI, HTTPException
from fastapi.responses import HTMLResponse, Response
from jinja2 import Environment, FileSystemLoader, select_autoescape

from fontsmith.publish import MemoryPublisher


DEFAULT_TEXT = "Lorem Ipsum Dolor"
TEMPLATES_DIR = Path(__file__).parent / "templates"

_ENV = Environment(
    loader=FileSystemLoader(str(TEMPLATES_DIR)),
    autoescape=select_autoescape(["html", "html.jinja"]),
    trim_blocks=True,
    lstrip_blocks=True,
)


def render_index(families: Sequence[str], *, prefix: str, text: str = DEFAULT_TEXT) -> str:
    """Render the HTML page previewing every family with ``text``."""
    return _ENV.get_template("index.html.jinja").render(
        families=list(families),
        prefix=prefix,
        text=text,
    )


def create_app(publisher: MemoryPublisher, *, text: str = DEFAULT_TEXT) -> FastAPI:
    """Return a FastAPI application serving everything ``publisher`` holds."""
    app = FastAPI(title="fontsmith preview", docs_url=None, redoc_url=None, openapi_url=None)
    index = render_index(publisher.families, prefix=publisher.prefix, text=text)

    @app.get("/", response_class=HTMLResponse)
    def index_page() -> HTMLResponse:
        return HTMLResponse(index)

    @app.get("/{asset_path:path}")
    def asset(asset_path: str) -> Response:
        published = publisher.get("/" + asset_path)
        if published is None:
            raise HTTPException(status_code=404, detail="Not Found")
        return Response(content=published.body, media_type=published.content_type)

    return app


__all__ = ["DEFAULT_TEXT", "create_app", "render_index"]
