from __future__ import annotations

from fastapi.testclient import TestClient

from fontsmith.publish import STYLESHEET_CONTENT_TYPE, MemoryPublisher
from fontsmith.routes import build_routes
from fontsmith.server import DEFAULT_TEXT, create_app, render_index
from fontsmith.stylesheet import FontFace


def _publisher(fake_transport, make_response) -> MemoryPublisher:
    transport = fake_transport(
        lambda url, headers: make_response(b"wOF2", headers={"Content-Type": "font/woff2"})
    )
    publisher = MemoryPublisher(transport, prefix="/_/")
    face = FontFace(
        family="Roboto Slab",
        style="normal",
        weight="400",
        src="https://fonts.gstatic.com/s/robotoslab/a.woff2",
        format="woff2",
        display="block",
    )
    build_routes("/_/", [face], publisher)
    return publisher


def test_render_index_links_every_family() -> None:
    html = render_index(["Roboto Slab", "Lato"], prefix="/_/", text="<b>Hi</b>")

    assert '<link rel="stylesheet" href="/_/Roboto%20Slab.css">' in html
    assert '<link rel="stylesheet" href="/_/Lato.css">' in html
    assert "1. Roboto Slab:" in html
    assert "2. Lato:" in html
    assert "&lt;b&gt;Hi&lt;/b&gt;" in html


def test_index_page(fake_transport, make_response) -> None:
    client = TestClient(create_app(_publisher(fake_transport, make_response)))

    response = client.get("/")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    assert "/_/Roboto%20Slab.css" in response.text
    assert DEFAULT_TEXT in response.text


def test_serves_published_assets(fake_transport, make_response) -> None:
    publisher = _publisher(fake_transport, make_response)
    client = TestClient(create_app(publisher))

    stylesheet = client.get("/_/Roboto Slab.css")
    assert stylesheet.status_code == 200
    assert stylesheet.headers["content-type"] == STYLESHEET_CONTENT_TYPE
    assert "font-display: block;" in stylesheet.text

    (font_path,) = [path for path in publisher.assets if path.endswith(".woff2")]
    font = client.get(font_path)
    assert font.status_code == 200
    assert font.headers["content-type"] == "font/woff2"
    assert font.content == b"wOF2"


def test_unknown_paths_are_not_found(fake_transport, make_response) -> None:
    client = TestClient(create_app(_publisher(fake_transport, make_response)))

    assert client.get("/_/missing.woff2").status_code == 404
    assert client.get("/favicon.ico").status_code == 404
