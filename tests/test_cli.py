from __future__ import annotations

import importlib
import json
from pathlib import Path

from fastapi.testclient import TestClient
import pytest
from typer.testing import CliRunner

from fontsmith.client import WebfontsClient
from fontsmith.config import ClientConfig
from fontsmith.constants import CATALOG_URL
from fontsmith.ui.cli import app, main
from fontsmith.ui.cli.utils import normalise_prefix
import fontsmith.ui.cli.state as cli_state


fonts_module = importlib.import_module("fontsmith.ui.cli.commands.fonts")
serve_module = importlib.import_module("fontsmith.ui.cli.commands.serve")


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def stylesheet(tmp_path, roboto_css) -> Path:
    path = tmp_path / "roboto.css"
    path.write_text(roboto_css, encoding="utf-8")
    return path


def _install_client(monkeypatch, module, handler, fake_transport, **config):
    transport = fake_transport(handler)
    client = WebfontsClient(
        ClientConfig(user_agent="test-agent", use_cache=False, **config), transport=transport
    )
    monkeypatch.setattr(module, "make_client", lambda: client)
    return transport


def _google(make_response, roboto_css):
    def handler(url, headers):
        if url.startswith("https://fonts.gstatic.com/"):
            return make_response(b"wOF2", headers={"Content-Type": "font/woff2"})
        if url.startswith(CATALOG_URL):
            return make_response(json.dumps({"items": [{"family": "Roboto"}]}))
        return make_response(roboto_css)

    return handler


@pytest.mark.parametrize(
    ("value", "expected"),
    [("_", "/_/"), ("/_/", "/_/"), ("fonts/v1", "/fonts/v1/"), ("", "/"), ("/", "/")],
)
def test_normalise_prefix(value: str, expected: str) -> None:
    assert normalise_prefix(value) == expected


def test_parse_json(runner: CliRunner, stylesheet: Path) -> None:
    result = runner.invoke(app, ["parse", str(stylesheet), "--json"])

    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert [entry["subset"] for entry in payload] == ["latin-ext", "latin"]
    assert payload[0]["unicode-range"][0] == "U+0100-02AF"


def test_parse_table(runner: CliRunner, stylesheet: Path) -> None:
    result = runner.invoke(app, ["parse", str(stylesheet)])

    assert result.exit_code == 0, result.output
    assert "2 font face(s)" in result.stdout


def test_parse_reports_stylesheet_errors(runner: CliRunner, tmp_path: Path) -> None:
    path = tmp_path / "bad.css"
    path.write_text("@font-face {\n  font-family: 'A';\n  color: red;\n}\n", encoding="utf-8")

    result = runner.invoke(app, ["parse", str(path)])

    assert result.exit_code == 1
    assert "unknown @font-face property 'color'" in result.output


def test_parse_lenient_subsets(runner: CliRunner, tmp_path: Path, roboto_css: str) -> None:
    path = tmp_path / "partial.css"
    path.write_text(roboto_css.replace("/* latin */\n", ""), encoding="utf-8")

    strict = runner.invoke(app, ["parse", str(path), "--json"])
    lenient = runner.invoke(app, ["parse", str(path), "--json", "--lenient-subsets"])

    assert strict.exit_code == 1
    assert lenient.exit_code == 0, lenient.output
    assert [entry.get("subset") for entry in json.loads(lenient.stdout)] == ["latin-ext", None]


def test_routes_json(runner: CliRunner, stylesheet: Path) -> None:
    result = runner.invoke(app, ["routes", str(stylesheet), "--json", "--prefix", "fonts"])

    assert result.exit_code == 0, result.output
    (entry,) = json.loads(result.stdout)
    assert entry["family"] == "Roboto"
    (route,) = entry["routes"]
    assert route["path"].startswith("/fonts/")
    assert route["path"].endswith(".woff2")
    assert f"url('{route['path']}') format('woff2')" in entry["stylesheet"]


def test_routes_output_directory(runner: CliRunner, stylesheet: Path, tmp_path: Path) -> None:
    out = tmp_path / "out"

    result = runner.invoke(app, ["routes", str(stylesheet), "--output", str(out)])

    assert result.exit_code == 0, result.output
    assert "Wrote 1 stylesheet(s)" in result.stdout
    assert (out / "Roboto.css").read_text(encoding="utf-8").startswith("@font-face {")
    manifest = json.loads((out / "routes.json").read_text(encoding="utf-8"))
    assert list(manifest) == ["Roboto"]
    assert manifest["Roboto"][0]["url"].startswith("https://fonts.gstatic.com/")


def test_invalid_config_file_exits(runner: CliRunner, stylesheet: Path, tmp_path: Path) -> None:
    config = tmp_path / "fontsmith.yml"
    config.write_text("colour: blue\n", encoding="utf-8")

    result = runner.invoke(app, ["--config", str(config), "parse", str(stylesheet)])

    assert result.exit_code == 1
    assert "invalid configuration" in result.output


def test_config_file_and_flags_are_merged(runner: CliRunner, stylesheet: Path, tmp_path: Path) -> None:
    config = tmp_path / "fontsmith.yml"
    config.write_text("key: from-file\ntimeout: 5\n", encoding="utf-8")

    result = runner.invoke(
        app, ["--config", str(config), "--key", "from-flag", "--no-cache", "parse", str(stylesheet)]
    )

    assert result.exit_code == 0, result.output
    state = cli_state.get_cli_state()
    assert state.config.key == "from-flag"
    assert state.config.timeout == 5
    assert state.config.use_cache is False


def test_families_lists_catalog(
    runner: CliRunner, monkeypatch, fake_transport, make_response, roboto_css
) -> None:
    _install_client(
        monkeypatch, fonts_module, _google(make_response, roboto_css), fake_transport, key="k"
    )

    result = runner.invoke(app, ["families", "--json"])

    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout)[0]["family"] == "Roboto"


def test_faces_uses_configured_user_agent(
    runner: CliRunner, monkeypatch, fake_transport, make_response, roboto_css
) -> None:
    transport = _install_client(
        monkeypatch, fonts_module, _google(make_response, roboto_css), fake_transport
    )

    result = runner.invoke(app, ["faces", "Roboto", "--variant", "400", "--json"])

    assert result.exit_code == 0, result.output
    assert len(transport.calls) == 1
    assert transport.calls[0][1] == {"User-Agent": "test-agent"}
    assert "family=Roboto%3A400" in transport.calls[0][0]


def test_export_writes_fonts_and_stylesheets(
    runner: CliRunner, monkeypatch, fake_transport, make_response, roboto_css, tmp_path
) -> None:
    transport = _install_client(
        monkeypatch, fonts_module, _google(make_response, roboto_css), fake_transport
    )
    out = tmp_path / "webfonts"

    result = runner.invoke(app, ["export", "Roboto", "--output", str(out)])

    assert result.exit_code == 0, result.output
    assert "Wrote 2 file(s)" in result.stdout
    assert (out / "Roboto.css").exists()
    assert len([path for path in out.iterdir() if path.suffix == ".woff2"]) == 1
    stylesheet_requests = [url for url in transport.urls if "fonts.googleapis.com" in url]
    assert len(stylesheet_requests) == 5


def test_serve_builds_preview_app(
    runner: CliRunner, monkeypatch, fake_transport, make_response, roboto_css
) -> None:
    _install_client(monkeypatch, serve_module, _google(make_response, roboto_css), fake_transport)
    captured: dict[str, object] = {}

    def fake_run(application, host, port, log_level):
        captured.update(app=application, host=host, port=port)

    monkeypatch.setattr(serve_module.uvicorn, "run", fake_run)

    result = runner.invoke(app, ["serve", "Roboto", "--listen", "127.0.0.1:8080"])

    assert result.exit_code == 0, result.output
    assert (captured["host"], captured["port"]) == ("127.0.0.1", 8080)
    client = TestClient(captured["app"])
    assert client.get("/_/Roboto.css").status_code == 200
    assert "Roboto" in client.get("/").text


def test_serve_rejects_bad_listen_address(runner: CliRunner) -> None:
    result = runner.invoke(app, ["serve", "Roboto", "--listen", "localhost:http"])

    assert result.exit_code != 0


def test_cache_clear(runner: CliRunner, tmp_path: Path) -> None:
    cache_dir = tmp_path / "responses"
    (cache_dir / "ab").mkdir(parents=True)

    result = runner.invoke(app, ["--cache-dir", str(cache_dir), "cache", "clear"])

    assert result.exit_code == 0, result.output
    assert not cache_dir.exists()
    assert "Removed" in result.stdout


def test_main_reports_library_errors(monkeypatch, capsys) -> None:
    monkeypatch.setattr("sys.argv", ["fontsmith", "families"])

    with pytest.raises(SystemExit) as excinfo:
        main()

    assert excinfo.value.code == 1
    assert "error: listing webfonts requires" in capsys.readouterr().err
