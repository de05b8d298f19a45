"""Typer application wiring for the fontsmith CLI."""

from __future__ import annotations

from pathlib import Path
import shutil

import typer

from fontsmith.cache import CACHE_NAMESPACE
from fontsmith.config import ClientConfig, load_config
from fontsmith.exceptions import ConfigError, FontsmithError, exception_hint
from fontsmith.user_dir import get_user_dir

from .commands import export, faces, families, parse, routes, serve
from .state import (
    configure_logging,
    debug_enabled,
    emit_error,
    get_cli_state,
    print_traceback,
    set_cli_state,
)


app = typer.Typer(
    help="Self-host web fonts: parse @font-face stylesheets and regenerate them with stable routes.",
    context_settings={"help_option_names": ["--help"]},
    no_args_is_help=True,
)

cache_app = typer.Typer(
    help="Manage the on-disk HTTP response cache.",
    context_settings={"help_option_names": ["--help"]},
)

app.add_typer(cache_app, name="cache")


@app.callback()
def _app_root(
    ctx: typer.Context,
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Increase CLI verbosity. Combine multiple times for additional diagnostics.",
    ),
    debug: bool = typer.Option(
        False,
        "--debug/--no-debug",
        help="Show full tracebacks when an unexpected error occurs.",
    ),
    config_path: Path | None = typer.Option(
        None,
        "--config",
        help="YAML file with client settings.",
        exists=True,
        dir_okay=False,
        readable=True,
        resolve_path=True,
    ),
    key: str | None = typer.Option(None, "--key", help="Google Fonts Developer API key."),
    token: str | None = typer.Option(None, "--token", help="OAuth2 bearer token."),
    user_agent: str | None = typer.Option(
        None, "--user-agent", help="User agent sent with stylesheet requests."
    ),
    cache_dir: Path | None = typer.Option(
        None, "--cache-dir", help="Directory of the HTTP response cache."
    ),
    no_cache: bool = typer.Option(False, "--no-cache", help="Disable the HTTP response cache."),
) -> None:
    try:
        base = load_config(config_path) if config_path else ClientConfig.from_env()
        config = base.merged(
            key=key,
            token=token,
            user_agent=user_agent,
            cache_dir=cache_dir,
            use_cache=False if no_cache else None,
        )
    except ConfigError as exc:
        emit_error(str(exc), exception=exc)
        raise typer.Exit(code=1) from exc

    set_cli_state(verbosity=verbose, debug=debug, config=config)
    configure_logging(verbose)
    ctx.obj = get_cli_state()


@cache_app.command(name="clear")
def cache_clear() -> None:
    """Remove every cached HTTP response."""
    state = get_cli_state()
    if state.config.cache_dir is not None:
        target = state.config.cache_dir
        cleared = [target] if target.exists() else []
        shutil.rmtree(target, ignore_errors=True)
    else:
        cleared = get_user_dir().clear_cache([CACHE_NAMESPACE])
    if cleared:
        for path in cleared:
            state.console.print(f"Removed {path}", highlight=False)
    else:
        state.console.print("Cache already empty.")


app.command(name="parse")(parse)
app.command(name="routes")(routes)
app.command(name="families")(families)
app.command(name="faces")(faces)
app.command(name="export")(export)
app.command(name="serve")(serve)


def main() -> None:
    """Console script entry point."""
    try:
        app()
    except KeyboardInterrupt as exc:
        if debug_enabled():
            raise
        emit_error("Operation cancelled by user.")
        raise SystemExit(130) from exc
    except FontsmithError as exc:
        if debug_enabled():
            print_traceback(exc)
        else:
            emit_error(str(exc), exception=exc)
        raise SystemExit(1) from exc
    except Exception as exc:  # pragma: no cover - unexpected failures
        if debug_enabled():
            print_traceback(exc)
        else:
            emit_error(exception_hint(exc) or type(exc).__name__, exception=exc)
        raise SystemExit(1) from exc


__all__ = ["app", "cache_app", "main"]
