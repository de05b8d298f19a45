"""Console, logging and settings shared by every CLI command."""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
import sys
from typing import TextIO

from rich.console import Console
from rich.logging import RichHandler
from rich.text import Text
from rich.traceback import Traceback

from fontsmith.config import ClientConfig
from fontsmith.exceptions import exception_messages


__all__ = [
    "CLIState",
    "configure_logging",
    "debug_enabled",
    "emit_error",
    "emit_warning",
    "get_cli_state",
    "print_traceback",
    "render_message",
    "set_cli_state",
]

_LEVEL_STYLES = {"error": "red", "warning": "yellow"}


@dataclass(slots=True)
class CLIState:
    """Options from the root callback plus the consoles commands print to."""

    verbosity: int = 0
    show_tracebacks: bool = False
    config: ClientConfig = field(default_factory=ClientConfig)
    _consoles: dict[str, Console] = field(default_factory=dict, init=False, repr=False)

    def _console_for(self, name: str, stream: TextIO, **options: object) -> Console:
        # Rebuilt whenever the stream is swapped, e.g. by CliRunner.
        console = self._consoles.get(name)
        if console is None or console.file is not stream:
            console = Console(file=stream, **options)
            self._consoles[name] = console
        return console

    @property
    def console(self) -> Console:
        return self._console_for("out", sys.stdout)

    @property
    def err_console(self) -> Console:
        return self._console_for("err", sys.stderr, highlight=False)


_CLI_STATE = CLIState()


def get_cli_state() -> CLIState:
    """Return the state shared by the callback and the commands."""
    return _CLI_STATE


def set_cli_state(
    *,
    verbosity: int | None = None,
    debug: bool | None = None,
    config: ClientConfig | None = None,
) -> None:
    """Store root options; ``None`` leaves a field untouched."""
    state = get_cli_state()
    if verbosity is not None:
        state.verbosity = max(0, verbosity)
    if debug is not None:
        state.show_tracebacks = debug
    if config is not None:
        state.config = config


def configure_logging(verbosity: int) -> None:
    """Attach a RichHandler to the ``fontsmith`` logger: INFO with -v, DEBUG with -vv."""
    package_logger = logging.getLogger("fontsmith")
    for handler in [h for h in package_logger.handlers if isinstance(h, RichHandler)]:
        package_logger.removeHandler(handler)
    if verbosity <= 0:
        package_logger.setLevel(logging.WARNING)
        return
    package_logger.addHandler(
        RichHandler(
            console=get_cli_state().err_console,
            show_path=verbosity >= 2,
            rich_tracebacks=True,
        )
    )
    package_logger.setLevel(logging.INFO if verbosity == 1 else logging.DEBUG)


def render_message(
    level: str,
    message: str,
    *,
    exception: BaseException | None = None,
) -> None:
    """Print ``level: message`` to stderr.

    With ``-v`` the exception type is added, with ``-vv`` the messages of the
    whole cause chain.
    """
    state = get_cli_state()
    style = _LEVEL_STYLES.get(level, "cyan")
    text = Text.assemble((f"{level}: ", f"bold {style}"), (message, style))

    if exception is not None and state.verbosity >= 1:
        details = [f"type: {type(exception).__name__}"]
        if state.verbosity >= 2:
            causes = [entry for entry in exception_messages(exception) if entry not in message]
            details.extend(f"caused by: {entry}" for entry in causes)
        text.append("\n" + "\n".join(details), style=style)

    state.err_console.print(text)


def emit_warning(message: str, *, exception: BaseException | None = None) -> None:
    render_message("warning", message, exception=exception)


def emit_error(message: str, *, exception: BaseException | None = None) -> None:
    render_message("error", message, exception=exception)


def print_traceback(exc: BaseException) -> None:
    """Render ``exc`` with a Rich traceback, showing locals with ``-vv``."""
    state = get_cli_state()
    state.err_console.print(
        Traceback.from_exception(
            type(exc),
            exc,
            exc.__traceback__,
            show_locals=state.verbosity >= 2,
        )
    )


def debug_enabled() -> bool:
    """Return whether ``--debug`` was given."""
    return get_cli_state().show_tracebacks
