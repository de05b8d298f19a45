"""Location of the fontsmith home and cache directories.

Resolution order for the cache root:

1. an explicit ``cache_root`` argument;
2. ``FONTSMITH_CACHE_DIR``;
3. ``$XDG_CACHE_HOME/fontsmith``;
4. ``<home>/cache`` when the home was set explicitly or via ``FONTSMITH_HOME``;
5. ``~/.cache/fontsmith``.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from contextlib import contextmanager
from dataclasses import dataclass
import os
from pathlib import Path
import shutil
from threading import RLock


__all__ = [
    "CACHE_ENV",
    "HOME_ENV",
    "FontsmithUserDir",
    "configure_user_dir",
    "get_user_dir",
    "resolve_user_dir",
    "user_dir_context",
]

HOME_ENV = "FONTSMITH_HOME"
CACHE_ENV = "FONTSMITH_CACHE_DIR"

_LOCK = RLock()
_CURRENT: FontsmithUserDir | None = None


@dataclass(frozen=True, slots=True)
class FontsmithUserDir:
    """Resolved home and cache roots."""

    root: Path
    cache_root: Path

    def cache_dir(self, namespace: str, *, create: bool = True) -> Path:
        """Return the cache directory reserved for ``namespace``."""
        target = self.cache_root / namespace
        if create:
            target.mkdir(parents=True, exist_ok=True)
        return target

    def clear_cache(self, namespaces: Iterable[str] | None = None) -> list[Path]:
        """Delete cached namespaces (the whole cache by default), returning what was removed."""
        targets = (
            [self.cache_root]
            if namespaces is None
            else [self.cache_root / name for name in namespaces]
        )
        removed: list[Path] = []
        for target in targets:
            if target.exists():
                shutil.rmtree(target)
                removed.append(target)
        return removed


def resolve_user_dir(
    *,
    root: str | Path | None = None,
    cache_root: str | Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> FontsmithUserDir:
    """Compute the roots from arguments and the environment."""
    environ = os.environ if environ is None else environ

    home_override = root or environ.get(HOME_ENV)
    home = Path(home_override).expanduser() if home_override else Path.home() / ".fontsmith"

    if cache_root:
        cache = Path(cache_root).expanduser()
    elif environ.get(CACHE_ENV):
        cache = Path(environ[CACHE_ENV]).expanduser()
    elif environ.get("XDG_CACHE_HOME"):
        cache = Path(environ["XDG_CACHE_HOME"]).expanduser() / "fontsmith"
    elif home_override:
        cache = home / "cache"
    else:
        cache = Path.home() / ".cache" / "fontsmith"
    return FontsmithUserDir(root=home, cache_root=cache)


def configure_user_dir(
    *,
    root: str | Path | None = None,
    cache_root: str | Path | None = None,
) -> FontsmithUserDir:
    """Resolve the roots again and make the result the shared instance."""
    global _CURRENT
    user_dir = resolve_user_dir(root=root, cache_root=cache_root)
    with _LOCK:
        _CURRENT = user_dir
    return user_dir


def get_user_dir() -> FontsmithUserDir:
    """Return the shared instance, resolving it on first use."""
    with _LOCK:
        if _CURRENT is None:
            return configure_user_dir()
        return _CURRENT


@contextmanager
def user_dir_context(
    *,
    root: str | Path | None = None,
    cache_root: str | Path | None = None,
) -> Iterator[FontsmithUserDir]:
    """Temporarily replace the shared instance."""
    global _CURRENT
    with _LOCK:
        previous = _CURRENT
    try:
        yield configure_user_dir(root=root, cache_root=cache_root)
    finally:
        with _LOCK:
            _CURRENT = previous
