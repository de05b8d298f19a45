"""Configuration models for the webfonts client.

ClientConfig

`key` (`str | None`)
: Google Fonts Developer API key used to list the catalog.

`token` (`str | None`)
: OAuth2 bearer token, used instead of `key` when provided.

`user_agent` (`str | None`)
: User agent sent with stylesheet requests. When omitted the latest stable
  desktop Chrome user agent is detected at first use.

`cache_dir` (`Path | None`)
: Directory for cached HTTP responses. Defaults to the `http` namespace of
  the fontsmith cache root.

`cache_ttl` (`int`)
: Seconds a cached response stays fresh.

`timeout` (`float`)
: Timeout in seconds for every HTTP request.

`use_cache` (`bool`)
: Toggle the on-disk response cache.
"""

from __future__ import annotations

from collections.abc import Mapping
import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError
import yaml

from fontsmith.exceptions import ConfigError


ENV_PREFIX = "FONTSMITH_"
_ENV_FIELDS = ("key", "token", "user_agent", "cache_dir")


class ClientConfig(BaseModel):
    """Settings shared by the client and the CLI."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    key: str | None = None
    token: str | None = None
    user_agent: str | None = None
    cache_dir: Path | None = None
    cache_ttl: int = Field(default=24 * 60 * 60, ge=0)
    timeout: float = Field(default=30.0, gt=0)
    use_cache: bool = True

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> ClientConfig:
        """Validate ``data`` and wrap validation failures in :class:`ConfigError`."""
        try:
            return cls.model_validate(dict(data))
        except ValidationError as exc:
            raise ConfigError(f"invalid configuration: {exc}") from exc

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None, **overrides: Any) -> ClientConfig:
        """Build a configuration from ``FONTSMITH_*`` variables."""
        environ = os.environ if environ is None else environ
        data: dict[str, Any] = {}
        for name in _ENV_FIELDS:
            value = environ.get(f"{ENV_PREFIX}{name.upper()}")
            if value:
                data[name] = value
        data.update({key: value for key, value in overrides.items() if value is not None})
        return cls.from_mapping(data)

    def merged(self, **overrides: Any) -> ClientConfig:
        """Return a copy with the non-``None`` overrides applied."""
        data = self.model_dump()
        data.update({key: value for key, value in overrides.items() if value is not None})
        return self.from_mapping(data)


def load_config(path: str | Path) -> ClientConfig:
    """Load a YAML configuration file."""
    config_path = Path(path)
    try:
        payload = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigError(f"unable to read configuration '{config_path}'") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"invalid YAML in '{config_path}'") from exc
    if payload is None:
        payload = {}
    if not isinstance(payload, Mapping):
        raise ConfigError(f"configuration '{config_path}' must be a mapping")
    return ClientConfig.from_mapping(payload)


__all__ = ["ENV_PREFIX", "ClientConfig", "load_config"]
