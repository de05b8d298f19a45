"""Client for the Google Fonts catalog and stylesheet services."""

from __future__ import annotations

from collections.abc import Mapping
import hashlib
import json
import logging
from typing import Any
from urllib.parse import urlencode

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from fontsmith.cache import CachingTransport, ResponseCache
from fontsmith.config import ClientConfig
from fontsmith.constants import (
    CATALOG_URL,
    CHROME_USER_AGENT,
    CHROME_VERSIONS_URL,
    RETRIEVAL_ORDER,
    USER_AGENTS,
)
from fontsmith.exceptions import FetchError, MissingCredentialsError
from fontsmith.http import LoggingTransport, RequestsTransport, Transport, fetch_ok
from fontsmith.query import Query, build_query
from fontsmith.stylesheet import FontFace, parse_stylesheet


logger = logging.getLogger(__name__)


class Webfont(BaseModel):
    """A family listed by the Google Fonts Developer API."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    family: str
    category: str | None = None
    variants: list[str] = Field(default_factory=list)
    subsets: list[str] = Field(default_factory=list)
    version: str | None = None
    last_modified: str | None = Field(default=None, alias="lastModified")
    files: dict[str, str] = Field(default_factory=dict)
    kind: str | None = None
    menu: str | None = None


def _decode_json(url: str, body: bytes) -> Any:
    try:
        return json.loads(body)
    except ValueError as exc:
        raise FetchError(url, f"invalid JSON returned by '{url}'") from exc


def build_transport(config: ClientConfig) -> Transport:
    """Assemble the default transport stack for ``config``."""
    transport: Transport = RequestsTransport(timeout=config.timeout)
    if config.use_cache:
        transport = CachingTransport(
            transport,
            ResponseCache(root=config.cache_dir, ttl=config.cache_ttl),
        )
    return LoggingTransport(transport)


def cache_buster(user_agent: str) -> str:
    """Return the short token appended to stylesheet URLs for ``user_agent``."""
    return hashlib.md5(user_agent.encode("utf-8")).hexdigest()[:5]  # noqa: S324


class WebfontsClient:
    """Retrieve the catalog and the font faces of Google Fonts families.

    The service tailors stylesheets to the requesting browser, so the user
    agent decides which file formats come back. :meth:`all_font_faces` walks
    a fixed table of user agents to collect every format.
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        *,
        transport: Transport | None = None,
    ) -> None:
        self.config = config or ClientConfig()
        self.transport = transport or build_transport(self.config)
        self._user_agent = self.config.user_agent

    @property
    def user_agent(self) -> str:
        """Return the configured user agent, detecting it on first use."""
        if self._user_agent is None:
            self._user_agent = self.detect_user_agent()
        return self._user_agent

    def detect_user_agent(self, platform: str = "linux", channel: str = "stable") -> str:
        """Build a desktop Chrome user agent from the latest released version."""
        url = CHROME_VERSIONS_URL.format(platform=platform, channel=channel)
        payload = _decode_json(url, fetch_ok(self.transport, url).body)
        try:
            version = payload["versions"][0]["version"]
        except (KeyError, IndexError, TypeError) as exc:
            raise FetchError(url, f"no Chrome version listed by '{url}'") from exc
        logger.debug("detected Chrome %s", version)
        return CHROME_USER_AGENT.format(version=version)

    def available(self, *, sort: str | None = None) -> list[Webfont]:
        """Return every family listed in the catalog."""
        params: dict[str, str] = {}
        headers: dict[str, str] = {}
        if self.config.token:
            headers["Authorization"] = f"Bearer {self.config.token}"
        elif self.config.key:
            params["key"] = self.config.key
        else:
            raise MissingCredentialsError(
                "listing webfonts requires an API key or an OAuth2 token, "
                "see https://developers.google.com/fonts/docs/developer_api"
            )
        if sort:
            params["sort"] = sort
        url = f"{CATALOG_URL}?{urlencode(params)}" if params else CATALOG_URL
        payload = _decode_json(url, fetch_ok(self.transport, url, headers).body)
        items = payload.get("items", []) if isinstance(payload, Mapping) else []
        try:
            return [Webfont.model_validate(item) for item in items]
        except ValidationError as exc:
            raise FetchError(url, f"unexpected catalog entry returned by '{url}'") from exc

    def fetch_stylesheet(self, query: Query, user_agent: str) -> str:
        """Return the stylesheet served for ``query`` to ``user_agent``."""
        url = f"{query.url}&_={cache_buster(user_agent)}"
        response = fetch_ok(self.transport, url, {"User-Agent": user_agent})
        return response.text()

    def _faces(self, query: Query, user_agent: str) -> list[FontFace]:
        url = query.url
        return parse_stylesheet(self.fetch_stylesheet(query, user_agent), base_url=url)

    def font_faces(self, family: str, **options: Any) -> list[FontFace]:
        """Return the font faces served to the configured user agent.

        ``options`` are forwarded to :func:`fontsmith.query.build_query`; a
        ``user_agent`` option overrides the client's user agent.
        """
        query = build_query(family, **options)
        return self._faces(query, query.user_agent or self.user_agent)

    def all_font_faces(self, family: str, **options: Any) -> list[FontFace]:
        """Return the font faces served to each format-specific user agent."""
        query = build_query(family, **options)
        faces: list[FontFace] = []
        for file_format in RETRIEVAL_ORDER:
            faces.extend(self._faces(query, USER_AGENTS[file_format]))
        return faces

    def woff2(self, family: str, **options: Any) -> FontFace | None:
        """Return the first WOFF2 face of ``family``, if any is served."""
        options.setdefault("user_agent", USER_AGENTS["woff2"])
        for face in self.font_faces(family, **options):
            if face.format == "woff2":
                return face
        return None


__all__ = ["Webfont", "WebfontsClient", "build_transport", "cache_buster"]
