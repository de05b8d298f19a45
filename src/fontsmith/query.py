"""Stylesheet queries for the Google Fonts CSS API."""

from __future__ import annotations

from dataclasses import dataclass, field
from urllib.parse import urlencode

from fontsmith.constants import STYLESHEET_URL


@dataclass(frozen=True, slots=True)
class Query:
    """Parameters of a single stylesheet request."""

    family: str
    variants: tuple[str, ...] = field(default_factory=tuple)
    subsets: tuple[str, ...] = field(default_factory=tuple)
    effects: tuple[str, ...] = field(default_factory=tuple)
    display: str | None = None
    text: str | None = None
    user_agent: str | None = None

    def values(self) -> list[tuple[str, str]]:
        """Return the query string parameters in a stable order."""
        family = self.family
        if self.variants:
            family += ":" + ",".join(self.variants)
        params = [("family", family)]
        if self.subsets:
            params.append(("subset", ",".join(self.subsets)))
        if self.effects:
            params.append(("effect", "|".join(self.effects)))
        if self.display:
            params.append(("display", self.display))
        if self.text:
            params.append(("text", self.text))
        return params

    @property
    def url(self) -> str:
        return f"{STYLESHEET_URL}?{urlencode(self.values())}"

    def __str__(self) -> str:
        return self.url


def build_query(
    family: str,
    *,
    variants: tuple[str, ...] | list[str] | None = None,
    subsets: tuple[str, ...] | list[str] | None = None,
    effects: tuple[str, ...] | list[str] | None = None,
    display: str | None = None,
    text: str | None = None,
    user_agent: str | None = None,
) -> Query:
    """Create a :class:`Query`, accepting lists wherever tuples are stored."""
    return Query(
        family=family,
        variants=tuple(variants or ()),
        subsets=tuple(subsets or ()),
        effects=tuple(effects or ()),
        display=display,
        text=text,
        user_agent=user_agent,
    )


__all__ = ["Query", "build_query"]
