from __future__ import annotations

from collections.abc import Callable, Mapping

import pytest
from requests.structures import CaseInsensitiveDict

from fontsmith.http import HttpResponse
from fontsmith.user_dir import user_dir_context


ROBOTO_CSS = """\
/* latin-ext */
@font-face {
  font-family: 'Roboto';
  font-style: normal;
  font-weight: 400;
  font-display: swap;
  src: url(https://fonts.gstatic.com/s/roboto/v30/KFOmCnqEu92Fr1Mu7GxKOzY.woff2) format('woff2');
  unicode-range: U+0100-02AF, U+0304, U+0308, U+1E00-1E9F, U+A720-A7FF;
}
/* latin */
@font-face {
  font-family: 'Roboto';
  font-style: normal;
  font-weight: 400;
  font-display: swap;
  src: url(https://fonts.gstatic.com/s/roboto/v30/KFOmCnqEu92Fr1Mu4mxK.woff2) format('woff2');
  unicode-range: U+0000-00FF, U+0131, U+0152-0153, U+FEFF, U+FFFD;
}
"""


def _response(
    body: bytes | str = b"",
    *,
    status_code: int = 200,
    headers: Mapping[str, str] | None = None,
) -> HttpResponse:
    if isinstance(body, str):
        body = body.encode("utf-8")
    return HttpResponse(
        status_code=status_code,
        headers=CaseInsensitiveDict(headers or {}),
        body=body,
    )


class FakeTransport:
    """Record requests and answer them through ``handler``."""

    def __init__(self, handler: Callable[[str, Mapping[str, str]], HttpResponse]) -> None:
        self._handler = handler
        self.calls: list[tuple[str, dict[str, str]]] = []

    def fetch(self, url: str, headers: Mapping[str, str] | None = None) -> HttpResponse:
        headers = dict(headers or {})
        self.calls.append((url, headers))
        return self._handler(url, headers)

    @property
    def urls(self) -> list[str]:
        return [url for url, _ in self.calls]


@pytest.fixture
def make_response():
    return _response


@pytest.fixture
def fake_transport():
    return FakeTransport


@pytest.fixture
def roboto_css() -> str:
    return ROBOTO_CSS


@pytest.fixture(autouse=True)
def isolated_user_dir(tmp_path, monkeypatch):
    for name in (
        "FONTSMITH_HOME",
        "FONTSMITH_CACHE_DIR",
        "FONTSMITH_KEY",
        "FONTSMITH_TOKEN",
        "FONTSMITH_USER_AGENT",
        "XDG_CACHE_HOME",
    ):
        monkeypatch.delenv(name, raising=False)
    with user_dir_context(root=tmp_path / "home", cache_root=tmp_path / "cache") as user_dir:
        yield user_dir
