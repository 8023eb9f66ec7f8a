"""Shared fixtures: a scripted stand-in for ``requests.Session``."""

from __future__ import annotations

import io
from pathlib import Path
from types import SimpleNamespace

import pytest
from requests import Response
from requests.cookies import create_cookie

from inspectlet.config import ClientSettings
from inspectlet.infrastructure.http import CookieJarFile, SessionTransport

SNAPSHOTS = Path(__file__).parent / "snapshots"


def make_response(
    text: str = "",
    status: int = 200,
    headers: dict | None = None,
    url: str = "https://www.inspectlet.com/",
) -> Response:
    resp = Response()
    resp.raw = io.BytesIO(text.encode("utf-8"))
    resp.status_code = status
    resp.encoding = "utf-8"
    resp.url = url
    resp.reason = "OK" if status == 200 else "Status"
    if headers:
        resp.headers.update(headers)
    return resp


def load_snapshot(folder: str, name: str) -> str:
    return (SNAPSHOTS / folder / f"{name}.html").read_text(encoding="utf-8")


class FakeSession:
    """Replays queued responses (or raises queued exceptions) in order."""

    def __init__(self, script: list, set_cookies: list | None = None) -> None:
        self.script = script
        self.set_cookies = list(set_cookies or [])
        self.calls: list[SimpleNamespace] = []
        self.headers: dict[str, str] = {}
        self.cookies = None
        self.max_redirects = 30
        self.close_count = 0

    def request(self, method, url, **kwargs):
        self.calls.append(SimpleNamespace(method=method, url=url, **kwargs))
        while self.set_cookies:
            self.cookies.set_cookie(self.set_cookies.pop(0))
        item = self.script.pop(0)
        if isinstance(item, BaseException):
            raise item
        return item

    def close(self) -> None:
        self.close_count += 1


class FakeSessionFactory:
    """Session factory handing out :class:`FakeSession` objects over one script."""

    def __init__(self, script: list | None = None, error: Exception | None = None) -> None:
        self.script = list(script or [])
        self.error = error
        self.sessions: list[FakeSession] = []
        self.set_cookies: list = []

    def __call__(self) -> FakeSession:
        if self.error is not None:
            raise self.error
        session = FakeSession(self.script, self.set_cookies)
        self.set_cookies = []
        self.sessions.append(session)
        return session

    @property
    def calls(self) -> list[SimpleNamespace]:
        return [call for session in self.sessions for call in session.calls]


@pytest.fixture
def settings() -> ClientSettings:
    return ClientSettings()


@pytest.fixture
def jar_file(tmp_path) -> CookieJarFile:
    return CookieJarFile(tmp_path / "cookies.txt")


@pytest.fixture
def session_factory() -> FakeSessionFactory:
    return FakeSessionFactory()


@pytest.fixture
def transport(settings, jar_file, session_factory) -> SessionTransport:
    return SessionTransport(settings, jar_file, session_factory=session_factory)


def session_cookie(name: str, value: str):
    return create_cookie(name, value, domain="www.inspectlet.com")
