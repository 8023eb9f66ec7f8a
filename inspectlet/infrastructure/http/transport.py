"""Session transport: one connection and one cookie jar per dashboard call.

A :class:`SessionTransport` hands out a fresh :class:`TransportConnection`
for every high-level call. The connection wraps a :class:`requests.Session`
configured like a browser (user agent, redirects with referer, cookie jar)
and reads/writes the client's Netscape cookie file around every request, so
cookies set by the login form carry over into the authenticated request.
Connections are never reused: the dispatcher releases each one before the
call returns.
"""

from __future__ import annotations

import os
import tempfile
import time
import warnings
from contextlib import contextmanager
from dataclasses import dataclass, field
from http.cookiejar import LoadError, MozillaCookieJar
from pathlib import Path
from typing import Any, Callable, Iterator, Mapping

import requests
from requests import Response, Session
from urllib3.exceptions import HTTPError, InsecureRequestWarning
from urllib3.response import BaseHTTPResponse

from inspectlet.config import ClientSettings
from inspectlet.infrastructure.observability.logging import get_logger, log_exception

logger = get_logger(__name__)


@dataclass
class Transfer:
    """Outcome of one request, in the shape the dispatcher inspects.

    ``error`` is set when the transport itself failed (DNS, TLS, timeout,
    too many redirects...). A non-2xx answer is not a transport failure.
    """

    status: int | None
    body: str
    error: str | None = None
    headers: dict[str, str] = field(default_factory=dict)

    @property
    def failed(self) -> bool:
        return self.error is not None

    def status_in(self, *codes: int) -> bool:
        return not self.failed and self.status in codes


class CookieJarFile:
    """Netscape-format cookie file shared by all calls of one client."""

    def __init__(self, path: str | Path | None = None) -> None:
        if path is None:
            fd, name = tempfile.mkstemp(prefix="inspectlet-", suffix=".cookies")
            os.close(fd)
            path = name
        self.path = Path(path)
        if not self.path.exists() or self.path.stat().st_size == 0:
            # An empty file is not a valid jar; write the header.
            MozillaCookieJar(str(self.path)).save()

    def load(self) -> MozillaCookieJar:
        """Return the stored cookies, without session cookies.

        Session cookies left by a previous call are dropped so every call
        starts a fresh cookie session and re-establishes it by logging in.
        """
        jar = MozillaCookieJar(str(self.path))
        jar.load(ignore_discard=False, ignore_expires=False)
        return jar

    def save(self, jar: MozillaCookieJar) -> None:
        jar.save(str(self.path), ignore_discard=True, ignore_expires=True)

    def remove(self) -> None:
        try:
            self.path.unlink()
        except FileNotFoundError:
            pass


class BrowserSession(Session):
    """``requests`` session that sets ``Referer`` on redirect hops."""

    def rebuild_auth(self, prepared_request, response) -> None:
        super().rebuild_auth(prepared_request, response)
        prepared_request.headers["Referer"] = response.url


# Bytes requested per read while draining a response body.
READ_CHUNK_SIZE = 64 * 1024


class TotalTimeout(requests.Timeout):
    """Raised when a request outlives the per-request deadline."""


def _read_chunk(raw: Any) -> bytes:
    # One socket read per call; the deadline is checked between reads.
    if isinstance(raw, BaseHTTPResponse):
        return raw.read1(READ_CHUNK_SIZE, decode_content=True)
    return raw.read1(READ_CHUNK_SIZE)


def _read_body(response: Response, deadline: float, total: float) -> None:
    """Load ``response`` content, failing once ``deadline`` has passed.

    The deadline covers the whole exchange: redirect hops, headers and every
    body read.
    """
    chunks: list[bytes] = []
    while True:
        if time.monotonic() > deadline:
            raise TotalTimeout(f"Operation timed out after {total:g} seconds")
        chunk = _read_chunk(response.raw)
        if not chunk:
            break
        chunks.append(chunk)
    response._content = b"".join(chunks)
    response._content_consumed = True


def _header_block(response: Response) -> str:
    lines = [f"HTTP/1.1 {response.status_code} {response.reason or ''}".rstrip()]
    lines.extend(f"{name}: {value}" for name, value in response.headers.items())
    return "\r\n".join(lines) + "\r\n\r\n"


class TransportConnection:
    """Connection handle used for one login/request/logout cycle."""

    def __init__(
        self,
        session: Any,
        jar_file: CookieJarFile,
        cookies: MozillaCookieJar,
        settings: ClientSettings,
    ) -> None:
        self.session = session
        self.jar_file = jar_file
        self.cookies = cookies
        self.settings = settings
        self.closed = False
        self._configure()

    def _configure(self) -> None:
        self.session.cookies = self.cookies
        self.session.max_redirects = self.settings.max_redirects
        self.session.headers["User-Agent"] = self.settings.user_agent

    def execute(
        self,
        method: str,
        url: str,
        content_type: str,
        *,
        body: str | None = None,
        form: Mapping[str, Any] | None = None,
        include_headers: bool = False,
    ) -> Transfer:
        """Perform one request and capture its outcome in memory.

        ``form`` is form-encoded by ``requests``; ``body`` is sent as is.
        With ``include_headers`` the status line and response headers are
        prepended to the captured body.
        """
        if self.closed:
            return Transfer(status=None, body="", error="Connection is closed.")

        data: Any = dict(form) if form is not None else body
        deadline = time.monotonic() + self.settings.total_timeout
        try:
            with warnings.catch_warnings():
                if self.settings.verify_tls is False:
                    warnings.simplefilter("ignore", InsecureRequestWarning)
                response = self.session.request(
                    method,
                    url,
                    headers={"Content-type": content_type},
                    data=data,
                    cookies=self.settings.session_cookies() or None,
                    timeout=self.settings.timeout,
                    verify=self.settings.verify_tls,
                    allow_redirects=True,
                    stream=True,
                )
            try:
                _read_body(response, deadline, self.settings.total_timeout)
            finally:
                response.close()
        except (requests.RequestException, HTTPError, OSError) as exc:
            logger.warning(f"{method} {url} failed: {exc}")
            self._persist_cookies()
            return Transfer(status=None, body="", error=str(exc))

        self._persist_cookies()
        text = response.text
        if include_headers:
            text = _header_block(response) + text
        logger.debug(f"{method} {url} -> {response.status_code}")
        return Transfer(
            status=response.status_code,
            body=text,
            headers=dict(response.headers),
        )

    def _persist_cookies(self) -> None:
        try:
            self.jar_file.save(self.cookies)
        except OSError as exc:
            log_exception(logger, "Could not write cookie jar", exc, path=self.jar_file.path)

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        self.session.close()


class SessionTransport:
    """Factory for per-call connections sharing one cookie jar file."""

    def __init__(
        self,
        settings: ClientSettings,
        jar_file: CookieJarFile,
        session_factory: Callable[[], Any] = BrowserSession,
    ) -> None:
        self.settings = settings
        self.jar_file = jar_file
        self.session_factory = session_factory

    def acquire_connection(self) -> TransportConnection | None:
        """Create a fresh connection, or return ``None`` if that fails."""
        try:
            cookies = self.jar_file.load()
        except (LoadError, OSError) as exc:
            log_exception(logger, "Could not load cookie jar", exc, path=self.jar_file.path)
            return None
        try:
            session = self.session_factory()
        except Exception as exc:
            log_exception(logger, "Could not create HTTP session", exc)
            return None
        return TransportConnection(session, self.jar_file, cookies, self.settings)

    def release_connection(self, connection: TransportConnection) -> None:
        connection.close()

    @contextmanager
    def connection(self) -> Iterator[TransportConnection | None]:
        """Yield a connection (or ``None``) and release it on exit."""
        connection = self.acquire_connection()
        try:
            yield connection
        finally:
            if connection is not None:
                self.release_connection(connection)


__all__ = [
    "BrowserSession",
    "CookieJarFile",
    "SessionTransport",
    "Transfer",
    "TransportConnection",
]
