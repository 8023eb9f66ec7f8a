"""Client settings.

The dashboard client takes its configuration as a :class:`ClientSettings`
instance passed to the constructor. Defaults reproduce the browser-like
behaviour the dashboard expects.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any

DEFAULT_BASE_URL = "https://www.inspectlet.com"

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows; U; Windows NT 5.1; rv:1.7.3) "
    "Gecko/20041001 Firefox/0.10.1"
)


@dataclass(frozen=True)
class ClientSettings:
    """Settings shared by every request of a client instance.

    ``verify_tls`` defaults to ``False``: the dashboard has historically been
    reached with certificate verification disabled. Set it to ``True`` (or
    to a CA bundle path) to verify the server certificate. The client logs a
    warning whenever verification is off.

    ``session_token``, when set, is sent as the cookie
    ``<session_cookie_name>=<session_token>`` alongside the cookie jar so a
    caller can correlate dashboard requests with its own session.
    """

    base_url: str = DEFAULT_BASE_URL
    user_agent: str = DEFAULT_USER_AGENT
    connect_timeout: float = 5.0
    read_timeout: float = 5.0
    total_timeout: float = 5.0
    max_redirects: int = 10
    verify_tls: bool | str = False
    session_cookie_name: str = "PHPSESSID"
    session_token: str | None = None
    login_path: str = "/signin/login"
    logout_path: str = "/control/logout"
    dashboard_path: str = "/dashboard"
    captures_path_template: str = "/dashboard/captureapi/{site_id}"

    @property
    def timeout(self) -> tuple[float, float]:
        """``(connect, read)`` for ``requests``; no single read outlasts ``total_timeout``."""
        return (self.connect_timeout, min(self.read_timeout, self.total_timeout))

    def build_url(self, path: str) -> str:
        """Return the absolute URL for a dashboard path."""
        return self.base_url.rstrip("/") + "/" + path.lstrip("/")

    def captures_path(self, site_id: Any) -> str:
        return self.captures_path_template.format(site_id=site_id)

    def session_cookies(self) -> dict[str, str]:
        if not self.session_token:
            return {}
        return {self.session_cookie_name: self.session_token}

    def with_overrides(self, **changes: Any) -> "ClientSettings":
        """Return a copy with the given fields replaced."""
        return dataclasses.replace(self, **changes)


__all__ = ["DEFAULT_BASE_URL", "DEFAULT_USER_AGENT", "ClientSettings"]
