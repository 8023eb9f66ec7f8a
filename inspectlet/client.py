"""Public client for the Inspectlet dashboard.

Usage::

    with Inspectlet("me@example.com", "secret") as inspectlet:
        sites = inspectlet.list_sites()
        if sites.success:
            for site in sites.data:
                captures = inspectlet.get_captures(site.id, {"page": 1})

Every call signs in, performs its request and signs out again; results are
:class:`~inspectlet.domain.models.Result` envelopes, never exceptions.
"""

from __future__ import annotations

import weakref
from typing import Any, Mapping

from inspectlet.config import ClientSettings
from inspectlet.domain.models import Credentials, HttpMethod, ResponseFormat, Result
from inspectlet.infrastructure.http import (
    CookieJarFile,
    InspectletHttpClient,
    SessionTransport,
)
from inspectlet.infrastructure.observability.logging import get_logger, log_context
from inspectlet.infrastructure.web.parsers import parse_site_list

logger = get_logger(__name__)


class Inspectlet:
    """Session-authenticated client for one Inspectlet account."""

    def __init__(
        self,
        username: str,
        password: str,
        *,
        settings: ClientSettings | None = None,
        session_token: str | None = None,
        transport: SessionTransport | None = None,
    ) -> None:
        self.credentials = Credentials(username, password)
        settings = settings or ClientSettings()
        if session_token is not None:
            settings = settings.with_overrides(session_token=session_token)
        self.settings = settings
        self._jar_finalizer = None
        if transport is None:
            jar_file = CookieJarFile()
            transport = SessionTransport(settings, jar_file)
            # The temp jar is removed even if close() is never called.
            self._jar_finalizer = weakref.finalize(self, jar_file.remove)
        self.transport = transport
        self.http = InspectletHttpClient(self.credentials, transport, settings)
        if settings.verify_tls is False:
            logger.warning(
                f"TLS certificate verification is disabled for {settings.base_url}"
            )

    def run(
        self,
        path: str,
        method: str | HttpMethod = HttpMethod.POST,
        response_format: str | ResponseFormat = ResponseFormat.JSON,
        params: Mapping[str, Any] | None = None,
    ) -> Result:
        """Perform one authenticated request; see :meth:`InspectletHttpClient.run`."""
        return self.http.run(path, method, response_format, params)

    def list_sites(self) -> Result:
        """Return the sites of the account scraped from the dashboard.

        On success ``data`` is a list of :class:`SiteRecord` and ``html``
        holds the dashboard markup they were scraped from. Markup that no
        longer matches yields the rows parsed before the mismatch.
        """
        result = self.run(self.settings.dashboard_path, HttpMethod.GET, ResponseFormat.HTML)
        if not result.success:
            return result

        html = str(result.data)
        parsed = parse_site_list(html)
        result.html = html
        result.data = parsed.sites
        logger.info(f"Listed {len(parsed.sites)} site(s)")
        return result

    def get_captures(self, site_id: str | int, params: Mapping[str, Any] | None = None) -> Result:
        """Return the capture data of one site, decoded from JSON."""
        with log_context(site_id=site_id):
            return self.run(
                self.settings.captures_path(site_id),
                HttpMethod.POST,
                ResponseFormat.JSON,
                params,
            )

    def close(self) -> None:
        """Delete the cookie jar file of this client."""
        if self._jar_finalizer is not None:
            self._jar_finalizer()
        else:
            self.transport.jar_file.remove()

    def __enter__(self) -> "Inspectlet":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


__all__ = ["Inspectlet"]
