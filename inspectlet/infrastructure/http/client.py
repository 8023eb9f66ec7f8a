"""Authenticated request dispatcher for the Inspectlet dashboard.

The dashboard offers no API tokens, so every call signs in through the HTML
login form, issues one request with the resulting cookie session, signs out
and closes the connection again. :meth:`InspectletHttpClient.run` performs
that whole cycle and reports the outcome as a :class:`Result` instead of
raising; transport errors, rejected logins, unexpected status codes and
undecodable JSON all come back as failed results.
"""

from __future__ import annotations

from typing import Any, Mapping

from inspectlet.config import ClientSettings
from inspectlet.domain.models import (
    Credentials,
    HttpMethod,
    RequestDescriptor,
    ResponseFormat,
    Result,
)
from inspectlet.infrastructure.observability.logging import get_logger, log_context

from .auth import ACCEPTED_STATUSES, log_in, log_out
from .decoding import interpret
from .encoding import encode_request
from .transport import SessionTransport, TransportConnection

logger = get_logger(__name__)

CONNECTION_FAILED = "Cannot initialize connection."
LOGIN_FAILED = "Failed to log in."
# The label is part of the failure message format callers match on.
TRANSPORT_ERROR_LABEL = "cURL Error"


class InspectletHttpClient:
    """Runs one login/request/logout cycle per call."""

    def __init__(
        self,
        credentials: Credentials,
        transport: SessionTransport,
        settings: ClientSettings,
    ) -> None:
        self.credentials = credentials
        self.transport = transport
        self.settings = settings

    def run(
        self,
        path: str,
        method: str | HttpMethod = HttpMethod.POST,
        response_format: str | ResponseFormat = ResponseFormat.JSON,
        params: Mapping[str, Any] | None = None,
    ) -> Result:
        """Log in, perform one request against ``path``, log out.

        Args:
            path: Dashboard path, e.g. ``/dashboard``.
            method: ``GET`` or ``POST``.
            response_format: ``JSON`` to decode the body, ``HTML`` to return it raw.
            params: Request parameters, encoded according to method and format.

        Returns:
            A successful :class:`Result` with the decoded (or raw) body, or a
            failed one describing which step went wrong.
        """
        request = RequestDescriptor.build(path, method, response_format, params)
        with log_context(path=request.path, method=request.method.value):
            outcome = self._exchange(request)
            if isinstance(outcome, Result):
                return outcome
            return interpret(outcome, request.response_format)

    def _exchange(self, request: RequestDescriptor) -> Result | str:
        """Return the response body, or a failed result.

        The connection is released before this returns on every path where
        it was acquired.
        """
        with self.transport.connection() as connection:
            if connection is None:
                return Result.fail(CONNECTION_FAILED)

            if not log_in(connection, self.credentials, self.settings):
                return Result.fail(LOGIN_FAILED)

            transfer = self._send(connection, request)
            if transfer.failed:
                return Result.fail(f"{TRANSPORT_ERROR_LABEL}: {transfer.error}")
            if transfer.status not in ACCEPTED_STATUSES:
                logger.warning(f"Dashboard answered HTTP {transfer.status}")
                return Result.fail(f"HTTP Error [{transfer.status}]: {transfer.body}")

            if not log_out(connection, self.settings):
                logger.warning("Logout failed; the dashboard session will expire on its own")
            return transfer.body

    def _send(self, connection: TransportConnection, request: RequestDescriptor):
        encoded = encode_request(request.method, request.response_format, request.params)
        return connection.execute(
            request.method.value,
            self.settings.build_url(request.path),
            encoded.content_type,
            body=encoded.body,
            form=encoded.form,
        )


__all__ = [
    "CONNECTION_FAILED",
    "InspectletHttpClient",
    "LOGIN_FAILED",
    "TRANSPORT_ERROR_LABEL",
]
