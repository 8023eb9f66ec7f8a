"""Dashboard sign-in and sign-out over a transport connection."""

from __future__ import annotations

from inspectlet.config import ClientSettings
from inspectlet.domain.models import Credentials
from inspectlet.infrastructure.observability.logging import get_logger

from .encoding import FORM_CONTENT_TYPE, HTML_CONTENT_TYPE
from .transport import TransportConnection

logger = get_logger(__name__)

# Status codes accepted from any dashboard exchange.
ACCEPTED_STATUSES = (200, 302)


def _usable(connection: TransportConnection | None) -> bool:
    return connection is not None and not connection.closed


def log_in(
    connection: TransportConnection | None,
    credentials: Credentials,
    settings: ClientSettings,
) -> bool:
    """Post the sign-in form; True when the dashboard accepted it."""
    if not _usable(connection):
        return False

    transfer = connection.execute(
        "POST",
        settings.build_url(settings.login_path),
        FORM_CONTENT_TYPE,
        body=credentials.form_body(),
        include_headers=True,
    )
    if transfer.status_in(*ACCEPTED_STATUSES):
        logger.debug("Logged in")
        return True
    logger.warning(
        f"Login rejected (status={transfer.status}, error={transfer.error})"
    )
    return False


def log_out(connection: TransportConnection | None, settings: ClientSettings) -> bool:
    """Request the sign-out page; True when the dashboard answered 200/302."""
    if not _usable(connection):
        return False

    transfer = connection.execute(
        "GET",
        settings.build_url(settings.logout_path),
        HTML_CONTENT_TYPE,
        include_headers=True,
    )
    if transfer.status_in(*ACCEPTED_STATUSES):
        logger.debug("Logged out")
        return True
    logger.warning(
        f"Logout rejected (status={transfer.status}, error={transfer.error})"
    )
    return False


__all__ = ["ACCEPTED_STATUSES", "log_in", "log_out"]
