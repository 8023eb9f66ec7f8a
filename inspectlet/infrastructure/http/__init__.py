"""HTTP adapters for the Inspectlet dashboard.

This package provides the per-call session transport, the sign-in/sign-out
exchanges and the authenticated request dispatcher.
"""

from .auth import ACCEPTED_STATUSES, log_in, log_out
from .client import (
    CONNECTION_FAILED,
    LOGIN_FAILED,
    TRANSPORT_ERROR_LABEL,
    InspectletHttpClient,
)
from .decoding import decode_json, interpret, passthrough
from .encoding import encode_request
from .transport import (
    BrowserSession,
    CookieJarFile,
    SessionTransport,
    Transfer,
    TransportConnection,
)

__all__ = [
    "ACCEPTED_STATUSES",
    "BrowserSession",
    "CONNECTION_FAILED",
    "CookieJarFile",
    "InspectletHttpClient",
    "LOGIN_FAILED",
    "SessionTransport",
    "TRANSPORT_ERROR_LABEL",
    "Transfer",
    "TransportConnection",
    "decode_json",
    "encode_request",
    "interpret",
    "log_in",
    "log_out",
    "passthrough",
]
