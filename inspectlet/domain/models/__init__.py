"""Domain models package.

Envelopes, request descriptors, credentials and scraped site records.
"""

from .request import (
    Credentials,
    EncodedRequest,
    HttpMethod,
    RequestDescriptor,
    ResponseFormat,
)
from .result import Result
from .site import SiteRecord

__all__ = [
    "Credentials",
    "EncodedRequest",
    "HttpMethod",
    "RequestDescriptor",
    "ResponseFormat",
    "Result",
    "SiteRecord",
]
