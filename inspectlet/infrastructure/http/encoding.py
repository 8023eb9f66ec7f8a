"""Request body and content type selection.

The dashboard expects a different content type and body shape depending on
the HTTP method and the format of the answer. Only three combinations are
special; every other pairing is sent as a plain ``text/html`` request
without a body.
"""

from __future__ import annotations

import json
from typing import Any, Mapping

from inspectlet.domain.models import EncodedRequest, HttpMethod, ResponseFormat

JSON_CONTENT_TYPE = "application/json;charset=UTF-8"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"
HTML_CONTENT_TYPE = "text/html"


def encode_request(
    method: HttpMethod,
    response_format: ResponseFormat,
    params: Mapping[str, Any] | None = None,
) -> EncodedRequest:
    """Return the content type and payload for ``(method, response_format)``."""
    params = params or {}
    key = (method, response_format)

    if key == (HttpMethod.POST, ResponseFormat.JSON):
        body = json.dumps(params, separators=(",", ":")) if params else "{}"
        return EncodedRequest(content_type=JSON_CONTENT_TYPE, body=body)
    if key == (HttpMethod.POST, ResponseFormat.HTML):
        return EncodedRequest(content_type=FORM_CONTENT_TYPE, form=dict(params))
    if key == (HttpMethod.GET, ResponseFormat.JSON):
        return EncodedRequest(content_type=JSON_CONTENT_TYPE)
    # GET + HTML and anything added to the enums later
    return EncodedRequest(content_type=HTML_CONTENT_TYPE)


__all__ = [
    "FORM_CONTENT_TYPE",
    "HTML_CONTENT_TYPE",
    "JSON_CONTENT_TYPE",
    "encode_request",
]
