"""Parsers for Inspectlet dashboard HTML.

The dashboard exposes the account's site list only as server-rendered
markup; this package turns it into :class:`~inspectlet.domain.models.SiteRecord`
objects.
"""

from .site_list import (
    CAPTURES_PREFIX,
    SiteListMarkupError,
    SiteListParseResult,
    parse_site_list,
    parse_site_row,
)
from .utils import (
    extract_attribute,
    extract_text,
    log_structure_signature,
    record_parsing_error,
    strip_prefix_ci,
    structure_checksum,
)

__all__ = [
    "CAPTURES_PREFIX",
    "SiteListMarkupError",
    "SiteListParseResult",
    "extract_attribute",
    "extract_text",
    "log_structure_signature",
    "parse_site_list",
    "parse_site_row",
    "record_parsing_error",
    "strip_prefix_ci",
    "structure_checksum",
]
