"""Reusable parsing helpers for dashboard scrapers.

Text and attribute extraction with BeautifulSoup, plus lightweight structure
checksums so markup drift on the dashboard shows up in the logs.
"""

from __future__ import annotations

import hashlib
import logging
import re

from bs4 import Tag

# HTML helpers


def extract_text(element, default: str = "") -> str:
    """Return the full text content of ``element``, stripped at both ends."""

    if element is None:
        return default
    return element.get_text().strip()


def extract_attribute(element: Tag | None, name: str, default: str = "") -> str:
    """Return a stripped attribute value; multi-valued attributes are joined."""

    if element is None:
        return default
    value = element.get(name, default)
    if isinstance(value, list):
        value = " ".join(value)
    return str(value).strip()


def strip_prefix_ci(value: str, prefix: str) -> str:
    """Remove every case-insensitive occurrence of ``prefix`` from ``value``."""

    if not prefix:
        return value
    return re.sub(re.escape(prefix), "", value, flags=re.IGNORECASE)


# Diagnostics helpers


def structure_checksum(html_fragment: str) -> str:
    """Return a stable checksum for a markup fragment."""

    normalized = re.sub(r"\s+", " ", html_fragment or "").strip()
    return hashlib.sha256(normalized.encode("utf-8")).hexdigest()


def log_structure_signature(
    logger: logging.Logger, section: str, html_fragment: str
) -> None:
    """Log a checksum for a specific parser section to detect layout drift."""

    checksum = structure_checksum(html_fragment)
    logger.debug(
        f"structure-signature section={section} checksum={checksum[:12]}",
        extra={"section": section, "checksum": checksum},
    )


def record_parsing_error(
    logger: logging.Logger, section: str, html_fragment: str, error: Exception
) -> None:
    """Log a parsing failure with a checksum and a clipped HTML snippet."""

    checksum = structure_checksum(html_fragment)
    snippet = (html_fragment or "").strip()
    if len(snippet) > 500:
        snippet = snippet[:500] + "…"
    logger.warning(
        f"parsing-error section={section}: {error!r}",
        extra={
            "section": section,
            "checksum": checksum,
            "snippet": snippet,
            "error": str(error),
        },
    )
