"""Parser for the dashboard site list.

The dashboard renders the sites of an account as zebra-striped ``div`` rows
inside ``#sitelist``; there is no JSON endpoint for it. Each row has one cell
per column, recognised by a class marker (``cname``, ``crecenabled``,
``cheatmaps``, ``cformanalytics``, ``cstatus``).

Scraping is best effort: when a row does not have the expected shape the
scrape stops, the rows parsed so far are kept and the error is logged and
returned alongside them instead of being raised.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from bs4 import BeautifulSoup, Tag

from inspectlet.domain.models import SiteRecord
from inspectlet.infrastructure.observability.logging import get_logger
from . import utils

logger = get_logger(__name__)

SITE_LIST_ID = "sitelist"
ROW_CLASSES = ("trow listcolor1", "trow listcolor2")
CAPTURES_PREFIX = "/dashboard/captures/"


class SiteListMarkupError(LookupError):
    """Raised internally when a row lacks an expected cell or element."""


@dataclass
class SiteListParseResult:
    """Sites scraped from the listing and the error that stopped the scrape."""

    sites: list[SiteRecord] = field(default_factory=list)
    error: Exception | None = None

    @property
    def complete(self) -> bool:
        return self.error is None


def _class_string(element: Tag) -> str:
    return " ".join(element.get("class") or [])


def _iter_rows(soup: BeautifulSoup):
    for container in soup.find_all("div", id=SITE_LIST_ID):
        for row in container.find_all("div", recursive=False):
            if _class_string(row) in ROW_CLASSES:
                yield row


def _cell(row: Tag, marker: str) -> Tag:
    for child in row.find_all("div", recursive=False):
        if marker in _class_string(child):
            return child
    raise SiteListMarkupError(f"row has no '{marker}' cell")


def _child(cell: Tag, name: str) -> Tag:
    element = cell.find(name, recursive=False)
    if element is None:
        raise SiteListMarkupError(f"cell '{_class_string(cell)}' has no <{name}>")
    return element


def parse_site_row(row: Tag) -> SiteRecord:
    """Build a :class:`SiteRecord` from one listing row."""

    name = utils.extract_text(_cell(row, "cname"))
    captures = utils.extract_attribute(_child(_cell(row, "crecenabled"), "a"), "href")
    heatmaps = utils.extract_attribute(_child(_cell(row, "cheatmaps"), "a"), "href")
    forms = utils.extract_attribute(_child(_cell(row, "cformanalytics"), "a"), "href")
    status = utils.extract_attribute(_child(_cell(row, "cstatus"), "img"), "src")
    return SiteRecord(
        id=utils.strip_prefix_ci(captures, CAPTURES_PREFIX),
        name=name,
        captures=captures,
        heatmaps=heatmaps,
        forms=forms,
        status=status,
    )


def parse_site_list(html: str) -> SiteListParseResult:
    """Scrape every site row from the dashboard listing markup."""

    result = SiteListParseResult()
    fragment = html or ""
    try:
        soup = BeautifulSoup(fragment, "html.parser")
        container = soup.find("div", id=SITE_LIST_ID)
        if container is not None:
            fragment = str(container)
            utils.log_structure_signature(logger, "site_list.container", fragment)
        for row in _iter_rows(soup):
            result.sites.append(parse_site_row(row))
    except Exception as exc:
        result.error = exc
        utils.record_parsing_error(logger, "site_list", fragment, exc)
    return result


__all__ = [
    "CAPTURES_PREFIX",
    "ROW_CLASSES",
    "SITE_LIST_ID",
    "SiteListMarkupError",
    "SiteListParseResult",
    "parse_site_list",
    "parse_site_row",
]
