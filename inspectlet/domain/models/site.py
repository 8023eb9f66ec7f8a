"""Site record scraped from the dashboard listing."""

from __future__ import annotations

from dataclasses import asdict, dataclass


@dataclass
class SiteRecord:
    """One row of the dashboard site list.

    ``captures``, ``heatmaps`` and ``forms`` are relative dashboard URLs;
    ``status`` is the ``src`` of the status icon shown for the site.
    """

    id: str
    name: str
    captures: str
    heatmaps: str
    forms: str
    status: str

    def to_dict(self) -> dict[str, str]:
        return asdict(self)
