# disaster_dashboard/services/volcanoes.py
"""
Smithsonian GVP "current eruptions" page → short list of VolcanoEntry.

The page is unversioned HTML, so extraction is a best-effort chain of
interchangeable extractors. The first one that finds anything wins:

  1. TableRowExtractor: each <tr> with cells: name=cell 0, status=cell 1
  2. ListItemExtractor: any <li> with enough text, truncated, no status

A page that matches neither yields an empty list, not an error.
"""
from __future__ import annotations

import logging
from typing import List, Protocol, Sequence

import httpx
from bs4 import BeautifulSoup

from disaster_dashboard.core.contracts import VolcanoEntry
from disaster_dashboard.core.settings import settings
from disaster_dashboard.services.upstream import fetch

logger = logging.getLogger(__name__)

GVP_CURRENT_ERUPTIONS_URL = "https://volcano.si.edu/gvp_currenteruptions.cfm"


class VolcanoExtractor(Protocol):
    name: str

    def extract(self, soup: BeautifulSoup, limit: int) -> List[VolcanoEntry]:
        ...


class TableRowExtractor:
    name = "table"

    def extract(self, soup: BeautifulSoup, limit: int) -> List[VolcanoEntry]:
        out: List[VolcanoEntry] = []
        for tr in soup.select("table tr"):
            if len(out) >= limit:
                break
            cells = tr.find_all("td")
            if not cells:
                continue
            name = cells[0].get_text().strip()
            if not name:
                continue
            status = cells[1].get_text().strip() if len(cells) > 1 else ""
            out.append(VolcanoEntry(name=name, status=status))
        return out


class ListItemExtractor:
    name = "list"

    def __init__(self, *, min_chars: int, name_chars: int):
        self.min_chars = min_chars
        self.name_chars = name_chars

    def extract(self, soup: BeautifulSoup, limit: int) -> List[VolcanoEntry]:
        out: List[VolcanoEntry] = []
        for li in soup.find_all("li"):
            if len(out) >= limit:
                break
            text = li.get_text().strip()
            if len(text) > self.min_chars:
                out.append(VolcanoEntry(name=text[: self.name_chars], status=""))
        return out


def default_extractors() -> List[VolcanoExtractor]:
    return [
        TableRowExtractor(),
        ListItemExtractor(
            min_chars=settings.volcano_fallback_min_chars,
            name_chars=settings.volcano_fallback_name_chars,
        ),
    ]


def extract_volcanoes(
    html: str,
    *,
    extractors: Sequence[VolcanoExtractor] | None = None,
    limit: int | None = None,
) -> List[VolcanoEntry]:
    cap = int(limit if limit is not None else settings.volcano_max_entries)
    soup = BeautifulSoup(html or "", "html.parser")

    for extractor in extractors if extractors is not None else default_extractors():
        entries = extractor.extract(soup, cap)
        if entries:
            logger.debug("gvp extractor=%s entries=%d", extractor.name, len(entries))
            return entries[:cap]

    logger.warning("gvp: no extractor matched the page, returning no volcanoes")
    return []


class Volcanoes:
    def __init__(self, *, client: httpx.AsyncClient, timeout_s: float | None = None):
        self.client = client
        self.timeout_s = float(timeout_s or settings.volcanoes_timeout_s)

    async def fetch(self) -> List[VolcanoEntry]:
        r = await fetch(self.client, GVP_CURRENT_ERUPTIONS_URL, timeout_s=self.timeout_s)
        entries = extract_volcanoes(r.text)
        logger.info("gvp_current_eruptions entries=%d", len(entries))
        return entries
