# disaster_dashboard/services/tsunami.py
"""
tsunami.gov ATOM feed (NTWC, PAAQ) → list of TsunamiEntry.

The feed can carry zero, one or many <entry> elements. They are collected
into a list right here so nothing downstream ever has to ask whether it got
one entry or several. Matching is on local names, so the Atom namespace
(or the lack of one) does not matter.
"""
from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from typing import Iterator, List, Optional

import httpx

from disaster_dashboard.core.contracts import TsunamiEntry
from disaster_dashboard.core.errors import UpstreamError
from disaster_dashboard.core.settings import settings
from disaster_dashboard.services.upstream import fetch

logger = logging.getLogger(__name__)

NTWC_ATOM_URL = "https://www.tsunami.gov/events/xml/PAAQAtom.xml"


# ══════════════════════════════════════════════════════════════
# XML helpers
# ══════════════════════════════════════════════════════════════

def _localname(tag: str) -> str:
    if "}" in tag:
        return tag.split("}", 1)[1]
    return tag


def _children(el: ET.Element, name: str) -> Iterator[ET.Element]:
    for child in el:
        if isinstance(child.tag, str) and _localname(child.tag) == name:
            yield child


def _first_child(el: ET.Element, name: str) -> Optional[ET.Element]:
    return next(_children(el, name), None)


def _inner_text(el: Optional[ET.Element]) -> str:
    # <summary type="xhtml"><div>...</div></summary> and plain text alike
    if el is None:
        return ""
    return "".join(el.itertext()).strip()


def _first_href(entry: ET.Element) -> str:
    link = _first_child(entry, "link")
    if link is None:
        return ""
    return (link.get("href") or "").strip()


# ══════════════════════════════════════════════════════════════
# ATOM parser
# ══════════════════════════════════════════════════════════════

def _parse_entry(entry: ET.Element) -> TsunamiEntry:
    return TsunamiEntry(
        id=_inner_text(_first_child(entry, "id")),
        title=_inner_text(_first_child(entry, "title")),
        updated=_inner_text(_first_child(entry, "updated")),
        summary=_inner_text(_first_child(entry, "summary")),
        link=_first_href(entry),
    )


def parse_atom(xml_text: str) -> List[TsunamiEntry]:
    """
    Parse an ATOM document into entries.

    Raises UpstreamError on malformed XML. A well-formed document whose root
    is not <feed> has no entries.
    """
    try:
        root = ET.fromstring(xml_text)
    except ET.ParseError as exc:
        raise UpstreamError(f"tsunami feed is not valid XML: {exc}") from exc

    if _localname(root.tag) != "feed":
        return []

    return [_parse_entry(e) for e in _children(root, "entry")]


class Tsunami:
    def __init__(self, *, client: httpx.AsyncClient, timeout_s: float | None = None):
        self.client = client
        self.timeout_s = float(timeout_s or settings.tsunami_timeout_s)

    async def fetch(self) -> List[TsunamiEntry]:
        r = await fetch(self.client, NTWC_ATOM_URL, timeout_s=self.timeout_s)
        entries = parse_atom(r.text)
        logger.info("tsunami_atom entries=%d", len(entries))
        return entries
