"""
View model for the dashboard page.

Pure functions from envelope `data` (or None for a failed feed) to what the
renderer draws. Anything malformed degrades to a placeholder instead of
raising.
"""
from __future__ import annotations

import math
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from disaster_dashboard.core.contracts import EarthquakeFeature, FloodReport
from disaster_dashboard.core.settings import settings
from disaster_dashboard.presentation.feeds import DashboardFeeds

EARTHQUAKES_UNAVAILABLE = "Earthquake feed unavailable"
TSUNAMI_UNAVAILABLE = "Tsunami feed unavailable"
TSUNAMI_NO_WARNINGS = "No tsunami warnings"
TSUNAMI_UNTITLED = "Latest tsunami message"
VOLCANOES_UNAVAILABLE = "Volcano feed unavailable"
FLOODS_UNAVAILABLE = "Flood feed unavailable"

TSUNAMI_REFERENCE_URL = "https://www.tsunami.gov/"
VOLCANO_REPORT_URL = "https://volcano.si.edu/"
RELIEFWEB_URL = "https://reliefweb.int/"
EMERGENCY_MAPPING_URL = "https://rapidmapping.emergency.copernicus.eu/EMSR839/download"


class ListItem(BaseModel):
    text: str
    href: Optional[str] = None


class TsunamiBanner(BaseModel):
    text: str
    href: Optional[str] = None      # set only when there is a message to open


class DashboardView(BaseModel):
    quakes: List[EarthquakeFeature] = Field(default_factory=list)
    quake_caption: str = EARTHQUAKES_UNAVAILABLE
    tsunami: TsunamiBanner
    volcano_items: List[ListItem] = Field(default_factory=list)
    flood_items: List[ListItem] = Field(default_factory=list)


# ══════════════════════════════════════════════════════════════
# Earthquakes
# ══════════════════════════════════════════════════════════════

def _safe_float(x: Any) -> Optional[float]:
    try:
        f = float(x)
        if math.isfinite(f):
            return f
    except (TypeError, ValueError):
        return None
    return None


def magnitude_color(mag: float) -> str:
    if mag >= 5:
        return "red"
    if mag >= 3:
        return "orange"
    return "yellow"


def marker_radius(mag: float) -> float:
    return 4 + max(0.0, mag)


def _feature_to_quake(feature: Any) -> Optional[EarthquakeFeature]:
    if not isinstance(feature, dict):
        return None
    props = feature.get("properties") or {}
    geom = feature.get("geometry") or {}
    coords = geom.get("coordinates") if isinstance(geom, dict) else None
    if not isinstance(props, dict) or not isinstance(coords, (list, tuple)) or len(coords) < 2:
        return None

    lon = _safe_float(coords[0])
    lat = _safe_float(coords[1])
    if lon is None or lat is None:
        return None

    time_ms = _safe_float(props.get("time"))
    return EarthquakeFeature(
        magnitude=_safe_float(props.get("mag")) or 0.0,
        place=str(props.get("place") or "Unknown"),
        time_ms=int(time_ms) if time_ms is not None else 0,
        longitude=lon,
        latitude=lat,
        details_url=str(props.get("url") or ""),
    )


def quake_features(geojson: Any) -> List[EarthquakeFeature]:
    if not isinstance(geojson, dict) or not isinstance(geojson.get("features"), list):
        return []
    out: List[EarthquakeFeature] = []
    for f in geojson["features"]:
        q = _feature_to_quake(f)
        if q is not None:
            out.append(q)
    return out


def top_quakes(quakes: List[EarthquakeFeature], limit: int) -> List[EarthquakeFeature]:
    return sorted(quakes, key=lambda q: q.magnitude, reverse=True)[:limit]


# ══════════════════════════════════════════════════════════════
# Tsunami / volcanoes / floods
# ══════════════════════════════════════════════════════════════

def tsunami_banner(entries: Any) -> TsunamiBanner:
    if not isinstance(entries, list):
        return TsunamiBanner(text=TSUNAMI_UNAVAILABLE)
    if not entries:
        return TsunamiBanner(text=TSUNAMI_NO_WARNINGS)
    first = entries[0] if isinstance(entries[0], dict) else {}
    title = str(first.get("title") or "").strip()
    return TsunamiBanner(text=title or TSUNAMI_UNTITLED, href=TSUNAMI_REFERENCE_URL)


def volcano_items(entries: Any, limit: int) -> List[ListItem]:
    if not isinstance(entries, list):
        return [ListItem(text=VOLCANOES_UNAVAILABLE)]
    items: List[ListItem] = []
    for v in entries[:limit]:
        if not isinstance(v, dict):
            continue
        name = str(v.get("name") or "")
        status = str(v.get("status") or "")
        items.append(ListItem(text=f"{name} — {status}" if status else name))
    items.append(ListItem(text="Full Weekly Volcanic Activity Report", href=VOLCANO_REPORT_URL))
    return items


def flood_reports(payload: Any, limit: int) -> Optional[List[FloodReport]]:
    """Map a ReliefWeb search response to reports; None when it has no `data` list."""
    if not isinstance(payload, dict) or not isinstance(payload.get("data"), list):
        return None
    out: List[FloodReport] = []
    for r in payload["data"][:limit]:
        fields: Dict[str, Any] = (r.get("fields") if isinstance(r, dict) else None) or {}
        title = fields.get("title") or "Report"
        urls = fields.get("url")
        if isinstance(urls, list):
            url = urls[0] if urls else None
        else:
            url = urls or None
        out.append(FloodReport(title=str(title), url=str(url) if url else None))
    return out


def flood_items(payload: Any, limit: int) -> List[ListItem]:
    reports = flood_reports(payload, limit)
    if reports is None:
        return [ListItem(text=FLOODS_UNAVAILABLE)]
    items = [ListItem(text=r.title, href=r.url) for r in reports]
    items.append(ListItem(text="Full ReliefWeb Flood Reports", href=RELIEFWEB_URL))
    return items


def build_view(feeds: DashboardFeeds) -> DashboardView:
    if isinstance(feeds.earthquakes, dict) and isinstance(feeds.earthquakes.get("features"), list):
        all_quakes = quake_features(feeds.earthquakes)
        quakes = top_quakes(all_quakes, settings.dashboard_quake_limit)
        caption = f"{len(feeds.earthquakes['features'])} events (past day)"
    else:
        quakes, caption = [], EARTHQUAKES_UNAVAILABLE

    return DashboardView(
        quakes=quakes,
        quake_caption=caption,
        tsunami=tsunami_banner(feeds.tsunami),
        volcano_items=volcano_items(feeds.volcanoes, settings.dashboard_volcano_limit),
        flood_items=flood_items(feeds.floods, settings.dashboard_flood_limit),
    )
