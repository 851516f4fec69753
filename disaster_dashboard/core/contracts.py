from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional
from pydantic import BaseModel, ConfigDict


# ──────────────────────────────────────────────────────────────
# Envelope
#
# Success and failure are separate models: a success body never
# carries `error`, a failure body never carries `data`.
# ──────────────────────────────────────────────────────────────

class FeedEnvelope(BaseModel):
    ok: Literal[True] = True
    source: str
    data: Any


class FeedFailure(BaseModel):
    ok: Literal[False] = False
    error: str


class PingResponse(BaseModel):
    ok: Literal[True] = True
    time: str                       # ISO8601 UTC


# ──────────────────────────────────────────────────────────────
# Earthquakes (USGS GeoJSON)
# ──────────────────────────────────────────────────────────────

class EarthquakeFeature(BaseModel):
    model_config = ConfigDict(frozen=True)

    magnitude: float
    place: str
    time_ms: int                    # epoch millis, as USGS sends it
    longitude: float
    latitude: float
    details_url: str


class EarthquakesEnvelope(FeedEnvelope):
    source: Literal["usgs"] = "usgs"
    data: Dict[str, Any]            # raw GeoJSON FeatureCollection


# ──────────────────────────────────────────────────────────────
# Tsunami (tsunami.gov ATOM)
# ──────────────────────────────────────────────────────────────

class TsunamiEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = ""
    title: str = ""
    updated: str = ""               # ISO8601 text from <updated>
    summary: str = ""
    link: str = ""


class TsunamiEnvelope(FeedEnvelope):
    source: Literal["tsunami.gov"] = "tsunami.gov"
    data: List[TsunamiEntry]


# ──────────────────────────────────────────────────────────────
# Volcanoes (GVP current eruptions page)
# ──────────────────────────────────────────────────────────────

class VolcanoEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    status: str = ""


class VolcanoesEnvelope(FeedEnvelope):
    source: Literal["gvp"] = "gvp"
    data: List[VolcanoEntry]


# ──────────────────────────────────────────────────────────────
# Floods (ReliefWeb reports search)
# ──────────────────────────────────────────────────────────────

class FloodReport(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    url: Optional[str] = None


class FloodsEnvelope(FeedEnvelope):
    source: Literal["reliefweb"] = "reliefweb"
    data: Dict[str, Any]            # raw paginated search response
