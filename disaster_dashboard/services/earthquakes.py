# disaster_dashboard/services/earthquakes.py
"""
USGS earthquake feed: all magnitudes, past day.

The GeoJSON FeatureCollection is passed through untouched; the dashboard
does its own sorting and picks out fields it needs.
"""
from __future__ import annotations

import logging
from typing import Any, Dict

import httpx

from disaster_dashboard.core.settings import settings
from disaster_dashboard.services.upstream import fetch_json_object

logger = logging.getLogger(__name__)

USGS_ALL_DAY_URL = "https://earthquake.usgs.gov/earthquakes/feed/v1.0/summary/all_day.geojson"


class Earthquakes:
    def __init__(self, *, client: httpx.AsyncClient, timeout_s: float | None = None):
        self.client = client
        self.timeout_s = float(timeout_s or settings.earthquakes_timeout_s)

    async def fetch(self) -> Dict[str, Any]:
        data = await fetch_json_object(self.client, USGS_ALL_DAY_URL, timeout_s=self.timeout_s)
        features = data.get("features")
        logger.info("usgs_all_day features=%s", len(features) if isinstance(features, list) else "?")
        return data
