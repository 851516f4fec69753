from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional

import httpx
from pydantic import BaseModel

logger = logging.getLogger(__name__)

EARTHQUAKES_PATH = "/api/earthquakes"
TSUNAMI_PATH = "/api/tsunami"
VOLCANOES_PATH = "/api/volcanoes"
FLOODS_PATH = "/api/floods"


class DashboardFeeds(BaseModel):
    """`data` of each successful envelope; None where that feed failed."""

    earthquakes: Optional[Any] = None
    tsunami: Optional[Any] = None
    volcanoes: Optional[Any] = None
    floods: Optional[Any] = None


async def fetch_envelope_data(
    client: httpx.AsyncClient,
    path: str,
    *,
    deadline_s: Optional[float] = None,
) -> Optional[Any]:
    try:
        r = await asyncio.wait_for(client.get(path), deadline_s)
        r.raise_for_status()
        body = r.json()
    except Exception as e:
        logger.warning("[dashboard] %s unavailable: %s", path, e)
        return None

    if not isinstance(body, dict) or body.get("ok") is not True or "data" not in body:
        logger.warning("[dashboard] %s returned an unusable envelope", path)
        return None
    return body["data"]


async def fetch_feeds(client: httpx.AsyncClient, *, deadline_s: Optional[float] = None) -> DashboardFeeds:
    # Independent fetches: one feed failing leaves the others untouched
    eq, ts, vol, fl = await asyncio.gather(
        fetch_envelope_data(client, EARTHQUAKES_PATH, deadline_s=deadline_s),
        fetch_envelope_data(client, TSUNAMI_PATH, deadline_s=deadline_s),
        fetch_envelope_data(client, VOLCANOES_PATH, deadline_s=deadline_s),
        fetch_envelope_data(client, FLOODS_PATH, deadline_s=deadline_s),
    )
    return DashboardFeeds(earthquakes=eq, tsunami=ts, volcanoes=vol, floods=fl)
