from __future__ import annotations

import logging

import httpx
from fastapi import APIRouter, Depends

from disaster_dashboard.core.contracts import (
    EarthquakesEnvelope,
    FeedFailure,
    FloodsEnvelope,
    TsunamiEnvelope,
    VolcanoesEnvelope,
)
from disaster_dashboard.core.errors import feed_unavailable
from disaster_dashboard.services.earthquakes import Earthquakes
from disaster_dashboard.services.floods import Floods
from disaster_dashboard.services.tsunami import Tsunami
from disaster_dashboard.services.volcanoes import Volcanoes

logger = logging.getLogger(__name__)

router = APIRouter()

_FAILURE = {500: {"model": FeedFailure}}


def get_upstream_client() -> httpx.AsyncClient:
    raise RuntimeError("Upstream client must be provided by app dependency override")


# Every route catches at its own boundary: whatever went wrong upstream
# (DNS, timeout, 5xx, unparseable body) becomes one fixed message.


@router.get("/earthquakes", response_model=EarthquakesEnvelope, responses=_FAILURE)
async def earthquakes(client: httpx.AsyncClient = Depends(get_upstream_client)) -> EarthquakesEnvelope:
    try:
        data = await Earthquakes(client=client).fetch()
    except Exception as e:
        logger.warning("[earthquakes] upstream failed: %s", e)
        feed_unavailable("Failed to fetch earthquakes")
    return EarthquakesEnvelope(data=data)


@router.get("/tsunami", response_model=TsunamiEnvelope, responses=_FAILURE)
async def tsunami(client: httpx.AsyncClient = Depends(get_upstream_client)) -> TsunamiEnvelope:
    try:
        entries = await Tsunami(client=client).fetch()
    except Exception as e:
        logger.warning("[tsunami] upstream failed: %s", e)
        feed_unavailable("Failed to fetch tsunami feed")
    return TsunamiEnvelope(data=entries)


@router.get("/volcanoes", response_model=VolcanoesEnvelope, responses=_FAILURE)
async def volcanoes(client: httpx.AsyncClient = Depends(get_upstream_client)) -> VolcanoesEnvelope:
    try:
        entries = await Volcanoes(client=client).fetch()
    except Exception as e:
        logger.warning("[volcanoes] upstream failed: %s", e)
        feed_unavailable("Failed to fetch volcano info")
    return VolcanoesEnvelope(data=entries)


@router.get("/floods", response_model=FloodsEnvelope, responses=_FAILURE)
async def floods(client: httpx.AsyncClient = Depends(get_upstream_client)) -> FloodsEnvelope:
    try:
        data = await Floods(client=client).fetch()
    except Exception as e:
        logger.warning("[floods] upstream failed: %s", e)
        feed_unavailable("Failed to fetch flood reports")
    return FloodsEnvelope(data=data)
