from __future__ import annotations

import logging

import httpx
from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse

from disaster_dashboard.core.settings import settings
from disaster_dashboard.presentation.feeds import fetch_feeds
from disaster_dashboard.presentation.render import DashboardRenderer
from disaster_dashboard.presentation.view import build_view

logger = logging.getLogger(__name__)

router = APIRouter()


def _feeds_client(request: Request) -> httpx.AsyncClient:
    timeout = httpx.Timeout(settings.dashboard_fetch_timeout_s)
    if settings.dashboard_api_base:
        return httpx.AsyncClient(base_url=settings.dashboard_api_base, timeout=timeout)
    # Same process: go through our own /api routes without a socket
    transport = httpx.ASGITransport(app=request.app)
    return httpx.AsyncClient(transport=transport, base_url="http://dashboard.internal", timeout=timeout)


@router.get("/", response_class=HTMLResponse)
async def dashboard(request: Request) -> HTMLResponse:
    async with _feeds_client(request) as client:
        feeds = await fetch_feeds(client, deadline_s=settings.dashboard_fetch_timeout_s)

    view = build_view(feeds)
    logger.info(
        "[dashboard] quakes=%d volcano_items=%d flood_items=%d",
        len(view.quakes),
        len(view.volcano_items),
        len(view.flood_items),
    )
    return HTMLResponse(DashboardRenderer(view).render())
