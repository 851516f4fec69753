"""
Outbound HTTP for the feed normalizers.

One `httpx.AsyncClient` is built at process start and shared by every route;
each call passes its own timeout, which bounds the whole request including
the body download. Failures of any kind (DNS, connect, timeout, non-2xx)
surface as `UpstreamError` so the route boundary has a single thing to catch.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict

import httpx

from disaster_dashboard.core.errors import UpstreamError
from disaster_dashboard.core.settings import settings

logger = logging.getLogger(__name__)


def build_upstream_client(*, transport: httpx.AsyncBaseTransport | None = None) -> httpx.AsyncClient:
    headers = {
        "User-Agent": settings.upstream_user_agent,
        "Accept": "application/json, application/atom+xml, application/xml;q=0.9, text/html;q=0.8, */*;q=0.5",
    }
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.floods_timeout_s),
        follow_redirects=True,
        headers=headers,
        transport=transport,
    )


async def fetch(
    client: httpx.AsyncClient,
    url: str,
    *,
    timeout_s: float,
    params: Any = None,
) -> httpx.Response:
    try:
        # httpx timeouts are per network step; wait_for bounds the whole call
        r = await asyncio.wait_for(client.get(url, params=params, timeout=timeout_s), timeout_s)
        r.raise_for_status()
    except asyncio.TimeoutError as exc:
        logger.error("upstream_deadline url=%s timeout_s=%.1f", url, timeout_s)
        raise UpstreamError(f"{url} did not complete within {timeout_s:.0f}s") from exc
    except httpx.HTTPStatusError as exc:
        logger.error(
            "upstream_http_error url=%s status=%d body=%s",
            url,
            exc.response.status_code,
            exc.response.text[:300],
        )
        raise UpstreamError(f"{url} returned HTTP {exc.response.status_code}") from exc
    except httpx.TimeoutException as exc:
        logger.error("upstream_timeout url=%s timeout_s=%.1f", url, timeout_s)
        raise UpstreamError(f"{url} timed out after {timeout_s:.0f}s") from exc
    except httpx.HTTPError as exc:
        logger.error("upstream_transport_error url=%s err=%s", url, exc)
        raise UpstreamError(f"{url} unreachable: {exc}") from exc
    return r


async def fetch_json_object(
    client: httpx.AsyncClient,
    url: str,
    *,
    timeout_s: float,
    params: Any = None,
) -> Dict[str, Any]:
    r = await fetch(client, url, timeout_s=timeout_s, params=params)
    try:
        data = r.json()
    except ValueError as exc:
        raise UpstreamError(f"{url} returned a non-JSON body") from exc
    if not isinstance(data, dict):
        raise UpstreamError(f"{url} returned JSON {type(data).__name__}, expected object")
    return data
