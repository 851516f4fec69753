from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable, Dict, List, Union

import httpx
import pytest
from fastapi.testclient import TestClient

from disaster_dashboard.api import feeds as feeds_api
from disaster_dashboard.main import app, provide_upstream_client
from disaster_dashboard.services.earthquakes import USGS_ALL_DAY_URL
from disaster_dashboard.services.floods import RELIEFWEB_REPORTS_URL
from disaster_dashboard.services.tsunami import NTWC_ATOM_URL
from disaster_dashboard.services.volcanoes import GVP_CURRENT_ERUPTIONS_URL

Responder = Callable[[httpx.Request], Union[httpx.Response, Awaitable[httpx.Response]]]


# ──────────────────────────────────────────────────────────────
# Upstream payloads
# ──────────────────────────────────────────────────────────────

def quake(mag, place, lon, lat, *, time_ms=1714564800000, qid=None):
    return {
        "type": "Feature",
        "id": qid or f"us{place[:3].lower()}{mag}",
        "properties": {
            "mag": mag,
            "place": place,
            "time": time_ms,
            "url": f"https://earthquake.usgs.gov/earthquakes/eventpage/{qid or 'x'}",
        },
        "geometry": {"type": "Point", "coordinates": [lon, lat, 10.0]},
    }


USGS_GEOJSON = {
    "type": "FeatureCollection",
    "metadata": {"title": "USGS All Earthquakes, Past Day", "count": 3},
    "features": [
        quake(5.2, "Near the coast of Chile", -71.5, -30.2, qid="us1"),
        quake(2.1, "10 km N of Ridgecrest, CA", -117.6, 35.7, qid="ci2"),
        quake(6.8, "South of the Fiji Islands", 178.1, -24.9, qid="us3"),
    ],
}

ATOM_TWO_ENTRIES = """<?xml version="1.0" encoding="UTF-8"?>
<feed xmlns="http://www.w3.org/2005/Atom" xmlns:geo="http://www.w3.org/2003/01/geo/wgs84_pos#">
  <id>urn:uuid:feed</id>
  <title>NTWC Tsunami Messages</title>
  <updated>2024-05-01T12:05:00Z</updated>
  <entry>
    <id>urn:uuid:aaa</id>
    <title>Tsunami Information Statement Number 1</title>
    <updated>2024-05-01T12:00:00Z</updated>
    <summary type="xhtml"><div xmlns="http://www.w3.org/1999/xhtml"><strong>Category:</strong> Information</div></summary>
    <link rel="related" href="https://www.tsunami.gov/events/PAAQ/2024/05/01/a.txt"/>
    <link rel="alternate" href="https://www.tsunami.gov/events/PAAQ/2024/05/01/a.html"/>
  </entry>
  <entry>
    <id>urn:uuid:bbb</id>
    <title>Tsunami Information Statement Number 2</title>
    <updated>2024-05-01T13:00:00Z</updated>
    <summary>No tsunami threat</summary>
  </entry>
</feed>
"""

GVP_TABLE_HTML = """
<html><body>
<table>
  <tr><th>Volcano</th><th>Eruption Start</th></tr>
  <tr><td>Etna</td><td>2013 Sep 3</td></tr>
  <tr><td> Kilauea </td><td>2024 Jun 3</td></tr>
  <tr><td>Sakurajima</td></tr>
</table>
</body></html>
"""

RELIEFWEB_SEARCH = {
    "time": 12,
    "href": "https://api.reliefweb.int/v2/reports",
    "totalCount": 51234,
    "count": 2,
    "data": [
        {
            "id": "4060001",
            "score": 1,
            "fields": {
                "title": "Bangladesh: Floods - Jun 2024",
                "url": ["https://reliefweb.int/report/bangladesh/floods-jun-2024"],
            },
        },
        {"id": "4060002", "score": 1, "fields": {"title": "Flash Flood Update No. 3"}},
    ],
}


# ──────────────────────────────────────────────────────────────
# Fake upstream
# ──────────────────────────────────────────────────────────────

class DripStream(httpx.AsyncByteStream):
    """Body that arrives one byte at a time: headers are prompt, the rest is not."""

    def __init__(self, chunks: int, interval_s: float) -> None:
        self.chunks = chunks
        self.interval_s = interval_s

    async def __aiter__(self):
        for _ in range(self.chunks):
            await asyncio.sleep(self.interval_s)
            yield b"x"


class FakeUpstream:
    """MockTransport handler keyed by scheme://host/path; unknown URLs fail to connect."""

    def __init__(self) -> None:
        self.responders: Dict[str, Responder] = {}
        self.requests: List[httpx.Request] = []
        self.timeouts: Dict[str, Dict[str, Any]] = {}

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = f"{request.url.scheme}://{request.url.host}{request.url.path}"
        self.timeouts[key] = request.extensions.get("timeout", {})
        responder = self.responders.get(key)
        if responder is None:
            raise httpx.ConnectError("upstream unreachable", request=request)
        return responder(request)

    def json(self, url: str, body, status: int = 200) -> None:
        self.responders[url] = lambda req: httpx.Response(status, json=body)

    def text(self, url: str, body: str, status: int = 200, content_type: str = "text/html") -> None:
        self.responders[url] = lambda req: httpx.Response(
            status, text=body, headers={"Content-Type": content_type}
        )

    def timeout(self, url: str) -> None:
        def _raise(req: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("read timed out", request=req)

        self.responders[url] = _raise

    def drip(self, url: str, *, chunks: int = 10, interval_s: float = 0.3) -> None:
        async def _respond(req: httpx.Request) -> httpx.Response:
            return httpx.Response(200, stream=DripStream(chunks, interval_s))

        self.responders[url] = _respond

    def all_healthy(self) -> None:
        self.json(USGS_ALL_DAY_URL, USGS_GEOJSON)
        self.text(NTWC_ATOM_URL, ATOM_TWO_ENTRIES, content_type="application/atom+xml")
        self.text(GVP_CURRENT_ERUPTIONS_URL, GVP_TABLE_HTML)
        self.json(RELIEFWEB_REPORTS_URL, RELIEFWEB_SEARCH)


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def client(upstream: FakeUpstream):
    mocked = httpx.AsyncClient(transport=httpx.MockTransport(upstream))
    app.dependency_overrides[feeds_api.get_upstream_client] = lambda: mocked
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides[feeds_api.get_upstream_client] = provide_upstream_client
        asyncio.run(mocked.aclose())
