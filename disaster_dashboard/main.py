# disaster_dashboard/main.py
from __future__ import annotations

import logging
from pathlib import Path

import httpx
from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.gzip import GZipMiddleware

# Load <project>/.env (main.py is <project>/disaster_dashboard/main.py)
BASE_DIR = Path(__file__).resolve().parent.parent
load_dotenv(BASE_DIR / ".env")

from disaster_dashboard.core.settings import settings
from disaster_dashboard.core.errors import FeedUnavailable, feed_unavailable_handler
from disaster_dashboard.api import api_router, page_router
from disaster_dashboard.services.upstream import build_upstream_client

logger = logging.getLogger(__name__)

app = FastAPI(title="Disaster Dashboard", version="1.0.0")

# ── Compression (must be added before CORS) ──
app.add_middleware(GZipMiddleware, minimum_size=1000)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list(),
    allow_credentials=False,
    allow_methods=["GET"],
    allow_headers=["*"],
)

app.add_exception_handler(FeedUnavailable, feed_unavailable_handler)

# ──────────────────────────────────────────────────────────────
# Upstream HTTP client: one per process, closed on shutdown
# ──────────────────────────────────────────────────────────────

_upstream = build_upstream_client()


def provide_upstream_client() -> httpx.AsyncClient:
    return _upstream


# ──────────────────────────────────────────────────────────────
# Dependency overrides
# ──────────────────────────────────────────────────────────────

from disaster_dashboard.api import feeds as feeds_api

app.dependency_overrides[feeds_api.get_upstream_client] = provide_upstream_client

# Routes
app.include_router(api_router)
app.include_router(page_router)

# ──────────────────────────────────────────────────────────────
# Shutdown
# ──────────────────────────────────────────────────────────────

@app.on_event("shutdown")
async def shutdown():
    logger.info("[app] Shutting down — closing upstream client")
    try:
        await _upstream.aclose()
    except Exception as e:
        logger.warning(f"[app] Error closing upstream client: {e}")
