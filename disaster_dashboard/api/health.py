from __future__ import annotations

from fastapi import APIRouter

from disaster_dashboard.core.contracts import PingResponse
from disaster_dashboard.core.time import utc_now_iso

router = APIRouter()


@router.get("/ping", response_model=PingResponse)
def ping() -> PingResponse:
    return PingResponse(time=utc_now_iso())
