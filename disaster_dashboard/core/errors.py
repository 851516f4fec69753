from __future__ import annotations

from fastapi import Request
from fastapi.responses import JSONResponse

from disaster_dashboard.core.contracts import FeedFailure


class UpstreamError(RuntimeError):
    """An upstream feed was unreachable, too slow, or returned something unusable."""


class FeedUnavailable(Exception):
    def __init__(self, message: str, status_code: int = 500):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def feed_unavailable(message: str):
    raise FeedUnavailable(message)


async def feed_unavailable_handler(request: Request, exc: FeedUnavailable) -> JSONResponse:
    body = FeedFailure(error=exc.message)
    return JSONResponse(status_code=exc.status_code, content=body.model_dump())
