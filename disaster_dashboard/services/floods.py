# disaster_dashboard/services/floods.py
"""
ReliefWeb v2 reports search for "flood", newest first.

The paginated response is passed through as-is; the dashboard maps each
report to a FloodReport itself.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Tuple

import httpx

from disaster_dashboard.core.settings import settings
from disaster_dashboard.services.upstream import fetch_json_object

logger = logging.getLogger(__name__)

RELIEFWEB_REPORTS_URL = "https://api.reliefweb.int/v2/reports"


def search_params(*, appname: str, limit: int) -> List[Tuple[str, str]]:
    # ReliefWeb's GET syntax for nested query/sort/fields parameters
    return [
        ("appname", appname),
        ("limit", str(limit)),
        ("sort[]", "date:desc"),
        ("query[value]", "flood"),
        ("query[operator]", "OR"),
        ("fields[include][]", "title"),
        ("fields[include][]", "url"),
    ]


class Floods:
    def __init__(self, *, client: httpx.AsyncClient, timeout_s: float | None = None):
        self.client = client
        self.timeout_s = float(timeout_s or settings.floods_timeout_s)

    async def fetch(self) -> Dict[str, Any]:
        params = search_params(appname=settings.reliefweb_appname, limit=settings.reliefweb_limit)
        data = await fetch_json_object(
            self.client,
            RELIEFWEB_REPORTS_URL,
            timeout_s=self.timeout_s,
            params=params,
        )
        logger.info("reliefweb_reports count=%s total=%s", data.get("count"), data.get("totalCount"))
        return data
