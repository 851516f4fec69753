from __future__ import annotations

from datetime import datetime, timezone


def utc_now_iso() -> str:
    # Millisecond precision with a trailing Z, e.g. 2024-05-01T12:00:00.000Z
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def format_epoch_ms(ms: int) -> str:
    try:
        dt = datetime.fromtimestamp(ms / 1000.0, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return ""
    return dt.strftime("%Y-%m-%d %H:%M UTC")
