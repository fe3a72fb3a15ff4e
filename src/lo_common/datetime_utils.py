"""UTC datetime utilities."""

import time
from datetime import datetime, timezone


def utc_now() -> datetime:
    """Return timezone-aware UTC now."""
    return datetime.now(timezone.utc)


def unix_now() -> int:
    """Whole seconds since the epoch, the unit the contract stores expirations in."""
    return int(time.time())


def format_expiration(timestamp: int) -> str:
    """Short date for an expiration column: 1767225600 -> '1 Jan 26'."""
    try:
        date = datetime.fromtimestamp(timestamp, timezone.utc)
    except (OverflowError, OSError, ValueError):
        return str(timestamp)
    return f"{date.day} {date.strftime('%b')} {date.strftime('%y')}"
