from __future__ import annotations

from datetime import date, datetime
from typing import Optional


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_optional_iso_date(value: Optional[str]) -> Optional[date]:
    if not value:
        return None
    return parse_iso_date(str(value))


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier. The pure core never calls
    this; only controllers read the clock and pass `now` down.
    """
    return datetime.now()
