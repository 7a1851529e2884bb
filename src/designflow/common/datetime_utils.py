from __future__ import annotations

from datetime import date, datetime, time, timedelta, tzinfo
from zoneinfo import ZoneInfo

from ..core.constants import DEFAULT_TIMEZONE


def get_zone(name: str | None = None) -> tzinfo:
    return ZoneInfo(name or DEFAULT_TIMEZONE)


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def now_local(tz: tzinfo | None = None) -> datetime:
    """Current time in the configured zone.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(tz or get_zone())


def to_ms(value: datetime) -> int:
    return int(value.timestamp() * 1000)


def from_ms(value: int, tz: tzinfo | None = None) -> datetime:
    return datetime.fromtimestamp(int(value) / 1000, tz or get_zone())


def start_of_day(value: datetime) -> datetime:
    return datetime.combine(value.date(), time(0, 0), value.tzinfo)


def day_bounds_ms(value: datetime) -> tuple[int, int]:
    """Return [start, end) of the calendar day containing ``value`` in epoch ms."""
    start = start_of_day(value)
    end = datetime.combine(start.date() + timedelta(days=1), time(0, 0), value.tzinfo)
    return to_ms(start), to_ms(end)
