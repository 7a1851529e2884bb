"""Reporting windows in epoch milliseconds.

Every period ends at ``now`` except ``yesterday`` and ``custom`` which are
closed calendar ranges. Both bounds are inclusive.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from ..common.datetime_utils import parse_iso_date, start_of_day, to_ms
from ..core.constants import MS_PER_DAY
from ..core.enums import ReportPeriod
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class DateRange:
    start_ms: int
    end_ms: int


def _parse_period(value: Optional[str]) -> ReportPeriod:
    try:
        return ReportPeriod((value or "").strip().lower())
    except ValueError:
        return ReportPeriod.TODAY


def _local_midnight(value: str, now: datetime) -> datetime:
    try:
        day = parse_iso_date(value)
    except ValueError:
        raise ValidationError("Data inválida, use o formato AAAA-MM-DD")
    return datetime(day.year, day.month, day.day, tzinfo=now.tzinfo)


def resolve_period(
    period: Optional[str],
    now: datetime,
    *,
    start: Optional[str] = None,
    end: Optional[str] = None,
) -> DateRange:
    today = start_of_day(now)
    kind = _parse_period(period)

    if kind == ReportPeriod.YESTERDAY:
        yesterday = start_of_day(today - timedelta(days=1))
        return DateRange(to_ms(yesterday), to_ms(today) - 1)

    if kind == ReportPeriod.WEEKLY:
        # weeks start on Monday
        week_start = start_of_day(today - timedelta(days=today.weekday()))
        return DateRange(to_ms(week_start), to_ms(now))

    if kind == ReportPeriod.MONTHLY:
        return DateRange(to_ms(today.replace(day=1)), to_ms(now))

    if kind == ReportPeriod.YEARLY:
        return DateRange(to_ms(today.replace(month=1, day=1)), to_ms(now))

    if kind == ReportPeriod.CUSTOM and start and end:
        first = _local_midnight(start, now)
        last = _local_midnight(end, now)
        if last < first:
            raise ValidationError("A data final deve ser posterior à data inicial")
        return DateRange(to_ms(first), to_ms(last) + MS_PER_DAY - 1)

    return DateRange(to_ms(today), to_ms(now))
