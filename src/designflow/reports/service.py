from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import tzinfo
from typing import Callable, Optional, Sequence

from ..common.datetime_utils import day_bounds_ms, from_ms
from ..core.enums import Role
from ..demands.model import Demand
from ..demands.repository import DemandRepository
from ..users.repository import UserRepository
from ..work_sessions.repository import WorkSessionRepository
from .periods import DateRange, resolve_period

UNKNOWN_USER = "Desconhecido"


@dataclass(frozen=True)
class DesignerRow:
    user_id: str
    name: str
    points: int
    arts: int


@dataclass(frozen=True)
class DashboardReport:
    period: DateRange
    total_arts: int
    total_points: int
    active_designers: int
    avg_points_per_designer: int
    designers: list[DesignerRow]


@dataclass(frozen=True)
class HistoryRow:
    session_id: str
    user_id: str
    user_name: str
    date: str
    start_time: str
    total_arts: int
    total_points: int
    timestamp: int


def display_name(name: str) -> str:
    """``"Designer 01 - Davi"`` becomes ``"Davi"``; other names pass through."""

    parts = name.split(" - ")
    return parts[1] if len(parts) > 1 and parts[1] else name


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


class ReportService:
    """Productivity aggregation for the admin dashboard and history pages."""

    def __init__(
        self,
        demands: DemandRepository,
        sessions: WorkSessionRepository,
        users: UserRepository,
        *,
        tz: tzinfo,
        clock_ms: Callable[[], int],
    ):
        self._demands = demands
        self._sessions = sessions
        self._users = users
        self._tz = tz
        self._clock_ms = clock_ms

    def resolve(self, period: Optional[str], *, start: Optional[str] = None, end: Optional[str] = None) -> DateRange:
        return resolve_period(period, from_ms(self._clock_ms(), self._tz), start=start, end=end)

    def _demands_in(self, window: DateRange, designer_id: Optional[str]) -> Sequence[Demand]:
        return self._demands.list_range(
            user_id=designer_id or None,
            start_ms=window.start_ms,
            end_ms=window.end_ms,
        )

    def build_dashboard(
        self,
        *,
        period: Optional[str] = None,
        designer_id: Optional[str] = None,
        start: Optional[str] = None,
        end: Optional[str] = None,
    ) -> DashboardReport:
        window = self.resolve(period, start=start, end=end)
        demands = self._demands_in(window, designer_id)

        total_arts = sum(d.total_quantity for d in demands)
        total_points = sum(d.total_points for d in demands)
        active = len({d.user_id for d in demands})
        avg = round_half_up(total_points / active) if active else 0

        per_user: dict[str, list[int]] = {}
        for d in demands:
            acc = per_user.setdefault(d.user_id, [0, 0])
            acc[0] += d.total_points
            acc[1] += d.total_quantity

        rows: list[DesignerRow] = []
        for designer in self._users.list_designers():
            if not designer.active or designer.role != Role.DESIGNER:
                continue
            points, arts = per_user.get(designer.user_id, (0, 0))
            if points > 0 or arts > 0:
                rows.append(DesignerRow(designer.user_id, display_name(designer.name), points, arts))

        return DashboardReport(
            period=window,
            total_arts=total_arts,
            total_points=total_points,
            active_designers=active,
            avg_points_per_designer=avg,
            designers=rows,
        )

    def build_history(
        self,
        *,
        period: Optional[str] = None,
        designer_id: Optional[str] = None,
        start: Optional[str] = None,
        end: Optional[str] = None,
    ) -> list[HistoryRow]:
        """One row per work session, with that user's output on the session's day."""

        window = self.resolve(period, start=start, end=end)
        sessions = self._sessions.list_range(
            user_id=designer_id or None,
            start_ms=window.start_ms,
            end_ms=window.end_ms,
        )
        demands = self._demands_in(window, designer_id)
        names = {u.user_id: u.name for u in self._users.list_all()}

        rows: list[HistoryRow] = []
        for s in sessions:
            started = from_ms(s.timestamp, self._tz)
            day_start, day_end = day_bounds_ms(started)
            day_demands = [d for d in demands if d.user_id == s.user_id and day_start <= d.timestamp < day_end]
            rows.append(
                HistoryRow(
                    session_id=s.session_id,
                    user_id=s.user_id,
                    user_name=names.get(s.user_id) or UNKNOWN_USER,
                    date=started.strftime("%d/%m/%Y"),
                    start_time=started.strftime("%H:%M"),
                    total_arts=sum(d.total_quantity for d in day_demands),
                    total_points=sum(d.total_points for d in day_demands),
                    timestamp=s.timestamp,
                )
            )

        rows.sort(key=lambda r: r.timestamp, reverse=True)
        return rows
