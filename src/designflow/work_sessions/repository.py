from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import WorkSession


class WorkSessionRepository(Protocol):
    def list_range(
        self,
        *,
        user_id: Optional[str] = None,
        start_ms: Optional[int] = None,
        end_ms: Optional[int] = None,
    ) -> Sequence[WorkSession]:
        """Newest first; bounds are inclusive."""

        raise NotImplementedError

    def get_or_create_for_day(
        self,
        *,
        user_id: str,
        day_start_ms: int,
        day_end_ms: int,
        new_session: WorkSession,
    ) -> tuple[WorkSession, bool]:
        """Return the earliest session in ``[day_start_ms, day_end_ms)`` or insert ``new_session``.

        The second element tells whether a row was created. Implementations
        must make check-and-insert atomic per user.
        """

        raise NotImplementedError
