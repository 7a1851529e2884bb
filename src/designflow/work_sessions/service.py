from __future__ import annotations

import logging
from datetime import tzinfo
from typing import Any, Callable, Optional, Sequence

from ..common.datetime_utils import day_bounds_ms, from_ms
from ..common.ids import new_id
from ..common.validators import optional_int, require_non_empty
from ..core.exceptions import NotFoundError
from ..users.repository import UserRepository
from .model import WorkSession
from .repository import WorkSessionRepository

logger = logging.getLogger(__name__)


class WorkSessionService:
    def __init__(
        self,
        sessions: WorkSessionRepository,
        users: UserRepository,
        *,
        tz: tzinfo,
        clock_ms: Callable[[], int],
    ):
        self._sessions = sessions
        self._users = users
        self._tz = tz
        self._clock_ms = clock_ms

    def list_sessions(
        self,
        *,
        user_id: Optional[str] = None,
        start_ms: Any = None,
        end_ms: Any = None,
    ) -> Sequence[WorkSession]:
        return self._sessions.list_range(
            user_id=user_id or None,
            start_ms=optional_int(start_ms, "startDate"),
            end_ms=optional_int(end_ms, "endDate"),
        )

    def clock_in(self, user_id: str) -> WorkSession:
        """Return today's session for the user, creating it on the first call of the day."""

        user_id = require_non_empty(user_id, "Usuário")
        if not self._users.get_by_id(user_id):
            raise NotFoundError("Usuário não encontrado")

        now_ms = self._clock_ms()
        day_start, day_end = day_bounds_ms(from_ms(now_ms, self._tz))

        session, created = self._sessions.get_or_create_for_day(
            user_id=user_id,
            day_start_ms=day_start,
            day_end_ms=day_end,
            new_session=WorkSession(session_id=new_id("session"), user_id=user_id, timestamp=now_ms),
        )
        if created:
            logger.info("user %s clocked in (session %s)", user_id, session.session_id)
        return session
