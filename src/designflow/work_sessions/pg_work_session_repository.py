from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.pg_base import db_cursor, fetchall, fetchone
from .model import WorkSession
from .repository import WorkSessionRepository


def _to_session(row: dict) -> WorkSession:
    return WorkSession(session_id=row["id"], user_id=row["user_id"], timestamp=int(row["timestamp"]))


class PgWorkSessionRepository(WorkSessionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_range(
        self,
        *,
        user_id: Optional[str] = None,
        start_ms: Optional[int] = None,
        end_ms: Optional[int] = None,
    ) -> Sequence[WorkSession]:
        clauses = ["1=1"]
        params: list[object] = []

        if user_id:
            clauses.append("user_id = %s")
            params.append(user_id)
        if start_ms is not None:
            clauses.append("timestamp >= %s")
            params.append(int(start_ms))
        if end_ms is not None:
            clauses.append("timestamp <= %s")
            params.append(int(end_ms))

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT id, user_id, timestamp FROM work_sessions WHERE {where} ORDER BY timestamp DESC",
                tuple(params),
            )
            return [_to_session(r) for r in fetchall(cur)]

    def get_or_create_for_day(
        self,
        *,
        user_id: str,
        day_start_ms: int,
        day_end_ms: int,
        new_session: WorkSession,
    ) -> tuple[WorkSession, bool]:
        with db_cursor(self._conn_factory) as (_, cur):
            # Serializes concurrent clock-ins of the same user until commit.
            cur.execute("SELECT pg_advisory_xact_lock(hashtext(%s))", (f"work_sessions:{user_id}",))
            cur.execute(
                """
                SELECT id, user_id, timestamp FROM work_sessions
                WHERE user_id = %s AND timestamp >= %s AND timestamp < %s
                ORDER BY timestamp ASC
                LIMIT 1
                """,
                (user_id, day_start_ms, day_end_ms),
            )
            row = fetchone(cur)
            if row:
                return _to_session(row), False

            cur.execute(
                "INSERT INTO work_sessions (id, user_id, timestamp) VALUES (%s, %s, %s)",
                (new_session.session_id, new_session.user_id, new_session.timestamp),
            )
            return new_session, True
