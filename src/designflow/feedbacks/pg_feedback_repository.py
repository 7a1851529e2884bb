from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.pg_base import db_cursor, fetchall, optional_ms
from .model import Feedback
from .repository import FeedbackRepository


def _to_feedback(row: dict) -> Feedback:
    return Feedback(
        feedback_id=row["id"],
        designer_id=row["designer_id"],
        designer_name=row["designer_name"],
        admin_name=row["admin_name"],
        comment=row.get("comment"),
        created_at=int(row["created_at"]),
        image_urls=list(row.get("image_urls") or []),
        viewed=bool(row.get("viewed") or False),
        viewed_at=optional_ms(row.get("viewed_at")),
    )


class PgFeedbackRepository(FeedbackRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for(self, *, designer_id: Optional[str] = None) -> Sequence[Feedback]:
        query = """
            SELECT id, designer_id, designer_name, admin_name, image_urls, comment,
                   created_at, viewed, viewed_at
            FROM feedbacks
        """
        params: tuple = ()
        if designer_id:
            query += " WHERE designer_id = %s"
            params = (designer_id,)
        query += " ORDER BY created_at DESC"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(query, params)
            return [_to_feedback(r) for r in fetchall(cur)]

    def create(self, feedback: Feedback) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO feedbacks (id, designer_id, designer_name, admin_name, image_urls, comment, created_at, viewed)
                VALUES (%s, %s, %s, %s, %s, %s, %s, false)
                """,
                (
                    feedback.feedback_id,
                    feedback.designer_id,
                    feedback.designer_name,
                    feedback.admin_name,
                    list(feedback.image_urls),
                    feedback.comment,
                    feedback.created_at,
                ),
            )

    def mark_viewed(self, feedback_id: str, *, viewed_at: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE feedbacks SET viewed = true, viewed_at = %s WHERE id = %s",
                (viewed_at, feedback_id),
            )
            return cur.rowcount > 0

    def delete(self, feedback_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM feedbacks WHERE id = %s", (feedback_id,))
            return cur.rowcount > 0
