from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.pg_base import db_cursor, fetchall, fetchone, optional_ms
from .model import Lesson, LessonChanges, LessonProgress
from .repository import LessonProgressRepository, LessonRepository

_LESSON_COLUMNS = "id, title, description, video_url, order_index, created_at"


def _to_lesson(row: dict) -> Lesson:
    return Lesson(
        lesson_id=row["id"],
        title=row["title"],
        description=row.get("description") or "",
        video_url=row["video_url"],
        order_index=int(row.get("order_index") or 0),
        created_at=int(row["created_at"]),
    )


def _to_progress(row: dict) -> LessonProgress:
    return LessonProgress(
        progress_id=row["id"],
        lesson_id=row["lesson_id"],
        designer_id=row["designer_id"],
        viewed=bool(row.get("viewed")),
        viewed_at=optional_ms(row.get("viewed_at")),
    )


class PgLessonRepository(LessonRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Lesson]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_LESSON_COLUMNS} FROM lessons ORDER BY order_index ASC")
            return [_to_lesson(r) for r in fetchall(cur)]

    def create(self, *, lesson_id: str, title: str, description: str, video_url: str, created_at: int) -> Lesson:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                INSERT INTO lessons (id, title, description, video_url, order_index, created_at)
                VALUES (%s, %s, %s, %s, (SELECT COALESCE(MAX(order_index), -1) + 1 FROM lessons), %s)
                RETURNING {_LESSON_COLUMNS}
                """,
                (lesson_id, title, description, video_url, created_at),
            )
            return _to_lesson(fetchone(cur))

    def update(self, lesson_id: str, changes: LessonChanges) -> Optional[Lesson]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                UPDATE lessons SET
                    title = COALESCE(%s, title),
                    description = COALESCE(%s, description),
                    video_url = COALESCE(%s, video_url),
                    order_index = COALESCE(%s, order_index)
                WHERE id = %s
                RETURNING {_LESSON_COLUMNS}
                """,
                (changes.title, changes.description, changes.video_url, changes.order_index, lesson_id),
            )
            row = fetchone(cur)
            return _to_lesson(row) if row else None

    def delete(self, lesson_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM lessons WHERE id = %s", (lesson_id,))
            return cur.rowcount > 0


class PgLessonProgressRepository(LessonProgressRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_designer(self, designer_id: str) -> Sequence[LessonProgress]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT id, lesson_id, designer_id, viewed, viewed_at FROM lesson_progress WHERE designer_id = %s",
                (designer_id,),
            )
            return [_to_progress(r) for r in fetchall(cur)]

    def mark_viewed(self, *, progress_id: str, lesson_id: str, designer_id: str, viewed_at: int) -> LessonProgress:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO lesson_progress (id, lesson_id, designer_id, viewed, viewed_at)
                VALUES (%s, %s, %s, true, %s)
                ON CONFLICT (lesson_id, designer_id)
                DO UPDATE SET viewed = true, viewed_at = EXCLUDED.viewed_at
                RETURNING id, lesson_id, designer_id, viewed, viewed_at
                """,
                (progress_id, lesson_id, designer_id, viewed_at),
            )
            return _to_progress(fetchone(cur))
