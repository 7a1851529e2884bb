from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Lesson, LessonChanges, LessonProgress


class LessonRepository(Protocol):
    def list_all(self) -> Sequence[Lesson]:
        raise NotImplementedError

    def create(self, *, lesson_id: str, title: str, description: str, video_url: str, created_at: int) -> Lesson:
        """Append the lesson after the current last one."""

        raise NotImplementedError

    def update(self, lesson_id: str, changes: LessonChanges) -> Optional[Lesson]:
        raise NotImplementedError

    def delete(self, lesson_id: str) -> bool:
        raise NotImplementedError


class LessonProgressRepository(Protocol):
    def list_for_designer(self, designer_id: str) -> Sequence[LessonProgress]:
        raise NotImplementedError

    def mark_viewed(self, *, progress_id: str, lesson_id: str, designer_id: str, viewed_at: int) -> LessonProgress:
        """Insert or update the (lesson, designer) row and return what is stored."""

        raise NotImplementedError
