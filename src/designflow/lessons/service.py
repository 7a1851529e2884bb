from __future__ import annotations

import logging
from typing import Any, Callable, Optional, Sequence

from ..common.ids import new_id
from ..common.validators import optional_int, require_non_empty
from ..core.exceptions import NotFoundError
from .model import Lesson, LessonChanges, LessonProgress
from .repository import LessonProgressRepository, LessonRepository

logger = logging.getLogger(__name__)


class LessonService:
    def __init__(
        self,
        lessons: LessonRepository,
        progress: LessonProgressRepository,
        *,
        clock_ms: Callable[[], int],
    ):
        self._lessons = lessons
        self._progress = progress
        self._clock_ms = clock_ms

    def list_lessons(self) -> Sequence[Lesson]:
        return self._lessons.list_all()

    def create(self, *, title: str, video_url: str, description: Optional[str] = None) -> Lesson:
        lesson = self._lessons.create(
            lesson_id=new_id("lesson"),
            title=require_non_empty(title, "Título"),
            description=description or "",
            video_url=require_non_empty(video_url, "URL do vídeo"),
            created_at=self._clock_ms(),
        )
        logger.info("lesson %s created at position %d", lesson.lesson_id, lesson.order_index)
        return lesson

    def update(
        self,
        lesson_id: str,
        *,
        title: Optional[str] = None,
        description: Optional[str] = None,
        video_url: Optional[str] = None,
        order_index: Any = None,
    ) -> Lesson:
        changes = LessonChanges(
            title=title or None,
            description=description,
            video_url=video_url or None,
            order_index=optional_int(order_index, "Ordem"),
        )
        lesson = self._lessons.update(lesson_id, changes)
        if lesson is None:
            raise NotFoundError("Aula não encontrada")
        return lesson

    def delete(self, lesson_id: str) -> None:
        if not self._lessons.delete(lesson_id):
            raise NotFoundError("Aula não encontrada")

    def progress_for(self, designer_id: str) -> Sequence[LessonProgress]:
        return self._progress.list_for_designer(designer_id)

    def mark_viewed(self, *, lesson_id: str, designer_id: str) -> LessonProgress:
        """Idempotent: a second call refreshes ``viewed_at`` on the same row."""

        return self._progress.mark_viewed(
            progress_id=new_id("progress"),
            lesson_id=require_non_empty(lesson_id, "Aula"),
            designer_id=require_non_empty(designer_id, "Designer"),
            viewed_at=self._clock_ms(),
        )
