from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Lesson:
    lesson_id: str
    title: str
    description: str
    video_url: str
    order_index: int
    created_at: int


@dataclass(frozen=True)
class LessonProgress:
    """One row per (lesson, designer); repeated views update the same row."""

    progress_id: str
    lesson_id: str
    designer_id: str
    viewed: bool
    viewed_at: Optional[int]


@dataclass(frozen=True)
class LessonChanges:
    title: Optional[str] = None
    description: Optional[str] = None
    video_url: Optional[str] = None
    order_index: Optional[int] = None
