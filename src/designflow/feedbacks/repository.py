from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Feedback


class FeedbackRepository(Protocol):
    def list_for(self, *, designer_id: Optional[str] = None) -> Sequence[Feedback]:
        raise NotImplementedError

    def create(self, feedback: Feedback) -> None:
        raise NotImplementedError

    def mark_viewed(self, feedback_id: str, *, viewed_at: int) -> bool:
        raise NotImplementedError

    def delete(self, feedback_id: str) -> bool:
        raise NotImplementedError
