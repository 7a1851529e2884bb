from __future__ import annotations

from typing import Any, Callable, Optional, Sequence

from ..common.ids import new_id
from ..common.validators import require_non_empty
from ..core.exceptions import NotFoundError, ValidationError
from .model import Feedback
from .repository import FeedbackRepository


class FeedbackService:
    """Admin feedback for designers, with a read receipt."""

    def __init__(self, feedbacks: FeedbackRepository, *, clock_ms: Callable[[], int]):
        self._feedbacks = feedbacks
        self._clock_ms = clock_ms

    def list_feedbacks(self, *, designer_id: Optional[str] = None) -> Sequence[Feedback]:
        return self._feedbacks.list_for(designer_id=designer_id or None)

    def create(
        self,
        *,
        designer_id: str,
        designer_name: str,
        admin_name: str,
        image_urls: Any = None,
        comment: Optional[str] = None,
    ) -> Feedback:
        if image_urls is None:
            image_urls = []
        if not isinstance(image_urls, list) or not all(isinstance(u, str) for u in image_urls):
            raise ValidationError("Lista de imagens inválida")

        feedback = Feedback(
            feedback_id=new_id("feedback"),
            designer_id=require_non_empty(designer_id, "Designer"),
            designer_name=require_non_empty(designer_name, "Nome do designer"),
            admin_name=require_non_empty(admin_name, "Nome do administrador"),
            comment=comment,
            created_at=self._clock_ms(),
            image_urls=list(image_urls),
        )
        self._feedbacks.create(feedback)
        return feedback

    def mark_viewed(self, feedback_id: str) -> None:
        if not self._feedbacks.mark_viewed(feedback_id, viewed_at=self._clock_ms()):
            raise NotFoundError("Feedback não encontrado")

    def delete(self, feedback_id: str) -> None:
        if not self._feedbacks.delete(feedback_id):
            raise NotFoundError("Feedback não encontrado")
