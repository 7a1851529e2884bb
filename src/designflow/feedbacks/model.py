from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class Feedback:
    feedback_id: str
    designer_id: str
    designer_name: str
    admin_name: str
    comment: Optional[str]
    created_at: int
    image_urls: list[str] = field(default_factory=list)
    viewed: bool = False
    viewed_at: Optional[int] = None
