from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class WorkSession:
    """Per-day clock-in marker for a user (epoch ms timestamp)."""

    session_id: str
    user_id: str
    timestamp: int
