from __future__ import annotations

from typing import Optional, Protocol

from .model import SystemSettings


class SettingsRepository(Protocol):
    def get(self) -> Optional[SystemSettings]:
        raise NotImplementedError

    def save(self, changes: SystemSettings) -> None:
        """Upsert the singleton row; ``None`` fields keep their stored value."""

        raise NotImplementedError
