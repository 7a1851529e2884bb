from __future__ import annotations

from typing import Any, Optional

from ..common.validators import require_non_negative_int
from ..core.constants import DEFAULT_VARIATION_POINTS
from .model import SystemSettings
from .repository import SettingsRepository


class SettingsService:
    def __init__(self, settings: SettingsRepository):
        self._settings = settings

    def get_settings(self) -> Optional[SystemSettings]:
        return self._settings.get()

    def variation_points(self) -> int:
        """Points per variation unit; falls back to the default when unset."""

        settings = self._settings.get()
        if settings is None or settings.variation_points is None:
            return DEFAULT_VARIATION_POINTS
        return int(settings.variation_points)

    def update(
        self,
        *,
        logo_url: Optional[str] = None,
        brand_title: Optional[str] = None,
        login_subtitle: Optional[str] = None,
        variation_points: Any = None,
    ) -> None:
        if variation_points is not None:
            variation_points = require_non_negative_int(variation_points, "Pontos por variação")

        self._settings.save(
            SystemSettings(
                logo_url=logo_url,
                brand_title=brand_title,
                login_subtitle=login_subtitle,
                variation_points=variation_points,
            )
        )
