from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class SystemSettings:
    """Singleton row (id=1): branding and the per-variation point value."""

    logo_url: Optional[str] = None
    brand_title: Optional[str] = None
    login_subtitle: Optional[str] = None
    variation_points: Optional[int] = None
