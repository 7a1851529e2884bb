from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Papel do usuário usado para permissões."""

    ADMIN = "ADM"
    DESIGNER = "DESIGNER"


class ReportPeriod(str, Enum):
    """Janelas de tempo aceitas pelos relatórios do painel."""

    TODAY = "today"
    YESTERDAY = "yesterday"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"
    CUSTOM = "custom"
