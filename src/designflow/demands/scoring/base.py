from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from ..model import DemandItem, DemandItemInput


class PointsCalculator(ABC):
    """Calculator interface (Strategy Pattern for demand scoring)."""

    @abstractmethod
    def score_item(self, item: DemandItemInput, *, variation_points: int) -> DemandItem:
        raise NotImplementedError

    @abstractmethod
    def total_quantity(self, items: Sequence[DemandItem]) -> int:
        raise NotImplementedError

    def total_points(self, items: Sequence[DemandItem]) -> int:
        return sum(i.total_points for i in items)
