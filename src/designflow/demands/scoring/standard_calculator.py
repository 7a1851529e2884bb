from __future__ import annotations

from typing import Sequence

from ..model import DemandItem, DemandItemInput
from .base import PointsCalculator


class StandardPointsCalculator(PointsCalculator):
    """Standard rule: points_per_unit * quantity + variation_quantity * variation_points.

    Variation items still score points but do not count as arts.
    """

    def score_item(self, item: DemandItemInput, *, variation_points: int) -> DemandItem:
        extra = item.variation_quantity * int(variation_points)
        return DemandItem(
            art_type_id=item.art_type_id,
            art_type_label=item.art_type_label,
            points_per_unit=item.points_per_unit,
            quantity=item.quantity,
            variation_quantity=item.variation_quantity,
            variation_points=extra,
            total_points=item.points_per_unit * item.quantity + extra,
            is_variation=item.is_variation,
        )

    def total_quantity(self, items: Sequence[DemandItem]) -> int:
        return sum(i.quantity for i in items if not i.is_variation)
