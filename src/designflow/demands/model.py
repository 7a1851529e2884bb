from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class DemandItem:
    """One line of a demand: a deliverable kind, its quantity and its score."""

    art_type_id: Optional[str]
    art_type_label: str
    points_per_unit: int
    quantity: int
    variation_quantity: int = 0
    variation_points: int = 0
    total_points: int = 0
    is_variation: bool = False


@dataclass(frozen=True)
class Demand:
    """A submitted batch of deliverables, owned by one user."""

    demand_id: str
    user_id: str
    user_name: str
    total_quantity: int
    total_points: int
    timestamp: int
    items: list[DemandItem] = field(default_factory=list)


@dataclass(frozen=True)
class DemandItemInput:
    """Item as received from the client, before scoring."""

    art_type_id: Optional[str]
    art_type_label: str
    points_per_unit: int
    quantity: int
    variation_quantity: int = 0
    is_variation: bool = False
