from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ArtType:
    """Catalog entry: a kind of deliverable and its point value."""

    art_type_id: str
    label: str
    points: int
    order: int
    is_variation: bool = False
