from __future__ import annotations

from typing import Iterable, Optional, Protocol, Sequence

from .model import ArtType


class ArtTypeRepository(Protocol):
    def list_all(self) -> Sequence[ArtType]:
        raise NotImplementedError

    def get_many(self, art_type_ids: Iterable[str]) -> dict[str, ArtType]:
        raise NotImplementedError

    def create(self, *, art_type_id: str, label: str, points: int, is_variation: bool) -> ArtType:
        """Insert at the end of the catalog (max sort order + 1)."""

        raise NotImplementedError

    def update(
        self,
        art_type_id: str,
        *,
        label: Optional[str] = None,
        points: Optional[int] = None,
        order: Optional[int] = None,
        is_variation: Optional[bool] = None,
    ) -> bool:
        raise NotImplementedError

    def delete(self, art_type_id: str) -> bool:
        raise NotImplementedError

    def reorder(self, orders: Sequence[tuple[str, int]]) -> None:
        raise NotImplementedError
