from __future__ import annotations

from typing import Any, Optional, Sequence

from ..common.ids import new_id
from ..common.validators import optional_int, require_non_empty, require_non_negative_int
from ..core.exceptions import NotFoundError, ValidationError
from .model import ArtType
from .repository import ArtTypeRepository


def _optional_bool(value: Any, field_name: str) -> Optional[bool]:
    if value is None:
        return None
    if not isinstance(value, bool):
        raise ValidationError(f"{field_name} inválido")
    return value


class ArtTypeService:
    def __init__(self, art_types: ArtTypeRepository):
        self._art_types = art_types

    def list_art_types(self) -> Sequence[ArtType]:
        return self._art_types.list_all()

    def create(self, *, label: str, points: Any, is_variation: Any = None) -> ArtType:
        return self._art_types.create(
            art_type_id=new_id("art"),
            label=require_non_empty(label, "Nome do tipo de arte"),
            points=require_non_negative_int(points, "Pontos"),
            is_variation=bool(_optional_bool(is_variation, "isVariation")),
        )

    def update(
        self,
        art_type_id: str,
        *,
        label: Optional[str] = None,
        points: Any = None,
        order: Any = None,
        is_variation: Any = None,
    ) -> None:
        if label is not None:
            label = require_non_empty(label, "Nome do tipo de arte")
        if points is not None:
            points = require_non_negative_int(points, "Pontos")

        updated = self._art_types.update(
            art_type_id,
            label=label,
            points=points,
            order=optional_int(order, "Ordem"),
            is_variation=_optional_bool(is_variation, "isVariation"),
        )
        if not updated:
            raise NotFoundError("Tipo de arte não encontrado")

    def delete(self, art_type_id: str) -> None:
        if not self._art_types.delete(art_type_id):
            raise NotFoundError("Tipo de arte não encontrado")

    def reorder(self, items: Any) -> None:
        """Apply ``[{id, order}, ...]`` in one transaction."""

        if not isinstance(items, list):
            raise ValidationError("Lista de tipos de arte inválida")

        orders: list[tuple[str, int]] = []
        for item in items:
            if not isinstance(item, dict):
                raise ValidationError("Lista de tipos de arte inválida")
            art_type_id = require_non_empty(item.get("id"), "Tipo de arte")
            orders.append((art_type_id, require_non_negative_int(item.get("order"), "Ordem")))

        self._art_types.reorder(orders)
