from __future__ import annotations

import logging
from typing import Any, Callable, Optional, Sequence

from ..art_types.repository import ArtTypeRepository
from ..common.ids import new_id
from ..common.validators import optional_int, require_non_empty, require_non_negative_int
from ..core.exceptions import NotFoundError, ValidationError
from ..settings.service import SettingsService
from ..users.repository import UserRepository
from .model import Demand, DemandItemInput
from .repository import DemandRepository
from .scoring.base import PointsCalculator
from .scoring.standard_calculator import StandardPointsCalculator

logger = logging.getLogger(__name__)


class DemandService:
    """Use cases around demands: scoring, storing and removing them."""

    def __init__(
        self,
        demands: DemandRepository,
        art_types: ArtTypeRepository,
        users: UserRepository,
        settings: SettingsService,
        *,
        calculator: Optional[PointsCalculator] = None,
        clock_ms: Callable[[], int],
    ):
        self._demands = demands
        self._art_types = art_types
        self._users = users
        self._settings = settings
        self._calculator = calculator or StandardPointsCalculator()
        self._clock_ms = clock_ms

    def list_demands(
        self,
        *,
        user_id: Optional[str] = None,
        start_ms: Any = None,
        end_ms: Any = None,
    ) -> Sequence[Demand]:
        return self._demands.list_range(
            user_id=user_id or None,
            start_ms=optional_int(start_ms, "startDate"),
            end_ms=optional_int(end_ms, "endDate"),
        )

    def _parse_items(self, raw_items: Any) -> list[DemandItemInput]:
        if not isinstance(raw_items, list) or not raw_items:
            raise ValidationError("Adicione pelo menos um item à demanda")

        catalog = self._art_types.get_many(
            i.get("artTypeId") for i in raw_items if isinstance(i, dict) and i.get("artTypeId")
        )

        items: list[DemandItemInput] = []
        for raw in raw_items:
            if not isinstance(raw, dict):
                raise ValidationError("Item de demanda inválido")

            art_type_id = raw.get("artTypeId") or None
            quantity = require_non_negative_int(raw.get("quantity"), "Quantidade")
            variation_quantity = require_non_negative_int(
                raw.get("variationQuantity"), "Quantidade de variações", default=0
            )

            art = catalog.get(art_type_id) if art_type_id else None
            if art is not None:
                # Catalog values win over whatever the client cached.
                label, points_per_unit, is_variation = art.label, art.points, art.is_variation
            else:
                label = require_non_empty(raw.get("artTypeLabel"), "Tipo de arte")
                points_per_unit = require_non_negative_int(raw.get("pointsPerUnit"), "Pontos por unidade")
                is_variation = raw.get("isVariation") is True

            items.append(
                DemandItemInput(
                    art_type_id=art_type_id,
                    art_type_label=label,
                    points_per_unit=points_per_unit,
                    quantity=quantity,
                    variation_quantity=variation_quantity,
                    is_variation=is_variation,
                )
            )
        return items

    def create_demand(self, *, user_id: str, items: Any, user_name: Optional[str] = None) -> Demand:
        user_id = require_non_empty(user_id, "Usuário")
        user = self._users.get_by_id(user_id)
        if not user:
            raise NotFoundError("Usuário não encontrado")

        inputs = self._parse_items(items)
        variation_points = self._settings.variation_points()
        scored = [self._calculator.score_item(i, variation_points=variation_points) for i in inputs]

        demand = Demand(
            demand_id=new_id("demand"),
            user_id=user.user_id,
            user_name=user.name or (user_name or ""),
            total_quantity=self._calculator.total_quantity(scored),
            total_points=self._calculator.total_points(scored),
            timestamp=self._clock_ms(),
            items=scored,
        )
        self._demands.create(demand)
        logger.info(
            "demand %s by %s: %d arts, %d points",
            demand.demand_id,
            demand.user_id,
            demand.total_quantity,
            demand.total_points,
        )
        return demand

    def delete_demand(self, demand_id: str) -> None:
        if not self._demands.delete(demand_id):
            raise NotFoundError("Demanda não encontrada")
