from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Demand


class DemandRepository(Protocol):
    def list_range(
        self,
        *,
        user_id: Optional[str] = None,
        start_ms: Optional[int] = None,
        end_ms: Optional[int] = None,
    ) -> Sequence[Demand]:
        """Newest first; ``start_ms``/``end_ms`` are inclusive bounds."""

        raise NotImplementedError

    def get_by_id(self, demand_id: str) -> Optional[Demand]:
        raise NotImplementedError

    def create(self, demand: Demand) -> None:
        """Insert the demand and all of its items atomically."""

        raise NotImplementedError

    def delete(self, demand_id: str) -> bool:
        """Delete the demand together with its items."""

        raise NotImplementedError
