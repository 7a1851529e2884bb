from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.pg_base import db_cursor, fetchall, fetchone
from .model import Demand, DemandItem
from .repository import DemandRepository


def _to_item(row: dict) -> DemandItem:
    return DemandItem(
        art_type_id=row.get("art_type_id"),
        art_type_label=row["art_type_label"],
        points_per_unit=int(row["points_per_unit"]),
        quantity=int(row["quantity"]),
        variation_quantity=int(row.get("variation_quantity") or 0),
        variation_points=int(row.get("variation_points") or 0),
        total_points=int(row["total_points"]),
        is_variation=bool(row.get("is_variation") or False),
    )


def _to_demand(row: dict, items: list[DemandItem]) -> Demand:
    return Demand(
        demand_id=row["id"],
        user_id=row["user_id"],
        user_name=row["user_name"],
        total_quantity=int(row["total_quantity"]),
        total_points=int(row["total_points"]),
        timestamp=int(row["timestamp"]),
        items=items,
    )


class PgDemandRepository(DemandRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @staticmethod
    def _items_by_demand(cur, demand_ids: list[str]) -> dict[str, list[DemandItem]]:
        out: dict[str, list[DemandItem]] = {d: [] for d in demand_ids}
        if not demand_ids:
            return out
        cur.execute(
            """
            SELECT demand_id, art_type_id, art_type_label, points_per_unit, quantity,
                   variation_quantity, variation_points, total_points, is_variation
            FROM demand_items
            WHERE demand_id = ANY(%s)
            ORDER BY id
            """,
            (demand_ids,),
        )
        for r in fetchall(cur):
            out[r["demand_id"]].append(_to_item(r))
        return out

    def list_range(
        self,
        *,
        user_id: Optional[str] = None,
        start_ms: Optional[int] = None,
        end_ms: Optional[int] = None,
    ) -> Sequence[Demand]:
        clauses = ["1=1"]
        params: list[object] = []

        if user_id:
            clauses.append("user_id = %s")
            params.append(user_id)
        if start_ms is not None:
            clauses.append("timestamp >= %s")
            params.append(int(start_ms))
        if end_ms is not None:
            clauses.append("timestamp <= %s")
            params.append(int(end_ms))

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT id, user_id, user_name, total_quantity, total_points, timestamp
                FROM demands
                WHERE {where}
                ORDER BY timestamp DESC
                """,
                tuple(params),
            )
            rows = fetchall(cur)
            items = self._items_by_demand(cur, [r["id"] for r in rows])
            return [_to_demand(r, items[r["id"]]) for r in rows]

    def get_by_id(self, demand_id: str) -> Optional[Demand]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, user_id, user_name, total_quantity, total_points, timestamp
                FROM demands WHERE id = %s
                """,
                (demand_id,),
            )
            row = fetchone(cur)
            if not row:
                return None
            return _to_demand(row, self._items_by_demand(cur, [demand_id])[demand_id])

    def create(self, demand: Demand) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO demands (id, user_id, user_name, total_quantity, total_points, timestamp)
                VALUES (%s, %s, %s, %s, %s, %s)
                """,
                (
                    demand.demand_id,
                    demand.user_id,
                    demand.user_name,
                    demand.total_quantity,
                    demand.total_points,
                    demand.timestamp,
                ),
            )
            for item in demand.items:
                cur.execute(
                    """
                    INSERT INTO demand_items (
                        demand_id, art_type_id, art_type_label, points_per_unit, quantity,
                        variation_quantity, variation_points, total_points, is_variation
                    )
                    VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s)
                    """,
                    (
                        demand.demand_id,
                        item.art_type_id,
                        item.art_type_label,
                        item.points_per_unit,
                        item.quantity,
                        item.variation_quantity,
                        item.variation_points,
                        item.total_points,
                        item.is_variation,
                    ),
                )

    def delete(self, demand_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM demand_items WHERE demand_id = %s", (demand_id,))
            cur.execute("DELETE FROM demands WHERE id = %s", (demand_id,))
            return cur.rowcount > 0
