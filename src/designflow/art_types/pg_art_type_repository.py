from __future__ import annotations

from typing import Iterable, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.pg_base import db_cursor, fetchall, fetchone
from .model import ArtType
from .repository import ArtTypeRepository


def _to_art_type(row: dict) -> ArtType:
    return ArtType(
        art_type_id=row["id"],
        label=row["label"],
        points=int(row["points"]),
        order=int(row["sort_order"]),
        is_variation=bool(row.get("is_variation") or False),
    )


class PgArtTypeRepository(ArtTypeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[ArtType]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, label, points, sort_order, is_variation FROM art_types ORDER BY sort_order")
            return [_to_art_type(r) for r in fetchall(cur)]

    def get_many(self, art_type_ids: Iterable[str]) -> dict[str, ArtType]:
        ids = sorted({i for i in art_type_ids if i})
        if not ids:
            return {}
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT id, label, points, sort_order, is_variation FROM art_types WHERE id = ANY(%s)",
                (ids,),
            )
            return {r["id"]: _to_art_type(r) for r in fetchall(cur)}

    def create(self, *, art_type_id: str, label: str, points: int, is_variation: bool) -> ArtType:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COALESCE(MAX(sort_order), -1) + 1 AS next FROM art_types")
            order = int(fetchone(cur)["next"])
            cur.execute(
                """
                INSERT INTO art_types (id, label, points, sort_order, is_variation)
                VALUES (%s, %s, %s, %s, %s)
                """,
                (art_type_id, label, points, order, is_variation),
            )
        return ArtType(art_type_id=art_type_id, label=label, points=points, order=order, is_variation=is_variation)

    def update(
        self,
        art_type_id: str,
        *,
        label: Optional[str] = None,
        points: Optional[int] = None,
        order: Optional[int] = None,
        is_variation: Optional[bool] = None,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE art_types
                SET label = COALESCE(%s, label),
                    points = COALESCE(%s, points),
                    sort_order = COALESCE(%s, sort_order),
                    is_variation = COALESCE(%s, is_variation)
                WHERE id = %s
                """,
                (label, points, order, is_variation, art_type_id),
            )
            return cur.rowcount > 0

    def delete(self, art_type_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM art_types WHERE id = %s", (art_type_id,))
            return cur.rowcount > 0

    def reorder(self, orders: Sequence[tuple[str, int]]) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            for art_type_id, order in orders:
                cur.execute("UPDATE art_types SET sort_order = %s WHERE id = %s", (order, art_type_id))
