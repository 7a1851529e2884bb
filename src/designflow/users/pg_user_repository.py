from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.pg_base import db_cursor, fetchall, fetchone
from .model import User, UserChanges
from .repository import UserRepository

_COLUMNS = "id, name, password, role, avatar_url, avatar_color, active"


def _to_user(row: dict) -> User:
    return User(
        user_id=row["id"],
        name=row["name"],
        password_hash=row["password"],
        role=Role(row["role"]),
        avatar_url=row.get("avatar_url"),
        avatar_color=row.get("avatar_color"),
        active=bool(row.get("active", True)),
    )


class PgUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users ORDER BY name")
            return [_to_user(r) for r in fetchall(cur)]

    def list_designers(self) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE role=%s ORDER BY name", (Role.DESIGNER.value,))
            return [_to_user(r) for r in fetchall(cur)]

    def get_by_id(self, user_id: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE id=%s", (user_id,))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def get_active_by_name(self, name: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE name=%s AND active=true", (name,))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def create_user(self, user: User) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO users (id, name, password, role, avatar_url, avatar_color, active)
                VALUES (%s, %s, %s, %s, %s, %s, %s)
                """,
                (
                    user.user_id,
                    user.name,
                    user.password_hash,
                    user.role.value,
                    user.avatar_url,
                    user.avatar_color,
                    user.active,
                ),
            )

    def update_user(self, user_id: str, changes: UserChanges) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE users
                SET name = COALESCE(%s, name),
                    password = COALESCE(%s, password),
                    active = COALESCE(%s, active),
                    avatar_color = COALESCE(%s, avatar_color),
                    avatar_url = COALESCE(%s, avatar_url)
                WHERE id = %s
                """,
                (
                    changes.name,
                    changes.password_hash,
                    changes.active,
                    changes.avatar_color,
                    changes.avatar_url,
                    user_id,
                ),
            )
            return cur.rowcount > 0

    def deactivate(self, user_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE users SET active = false WHERE id = %s", (user_id,))
            return cur.rowcount > 0

    def delete_cascade(self, user_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                DELETE FROM demand_items
                WHERE demand_id IN (SELECT id FROM demands WHERE user_id = %s)
                """,
                (user_id,),
            )
            cur.execute("DELETE FROM demands WHERE user_id = %s", (user_id,))
            cur.execute("DELETE FROM work_sessions WHERE user_id = %s", (user_id,))
            cur.execute("DELETE FROM feedbacks WHERE designer_id = %s", (user_id,))
            cur.execute("DELETE FROM lesson_progress WHERE designer_id = %s", (user_id,))
            cur.execute("DELETE FROM users WHERE id = %s", (user_id,))
            return cur.rowcount > 0
