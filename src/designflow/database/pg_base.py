from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, List, Optional

from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection):
    """Yield ``(conn, cur)`` inside one transaction.

    Commits when the block finishes, rolls back and re-raises on any error.
    Everything executed inside a single ``with`` block is atomic.
    """

    conn = conn_factory.connect()
    try:
        cur = conn.cursor()
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return dict(row) if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return [dict(r) for r in rows or []]


def optional_ms(value: Any) -> Optional[int]:
    """BIGINT epoch-ms columns may come back as int, Decimal or str."""

    if value is None:
        return None
    return int(value)
