from __future__ import annotations

import logging
from pathlib import Path

import psycopg2
from psycopg2 import sql
from werkzeug.security import generate_password_hash

from ..core.constants import DEFAULT_USER_PASSWORD, DEFAULT_VARIATION_POINTS, SETTINGS_ROW_ID
from .connection import DatabaseConnection, DBConfig
from .pg_base import db_cursor

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parent / "schema.sql"

DEMO_USERS = [
    ("d1", "Designer 01 - Davi", "DESIGNER", "https://ui-avatars.com/api/?name=Davi&background=8b5cf6&color=fff"),
    ("d2", "Designer 02 - Guilherme", "DESIGNER", "https://ui-avatars.com/api/?name=Guilherme&background=06b6d4&color=fff"),
    ("d3", "Designer 03 - Paulo", "DESIGNER", "https://ui-avatars.com/api/?name=Paulo&background=ec4899&color=fff"),
    ("a1", "Administrador", "ADM", "https://ui-avatars.com/api/?name=Admin&background=1e293b&color=fff"),
]

# (id, label, points, sort_order, is_variation)
DEMO_ART_TYPES = [
    ("1", "Arte Única", 10, 0, False),
    ("2", "Feed + Storys", 25, 1, False),
    ("3", "Carrossel", 40, 2, False),
    ("4", "Banner Site", 30, 3, False),
    ("5", "Tabela de Preços", 50, 4, False),
    ("6", "Criação de Categoria", 15, 5, False),
    ("7", "Variação de Formato", 5, 6, True),
    ("8", "Edição de Vídeo (Reels)", 60, 7, False),
    ("9", "Outros", 10, 8, False),
]


def _conn_factory(db_config: dict) -> DatabaseConnection:
    # Bootstrap runs before the container exists, so it bypasses the singleton.
    return DatabaseConnection(DBConfig.from_mapping(db_config))


def ensure_database_exists(db_config: dict) -> None:
    config = DBConfig.from_mapping(db_config)
    if config.dsn:
        # Managed databases (DATABASE_URL) are provisioned outside the app.
        return

    conn = psycopg2.connect(
        host=config.host,
        port=config.port,
        user=config.user,
        password=config.password,
        dbname="postgres",
    )
    conn.autocommit = True
    try:
        cur = conn.cursor()
        cur.execute("SELECT 1 FROM pg_database WHERE datname=%s", (config.database,))
        if cur.fetchone() is None:
            cur.execute(sql.SQL("CREATE DATABASE {}").format(sql.Identifier(config.database)))
            logger.info("created database %s", config.database)
    finally:
        conn.close()


def _column_exists(cur, table: str, column: str) -> bool:
    cur.execute(
        """
        SELECT 1 FROM information_schema.columns
        WHERE table_schema = current_schema() AND table_name = %s AND column_name = %s
        """,
        (table, column),
    )
    return cur.fetchone() is not None


def apply_schema(db_config: dict, *, schema_path: str | Path = SCHEMA_PATH) -> None:
    ensure_database_exists(db_config)
    ddl = Path(schema_path).read_text(encoding="utf-8")

    with db_cursor(_conn_factory(db_config)) as (_, cur):
        art_types_flagged = _column_exists(cur, "art_types", "is_variation")
        items_flagged = _column_exists(cur, "demand_items", "is_variation")
        cur.execute(ddl)
        backfill_variation_flags(cur, art_types=not art_types_flagged, demand_items=not items_flagged)


def backfill_variation_flags(cur, *, art_types: bool, demand_items: bool) -> int:
    """Derive the variation flag from labels, once, when the column is created.

    Older databases identified variations by their label only. After the
    column exists the flag belongs to the catalog and is never recomputed.
    """

    updated = 0
    if art_types:
        cur.execute("UPDATE art_types SET is_variation = true WHERE label ILIKE %s", ("%variação%",))
        updated = cur.rowcount
        if updated:
            logger.info("flagged %d legacy art types as variations", updated)
    if demand_items:
        cur.execute(
            """
            UPDATE demand_items di SET is_variation = true
            FROM art_types a
            WHERE a.id = di.art_type_id AND a.is_variation
            """
        )
    return updated


def ensure_demo_data(db_config: dict, *, demo_password: str = DEFAULT_USER_PASSWORD) -> None:
    with db_cursor(_conn_factory(db_config)) as (_, cur):
        cur.execute("SELECT COUNT(*) AS n FROM users")
        if int(cur.fetchone()["n"]) == 0:
            password_hash = generate_password_hash(demo_password)
            for user_id, name, role, avatar_url in DEMO_USERS:
                cur.execute(
                    """
                    INSERT INTO users (id, name, password, role, avatar_url, active)
                    VALUES (%s, %s, %s, %s, %s, true)
                    """,
                    (user_id, name, password_hash, role, avatar_url),
                )

        cur.execute("SELECT COUNT(*) AS n FROM art_types")
        if int(cur.fetchone()["n"]) == 0:
            for art_id, label, points, order, is_variation in DEMO_ART_TYPES:
                cur.execute(
                    """
                    INSERT INTO art_types (id, label, points, sort_order, is_variation)
                    VALUES (%s, %s, %s, %s, %s)
                    """,
                    (art_id, label, points, order, is_variation),
                )

        cur.execute(
            """
            INSERT INTO system_settings (id, brand_title, login_subtitle, variation_points)
            VALUES (%s, %s, %s, %s)
            ON CONFLICT (id) DO NOTHING
            """,
            (SETTINGS_ROW_ID, "DesignFlow Pro", "Sistema de Produtividade", DEFAULT_VARIATION_POINTS),
        )


def list_tables(db_config: dict) -> list[str]:
    with db_cursor(_conn_factory(db_config)) as (_, cur):
        cur.execute(
            """
            SELECT table_name FROM information_schema.tables
            WHERE table_schema = 'public'
            ORDER BY table_name
            """
        )
        return [row["table_name"] for row in cur.fetchall()]
