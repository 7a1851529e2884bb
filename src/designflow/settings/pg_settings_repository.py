from __future__ import annotations

from typing import Optional

from ..core.constants import SETTINGS_ROW_ID
from ..database.connection import DatabaseConnection
from ..database.pg_base import db_cursor, fetchone
from .model import SystemSettings
from .repository import SettingsRepository


class PgSettingsRepository(SettingsRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self) -> Optional[SystemSettings]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT logo_url, brand_title, login_subtitle, variation_points
                FROM system_settings WHERE id = %s
                """,
                (SETTINGS_ROW_ID,),
            )
            row = fetchone(cur)
            if not row:
                return None
            return SystemSettings(
                logo_url=row.get("logo_url"),
                brand_title=row.get("brand_title"),
                login_subtitle=row.get("login_subtitle"),
                variation_points=row.get("variation_points"),
            )

    def save(self, changes: SystemSettings) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO system_settings (id, logo_url, brand_title, login_subtitle, variation_points)
                VALUES (%s, %s, %s, %s, COALESCE(%s, 5))
                ON CONFLICT (id) DO UPDATE SET
                    logo_url = COALESCE(%s, system_settings.logo_url),
                    brand_title = COALESCE(%s, system_settings.brand_title),
                    login_subtitle = COALESCE(%s, system_settings.login_subtitle),
                    variation_points = COALESCE(%s, system_settings.variation_points)
                """,
                (
                    SETTINGS_ROW_ID,
                    changes.logo_url,
                    changes.brand_title,
                    changes.login_subtitle,
                    changes.variation_points,
                    changes.logo_url,
                    changes.brand_title,
                    changes.login_subtitle,
                    changes.variation_points,
                ),
            )
