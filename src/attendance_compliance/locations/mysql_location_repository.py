from __future__ import annotations

import json
from typing import Optional

from ..core.constants import OFFICE_LOCATION_SETTING_KEY
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import OfficeLocation
from .repository import OfficeLocationRepository


class MySQLOfficeLocationRepository(OfficeLocationRepository):
    """Office location kept as a JSON value in the key/value settings table."""

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_office_location(self) -> Optional[OfficeLocation]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT setting_value FROM settings WHERE setting_key=%s",
                (OFFICE_LOCATION_SETTING_KEY,),
            )
            row = fetchone(cur)
            if not row:
                return None
            value = row["setting_value"]
            if isinstance(value, (bytes, bytearray)):
                value = value.decode("utf-8")
            if isinstance(value, str):
                value = json.loads(value)
            return OfficeLocation.from_setting_value(value)

    def upsert_office_location(self, location: OfficeLocation) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO settings(setting_key, setting_value, description)
                VALUES(%s,%s,%s)
                ON DUPLICATE KEY UPDATE setting_value=VALUES(setting_value), description=VALUES(description)
                """,
                (
                    OFFICE_LOCATION_SETTING_KEY,
                    json.dumps(location.to_setting_value()),
                    "Office location and attendance radius",
                ),
            )
