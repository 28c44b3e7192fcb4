from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .repository import ThresholdRepository

logger = logging.getLogger(__name__)


class MySQLThresholdRepository(ThresholdRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, activity_id: str) -> Optional[Dict[str, Any]]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT payload FROM threshold_preferences WHERE activity_id=%s",
                (str(activity_id),),
            )
            row = fetchone(cur)
        if not row or not row.get("payload"):
            return None

        raw = row["payload"]
        if isinstance(raw, (bytes, bytearray)):
            raw = raw.decode("utf-8")
        try:
            payload = json.loads(raw)
        except ValueError:
            logger.warning("Stored threshold payload for activity %s is not JSON", activity_id)
            return None
        return payload if isinstance(payload, dict) else None

    def save(self, activity_id: str, payload: Dict[str, Any]) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO threshold_preferences(activity_id, payload)
                VALUES(%s,%s)
                ON DUPLICATE KEY UPDATE payload=VALUES(payload), updated_at=CURRENT_TIMESTAMP
                """,
                (str(activity_id), json.dumps(payload, ensure_ascii=False)),
            )
