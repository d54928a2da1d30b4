from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Service
from .repository import ServiceRepository


def _to_service(r: Dict[str, Any]) -> Service:
    return Service(
        service_id=int(r["service_id"]),
        service_datetime=r["service_datetime"],
        topic=r["topic"],
        speaker=r.get("speaker"),
    )


class MySQLServiceRepository(ServiceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, service_id: int) -> Optional[Service]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT service_id, service_datetime, topic, speaker
                FROM services
                WHERE service_id=%s
                """,
                (int(service_id),),
            )
            r = fetchone(cur)
            return _to_service(r) if r else None

    def list_all(self) -> Sequence[Service]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT service_id, service_datetime, topic, speaker
                FROM services
                ORDER BY service_datetime DESC, service_id DESC
                """
            )
            return [_to_service(r) for r in fetchall(cur)]

    def list_recent(self, limit: int) -> Sequence[Service]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT service_id, service_datetime, topic, speaker
                FROM services
                ORDER BY service_datetime DESC, service_id DESC
                LIMIT %s
                """,
                (int(limit),),
            )
            return [_to_service(r) for r in fetchall(cur)]

    def create(self, *, service_datetime: datetime, topic: str, speaker: Optional[str] = None) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO services(service_datetime, topic, speaker) VALUES(%s,%s,%s)",
                (service_datetime, topic, speaker),
            )
            return int(cur.lastrowid)

    def update_datetime(self, *, service_id: int, service_datetime: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT service_datetime FROM services WHERE service_id=%s FOR UPDATE",
                (int(service_id),),
            )
            row = fetchone(cur)
            if not row:
                return False

            cur.execute(
                "UPDATE services SET service_datetime=%s WHERE service_id=%s",
                (service_datetime, int(service_id)),
            )
            # First visits stamped from this service follow its new date.
            cur.execute(
                """
                UPDATE people p
                JOIN attendance a ON a.person_id = p.person_id AND a.service_id = %s
                SET p.first_visit = %s
                WHERE p.first_visit = %s
                """,
                (int(service_id), service_datetime, row["service_datetime"]),
            )
            return True
