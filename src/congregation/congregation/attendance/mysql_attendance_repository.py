from __future__ import annotations

from typing import Iterable, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import AttendanceRecord
from .repository import AttendanceRepository


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT service_id, person_id FROM attendance")
            return [
                AttendanceRecord(service_id=int(r["service_id"]), person_id=int(r["person_id"]))
                for r in fetchall(cur)
            ]

    def list_for_service(self, service_id: int) -> Sequence[AttendanceRecord]:
        return self.list_for_services([service_id])

    def list_for_services(self, service_ids: Sequence[int]) -> Sequence[AttendanceRecord]:
        ids = [int(sid) for sid in service_ids]
        if not ids:
            return []
        placeholders = ",".join(["%s"] * len(ids))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT service_id, person_id
                FROM attendance
                WHERE service_id IN ({placeholders})
                ORDER BY service_id ASC, person_id ASC
                """,
                tuple(ids),
            )
            return [
                AttendanceRecord(service_id=int(r["service_id"]), person_id=int(r["person_id"]))
                for r in fetchall(cur)
            ]

    def replace_for_service(self, service_id: int, person_ids: Iterable[int]) -> int:
        rows = [(int(service_id), int(pid)) for pid in person_ids]
        # Delete + insert share one connection, so db_cursor commits or rolls back both.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM attendance WHERE service_id=%s", (int(service_id),))
            if rows:
                cur.executemany(
                    "INSERT IGNORE INTO attendance(service_id, person_id) VALUES(%s,%s)",
                    rows,
                )
            return len(rows)

    def has_attendance_elsewhere(self, person_id: int, *, exclude_service_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT 1 AS found
                FROM attendance
                WHERE person_id=%s AND service_id<>%s
                LIMIT 1
                """,
                (int(person_id), int(exclude_service_id)),
            )
            return fetchone(cur) is not None
