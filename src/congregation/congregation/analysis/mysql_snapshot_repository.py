from __future__ import annotations

from ..attendance.model import AttendanceRecord
from ..core.enums import PersonKind
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from ..members.mysql_people_repository import _COLUMNS as PERSON_COLUMNS
from ..members.mysql_people_repository import _to_person
from ..worship.mysql_service_repository import _to_service
from .model import Snapshot
from .repository import SnapshotRepository


class MySQLSnapshotRepository(SnapshotRepository):
    """Reads the three report inputs inside a single read-only transaction."""

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def load(self) -> Snapshot:
        with db_cursor(self._conn_factory) as (conn, cur):
            conn.start_transaction(consistent_snapshot=True, isolation_level="REPEATABLE READ", readonly=True)

            cur.execute(
                f"""
                SELECT {PERSON_COLUMNS}
                FROM people
                WHERE kind=%s AND is_active=1
                ORDER BY last_name ASC, first_name ASC, person_id ASC
                """,
                (PersonKind.MEMBER.value,),
            )
            members = [_to_person(r) for r in fetchall(cur)]

            cur.execute(
                """
                SELECT service_id, service_datetime, topic, speaker
                FROM services
                ORDER BY service_datetime DESC, service_id DESC
                """
            )
            services = [_to_service(r) for r in fetchall(cur)]

            cur.execute("SELECT service_id, person_id FROM attendance")
            records = [
                AttendanceRecord(service_id=int(r["service_id"]), person_id=int(r["person_id"]))
                for r in fetchall(cur)
            ]

        return Snapshot(members=members, services=services, records=records)
