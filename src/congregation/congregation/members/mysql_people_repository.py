from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional, Sequence

from ..core.enums import PersonKind, VisitorStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Member, Visitor
from .repository import PeopleRepository, Person

_COLUMNS = """
    person_id, kind, first_name, last_name, phone_number, email,
    member_since, first_visit, is_active, visitor_status
"""


def _to_person(row: Dict[str, Any]) -> Person:
    if PersonKind(row["kind"]) == PersonKind.VISITOR:
        return Visitor(
            person_id=int(row["person_id"]),
            first_name=row["first_name"],
            last_name=row["last_name"],
            phone_number=row.get("phone_number"),
            email=row.get("email"),
            first_visit=row.get("first_visit"),
            status=VisitorStatus(row.get("visitor_status") or VisitorStatus.NEW.value),
        )
    return Member(
        person_id=int(row["person_id"]),
        first_name=row["first_name"],
        last_name=row["last_name"],
        phone_number=row.get("phone_number"),
        email=row.get("email"),
        member_since=row.get("member_since"),
        first_visit=row.get("first_visit"),
        is_active=bool(row.get("is_active", True)),
    )


class MySQLPeopleRepository(PeopleRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, person_id: int) -> Optional[Person]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM people WHERE person_id=%s", (int(person_id),))
            row = fetchone(cur)
            return _to_person(row) if row else None

    def get_many(self, person_ids: Sequence[int]) -> Sequence[Person]:
        ids = [int(pid) for pid in person_ids]
        if not ids:
            return []
        placeholders = ",".join(["%s"] * len(ids))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM people WHERE person_id IN ({placeholders})",
                tuple(ids),
            )
            return [_to_person(r) for r in fetchall(cur)]

    def get_by_phone(self, phone_number: str) -> Optional[Person]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM people WHERE phone_number=%s", (phone_number,))
            row = fetchone(cur)
            return _to_person(row) if row else None

    def list_active_members(self) -> Sequence[Member]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM people
                WHERE kind=%s AND is_active=1
                ORDER BY last_name ASC, first_name ASC, person_id ASC
                """,
                (PersonKind.MEMBER.value,),
            )
            return [_to_person(r) for r in fetchall(cur)]

    def _insert(
        self,
        *,
        kind: PersonKind,
        first_name: str,
        last_name: str,
        phone_number: str,
        email: Optional[str],
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO people(kind, first_name, last_name, phone_number, email, member_since, is_active, visitor_status)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    kind.value,
                    first_name,
                    last_name,
                    phone_number,
                    email,
                    datetime.now() if kind == PersonKind.MEMBER else None,
                    1,
                    VisitorStatus.NEW.value if kind == PersonKind.VISITOR else None,
                ),
            )
            return int(cur.lastrowid)

    def create_member(
        self,
        *,
        first_name: str,
        last_name: str,
        phone_number: str,
        email: Optional[str] = None,
    ) -> int:
        return self._insert(
            kind=PersonKind.MEMBER,
            first_name=first_name,
            last_name=last_name,
            phone_number=phone_number,
            email=email,
        )

    def create_visitor(
        self,
        *,
        first_name: str,
        last_name: str,
        phone_number: str,
        email: Optional[str] = None,
    ) -> int:
        return self._insert(
            kind=PersonKind.VISITOR,
            first_name=first_name,
            last_name=last_name,
            phone_number=phone_number,
            email=email,
        )

    def set_active(self, person_id: int, *, is_active: bool) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE people SET is_active=%s WHERE person_id=%s AND kind=%s",
                (1 if is_active else 0, int(person_id), PersonKind.MEMBER.value),
            )
            return cur.rowcount > 0

    def set_first_visit(self, person_id: int, *, first_visit: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE people SET first_visit=%s WHERE person_id=%s AND first_visit IS NULL",
                (first_visit, int(person_id)),
            )
            return cur.rowcount > 0
