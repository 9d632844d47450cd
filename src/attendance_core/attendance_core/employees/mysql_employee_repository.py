from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Employee
from .repository import EmployeeRepository


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT user_id, company_id, name, role, face_descriptor, basic_salary, joining_date, is_active
                FROM employees
                WHERE user_id=%s AND is_deleted=0
                """,
                (int(user_id),),
            )
            row = fetchone(cur)
            if not row:
                return None
            return Employee(
                user_id=int(row["user_id"]),
                company_id=int(row["company_id"]),
                name=row["name"],
                role=Role(row["role"]),
                face_descriptor=row.get("face_descriptor"),
                basic_salary=float(row.get("basic_salary") or 0),
                joining_date=row.get("joining_date"),
                is_active=bool(row.get("is_active", True)),
            )

    def list_active_ids(self, company_id: int) -> Sequence[int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT user_id
                FROM employees
                WHERE company_id=%s AND role=%s AND is_active=1 AND is_deleted=0
                ORDER BY user_id
                """,
                (int(company_id), Role.EMPLOYEE.value),
            )
            return [int(r["user_id"]) for r in fetchall(cur)]
