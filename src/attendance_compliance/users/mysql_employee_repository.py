from __future__ import annotations

from typing import Iterable, Mapping, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import Employee
from .repository import EmployeeDirectory


def _row_to_employee(row: dict) -> Employee:
    return Employee(
        user_id=str(row["user_id"]),
        name=row["name"],
        role=Role(row["role"]),
        employee_number=row.get("employee_number"),
        department=row.get("department"),
        is_active=bool(row.get("is_active", True)),
    )


class MySQLEmployeeDirectory(EmployeeDirectory):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_active_employees(self) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT user_id, name, role, employee_number, department, is_active
                FROM employees
                WHERE is_active=1
                ORDER BY name
                """
            )
            return [_row_to_employee(r) for r in fetchall(cur)]

    def get_many(self, user_ids: Iterable[str]) -> Mapping[str, Employee]:
        ids = sorted({str(u) for u in user_ids})
        if not ids:
            return {}
        placeholders = ",".join(["%s"] * len(ids))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT user_id, name, role, employee_number, department, is_active
                FROM employees
                WHERE user_id IN ({placeholders})
                """,
                tuple(ids),
            )
            return {str(r["user_id"]): _row_to_employee(r) for r in fetchall(cur)}
