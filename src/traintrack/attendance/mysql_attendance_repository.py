from __future__ import annotations

from datetime import date
from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_date
from .model import AttendanceRecord
from .repository import AttendanceRepository

_ATTENDANCE_COLUMNS = "id, workspace_id, training_id, trainee_id, timestamp_iso, session_date, created_at"


def _to_record(row: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=row["id"],
        workspace_id=row["workspace_id"],
        training_id=row["training_id"],
        trainee_id=row["trainee_id"],
        timestamp=row["timestamp_iso"],
        session_date=normalize_mysql_date(row["session_date"]),
        created_at=row.get("created_at"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def exists(self, *, workspace_id: str, training_id: str, trainee_id: str, session_date: date) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id FROM attendance
                WHERE workspace_id=%s AND training_id=%s AND trainee_id=%s AND session_date=%s
                LIMIT 1
                """,
                (workspace_id, training_id, trainee_id, session_date),
            )
            return fetchone(cur) is not None

    def create(self, record: AttendanceRecord) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance(id, workspace_id, training_id, trainee_id, timestamp_iso, session_date)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (
                    record.attendance_id,
                    record.workspace_id,
                    record.training_id,
                    record.trainee_id,
                    record.timestamp,
                    record.session_date,
                ),
            )

    def list_for_training(self, workspace_id: str, training_id: str) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_ATTENDANCE_COLUMNS} FROM attendance
                WHERE workspace_id=%s AND training_id=%s
                ORDER BY created_at ASC
                """,
                (workspace_id, training_id),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def list_by_workspace(self, workspace_id: str) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_ATTENDANCE_COLUMNS} FROM attendance WHERE workspace_id=%s ORDER BY created_at ASC",
                (workspace_id,),
            )
            return [_to_record(r) for r in fetchall(cur)]
