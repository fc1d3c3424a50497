from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Trainee
from .repository import TraineeRepository

_TRAINEE_COLUMNS = "id, workspace_id, training_id, name, email, phone, unique_code, created_at"


def _to_trainee(row: dict) -> Trainee:
    return Trainee(
        trainee_id=row["id"],
        workspace_id=row["workspace_id"],
        training_id=row["training_id"],
        name=row["name"],
        email=row["email"],
        phone=row.get("phone"),
        unique_code=row["unique_code"],
        created_at=row.get("created_at"),
    )


class MySQLTraineeRepository(TraineeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, workspace_id: str, trainee_id: str) -> Optional[Trainee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_TRAINEE_COLUMNS} FROM trainees WHERE workspace_id=%s AND id=%s",
                (workspace_id, trainee_id),
            )
            row = fetchone(cur)
            return _to_trainee(row) if row else None

    def get_by_email(self, workspace_id: str, training_id: str, email: str) -> Optional[Trainee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_TRAINEE_COLUMNS} FROM trainees
                WHERE workspace_id=%s AND training_id=%s AND LOWER(email)=LOWER(%s)
                """,
                (workspace_id, training_id, email),
            )
            row = fetchone(cur)
            return _to_trainee(row) if row else None

    def list_for_training(self, workspace_id: str, training_id: str) -> Sequence[Trainee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_TRAINEE_COLUMNS} FROM trainees
                WHERE workspace_id=%s AND training_id=%s
                ORDER BY created_at ASC
                """,
                (workspace_id, training_id),
            )
            return [_to_trainee(r) for r in fetchall(cur)]

    def list_by_workspace(self, workspace_id: str) -> Sequence[Trainee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_TRAINEE_COLUMNS} FROM trainees WHERE workspace_id=%s ORDER BY created_at ASC",
                (workspace_id,),
            )
            return [_to_trainee(r) for r in fetchall(cur)]

    def create(self, trainee: Trainee) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO trainees(id, workspace_id, training_id, name, email, phone, unique_code)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    trainee.trainee_id,
                    trainee.workspace_id,
                    trainee.training_id,
                    trainee.name,
                    trainee.email,
                    trainee.phone,
                    trainee.unique_code,
                ),
            )

    def delete_with_attendance(self, workspace_id: str, trainee_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM attendance WHERE workspace_id=%s AND trainee_id=%s",
                (workspace_id, trainee_id),
            )
            cur.execute(
                "DELETE FROM trainees WHERE workspace_id=%s AND id=%s",
                (workspace_id, trainee_id),
            )
            return cur.rowcount > 0
