from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import TrainingType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, dumps_dates, fetchall, fetchone, loads_dates
from .model import Training
from .repository import TrainingRepository

_TRAINING_COLUMNS = (
    "id, workspace_id, admin_id, title, type, location, dates_json, start_date, end_date, "
    "description, resources_link, created_at"
)


def _to_training(row: dict) -> Training:
    return Training(
        training_id=row["id"],
        workspace_id=row["workspace_id"],
        admin_id=row["admin_id"],
        title=row["title"],
        training_type=TrainingType(row["type"]),
        location=row["location"],
        dates=tuple(sorted(loads_dates(row["dates_json"]))),
        description=row["description"],
        resources_link=row.get("resources_link"),
        created_at=row.get("created_at"),
    )


class MySQLTrainingRepository(TrainingRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, workspace_id: str, training_id: str) -> Optional[Training]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_TRAINING_COLUMNS} FROM trainings WHERE workspace_id=%s AND id=%s",
                (workspace_id, training_id),
            )
            row = fetchone(cur)
            return _to_training(row) if row else None

    def list_by_workspace(self, workspace_id: str, *, admin_id: Optional[str] = None) -> Sequence[Training]:
        sql = f"SELECT {_TRAINING_COLUMNS} FROM trainings WHERE workspace_id=%s"
        params: list = [workspace_id]
        if admin_id:
            sql += " AND admin_id=%s"
            params.append(admin_id)
        sql += " ORDER BY created_at DESC"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_to_training(r) for r in fetchall(cur)]

    def create(self, training: Training) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO trainings(
                    id, workspace_id, admin_id, title, type, location, dates_json,
                    start_date, end_date, description, resources_link
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    training.training_id,
                    training.workspace_id,
                    training.admin_id,
                    training.title,
                    training.training_type.value,
                    training.location,
                    dumps_dates(list(training.dates)),
                    training.start_date,
                    training.end_date,
                    training.description,
                    training.resources_link,
                ),
            )

    def update(self, training: Training) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE trainings
                SET admin_id=%s, title=%s, type=%s, location=%s, dates_json=%s,
                    start_date=%s, end_date=%s, description=%s, resources_link=%s
                WHERE workspace_id=%s AND id=%s
                """,
                (
                    training.admin_id,
                    training.title,
                    training.training_type.value,
                    training.location,
                    dumps_dates(list(training.dates)),
                    training.start_date,
                    training.end_date,
                    training.description,
                    training.resources_link,
                    training.workspace_id,
                    training.training_id,
                ),
            )
            return cur.rowcount > 0

    def delete_with_dependents(self, workspace_id: str, training_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM attendance WHERE workspace_id=%s AND training_id=%s",
                (workspace_id, training_id),
            )
            cur.execute(
                "DELETE FROM trainees WHERE workspace_id=%s AND training_id=%s",
                (workspace_id, training_id),
            )
            cur.execute(
                "DELETE FROM trainings WHERE workspace_id=%s AND id=%s",
                (workspace_id, training_id),
            )
            return cur.rowcount > 0
