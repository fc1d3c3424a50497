from __future__ import annotations

from datetime import date
from typing import Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def exists(self, *, workspace_id: str, training_id: str, trainee_id: str, session_date: date) -> bool:
        raise NotImplementedError

    def create(self, record: AttendanceRecord) -> None:
        """Insert; raises ``DuplicateRecordError`` when the trainee already
        checked in for that session date."""
        raise NotImplementedError

    def list_for_training(self, workspace_id: str, training_id: str) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_by_workspace(self, workspace_id: str) -> Sequence[AttendanceRecord]:
        raise NotImplementedError
