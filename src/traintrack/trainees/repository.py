from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Trainee


class TraineeRepository(Protocol):
    def get(self, workspace_id: str, trainee_id: str) -> Optional[Trainee]:
        raise NotImplementedError

    def get_by_email(self, workspace_id: str, training_id: str, email: str) -> Optional[Trainee]:
        """Case-insensitive lookup inside one training."""
        raise NotImplementedError

    def list_for_training(self, workspace_id: str, training_id: str) -> Sequence[Trainee]:
        raise NotImplementedError

    def list_by_workspace(self, workspace_id: str) -> Sequence[Trainee]:
        raise NotImplementedError

    def create(self, trainee: Trainee) -> None:
        raise NotImplementedError

    def delete_with_attendance(self, workspace_id: str, trainee_id: str) -> bool:
        raise NotImplementedError
