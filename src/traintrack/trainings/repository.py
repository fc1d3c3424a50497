from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Training


class TrainingRepository(Protocol):
    def get(self, workspace_id: str, training_id: str) -> Optional[Training]:
        raise NotImplementedError

    def list_by_workspace(self, workspace_id: str, *, admin_id: Optional[str] = None) -> Sequence[Training]:
        """Newest first."""
        raise NotImplementedError

    def create(self, training: Training) -> None:
        raise NotImplementedError

    def update(self, training: Training) -> bool:
        raise NotImplementedError

    def delete_with_dependents(self, workspace_id: str, training_id: str) -> bool:
        """Delete the training together with its trainees and attendance."""
        raise NotImplementedError
