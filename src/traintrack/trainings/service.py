from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Mapping, Optional, Sequence

from ..common.ids import gen_id
from ..common.validators import optional_text, require_choice, require_non_empty, require_session_dates
from ..core import access
from ..core.constants import ID_PREFIX_TRAINING
from ..core.enums import Role, TrainingType
from ..core.exceptions import AuthorizationError, NotFoundError
from ..users.model import User
from ..users.repository import UserRepository
from .model import Training
from .repository import TrainingRepository

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("title", "training_type", "location", "dates", "description", "resources_link", "admin_id")


def _training_type(value: Any) -> TrainingType:
    return TrainingType(require_choice(value or TrainingType.IN_PERSON.value, [t.value for t in TrainingType], "training type"))


class TrainingService:
    """Use cases: trainings inside a workspace."""

    def __init__(self, trainings: TrainingRepository, users: Optional[UserRepository] = None):
        self._trainings = trainings
        self._users = users

    def require_training(self, workspace_id: str, training_id: str, *, id_field: str = "trainingId") -> Training:
        training = self._trainings.get(
            require_non_empty(workspace_id, "workspaceId"),
            require_non_empty(training_id, id_field),
        )
        if not training:
            raise NotFoundError("Training not found.")
        return training

    def list_trainings(
        self, actor: User, *, workspace_id: Optional[str] = None, admin_id: Optional[str] = None
    ) -> Sequence[Training]:
        ws = access.resolve_workspace(actor, workspace_id)
        return self._trainings.list_by_workspace(ws, admin_id=optional_text(admin_id))

    def get_training(self, actor: User, training_id: str, *, workspace_id: Optional[str] = None) -> Training:
        return self.require_training(access.resolve_workspace(actor, workspace_id), training_id, id_field="id")

    def get_public(self, workspace_id: str, training_id: str) -> Training:
        """Lookup used by the public registration and check-in pages."""
        return self.require_training(workspace_id, training_id, id_field="id")

    def create_training(
        self,
        actor: User,
        *,
        title: str,
        dates: Any,
        training_type: Any = None,
        location: Any = "",
        description: Any = "",
        resources_link: Any = None,
        workspace_id: Optional[str] = None,
    ) -> Training:
        access.require_role(actor, *access.MANAGER_ROLES)
        ws = access.resolve_workspace(actor, workspace_id)

        training = Training(
            training_id=gen_id(ID_PREFIX_TRAINING),
            workspace_id=ws,
            admin_id=actor.user_id,
            title=require_non_empty(title, "Title"),
            training_type=_training_type(training_type),
            location=optional_text(location) or "",
            dates=tuple(require_session_dates(dates)),
            description=optional_text(description) or "",
            resources_link=optional_text(resources_link),
        )
        self._trainings.create(training)
        logger.info("%s created training %s in %s", actor.user_id, training.training_id, ws)
        return self._trainings.get(ws, training.training_id) or training

    def update_training(
        self,
        actor: User,
        training_id: str,
        changes: Mapping[str, Any],
        *,
        workspace_id: Optional[str] = None,
    ) -> Training:
        current = self.require_training(access.resolve_workspace(actor, workspace_id), training_id, id_field="id")
        access.require_training_manager(actor, current)

        fields: dict[str, Any] = {}
        for key in EDITABLE_FIELDS:
            if key not in changes:
                continue
            value = changes[key]
            if key == "title":
                fields[key] = require_non_empty(value, "Title")
            elif key == "training_type":
                fields[key] = _training_type(value)
            elif key == "dates":
                fields[key] = tuple(require_session_dates(value))
            elif key == "resources_link":
                fields[key] = optional_text(value)
            elif key == "admin_id":
                fields[key] = self._reassigned_owner(actor, current, value)
            else:
                fields[key] = optional_text(value) or ""

        updated = replace(current, **fields)
        self._trainings.update(updated)
        logger.info("%s updated training %s", actor.user_id, current.training_id)
        return updated

    def delete_training(self, actor: User, training_id: str, *, workspace_id: Optional[str] = None) -> None:
        current = self.require_training(access.resolve_workspace(actor, workspace_id), training_id, id_field="id")
        access.require_training_manager(actor, current)
        self._trainings.delete_with_dependents(current.workspace_id, current.training_id)
        logger.info("%s deleted training %s", actor.user_id, current.training_id)

    def _reassigned_owner(self, actor: User, current: Training, value: Any) -> str:
        admin_id = require_non_empty(value, "adminId")
        if admin_id == current.admin_id:
            return admin_id
        if not actor.is_super_admin:
            raise AuthorizationError("Only super admin can reassign a training.")
        if self._users is not None:
            owner = self._users.get_by_id(admin_id)
            if (
                not owner
                or owner.role == Role.SUB_ADMIN
                or (owner.role == Role.ADMIN and owner.workspace_id != current.workspace_id)
            ):
                raise AuthorizationError("New owner must be an admin of this workspace.")
        return admin_id
