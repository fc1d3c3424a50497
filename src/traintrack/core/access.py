"""Role guard: workspace scoping and the role hierarchy.

- super_admin: full access across all workspaces.
- admin: full access within its own workspace, limited to the trainings it
  owns and the sub-admins it created.
- sub_admin: read-only within its workspace.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from ..common.validators import as_text
from .enums import Role
from .exceptions import AuthorizationError

if TYPE_CHECKING:
    from ..trainings.model import Training
    from ..users.model import User


MANAGER_ROLES = frozenset({Role.SUPER_ADMIN, Role.ADMIN})


def require_role(actor: "User", *allowed: Role) -> None:
    if actor.role not in allowed:
        raise AuthorizationError("Not allowed.")


def resolve_workspace(actor: "User", requested_workspace_id: Optional[str] = None) -> str:
    """Workspace the actor is allowed to act on.

    Only the super admin may address a workspace other than its own.
    """
    requested = as_text(requested_workspace_id, "workspaceId").strip()
    if not requested:
        return actor.workspace_id
    if actor.role == Role.SUPER_ADMIN or requested == actor.workspace_id:
        return requested
    raise AuthorizationError("Workspace mismatch.")


def can_manage_training(actor: "User", training: "Training") -> bool:
    if actor.role == Role.SUPER_ADMIN:
        return True
    return (
        actor.role == Role.ADMIN
        and training.workspace_id == actor.workspace_id
        and training.admin_id == actor.user_id
    )


def require_training_manager(actor: "User", training: "Training") -> None:
    if not can_manage_training(actor, training):
        raise AuthorizationError("Only the training owner can change this training.")


def can_delete_user(actor: "User", target: "User") -> bool:
    if target.role == Role.SUPER_ADMIN or target.user_id == actor.user_id:
        return False
    if actor.role == Role.SUPER_ADMIN:
        return True
    if actor.role == Role.ADMIN:
        return (
            target.workspace_id == actor.workspace_id
            and target.parent_admin_id == actor.user_id
            and target.role == Role.SUB_ADMIN
        )
    return False


def role_for_new_user(actor: "User") -> Role:
    """Role granted to an account created by ``actor``."""
    if actor.role == Role.SUPER_ADMIN:
        return Role.ADMIN
    if actor.role == Role.ADMIN:
        return Role.SUB_ADMIN
    raise AuthorizationError("Not allowed.")
