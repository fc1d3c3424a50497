from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.ids import gen_api_token, gen_id
from ..common.validators import require_choice, require_email, require_non_empty
from ..core import access
from ..core.constants import ID_PREFIX_USER, ID_PREFIX_WORKSPACE
from ..core.enums import Role
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DuplicateRecordError,
    NotFoundError,
    ValidationError,
)
from .model import User
from .repository import UserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoginResult:
    """What the client keeps after login: the user plus its bearer token."""

    user: User
    api_token: str


class AuthService:
    """Use cases: signup, login/logout, bearer token resolution."""

    def __init__(self, users: UserRepository):
        self._users = users

    def enforce_single_super_admin(self) -> int:
        """Demote every super admin but the oldest one; returns how many."""
        supers = list(self._users.list_super_admins())
        if len(supers) <= 1:
            return 0
        keep = supers[0]
        demoted = self._users.demote_super_admins_except(keep.user_id)
        logger.warning("Demoted %s extra super admin(s); kept %s", demoted, keep.user_id)
        return demoted

    def signup(self, *, name: str, email: str, password: str) -> LoginResult:
        name = require_non_empty(name, "Name")
        email = require_email(email)
        require_non_empty(password, "Password")

        if self._users.get_by_email(email):
            raise ValidationError("An account with this email already exists.")

        role = Role.ADMIN if self._users.list_super_admins() else Role.SUPER_ADMIN
        user_id = gen_id(ID_PREFIX_USER)
        try:
            self._users.create_user(
                user_id=user_id,
                name=name,
                email=email,
                password_hash=generate_password_hash(password),
                role=role,
                workspace_id=gen_id(ID_PREFIX_WORKSPACE),
                parent_admin_id=None,
            )
        except DuplicateRecordError:
            raise ValidationError("An account with this email already exists.")

        logger.info("Signup %s as %s", user_id, role.value)
        return self._issue_token(user_id)

    def login(self, email: str, password: str) -> LoginResult:
        user = self._users.get_by_email(email.strip().lower() if email else "")
        if not user:
            logger.warning("Login failed for unknown email")
            raise AuthenticationError("Invalid email or password.")

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except ValueError:
            # e.g. placeholder hashes or corrupted values
            ok = False

        if not ok:
            logger.warning("Login failed for %s", user.user_id)
            raise AuthenticationError("Invalid email or password.")

        return self._issue_token(user.user_id)

    def logout(self, actor: User) -> None:
        self._users.set_api_token(actor.user_id, None)

    def authenticate_token(self, api_token: Optional[str]) -> User:
        if not api_token:
            raise AuthenticationError("Authentication required.")
        user = self._users.get_by_api_token(api_token)
        if not user:
            raise AuthenticationError("Invalid or expired token.")
        return user

    def _issue_token(self, user_id: str) -> LoginResult:
        token = gen_api_token()
        self._users.set_api_token(user_id, token)
        user = self._users.get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found.")
        return LoginResult(user=user, api_token=token)


class UserService:
    """Use cases: user management inside workspaces."""

    def __init__(self, users: UserRepository):
        self._users = users

    def get_user(self, actor: User, user_id: str) -> User:
        user = self._users.get_by_id(require_non_empty(user_id, "id"))
        if not user:
            raise NotFoundError("User not found.")
        if not actor.is_super_admin and user.workspace_id != actor.workspace_id:
            raise AuthorizationError("Access denied.")
        return user

    def list_users(self, actor: User, *, workspace_id: Optional[str] = None) -> Sequence[User]:
        if actor.is_super_admin and not workspace_id:
            return self._users.list_all()
        return self._users.list_by_workspace(access.resolve_workspace(actor, workspace_id))

    def create_user(self, actor: User, *, name: str, email: str, password: str) -> User:
        role = access.role_for_new_user(actor)
        name = require_non_empty(name, "Name")
        email = require_email(email)
        require_non_empty(password, "Password")

        if self._users.get_by_email(email):
            raise ValidationError("A user with this email already exists.")

        user_id = gen_id(ID_PREFIX_USER)
        try:
            self._users.create_user(
                user_id=user_id,
                name=name,
                email=email,
                password_hash=generate_password_hash(password),
                role=role,
                workspace_id=actor.workspace_id,
                parent_admin_id=actor.user_id,
            )
        except DuplicateRecordError:
            raise ValidationError("A user with this email already exists.")

        logger.info("%s created %s %s", actor.user_id, role.value, user_id)
        created = self._users.get_by_id(user_id)
        if not created:
            raise NotFoundError("User not found.")
        return created

    def delete_user(self, actor: User, user_id: str, *, workspace_id: Optional[str] = None) -> None:
        target = self._users.get_by_id(require_non_empty(user_id, "id"))
        if not target:
            raise NotFoundError("User not found.")
        if target.role == Role.SUPER_ADMIN:
            raise AuthorizationError("The super admin account cannot be deleted.")
        if workspace_id and target.workspace_id != workspace_id:
            raise AuthorizationError("Workspace mismatch.")
        if not access.can_delete_user(actor, target):
            raise AuthorizationError("Not allowed.")

        if not self._users.delete_by_id(target.user_id):
            raise NotFoundError("User not found.")
        logger.info("%s deleted user %s", actor.user_id, target.user_id)

    def change_role(self, actor: User, user_id: str, new_role: str, *, workspace_id: Optional[str] = None) -> None:
        if (new_role or "").strip() == Role.SUPER_ADMIN.value:
            raise ValidationError("Only one super admin is allowed.")
        role = Role(require_choice(new_role, (Role.ADMIN.value, Role.SUB_ADMIN.value), "role"))

        target = self._users.get_by_id(require_non_empty(user_id, "id"))
        if not target:
            raise NotFoundError("User not found.")
        if not actor.is_super_admin:
            raise AuthorizationError("Only super admin can promote.")
        if target.role == Role.SUPER_ADMIN:
            raise AuthorizationError("Super admin role cannot be changed.")
        if workspace_id and target.workspace_id != workspace_id:
            raise AuthorizationError("Workspace mismatch.")

        self._users.set_role(target.user_id, role)
        logger.info("%s set role of %s to %s", actor.user_id, target.user_id, role.value)
