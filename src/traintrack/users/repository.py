from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import Role
from .model import User


class UserRepository(Protocol):
    """Repository interface for User.

    Services depend on this protocol, never on a concrete database.
    """

    def get_by_id(self, user_id: str) -> Optional[User]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[User]:
        raise NotImplementedError

    def get_by_api_token(self, api_token: str) -> Optional[User]:
        raise NotImplementedError

    def list_all(self) -> Sequence[User]:
        raise NotImplementedError

    def list_by_workspace(self, workspace_id: str) -> Sequence[User]:
        raise NotImplementedError

    def list_super_admins(self) -> Sequence[User]:
        """Super admins, oldest first."""
        raise NotImplementedError

    def create_user(
        self,
        *,
        user_id: str,
        name: str,
        email: str,
        password_hash: str,
        role: Role,
        workspace_id: str,
        parent_admin_id: Optional[str],
    ) -> None:
        raise NotImplementedError

    def set_role(self, user_id: str, role: Role) -> bool:
        raise NotImplementedError

    def demote_super_admins_except(self, keep_user_id: str) -> int:
        raise NotImplementedError

    def set_api_token(self, user_id: str, api_token: Optional[str]) -> bool:
        raise NotImplementedError

    def delete_by_id(self, user_id: str) -> bool:
        raise NotImplementedError
