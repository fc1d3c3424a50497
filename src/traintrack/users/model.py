from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: an account inside one workspace.

    Plain data object; no database access here.
    """

    user_id: str
    name: str
    email: str
    password_hash: str
    role: Role
    workspace_id: str
    parent_admin_id: Optional[str] = None
    api_token: Optional[str] = None
    created_at: Optional[datetime] = None

    @property
    def is_super_admin(self) -> bool:
        return self.role == Role.SUPER_ADMIN
