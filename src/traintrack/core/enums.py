from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Account roles, highest privilege first."""

    SUPER_ADMIN = "super_admin"
    ADMIN = "admin"
    SUB_ADMIN = "sub_admin"


class TrainingType(str, Enum):
    IN_PERSON = "in_person"
    VIRTUAL = "virtual"
