from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Trainee:
    """Domain entity: a person registered for one training."""

    trainee_id: str
    workspace_id: str
    training_id: str
    name: str
    email: str
    unique_code: str
    phone: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class ImportSummary:
    added: int
    skipped: int
