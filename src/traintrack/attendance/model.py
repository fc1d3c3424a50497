from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one check-in of a trainee for one session date."""

    attendance_id: str
    workspace_id: str
    training_id: str
    trainee_id: str
    timestamp: str
    session_date: date
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class CheckInResult:
    """Outcome shown on the public check-in page."""

    success: bool
    message: str
    trainee_name: Optional[str] = None
