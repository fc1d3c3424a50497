from __future__ import annotations

from dataclasses import dataclass, field
from typing import List


@dataclass(frozen=True)
class CsvReport:
    """Tabular export, rendered to CSV by the API layer."""

    filename: str
    headers: List[str]
    rows: List[List[str]] = field(default_factory=list)


@dataclass(frozen=True)
class TrainingAttendanceCount:
    training_id: str
    name: str
    attendance: int


@dataclass(frozen=True)
class DashboardStats:
    trainings_count: int
    total_attendance: int
    active_admins: int
    chart: List[TrainingAttendanceCount] = field(default_factory=list)
