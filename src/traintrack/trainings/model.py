from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Tuple

from ..core.enums import TrainingType


@dataclass(frozen=True)
class Training:
    """Domain entity: a training with its ordered session dates."""

    training_id: str
    workspace_id: str
    admin_id: str
    title: str
    training_type: TrainingType
    location: str
    dates: Tuple[date, ...]
    description: str
    resources_link: Optional[str] = None
    created_at: Optional[datetime] = None

    @property
    def start_date(self) -> date:
        return self.dates[0]

    @property
    def end_date(self) -> date:
        return self.dates[-1]

    def has_session_on(self, day: date) -> bool:
        return day in self.dates
