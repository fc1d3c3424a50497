from __future__ import annotations

import re
from collections import Counter
from typing import Optional

from ..common.datetime_utils import format_iso_date
from ..core import access
from ..core.constants import CHART_TITLE_MAX_LENGTH
from ..core.exceptions import NotFoundError
from ..attendance.repository import AttendanceRepository
from ..trainees.repository import TraineeRepository
from ..trainings.repository import TrainingRepository
from ..users.model import User
from ..users.repository import UserRepository
from .model import CsvReport, DashboardStats, TrainingAttendanceCount


def _short_title(title: str) -> str:
    if len(title) > CHART_TITLE_MAX_LENGTH:
        return title[:CHART_TITLE_MAX_LENGTH] + "..."
    return title


class ReportService:
    """Read models for exports and the dashboard."""

    def __init__(
        self,
        trainings: TrainingRepository,
        trainees: TraineeRepository,
        attendance: AttendanceRepository,
        users: UserRepository,
    ):
        self._trainings = trainings
        self._trainees = trainees
        self._attendance = attendance
        self._users = users

    def training_attendance_report(
        self, actor: User, training_id: str, *, workspace_id: Optional[str] = None
    ) -> CsvReport:
        """Present/Absent matrix: one row per trainee, one column per session date."""
        ws = access.resolve_workspace(actor, workspace_id)
        training = self._trainings.get(ws, training_id)
        if not training:
            raise NotFoundError("Training not found.")

        present = {
            (r.trainee_id, r.session_date) for r in self._attendance.list_for_training(ws, training.training_id)
        }
        dates = list(training.dates)
        rows = []
        for t in self._trainees.list_for_training(ws, training.training_id):
            row = [t.name, t.email, t.unique_code]
            row.extend("Present" if (t.trainee_id, d) in present else "Absent" for d in dates)
            rows.append(row)

        safe_title = re.sub(r"[^\w.-]+", "_", training.title.strip(), flags=re.ASCII) or training.training_id
        return CsvReport(
            filename=f"{safe_title}_Report.csv",
            headers=["Name", "Email", "Unique Code", *[format_iso_date(d) for d in dates]],
            rows=rows,
        )

    def workspace_report(self, actor: User, *, workspace_id: Optional[str] = None) -> CsvReport:
        ws = access.resolve_workspace(actor, workspace_id)
        admins = {u.user_id: u.name for u in self._users.list_by_workspace(ws)}
        trainees_by_training: dict[str, list] = {}
        for t in self._trainees.list_by_workspace(ws):
            trainees_by_training.setdefault(t.training_id, []).append(t)
        records_by_trainee: dict[tuple[str, str], list] = {}
        for r in self._attendance.list_by_workspace(ws):
            records_by_trainee.setdefault((r.training_id, r.trainee_id), []).append(r)

        rows = []
        for training in self._trainings.list_by_workspace(ws):
            admin_name = admins.get(training.admin_id) or self._lookup_name(training.admin_id)
            for trainee in trainees_by_training.get(training.training_id, []):
                base = [training.training_id, training.title, admin_name, trainee.name, trainee.email]
                records = records_by_trainee.get((training.training_id, trainee.trainee_id), [])
                if not records:
                    rows.append(base + ["N/A", "Not Attended"])
                for rec in records:
                    rows.append(base + [format_iso_date(rec.session_date), rec.timestamp])

        return CsvReport(
            filename=f"workspace_{ws}_attendance.csv",
            headers=[
                "Training ID",
                "Training Title",
                "Admin Name",
                "Trainee Name",
                "Trainee Email",
                "Session Date",
                "Check-in Time",
            ],
            rows=rows,
        )

    def dashboard(self, actor: User) -> DashboardStats:
        owner_filter = None if actor.is_super_admin else actor.user_id
        trainings = self._trainings.list_by_workspace(actor.workspace_id, admin_id=owner_filter)
        visible = {t.training_id for t in trainings}

        counts = Counter(
            r.training_id for r in self._attendance.list_by_workspace(actor.workspace_id) if r.training_id in visible
        )
        active_admins = len(self._users.list_all()) if actor.is_super_admin else 0

        return DashboardStats(
            trainings_count=len(trainings),
            total_attendance=sum(counts.values()),
            active_admins=active_admins,
            chart=[
                TrainingAttendanceCount(t.training_id, _short_title(t.title), counts.get(t.training_id, 0))
                for t in trainings
            ],
        )

    def _lookup_name(self, user_id: str) -> str:
        user = self._users.get_by_id(user_id)
        return user.name if user else "Unknown"
