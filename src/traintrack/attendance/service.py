from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Sequence

from ..common.datetime_utils import format_iso_date, now_utc, to_iso_timestamp
from ..common.ids import gen_id
from ..common.validators import normalize_email, require_non_empty
from ..core import access
from ..core.constants import ID_PREFIX_ATTENDANCE
from ..core.exceptions import DuplicateRecordError, ValidationError
from ..trainees.repository import TraineeRepository
from ..trainings.repository import TrainingRepository
from ..users.model import User
from .model import AttendanceRecord, CheckInResult
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        trainings: TrainingRepository,
        trainees: TraineeRepository,
    ):
        self._attendance = attendance
        self._trainings = trainings
        self._trainees = trainees

    def mark_attendance(
        self,
        workspace_id: str,
        training_id: str,
        email: str,
        *,
        now: datetime | None = None,
    ) -> CheckInResult:
        """Public QR check-in: one record per trainee per session date.

        Business failures are returned as an unsuccessful result so the
        check-in page can show them; only missing input raises.
        """
        email = normalize_email(email)
        if not (workspace_id or "").strip() or not (training_id or "").strip() or not email:
            raise ValidationError("workspaceId, trainingId, and email are required.")

        now = now or now_utc()
        today = now.date()

        training = self._trainings.get(workspace_id, training_id)
        if not training:
            return CheckInResult(False, "Training not found")

        if not training.has_session_on(today):
            return CheckInResult(False, f"No training session scheduled for today ({format_iso_date(today)}).")

        trainee = self._trainees.get_by_email(workspace_id, training_id, email)
        if not trainee:
            return CheckInResult(False, "Email not found in the registration list for this training.")

        already = CheckInResult(False, "You are already checked in for today.", trainee.name)
        if self._attendance.exists(
            workspace_id=workspace_id,
            training_id=training_id,
            trainee_id=trainee.trainee_id,
            session_date=today,
        ):
            return already

        record = AttendanceRecord(
            attendance_id=gen_id(ID_PREFIX_ATTENDANCE),
            workspace_id=workspace_id,
            training_id=training_id,
            trainee_id=trainee.trainee_id,
            timestamp=to_iso_timestamp(now),
            session_date=today,
        )
        try:
            self._attendance.create(record)
        except DuplicateRecordError:
            # Lost a race against a concurrent check-in for the same day.
            return already

        logger.info("Check-in %s for trainee %s on %s", record.attendance_id, trainee.trainee_id, today)
        return CheckInResult(True, "Check-in successful!", trainee.name)

    def list_for_training(
        self, actor: User, training_id: str, *, workspace_id: Optional[str] = None
    ) -> Sequence[AttendanceRecord]:
        ws = access.resolve_workspace(actor, workspace_id)
        return self._attendance.list_for_training(ws, require_non_empty(training_id, "trainingId"))

    def list_for_workspace(self, actor: User, *, workspace_id: Optional[str] = None) -> Sequence[AttendanceRecord]:
        return self._attendance.list_by_workspace(access.resolve_workspace(actor, workspace_id))
