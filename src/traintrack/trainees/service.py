from __future__ import annotations

import csv
import io
import logging
from typing import Optional, Sequence

from ..common.ids import gen_id, gen_trainee_code
from ..common.validators import optional_text, require_email, require_non_empty
from ..core import access
from ..core.constants import ID_PREFIX_TRAINEE
from ..core.exceptions import DuplicateRecordError, NotFoundError, ValidationError
from ..trainings.model import Training
from ..trainings.repository import TrainingRepository
from ..users.model import User
from .model import ImportSummary, Trainee
from .repository import TraineeRepository

logger = logging.getLogger(__name__)


class TraineeService:
    """Use cases: registering and removing trainees of a training."""

    def __init__(self, trainees: TraineeRepository, trainings: TrainingRepository):
        self._trainees = trainees
        self._trainings = trainings

    def _require_training(self, workspace_id: str, training_id: str) -> Training:
        training = self._trainings.get(workspace_id, require_non_empty(training_id, "trainingId"))
        if not training:
            raise NotFoundError("Training not found.")
        return training

    def list_trainees(self, actor: User, training_id: str, *, workspace_id: Optional[str] = None) -> Sequence[Trainee]:
        ws = access.resolve_workspace(actor, workspace_id)
        return self._trainees.list_for_training(ws, require_non_empty(training_id, "trainingId"))

    def add_trainee(
        self,
        actor: User,
        training_id: str,
        *,
        name: str,
        email: str,
        phone: Optional[str] = None,
        workspace_id: Optional[str] = None,
    ) -> Trainee:
        training = self._require_training(access.resolve_workspace(actor, workspace_id), training_id)
        access.require_training_manager(actor, training)
        trainee = self._create(training, name=name, email=email, phone=phone)
        logger.info("%s added trainee %s to %s", actor.user_id, trainee.trainee_id, training.training_id)
        return trainee

    def register(
        self,
        workspace_id: str,
        training_id: str,
        *,
        name: str,
        email: str,
        phone: Optional[str] = None,
    ) -> Trainee:
        """Public self-registration through the training's sign-up link."""
        training = self._require_training(require_non_empty(workspace_id, "workspaceId"), training_id)
        trainee = self._create(training, name=name, email=email, phone=phone)
        logger.info("Trainee %s self-registered to %s", trainee.trainee_id, training.training_id)
        return trainee

    def remove_trainee(self, actor: User, trainee_id: str, *, workspace_id: Optional[str] = None) -> None:
        ws = access.resolve_workspace(actor, workspace_id)
        trainee = self._trainees.get(ws, require_non_empty(trainee_id, "id"))
        if not trainee:
            raise NotFoundError("Trainee not found.")

        training = self._trainings.get(ws, trainee.training_id)
        if training:
            access.require_training_manager(actor, training)
        else:
            # Orphaned trainee: only the workspace managers may clean it up.
            access.require_role(actor, *access.MANAGER_ROLES)

        self._trainees.delete_with_attendance(ws, trainee.trainee_id)
        logger.info("%s removed trainee %s", actor.user_id, trainee.trainee_id)

    def import_csv(
        self, actor: User, training_id: str, text: str, *, workspace_id: Optional[str] = None
    ) -> ImportSummary:
        """Bulk add from ``Name, Email`` lines; a first line mentioning
        "email" is treated as a header."""
        training = self._require_training(access.resolve_workspace(actor, workspace_id), training_id)
        access.require_training_manager(actor, training)

        rows = [r for r in csv.reader(io.StringIO(text or "")) if any(cell.strip() for cell in r)]
        if rows and any("email" in cell.lower() for cell in rows[0]):
            rows = rows[1:]

        added = skipped = 0
        for row in rows:
            if len(row) < 2:
                skipped += 1
                continue
            try:
                self._create(training, name=row[0], email=row[1], phone=row[2] if len(row) > 2 else None)
                added += 1
            except ValidationError:
                skipped += 1

        logger.info("%s imported %s trainee(s) into %s (%s skipped)", actor.user_id, added, training.training_id, skipped)
        return ImportSummary(added=added, skipped=skipped)

    def _create(self, training: Training, *, name: str, email: str, phone: Optional[str]) -> Trainee:
        name = require_non_empty(name, "Name")
        email = require_email(email)

        if self._trainees.get_by_email(training.workspace_id, training.training_id, email):
            raise ValidationError("This email is already registered for this training.")

        trainee = Trainee(
            trainee_id=gen_id(ID_PREFIX_TRAINEE),
            workspace_id=training.workspace_id,
            training_id=training.training_id,
            name=name,
            email=email,
            phone=optional_text(phone),
            unique_code=gen_trainee_code(),
        )
        try:
            self._trainees.create(trainee)
        except DuplicateRecordError:
            raise ValidationError("This email is already registered for this training.")
        return trainee
