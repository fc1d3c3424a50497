from __future__ import annotations

import itertools
from dataclasses import replace
from datetime import date, datetime, timezone
from typing import Optional

import pytest
from werkzeug.security import generate_password_hash

from traintrack.container import wire
from traintrack.core.enums import Role, TrainingType
from traintrack.core.exceptions import DuplicateRecordError
from traintrack.trainees.model import Trainee
from traintrack.trainings.model import Training
from traintrack.users.model import User

_clock = itertools.count(1)


class FakeDB:
    def __init__(self):
        self.users: dict[str, User] = {}
        self.trainings: dict[str, Training] = {}
        self.trainees: dict[str, Trainee] = {}
        self.attendance: dict = {}
        self.order: dict[str, int] = {}

    def stamp(self, key: str) -> None:
        self.order[key] = next(_clock)


class InMemoryUsers:
    def __init__(self, db: FakeDB):
        self._db = db

    def _sorted(self, users):
        return sorted(users, key=lambda u: self._db.order[u.user_id])

    def get_by_id(self, user_id: str) -> Optional[User]:
        return self._db.users.get(user_id)

    def get_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self._db.users.values() if u.email == email), None)

    def get_by_api_token(self, api_token: str) -> Optional[User]:
        return next((u for u in self._db.users.values() if u.api_token == api_token), None)

    def list_all(self):
        return self._sorted(self._db.users.values())

    def list_by_workspace(self, workspace_id: str):
        return self._sorted(u for u in self._db.users.values() if u.workspace_id == workspace_id)

    def list_super_admins(self):
        return self._sorted(u for u in self._db.users.values() if u.role == Role.SUPER_ADMIN)

    def create_user(self, *, user_id, name, email, password_hash, role, workspace_id, parent_admin_id):
        if self.get_by_email(email):
            raise DuplicateRecordError("Duplicate entry for key 'email'")
        self._db.users[user_id] = User(
            user_id=user_id,
            name=name,
            email=email,
            password_hash=password_hash,
            role=role,
            workspace_id=workspace_id,
            parent_admin_id=parent_admin_id,
        )
        self._db.stamp(user_id)

    def set_role(self, user_id: str, role: Role) -> bool:
        user = self._db.users.get(user_id)
        if not user:
            return False
        self._db.users[user_id] = replace(user, role=role)
        return True

    def demote_super_admins_except(self, keep_user_id: str) -> int:
        demoted = 0
        for user in list(self._db.users.values()):
            if user.role == Role.SUPER_ADMIN and user.user_id != keep_user_id:
                self._db.users[user.user_id] = replace(user, role=Role.ADMIN)
                demoted += 1
        return demoted

    def set_api_token(self, user_id: str, api_token) -> bool:
        user = self._db.users.get(user_id)
        if not user:
            return False
        self._db.users[user_id] = replace(user, api_token=api_token)
        return True

    def delete_by_id(self, user_id: str) -> bool:
        return self._db.users.pop(user_id, None) is not None


class InMemoryTrainings:
    def __init__(self, db: FakeDB):
        self._db = db

    def get(self, workspace_id, training_id):
        t = self._db.trainings.get(training_id)
        return t if t and t.workspace_id == workspace_id else None

    def list_by_workspace(self, workspace_id, *, admin_id=None):
        rows = [
            t
            for t in self._db.trainings.values()
            if t.workspace_id == workspace_id and (not admin_id or t.admin_id == admin_id)
        ]
        return sorted(rows, key=lambda t: self._db.order[t.training_id], reverse=True)

    def create(self, training):
        self._db.trainings[training.training_id] = training
        self._db.stamp(training.training_id)

    def update(self, training):
        if training.training_id not in self._db.trainings:
            return False
        self._db.trainings[training.training_id] = training
        return True

    def delete_with_dependents(self, workspace_id, training_id):
        for key, rec in list(self._db.attendance.items()):
            if rec.workspace_id == workspace_id and rec.training_id == training_id:
                del self._db.attendance[key]
        for key, t in list(self._db.trainees.items()):
            if t.workspace_id == workspace_id and t.training_id == training_id:
                del self._db.trainees[key]
        if self.get(workspace_id, training_id):
            del self._db.trainings[training_id]
            return True
        return False


class InMemoryTrainees:
    def __init__(self, db: FakeDB):
        self._db = db

    def _sorted(self, rows):
        return sorted(rows, key=lambda t: self._db.order[t.trainee_id])

    def get(self, workspace_id, trainee_id):
        t = self._db.trainees.get(trainee_id)
        return t if t and t.workspace_id == workspace_id else None

    def get_by_email(self, workspace_id, training_id, email):
        return next(
            (
                t
                for t in self._db.trainees.values()
                if t.workspace_id == workspace_id and t.training_id == training_id and t.email.lower() == email.lower()
            ),
            None,
        )

    def list_for_training(self, workspace_id, training_id):
        return self._sorted(
            t for t in self._db.trainees.values() if t.workspace_id == workspace_id and t.training_id == training_id
        )

    def list_by_workspace(self, workspace_id):
        return self._sorted(t for t in self._db.trainees.values() if t.workspace_id == workspace_id)

    def create(self, trainee):
        if self.get_by_email(trainee.workspace_id, trainee.training_id, trainee.email):
            raise DuplicateRecordError("Duplicate entry for key 'uniq_trainee'")
        self._db.trainees[trainee.trainee_id] = trainee
        self._db.stamp(trainee.trainee_id)

    def delete_with_attendance(self, workspace_id, trainee_id):
        for key, rec in list(self._db.attendance.items()):
            if rec.workspace_id == workspace_id and rec.trainee_id == trainee_id:
                del self._db.attendance[key]
        if self.get(workspace_id, trainee_id):
            del self._db.trainees[trainee_id]
            return True
        return False


class InMemoryAttendance:
    """Keyed like the ``uniq_attendance`` index."""

    def __init__(self, db: FakeDB):
        self._db = db

    @staticmethod
    def _key(rec):
        return (rec.workspace_id, rec.training_id, rec.trainee_id, rec.session_date)

    def exists(self, *, workspace_id, training_id, trainee_id, session_date):
        return (workspace_id, training_id, trainee_id, session_date) in self._db.attendance

    def create(self, record):
        key = self._key(record)
        if key in self._db.attendance:
            raise DuplicateRecordError("Duplicate entry for key 'uniq_attendance'")
        self._db.attendance[key] = record
        self._db.stamp(record.attendance_id)

    def _sorted(self, rows):
        return sorted(rows, key=lambda r: self._db.order[r.attendance_id])

    def list_for_training(self, workspace_id, training_id):
        return self._sorted(
            r for r in self._db.attendance.values() if r.workspace_id == workspace_id and r.training_id == training_id
        )

    def list_by_workspace(self, workspace_id):
        return self._sorted(r for r in self._db.attendance.values() if r.workspace_id == workspace_id)


@pytest.fixture
def fake_db():
    return FakeDB()


@pytest.fixture
def container(fake_db):
    return wire(
        users_repo=InMemoryUsers(fake_db),
        trainings_repo=InMemoryTrainings(fake_db),
        trainees_repo=InMemoryTrainees(fake_db),
        attendance_repo=InMemoryAttendance(fake_db),
    )


@pytest.fixture
def fixed_now():
    return datetime(2026, 2, 2, 8, 30, 0, tzinfo=timezone.utc)


@pytest.fixture
def make_user(fake_db):
    def _make(user_id, *, role=Role.ADMIN, workspace_id="ws_a", parent_admin_id=None, password="pw"):
        InMemoryUsers(fake_db).create_user(
            user_id=user_id,
            name=user_id.title(),
            email=f"{user_id}@example.com",
            password_hash=generate_password_hash(password),
            role=role,
            workspace_id=workspace_id,
            parent_admin_id=parent_admin_id,
        )
        return fake_db.users[user_id]

    return _make


@pytest.fixture
def make_training(fake_db):
    def _make(training_id, *, admin_id, workspace_id="ws_a", dates=(date(2026, 2, 2), date(2026, 2, 3)), title=None):
        training = Training(
            training_id=training_id,
            workspace_id=workspace_id,
            admin_id=admin_id,
            title=title or f"Training {training_id}",
            training_type=TrainingType.IN_PERSON,
            location="Room 1",
            dates=tuple(dates),
            description="",
        )
        InMemoryTrainings(fake_db).create(training)
        return training

    return _make


@pytest.fixture
def make_trainee(fake_db):
    def _make(trainee_id, *, training_id, workspace_id="ws_a", email=None, name=None):
        trainee = Trainee(
            trainee_id=trainee_id,
            workspace_id=workspace_id,
            training_id=training_id,
            name=name or trainee_id.title(),
            email=email or f"{trainee_id}@example.com",
            unique_code="ABCD1234",
        )
        InMemoryTrainees(fake_db).create(trainee)
        return trainee

    return _make
