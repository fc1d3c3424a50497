from __future__ import annotations

import pytest

from traintrack.core.enums import Role
from traintrack.core.exceptions import AuthorizationError, NotFoundError, ValidationError


@pytest.fixture
def ann(make_user):
    return make_user("ann", role=Role.ADMIN, workspace_id="ws_a")


@pytest.fixture
def bob(make_user):
    return make_user("bob", role=Role.ADMIN, workspace_id="ws_a")


def test_add_trainee_normalizes_email_and_generates_code(container, make_training, ann):
    make_training("t1", admin_id="ann")

    trainee = container.trainee_service.add_trainee(ann, "t1", name="Eve", email=" Eve@Example.COM ", phone="")

    assert trainee.email == "eve@example.com"
    assert trainee.phone is None
    assert len(trainee.unique_code) == 8
    assert trainee.unique_code == trainee.unique_code.upper()


def test_email_is_unique_per_training(container, make_training, ann):
    make_training("t1", admin_id="ann")
    make_training("t2", admin_id="ann")
    container.trainee_service.add_trainee(ann, "t1", name="Eve", email="eve@example.com")

    with pytest.raises(ValidationError):
        container.trainee_service.add_trainee(ann, "t1", name="Eve again", email="EVE@example.com")
    assert container.trainee_service.add_trainee(ann, "t2", name="Eve", email="eve@example.com")


def test_add_to_unknown_training(container, ann):
    with pytest.raises(NotFoundError):
        container.trainee_service.add_trainee(ann, "missing", name="Eve", email="eve@example.com")


def test_admin_cannot_add_to_or_remove_from_another_admins_training(container, fake_db, make_training, make_trainee, ann, bob):
    make_training("t1", admin_id="ann")
    make_trainee("tr1", training_id="t1")

    with pytest.raises(AuthorizationError):
        container.trainee_service.add_trainee(bob, "t1", name="Eve", email="eve@example.com")
    with pytest.raises(AuthorizationError):
        container.trainee_service.remove_trainee(bob, "tr1")
    assert "tr1" in fake_db.trainees


def test_remove_trainee_drops_attendance(container, fake_db, make_training, make_trainee, ann, fixed_now):
    make_training("t1", admin_id="ann")
    make_trainee("tr1", training_id="t1")
    container.attendance_service.mark_attendance("ws_a", "t1", "tr1@example.com", now=fixed_now)

    container.trainee_service.remove_trainee(ann, "tr1")

    assert fake_db.trainees == {}
    assert fake_db.attendance == {}


def test_public_registration_needs_no_actor(container, make_training, ann):
    make_training("t1", admin_id="ann")

    trainee = container.trainee_service.register("ws_a", "t1", name="Eve", email="eve@example.com")

    assert trainee.workspace_id == "ws_a"
    with pytest.raises(NotFoundError):
        container.trainee_service.register("ws_other", "t1", name="Eve", email="eve@example.com")


def test_import_csv_skips_header_duplicates_and_bad_rows(container, make_training, ann):
    make_training("t1", admin_id="ann")
    text = "Name,Email\nEve, eve@example.com\n\nMallory\nEve Again,EVE@example.com\nTrent,trent@example.com,555-0101\n"

    summary = container.trainee_service.import_csv(ann, "t1", text)

    assert (summary.added, summary.skipped) == (2, 2)
    trainees = container.trainee_service.list_trainees(ann, "t1")
    assert [t.email for t in trainees] == ["eve@example.com", "trent@example.com"]
    assert trainees[1].phone == "555-0101"
