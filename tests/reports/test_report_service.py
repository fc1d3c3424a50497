from __future__ import annotations

from datetime import date, datetime, timezone

import pytest

from traintrack.core.enums import Role
from traintrack.core.exceptions import NotFoundError


@pytest.fixture
def workspace(container, make_user, make_training, make_trainee, fixed_now):
    make_user("root", role=Role.SUPER_ADMIN, workspace_id="ws_a")
    make_user("ann", role=Role.ADMIN, workspace_id="ws_a")
    make_training("t1", admin_id="ann", title="Python 101")
    make_training("t2", admin_id="root", title="A very long training title", dates=(date(2026, 2, 2),))
    make_trainee("tr1", training_id="t1", name="Eve", email="eve@example.com")
    make_trainee("tr2", training_id="t1", name="Ivan", email="ivan@example.com")
    container.attendance_service.mark_attendance("ws_a", "t1", "eve@example.com", now=fixed_now)
    container.attendance_service.mark_attendance(
        "ws_a", "t1", "eve@example.com", now=datetime(2026, 2, 3, 9, 0, tzinfo=timezone.utc)
    )


def test_training_matrix_marks_present_and_absent(container, workspace):
    ann = container.users_repo.get_by_id("ann")

    report = container.report_service.training_attendance_report(ann, "t1")

    assert report.filename == "Python_101_Report.csv"
    assert report.headers == ["Name", "Email", "Unique Code", "2026-02-02", "2026-02-03"]
    assert report.rows == [
        ["Eve", "eve@example.com", "ABCD1234", "Present", "Present"],
        ["Ivan", "ivan@example.com", "ABCD1234", "Absent", "Absent"],
    ]


def test_training_matrix_unknown_training(container, workspace):
    with pytest.raises(NotFoundError):
        container.report_service.training_attendance_report(container.users_repo.get_by_id("ann"), "nope")


def test_workspace_report_lists_every_check_in_and_no_shows(container, workspace):
    report = container.report_service.workspace_report(container.users_repo.get_by_id("ann"))

    assert report.headers[-2:] == ["Session Date", "Check-in Time"]
    assert report.rows == [
        ["t1", "Python 101", "Ann", "Eve", "eve@example.com", "2026-02-02", "2026-02-02T08:30:00+00:00"],
        ["t1", "Python 101", "Ann", "Eve", "eve@example.com", "2026-02-03", "2026-02-03T09:00:00+00:00"],
        ["t1", "Python 101", "Ann", "Ivan", "ivan@example.com", "N/A", "Not Attended"],
    ]


def test_dashboard_for_admin_counts_own_trainings(container, workspace):
    stats = container.report_service.dashboard(container.users_repo.get_by_id("ann"))

    assert stats.trainings_count == 1
    assert stats.total_attendance == 2
    assert stats.active_admins == 0
    assert [(c.training_id, c.attendance) for c in stats.chart] == [("t1", 2)]


def test_dashboard_for_super_admin_sees_workspace(container, workspace):
    stats = container.report_service.dashboard(container.users_repo.get_by_id("root"))

    assert stats.trainings_count == 2
    assert stats.total_attendance == 2
    assert stats.active_admins == 2
    assert stats.chart[0].name == "A very long tra..."
