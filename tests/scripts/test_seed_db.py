from __future__ import annotations

import importlib.util
from datetime import date, datetime, timezone
from pathlib import Path

import pytest

SEED_SCRIPT = Path(__file__).resolve().parents[2] / "scripts" / "seed_db.py"


@pytest.fixture
def seed_db():
    spec = importlib.util.spec_from_file_location("seed_db", SEED_SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_seeded_training_starts_on_the_utc_check_in_date(seed_db, container, monkeypatch, capsys):
    # 23:30 UTC is already the next day in UTC+ zones; check-in uses the UTC date.
    monkeypatch.setattr(seed_db, "build_container", lambda db_config: container)
    monkeypatch.setattr(seed_db, "apply_schema", lambda conn: None)
    monkeypatch.setattr(seed_db, "now_utc", lambda: datetime(2026, 2, 2, 23, 30, tzinfo=timezone.utc))
    monkeypatch.setattr("sys.argv", ["seed_db.py"])

    seed_db.main()

    admin = container.users_repo.get_by_email("admin@example.com")
    [training] = container.trainings_repo.list_by_workspace(admin.workspace_id)
    assert training.dates == (date(2026, 2, 2), date(2026, 2, 3), date(2026, 2, 4))
    assert len(container.trainees_repo.list_for_training(admin.workspace_id, training.training_id)) == 2
    assert "OK: Seeded admin@example.com" in capsys.readouterr().out
