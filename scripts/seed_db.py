"""Create a demo super admin with one training running today."""
from __future__ import annotations

import argparse
import importlib
import sys
from datetime import timedelta
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
for path in (REPO_ROOT, REPO_ROOT / "src"):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from config import get_settings_module

from traintrack.common.datetime_utils import now_utc
from traintrack.container import build_container
from traintrack.core.exceptions import AuthenticationError, ValidationError
from traintrack.database.bootstrap import apply_schema


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--email", default="admin@example.com")
    parser.add_argument("--password", default="admin123")
    args = parser.parse_args()

    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=dict(settings.DB_CONFIG))
    apply_schema(container.conn)

    try:
        session = container.auth_service.signup(name="Demo Admin", email=args.email, password=args.password)
    except ValidationError:
        try:
            session = container.auth_service.login(args.email, args.password)
        except AuthenticationError:
            sys.exit(f"{args.email} already exists with a different password")

    actor = session.user
    today = now_utc().date()
    training = container.training_service.create_training(
        actor,
        title="Demo Onboarding",
        dates=[(today + timedelta(days=i)).isoformat() for i in range(3)],
        location="Room 1",
        description="Seeded by scripts/seed_db.py",
    )
    for name, email in (("Ada Lovelace", "ada@example.com"), ("Alan Turing", "alan@example.com")):
        container.trainee_service.add_trainee(actor, training.training_id, name=name, email=email)

    print(f"OK: Seeded {actor.email} ({actor.role.value}) training={training.training_id} token={session.api_token}")


if __name__ == "__main__":
    main()
