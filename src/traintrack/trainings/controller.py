from __future__ import annotations

from flask import current_app

from ..api.router import ActionRouter, current_actor, params, text_param
from ..api.serializers import public_training_to_json, training_to_json
from ..common.validators import as_text
from ..container import Container
from ..core.constants import DEFAULT_PUBLIC_BASE_URL
from ..core.exceptions import ValidationError
from ..reports.qr import checkin_url, registration_url, render_qr_png

# JSON key -> TrainingService field
FIELD_MAP = {
    "title": "title",
    "type": "training_type",
    "location": "location",
    "dates": "dates",
    "description": "description",
    "resourcesLink": "resources_link",
    "adminId": "admin_id",
}


def _training_payload(data: dict) -> dict:
    training = data.get("training", data)
    if not isinstance(training, dict):
        raise ValidationError("Invalid payload.")
    return training


def register(api: ActionRouter, container: Container) -> None:
    trainings = container.training_service

    @api.action("trainings")
    def list_trainings():
        data = params()
        rows = trainings.list_trainings(
            current_actor(),
            workspace_id=text_param(data, "workspaceId"),
            admin_id=text_param(data, "adminId"),
        )
        return [training_to_json(t) for t in rows]

    @api.action("training_get")
    def training_get():
        data = params()
        training = trainings.get_training(
            current_actor(), text_param(data, "id"), workspace_id=text_param(data, "workspaceId")
        )
        return training_to_json(training)

    @api.action("training_public", public=True)
    def training_public():
        data = params()
        training = trainings.get_public(text_param(data, "workspaceId"), text_param(data, "id"))
        return public_training_to_json(training)

    @api.action("trainings_create", methods=("POST",))
    def trainings_create():
        data = params()
        payload = _training_payload(data)
        created = trainings.create_training(
            current_actor(),
            title=text_param(payload, "title"),
            dates=payload.get("dates"),
            training_type=text_param(payload, "type"),
            location=text_param(payload, "location"),
            description=text_param(payload, "description"),
            resources_link=text_param(payload, "resourcesLink"),
            workspace_id=text_param(data, "workspaceId"),
        )
        return training_to_json(created)

    @api.action("trainings_update", methods=("POST",))
    def trainings_update():
        data = params()
        changes = data.get("data")
        if not isinstance(changes, dict):
            raise ValidationError("Invalid payload.")
        mapped = {
            FIELD_MAP[k]: v if k == "dates" else as_text(v, k) for k, v in changes.items() if k in FIELD_MAP
        }
        updated = trainings.update_training(
            current_actor(), text_param(data, "id"), mapped, workspace_id=text_param(data, "workspaceId")
        )
        return training_to_json(updated)

    @api.action("trainings_delete", methods=("POST",))
    def trainings_delete():
        data = params()
        trainings.delete_training(current_actor(), text_param(data, "id"), workspace_id=text_param(data, "workspaceId"))
        return {"ok": True}

    @api.action("training_qr")
    def training_qr():
        """PNG QR code for the check-in page (``kind=register`` for sign-up)."""
        data = params()
        training = trainings.get_training(
            current_actor(), text_param(data, "id"), workspace_id=text_param(data, "workspaceId")
        )
        base_url = current_app.config.get("PUBLIC_BASE_URL", DEFAULT_PUBLIC_BASE_URL)
        if data.get("kind") == "register":
            link = registration_url(base_url, training)
        else:
            link = checkin_url(base_url, training)
        return current_app.response_class(render_qr_png(link), mimetype="image/png")
