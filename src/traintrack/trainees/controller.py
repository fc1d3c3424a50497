from __future__ import annotations

from ..api.router import ActionRouter, current_actor, params, text_param
from ..api.serializers import import_summary_to_json, trainee_to_json
from ..container import Container
from ..core.exceptions import ValidationError


def _trainee_payload(data: dict) -> dict:
    trainee = data.get("trainee", data)
    if not isinstance(trainee, dict):
        raise ValidationError("Invalid payload.")
    return trainee


def register(api: ActionRouter, container: Container) -> None:
    trainees = container.trainee_service

    @api.action("trainees")
    def list_trainees():
        data = params()
        rows = trainees.list_trainees(
            current_actor(), text_param(data, "trainingId"), workspace_id=text_param(data, "workspaceId")
        )
        return [trainee_to_json(t) for t in rows]

    @api.action("trainees_add", methods=("POST",))
    def trainees_add():
        data = params()
        payload = _trainee_payload(data)
        trainee = trainees.add_trainee(
            current_actor(),
            text_param(payload, "trainingId"),
            name=text_param(payload, "name"),
            email=text_param(payload, "email"),
            phone=text_param(payload, "phone"),
            workspace_id=text_param(data, "workspaceId"),
        )
        return trainee_to_json(trainee)

    @api.action("trainees_register", methods=("POST",), public=True)
    def trainees_register():
        data = params()
        payload = _trainee_payload(data)
        trainee = trainees.register(
            text_param(data, "workspaceId"),
            text_param(payload, "trainingId"),
            name=text_param(payload, "name"),
            email=text_param(payload, "email"),
            phone=text_param(payload, "phone"),
        )
        return trainee_to_json(trainee)

    @api.action("trainees_remove", methods=("POST",))
    def trainees_remove():
        data = params()
        trainees.remove_trainee(current_actor(), text_param(data, "id"), workspace_id=text_param(data, "workspaceId"))
        return {"ok": True}

    @api.action("trainees_import", methods=("POST",))
    def trainees_import():
        data = params()
        summary = trainees.import_csv(
            current_actor(),
            text_param(data, "trainingId"),
            text_param(data, "csv"),
            workspace_id=text_param(data, "workspaceId"),
        )
        return import_summary_to_json(summary)
