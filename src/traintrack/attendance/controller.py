from __future__ import annotations

from ..api.router import ActionRouter, current_actor, params, text_param
from ..api.serializers import attendance_to_json, checkin_to_json
from ..container import Container


def register(api: ActionRouter, container: Container) -> None:
    attendance = container.attendance_service

    @api.action("attendance")
    def list_attendance():
        data = params()
        rows = attendance.list_for_training(
            current_actor(), text_param(data, "trainingId"), workspace_id=text_param(data, "workspaceId")
        )
        return [attendance_to_json(r) for r in rows]

    @api.action("attendance_all")
    def list_all_attendance():
        rows = attendance.list_for_workspace(current_actor(), workspace_id=text_param(params(), "workspaceId"))
        return [attendance_to_json(r) for r in rows]

    @api.action("attendance_mark", methods=("POST",), public=True)
    def attendance_mark():
        data = params()
        result = attendance.mark_attendance(
            text_param(data, "workspaceId"),
            text_param(data, "trainingId"),
            text_param(data, "email"),
        )
        return checkin_to_json(result)
