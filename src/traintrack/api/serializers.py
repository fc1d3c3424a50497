"""camelCase JSON shapes consumed by the front-end."""
from __future__ import annotations

from typing import Any, Dict, Optional

from ..attendance.model import AttendanceRecord, CheckInResult
from ..common.datetime_utils import format_iso_date
from ..reports.model import DashboardStats
from ..trainees.model import ImportSummary, Trainee
from ..trainings.model import Training
from ..users.model import User


def user_to_json(user: User, *, api_token: Optional[str] = None) -> Dict[str, Any]:
    data = {
        "id": user.user_id,
        "name": user.name,
        "email": user.email,
        "role": user.role.value,
        "workspaceId": user.workspace_id,
        "parentAdminId": user.parent_admin_id,
    }
    if api_token:
        data["apiToken"] = api_token
    return data


def training_to_json(training: Training) -> Dict[str, Any]:
    return {
        "id": training.training_id,
        "workspaceId": training.workspace_id,
        "adminId": training.admin_id,
        "title": training.title,
        "type": training.training_type.value,
        "location": training.location,
        "dates": [format_iso_date(d) for d in training.dates],
        "startDate": format_iso_date(training.start_date),
        "endDate": format_iso_date(training.end_date),
        "description": training.description,
        "resourcesLink": training.resources_link,
    }


def public_training_to_json(training: Training) -> Dict[str, Any]:
    data = training_to_json(training)
    data.pop("adminId")
    return data


def trainee_to_json(trainee: Trainee) -> Dict[str, Any]:
    return {
        "id": trainee.trainee_id,
        "trainingId": trainee.training_id,
        "name": trainee.name,
        "email": trainee.email,
        "phone": trainee.phone,
        "uniqueCode": trainee.unique_code,
    }


def attendance_to_json(record: AttendanceRecord) -> Dict[str, Any]:
    return {
        "id": record.attendance_id,
        "trainingId": record.training_id,
        "traineeId": record.trainee_id,
        "timestamp": record.timestamp,
        "sessionDate": format_iso_date(record.session_date),
    }


def checkin_to_json(result: CheckInResult) -> Dict[str, Any]:
    data: Dict[str, Any] = {"success": result.success, "message": result.message}
    if result.trainee_name:
        data["traineeName"] = result.trainee_name
    return data


def import_summary_to_json(summary: ImportSummary) -> Dict[str, Any]:
    return {"added": summary.added, "skipped": summary.skipped}


def dashboard_to_json(stats: DashboardStats) -> Dict[str, Any]:
    return {
        "trainingsCount": stats.trainings_count,
        "totalAttendance": stats.total_attendance,
        "activeAdmins": stats.active_admins,
        "chart": [{"id": c.training_id, "name": c.name, "attendance": c.attendance} for c in stats.chart],
    }
