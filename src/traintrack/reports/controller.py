from __future__ import annotations

import csv
import io

from flask import current_app

from ..api.router import ActionRouter, current_actor, params, text_param
from ..api.serializers import dashboard_to_json
from ..container import Container
from .model import CsvReport


def _write_report_csv(report: CsvReport):
    out = io.StringIO()
    writer = csv.writer(out)
    writer.writerow(report.headers)
    writer.writerows(report.rows)

    csv_bytes = out.getvalue().encode("utf-8-sig")
    return current_app.response_class(
        csv_bytes,
        mimetype="text/csv",
        headers={"Content-Disposition": f"attachment; filename={report.filename}"},
    )


def register(api: ActionRouter, container: Container) -> None:
    reports = container.report_service

    @api.action("attendance_export")
    def attendance_export():
        data = params()
        report = reports.training_attendance_report(
            current_actor(), text_param(data, "trainingId"), workspace_id=text_param(data, "workspaceId")
        )
        return _write_report_csv(report)

    @api.action("workspace_export")
    def workspace_export():
        report = reports.workspace_report(current_actor(), workspace_id=text_param(params(), "workspaceId"))
        return _write_report_csv(report)

    @api.action("dashboard")
    def dashboard():
        return dashboard_to_json(reports.dashboard(current_actor()))
