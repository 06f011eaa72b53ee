from __future__ import annotations

from dataclasses import asdict

from flask import Flask, jsonify, request

from ..attendance.controller import record_to_dict
from ..attendance.model import RecordCriteria
from ..common.web import current_viewer, login_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    def _report():
        viewer_id, viewer_role = current_viewer()
        criteria = RecordCriteria.from_query(request.args)
        return viewer_id, viewer_role, criteria

    @app.route("/api/reports/attendance", methods=["GET"], endpoint="api_report_attendance")
    @login_required
    def api_report_attendance():
        viewer_id, viewer_role, criteria = _report()
        data = container.report_service.build_attendance_report(
            viewer_id=viewer_id,
            viewer_role=viewer_role,
            criteria=criteria,
        )
        return jsonify(
            {
                "headers": list(data.table.headers),
                "rows": [list(row) for row in data.table.rows],
                "records": [record_to_dict(r) for r in data.records],
                "warnings": [record_to_dict(r) for r in data.warnings],
            }
        )

    @app.route("/api/reports/summary", methods=["GET"], endpoint="api_report_summary")
    @login_required
    def api_report_summary():
        viewer_id, viewer_role, criteria = _report()
        data = container.report_service.build_attendance_report(
            viewer_id=viewer_id,
            viewer_role=viewer_role,
            criteria=criteria,
        )
        return jsonify({"summary": [asdict(s) for s in data.summary]})

    @app.route("/api/reports/attendance.csv", methods=["GET"], endpoint="api_report_attendance_csv")
    @login_required
    def api_report_attendance_csv():
        viewer_id, viewer_role, criteria = _report()
        export = container.report_service.export_csv(
            viewer_id=viewer_id,
            viewer_role=viewer_role,
            criteria=criteria,
        )
        return app.response_class(
            export.content.encode("utf-8-sig"),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={export.filename}"},
        )
