from __future__ import annotations

import csv
import io

from flask import Flask, jsonify, request

from ..common.responses import error_response
from ..core.exceptions import DomainError, ValidationError
from ..container import Container
from ..members.service import person_to_dict
from .service import lapse_result_to_dict
from .thresholds import ThresholdSet


def register(app: Flask, container: Container) -> None:
    def _thresholds_override():
        raw = request.args.get("thresholds")
        return ThresholdSet.parse(raw) if raw else None

    def _write_report_csv(*, rows: list[dict], filename: str):
        out = io.StringIO()
        writer = csv.DictWriter(
            out,
            fieldnames=[
                "tier",
                "person_id",
                "name",
                "phone_number",
                "elapsed_days",
                "never_attended",
                "last_attended",
            ],
        )
        writer.writeheader()
        for row in rows:
            writer.writerow(row)

        csv_bytes = out.getvalue().encode("utf-8-sig")
        return app.response_class(
            csv_bytes,
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    @app.route("/api/reports/lapsed-members", methods=["GET"], endpoint="lapsed_members")
    async def lapsed_members():
        try:
            thresholds = _thresholds_override()
            report = await container.lapse_report_service.get_lapsed_members(thresholds=thresholds)
        except DomainError as e:
            return error_response(e)

        used = thresholds or container.lapse_report_service.thresholds
        return jsonify(
            {
                "success": True,
                "thresholds": used.as_dict(),
                "lapsed_members": [lapse_result_to_dict(r) for r in report],
            }
        )

    @app.route("/api/reports/lapsed-members.csv", methods=["GET"], endpoint="lapsed_members_csv")
    async def lapsed_members_csv():
        try:
            report = await container.lapse_report_service.get_lapsed_members(thresholds=_thresholds_override())
        except DomainError as e:
            return error_response(e)
        return _write_report_csv(rows=[lapse_result_to_dict(r) for r in report], filename="lapsed_members.csv")

    @app.route("/api/outreach/absent", methods=["GET"], endpoint="absent_members")
    async def absent_members():
        try:
            last_n = int(request.args.get("last") or container.absent_service_window)
            members = await container.outreach_service.absent_from_last_services(last_n)
        except ValueError:
            return error_response(ValidationError("last must be an integer"))
        except DomainError as e:
            return error_response(e)
        return jsonify({"success": True, "last": last_n, "members": [person_to_dict(m) for m in members]})

    @app.route("/api/services/<int:service_id>/first-timers", methods=["GET"], endpoint="first_timers")
    async def first_timers(service_id: int):
        try:
            people = await container.outreach_service.first_time_attendees(service_id)
        except DomainError as e:
            return error_response(e)
        return jsonify({"success": True, "service_id": service_id, "people": [person_to_dict(p) for p in people]})
