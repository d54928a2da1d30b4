from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.responses import error_response
from ..core.exceptions import DomainError, ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance/mark", methods=["POST"], endpoint="mark_attendance")
    def mark_attendance():
        payload = request.get_json(silent=True)
        if payload is not None:
            service_id = payload.get("service_id")
            attendees = payload.get("attendees")
        else:
            # Form posts repeat the field once per ticked checkbox.
            service_id = request.form.get("service_id")
            attendees = request.form.getlist("attendees")

        try:
            if service_id in (None, ""):
                raise ValidationError("service_id is required")
            result = container.attendance_service.mark_attendance(int(service_id), attendees)
        except ValueError:
            return error_response(ValidationError(f"invalid service_id: {service_id!r}"))
        except DomainError as e:
            return error_response(e)

        return jsonify(
            {
                "success": True,
                "service_id": result.service_id,
                "attendee_ids": list(result.attendee_ids),
                "first_visit_ids": list(result.first_visit_ids),
                "skipped_ids": list(result.skipped_ids),
            }
        )

    @app.route("/api/services/<int:service_id>/attendance", methods=["GET"], endpoint="service_attendance")
    def service_attendance(service_id: int):
        try:
            service = container.calendar_service.get_service(service_id)
            attendee_ids = container.attendance_service.attendee_ids(service_id)
        except DomainError as e:
            return error_response(e)

        return jsonify(
            {
                "success": True,
                "service_id": service.service_id,
                "service_datetime": service.service_datetime.isoformat(),
                "attendee_ids": attendee_ids,
            }
        )
