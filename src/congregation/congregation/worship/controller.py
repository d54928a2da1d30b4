from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_datetime
from ..common.responses import error_response
from ..core.constants import DEFAULT_RECENT_SERVICES_LIMIT
from ..core.exceptions import DomainError, ValidationError
from ..container import Container
from .service import service_to_dict


def register(app: Flask, container: Container) -> None:
    def _parse_when(value: str | None):
        if not value:
            raise ValidationError("service_datetime is required")
        try:
            return parse_iso_datetime(value)
        except ValueError:
            raise ValidationError(f"invalid service_datetime: {value!r}") from None

    @app.route("/api/services", methods=["GET"], endpoint="recent_services")
    def recent_services():
        try:
            limit = int(request.args.get("limit") or DEFAULT_RECENT_SERVICES_LIMIT)
            services = container.calendar_service.recent_services(limit)
        except ValueError:
            return error_response(ValidationError("limit must be an integer"))
        except DomainError as e:
            return error_response(e)
        return jsonify({"success": True, "services": [service_to_dict(s) for s in services]})

    @app.route("/api/services", methods=["POST"], endpoint="add_service")
    def add_service():
        data = request.get_json(silent=True) or request.form
        try:
            service_id = container.calendar_service.create_service(
                service_datetime=_parse_when(data.get("service_datetime")),
                topic=data.get("topic", ""),
                speaker=data.get("speaker"),
            )
        except DomainError as e:
            return error_response(e)
        return jsonify({"success": True, "service_id": service_id}), 201

    @app.route("/api/services/<int:service_id>/date", methods=["POST"], endpoint="correct_service_date")
    def correct_service_date(service_id: int):
        data = request.get_json(silent=True) or request.form
        try:
            container.calendar_service.correct_date(
                service_id=service_id,
                service_datetime=_parse_when(data.get("service_datetime")),
            )
        except DomainError as e:
            return error_response(e)
        return jsonify({"success": True})
