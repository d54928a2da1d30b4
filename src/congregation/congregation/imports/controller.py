from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.responses import error_response
from ..core.exceptions import DomainError, ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/imports/people", methods=["POST"], endpoint="import_people")
    def import_people():
        upload = request.files.get("file")
        service_id_s = request.form.get("service_id") or None
        try:
            service_id = int(service_id_s) if service_id_s else None
        except ValueError:
            return error_response(ValidationError(f"invalid service_id: {service_id_s!r}"))

        try:
            if not upload or not upload.filename:
                raise ValidationError("no file uploaded")
            summary = container.import_service.import_file(
                upload.stream,
                filename=upload.filename,
                service_id=service_id,
            )
        except DomainError as e:
            return error_response(e)

        return jsonify(
            {
                "success": True,
                "created_ids": summary.created_ids,
                "matched_ids": summary.matched_ids,
                "skipped_rows": summary.skipped_rows,
                "marked_service_id": summary.attendance.service_id if summary.attendance else None,
            }
        )
