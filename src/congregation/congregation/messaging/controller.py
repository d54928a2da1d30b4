from __future__ import annotations

from flask import Flask, jsonify

from ..common.responses import error_response
from ..core.exceptions import DomainError
from ..container import Container
from .service import outcome_to_dict


def register(app: Flask, container: Container) -> None:
    @app.route("/api/services/<int:service_id>/send-sms", methods=["POST"], endpoint="send_sms")
    async def send_sms(service_id: int):
        try:
            outcomes = await container.follow_up_service.send_attendance_follow_ups(service_id)
        except DomainError as e:
            return error_response(e)

        return jsonify(
            {
                "success": True,
                "sent": sum(1 for o in outcomes if o.success),
                "failed": sum(1 for o in outcomes if not o.success),
                "results": [outcome_to_dict(o) for o in outcomes],
            }
        )
