from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.responses import error_response
from ..core.exceptions import DomainError
from ..container import Container
from .service import person_to_dict


def register(app: Flask, container: Container) -> None:
    @app.route("/api/members", methods=["GET"], endpoint="list_members")
    def list_members():
        members = container.member_service.list_active_members()
        return jsonify({"success": True, "members": [person_to_dict(m) for m in members]})

    @app.route("/api/members", methods=["POST"], endpoint="add_member")
    def add_member():
        data = request.get_json(silent=True) or request.form
        try:
            person_id = container.member_service.enroll_member(
                first_name=data.get("first_name", ""),
                last_name=data.get("last_name", ""),
                phone_number=data.get("phone_number", ""),
                email=data.get("email"),
            )
        except DomainError as e:
            return error_response(e)
        return jsonify({"success": True, "person_id": person_id}), 201

    @app.route("/api/members/<int:person_id>/deactivate", methods=["POST"], endpoint="deactivate_member")
    def deactivate_member(person_id: int):
        try:
            container.member_service.deactivate_member(person_id)
        except DomainError as e:
            return error_response(e)
        return jsonify({"success": True})

    @app.route("/api/visitors", methods=["POST"], endpoint="add_visitor")
    def add_visitor():
        data = request.get_json(silent=True) or request.form
        try:
            person_id = container.member_service.register_visitor(
                first_name=data.get("first_name", ""),
                last_name=data.get("last_name", ""),
                phone_number=data.get("phone_number", ""),
                email=data.get("email"),
            )
        except DomainError as e:
            return error_response(e)
        return jsonify({"success": True, "person_id": person_id}), 201
