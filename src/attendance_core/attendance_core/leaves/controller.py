from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import (
    current_identity,
    handle_errors,
    hr_required,
    json_body,
    login_required,
    pick,
    result_response,
)
from ..container import Container
from ..core.enums import RequestStatus
from ..core.exceptions import ValidationError


def _leave(leave) -> dict:
    return {"leave": leave.to_dict()}


def _decision(decision) -> dict:
    return decision.to_dict()


def register(app: Flask, container: Container) -> None:
    service = container.leave_service

    @app.route("/api/leaves", methods=["POST"], endpoint="leaves_apply")
    @login_required
    @handle_errors("Server Error: Could not apply leave.")
    def apply_leave():
        body = json_body()
        result = service.apply_leave(
            user_id=current_identity().user_id,
            leave_type=pick(body, "leave_type", "leaveType", default=""),
            day_type=pick(body, "day_type", "dayType", default=""),
            start_date=pick(body, "start_date", "startDate", default=""),
            end_date=pick(body, "end_date", "endDate", default=""),
            reason=pick(body, "reason", default=""),
        )
        return result_response(result, _leave, success_status=201)

    @app.route("/api/leaves/wfh", methods=["POST"], endpoint="leaves_wfh")
    @login_required
    @handle_errors("Could not submit WFH request")
    def wfh_request():
        body = json_body()
        result = service.submit_wfh_request(
            user_id=current_identity().user_id,
            reason=pick(body, "reason", default=""),
        )
        return result_response(result, _leave, success_status=201)

    @app.route("/api/leaves/mine", methods=["GET"], endpoint="leaves_mine")
    @login_required
    @handle_errors("Error fetching leaves")
    def my_leaves():
        leaves = service.list_mine(user_id=current_identity().user_id)
        return jsonify({"items": [lv.to_dict() for lv in leaves]})

    @app.route("/api/leaves", methods=["GET"], endpoint="leaves_company")
    @hr_required
    @handle_errors("Error fetching leaves")
    def company_leaves():
        who = current_identity()
        raw_status = request.args.get("status")
        try:
            status = RequestStatus(raw_status) if raw_status else None
        except ValueError:
            raise ValidationError(f"Invalid status: {raw_status!r}")
        leaves = service.list_company(current_role=who.role, company_id=who.company_id, status=status)
        return jsonify({"items": [lv.to_dict() for lv in leaves]})

    @app.route("/api/leaves/<int:request_id>/approve", methods=["POST"], endpoint="leaves_approve")
    @hr_required
    @handle_errors("Update failed")
    def approve(request_id: int):
        who = current_identity()
        result = service.approve(
            current_role=who.role,
            actor_id=who.user_id,
            actor_company_id=who.company_id,
            request_id=request_id,
        )
        return result_response(result, _decision)

    @app.route("/api/leaves/<int:request_id>/reject", methods=["POST"], endpoint="leaves_reject")
    @hr_required
    @handle_errors("Update failed")
    def reject(request_id: int):
        who = current_identity()
        body = json_body()
        result = service.reject(
            current_role=who.role,
            actor_id=who.user_id,
            actor_company_id=who.company_id,
            request_id=request_id,
            reject_reason=pick(body, "reject_reason", "rejectReason", default=""),
        )
        return result_response(result, _decision)
