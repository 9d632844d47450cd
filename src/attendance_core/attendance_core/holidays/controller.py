from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import current_identity, handle_errors, hr_required, json_body, login_required, pick, result_response
from ..container import Container
from ..core.exceptions import ValidationError


def _ids(raw) -> list[int] | None:
    if raw is None:
        return None
    if not isinstance(raw, list):
        raise ValidationError("employee_ids must be a list")
    try:
        return [int(x) for x in raw]
    except (TypeError, ValueError):
        raise ValidationError("employee_ids must be integers")


def register(app: Flask, container: Container) -> None:
    @app.route("/api/holidays", methods=["POST"], endpoint="holidays_mark")
    @hr_required
    @handle_errors("Failed to mark holiday")
    def mark_holiday():
        who = current_identity()
        body = json_body()
        company_id = pick(body, "company_id", "companyId")
        if company_id is not None and not str(company_id).isdigit():
            raise ValidationError("company_id must be an integer")
        result = container.holiday_service.mark_holiday(
            current_role=who.role,
            actor_company_id=who.company_id,
            company_id=int(company_id) if company_id is not None else None,
            holiday_date=pick(body, "date", "holiday_date", default=""),
            reason=pick(body, "reason", default=""),
            employee_ids=_ids(pick(body, "employee_ids", "employeeIds")),
        )
        return result_response(result, lambda marking: marking.to_dict(), success_status=201)

    @app.route("/api/holidays", methods=["GET"], endpoint="holidays_list")
    @login_required
    @handle_errors("Error fetching holidays")
    def list_holidays():
        who = current_identity()
        if who.company_id is None:
            raise ValidationError("Company missing")
        holidays = container.holiday_service.list_between(
            who.company_id, request.args.get("start", ""), request.args.get("end", "")
        )
        return jsonify({"items": [h.to_dict() for h in holidays]})
