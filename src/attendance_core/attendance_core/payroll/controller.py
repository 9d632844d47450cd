from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import current_identity, handle_errors, hr_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/payroll/<int:user_id>", methods=["GET"], endpoint="payroll_summary")
    @hr_required
    @handle_errors("Payroll calculation error")
    def payroll_summary(user_id: int):
        who = current_identity()
        summary = container.payroll_service.payroll_summary(
            current_role=who.role,
            actor_company_id=who.company_id,
            user_id=user_id,
            start=request.args.get("start", ""),
            end=request.args.get("end", ""),
        )
        return jsonify(summary.to_dict())
