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
from ..core.enums import AttendanceMode, AttendanceStatus
from ..core.exceptions import ValidationError


def _location(body: dict):
    loc = pick(body, "location")
    if loc is None and pick(body, "lat", "latitude") is not None:
        loc = {
            "lat": pick(body, "lat", "latitude"),
            "lng": pick(body, "lng", "longitude"),
            "address": pick(body, "address", default=""),
        }
    return loc


def _punch_mode(value) -> AttendanceMode:
    if not value:
        return AttendanceMode.OFFICE
    try:
        mode = AttendanceMode(str(value))
    except ValueError:
        raise ValidationError(f"Invalid mode: {value!r}")
    if mode not in {AttendanceMode.OFFICE, AttendanceMode.WFH}:
        raise ValidationError(f"Invalid mode: {value!r}")
    return mode


def _manual_status(value) -> AttendanceStatus:
    try:
        return AttendanceStatus(str(value or AttendanceStatus.PRESENT.value))
    except ValueError:
        raise ValidationError(f"Invalid status: {value!r}")


def _record(rec) -> dict:
    return {"attendance": rec.to_dict()}


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service

    @app.route("/api/attendance/punch-in", methods=["POST"], endpoint="attendance_punch_in")
    @login_required
    @handle_errors("Punch in failed")
    def punch_in():
        body = json_body()
        result = service.punch_in(
            current_identity().user_id,
            face_descriptor=pick(body, "face_descriptor", "faceDescriptor"),
            location=_location(body),
            image=pick(body, "image"),
            planned_tasks=pick(body, "planned_tasks", "plannedTasks", default=""),
            mode=_punch_mode(pick(body, "mode")),
        )
        return result_response(result, _record, success_status=201)

    @app.route("/api/attendance/break-start", methods=["POST"], endpoint="attendance_break_start")
    @login_required
    @handle_errors("Break start failed")
    def break_start():
        return result_response(service.start_break(current_identity().user_id), _record)

    @app.route("/api/attendance/break-end", methods=["POST"], endpoint="attendance_break_end")
    @login_required
    @handle_errors("Break end failed")
    def break_end():
        return result_response(service.end_break(current_identity().user_id), _record)

    @app.route("/api/attendance/punch-out", methods=["POST"], endpoint="attendance_punch_out")
    @login_required
    @handle_errors("Punch out failed")
    def punch_out():
        body = json_body()
        result = service.punch_out(
            current_identity().user_id,
            daily_report=pick(body, "daily_report", "dailyReport", default=""),
            face_descriptor=pick(body, "face_descriptor", "faceDescriptor"),
            image=pick(body, "image"),
        )
        return result_response(result, _record)

    @app.route("/api/attendance/today", methods=["GET"], endpoint="attendance_today")
    @login_required
    @handle_errors("Could not load today's attendance")
    def today():
        user_id = current_identity().user_id
        rec = service.get_today_record(user_id)
        if rec is None:
            return jsonify({"date": service.today_for(user_id), "status": AttendanceStatus.NOT_STARTED.value, "attendance": None})
        return jsonify({"date": rec.work_date, "status": rec.status.value, "attendance": rec.to_dict()})

    @app.route("/api/attendance/history", methods=["GET"], endpoint="attendance_history")
    @login_required
    @handle_errors("Could not load attendance history")
    def history():
        records = service.get_history(current_identity().user_id)
        return jsonify({"items": [r.to_dict() for r in records]})

    @app.route("/api/attendance/manual", methods=["POST"], endpoint="attendance_manual")
    @hr_required
    @handle_errors("Manual attendance failed")
    def manual():
        body = json_body()
        who = current_identity()
        try:
            user_id = int(pick(body, "user_id", "userId"))
        except (TypeError, ValueError):
            raise ValidationError("user_id is required")
        result = service.manual_entry(
            current_role=who.role,
            actor_id=who.user_id,
            actor_company_id=who.company_id,
            user_id=user_id,
            work_date=pick(body, "date", "work_date", default=""),
            status=_manual_status(pick(body, "status")),
            in_time=pick(body, "in_time", "inTime", default=""),
            out_time=pick(body, "out_time", "outTime", default=""),
            remarks=pick(body, "remarks", default=""),
        )
        return result_response(result, _record)

    @app.route("/api/attendance/all", methods=["GET"], endpoint="attendance_all")
    @hr_required
    @handle_errors("Could not load company attendance")
    def company_attendance():
        who = current_identity()
        records = service.company_attendance(
            current_role=who.role,
            company_id=who.company_id,
            search=request.args.get("search", ""),
        )
        return jsonify({"items": [r.to_dict() for r in records]})

    @app.route("/api/attendance/history/<int:user_id>", methods=["GET"], endpoint="attendance_user_history")
    @hr_required
    @handle_errors("Could not load employee history")
    def employee_history(user_id: int):
        who = current_identity()
        records = service.employee_history(
            current_role=who.role,
            actor_company_id=who.company_id,
            user_id=user_id,
            search=request.args.get("search", ""),
        )
        return jsonify({"items": [r.to_dict() for r in records]})

    @app.route("/api/attendance/stats", methods=["GET"], endpoint="attendance_stats")
    @login_required
    @handle_errors("Could not load attendance stats")
    def stats():
        return jsonify(service.monthly_stats(current_identity().user_id).to_dict())
