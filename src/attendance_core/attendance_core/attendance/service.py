from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime, time, timedelta
from typing import Any, Optional, Sequence

from ..common.datetime_utils import (
    date_string_in_tz,
    format_date,
    local_date,
    local_time_to_utc,
    month_range,
    parse_hhmm,
    parse_iso_date,
    utc_now,
)
from ..common.validators import clamp_str, has_min_length
from ..companies.model import Company
from ..companies.repository import CompanyRepository
from ..core.constants import (
    DEFAULT_GEOFENCE_RADIUS_M,
    DEFAULT_HISTORY_LIMIT,
    HALF_DAY_HOURS,
    MAX_DAILY_REPORT_LENGTH,
    MAX_PHOTO_BYTES,
    MAX_PLANNED_TASKS_LENGTH,
    MAX_REMARKS_LENGTH,
    MIN_DAILY_REPORT_LENGTH,
    SYNTHETIC_PUNCH_IN,
    SYNTHETIC_PUNCH_OUT,
)
from ..core.enums import AttendanceMode, AttendanceSource, AttendanceStatus, Role
from ..core.exceptions import AuthorizationError, DuplicateRecordError, NotFoundError, ValidationError
from ..core.results import OperationResult, RejectionReason
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from ..face.matcher import descriptor_supplied
from ..face.verifier import FaceVerifier
from ..geo.geofence import check_geofence, normalize_location
from ..storage.photo_store import BackgroundPhotoWriter
from .model import AttendanceRecord, AttendanceSearch
from .repository import AttendanceRepository
from .stats import AttendanceStats, summarize
from .worktime import compute_net_hours, elapsed_break_minutes, status_for_net_hours

logger = logging.getLogger(__name__)

ALREADY_MARKED_MESSAGE = "Attendance already marked for today"

# Manual entry: status -> mode. Anything not listed is "Manual".
_MANUAL_MODES = {
    AttendanceStatus.HOLIDAY: AttendanceMode.HOLIDAY,
    AttendanceStatus.ON_LEAVE: AttendanceMode.PAID_LEAVE,
    AttendanceStatus.ABSENT: AttendanceMode.UNPAID_LEAVE,
}
_NO_PUNCH_STATUSES = frozenset(_MANUAL_MODES)


def _wall_clock(value: Optional[str], field_name: str) -> Optional[time]:
    """Blank means "use the default"; anything else must be HH:MM."""
    if value is None or not str(value).strip():
        return None
    parsed = parse_hhmm(str(value))
    if parsed is None:
        raise ValidationError(f"Invalid {field_name} (expected HH:MM): {value!r}")
    return parsed


class AttendanceService:
    """Punch-in / break / punch-out lifecycle of the daily attendance record.

    Domain rejections come back as ``OperationResult.rejected``; unknown
    employees/companies raise ``NotFoundError`` and storage failures
    propagate unchanged.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        companies: CompanyRepository,
        *,
        face_verifier: FaceVerifier,
        photo_writer: BackgroundPhotoWriter | None = None,
        max_photo_bytes: int = MAX_PHOTO_BYTES,
        default_geofence_radius: float = DEFAULT_GEOFENCE_RADIUS_M,
    ):
        self._attendance = attendance
        self._employees = employees
        self._companies = companies
        self._faces = face_verifier
        self._photos = photo_writer
        self._max_photo_bytes = int(max_photo_bytes)
        self._default_radius = float(default_geofence_radius)

    # ------------------------------------------------------------------ lookups

    def _load(self, user_id: int) -> tuple[Employee, Company]:
        employee = self._employees.get_by_id(int(user_id))
        if not employee:
            raise NotFoundError("Employee not found")
        company = self._companies.get_by_id(employee.company_id)
        if not company:
            raise NotFoundError("Company not linked")
        return employee, company

    def today_for(self, user_id: int, *, now: datetime | None = None) -> str:
        _, company = self._load(user_id)
        return date_string_in_tz(now or utc_now(), company.time_zone)

    def get_today_record(self, user_id: int, *, now: datetime | None = None) -> Optional[AttendanceRecord]:
        return self._attendance.get_for_user_and_date(int(user_id), self.today_for(user_id, now=now))

    def get_history(self, user_id: int, *, limit: int = DEFAULT_HISTORY_LIMIT) -> Sequence[AttendanceRecord]:
        return self._attendance.get_recent_for_user(int(user_id), int(limit))

    # ------------------------------------------------------------------ punch flow

    def _face_matches(self, employee: Employee, descriptor: Any) -> bool:
        check = self._faces.verify(key=employee.user_id, stored_raw=employee.face_descriptor, incoming_raw=descriptor)
        return check.matched

    def _photo_key(self, prefix: str, user_id: int, image: Optional[str], now: datetime) -> tuple[str, str]:
        """(storage key, reference path), both empty when there is nothing to store."""
        if not self._photos or not image:
            return "", ""
        key = f"{prefix}_{user_id}_{int(now.timestamp() * 1000)}.jpg"
        return key, self._photos.reference_for(key)

    def punch_in(
        self,
        user_id: int,
        *,
        face_descriptor: Any,
        location: Any = None,
        image: Optional[str] = None,
        planned_tasks: str = "",
        mode: AttendanceMode = AttendanceMode.OFFICE,
        now: datetime | None = None,
    ) -> OperationResult[AttendanceRecord]:
        now = now or utc_now()
        employee, company = self._load(user_id)
        if not company.is_active:
            return OperationResult.rejected(RejectionReason.COMPANY_INACTIVE, "Company account suspended/inactive")

        today = date_string_in_tz(now, company.time_zone)

        # Advisory only; the unique key on (user_id, work_date) decides.
        if self._attendance.get_for_user_and_date(employee.user_id, today):
            return OperationResult.rejected(RejectionReason.ALREADY_MARKED, ALREADY_MARKED_MESSAGE)

        if not descriptor_supplied(face_descriptor):
            return OperationResult.rejected(RejectionReason.FACE_REQUIRED, "Face data required")
        if not self._face_matches(employee, face_descriptor):
            return OperationResult.rejected(RejectionReason.FACE_MISMATCH, "Face mismatch, please try again")

        office = company.geofence
        if office is not None:
            geo = check_geofence(location, office, default_radius=self._default_radius)
            if not geo.inside:
                if geo.distance_m is None:
                    logger.info("punch-in rejected for user %s: no usable location", employee.user_id)
                    return OperationResult.rejected(RejectionReason.OUTSIDE_GEOFENCE, "Location required")
                logger.info("punch-in rejected for user %s: %.0fm from office", employee.user_id, geo.distance_m)
                return OperationResult.rejected(
                    RejectionReason.OUTSIDE_GEOFENCE,
                    f"You are too far from office ({geo.distance_m:.0f}m away)",
                    distance_m=round(geo.distance_m, 1),
                )

        if image and len(image) > self._max_photo_bytes:
            return OperationResult.rejected(RejectionReason.PHOTO_TOO_LARGE, "Image too large")

        key, photo_ref = self._photo_key("in", employee.user_id, image, now)
        record = AttendanceRecord(
            user_id=employee.user_id,
            company_id=company.company_id,
            work_date=today,
            status=AttendanceStatus.PRESENT,
            mode=mode,
            source=AttendanceSource.GPS_FACE,
            punch_in_time=now,
            location=normalize_location(location),
            in_image=photo_ref,
            face_matched=True,
            planned_tasks=clamp_str(planned_tasks, MAX_PLANNED_TASKS_LENGTH),
        )

        try:
            attendance_id = self._attendance.create(record)
        except DuplicateRecordError:
            logger.info("punch-in race lost for user %s on %s", employee.user_id, today)
            return OperationResult.rejected(RejectionReason.ALREADY_MARKED, ALREADY_MARKED_MESSAGE)

        if key:
            self._photos.submit(key, image)

        return OperationResult.success(replace(record, attendance_id=attendance_id), "Punch in successful")

    def _open_record(self, user_id: int, now: datetime) -> Optional[AttendanceRecord]:
        _, company = self._load(user_id)
        return self._attendance.get_for_user_and_date(int(user_id), date_string_in_tz(now, company.time_zone))

    def start_break(self, user_id: int, *, now: datetime | None = None) -> OperationResult[AttendanceRecord]:
        now = now or utc_now()
        record = self._open_record(user_id, now)
        if not record or not record.is_open:
            return OperationResult.rejected(RejectionReason.NO_ACTIVE_SESSION, "Invalid break request")
        if record.status == AttendanceStatus.ON_BREAK:
            return OperationResult.rejected(RejectionReason.ALREADY_ON_BREAK, "Break already started")

        updated = replace(record, status=AttendanceStatus.ON_BREAK, break_start_at=record.break_start_at or now)
        self._attendance.update(updated)
        return OperationResult.success(updated, "Break started")

    def end_break(self, user_id: int, *, now: datetime | None = None) -> OperationResult[AttendanceRecord]:
        # Lenient: any existing record is put back to Present.
        now = now or utc_now()
        record = self._open_record(user_id, now)
        if not record:
            return OperationResult.rejected(RejectionReason.NO_ACTIVE_SESSION, "No active session")

        updated = replace(
            record,
            status=AttendanceStatus.PRESENT,
            total_break_minutes=record.total_break_minutes + elapsed_break_minutes(record.break_start_at, now),
            break_start_at=None,
        )
        self._attendance.update(updated)
        return OperationResult.success(updated, "Break ended")

    def punch_out(
        self,
        user_id: int,
        *,
        daily_report: str,
        face_descriptor: Any = None,
        image: Optional[str] = None,
        now: datetime | None = None,
    ) -> OperationResult[AttendanceRecord]:
        now = now or utc_now()
        if not has_min_length(daily_report, MIN_DAILY_REPORT_LENGTH):
            return OperationResult.rejected(
                RejectionReason.MISSING_REPORT,
                f"Daily report is required (at least {MIN_DAILY_REPORT_LENGTH} characters)",
            )

        employee, company = self._load(user_id)
        record = self._attendance.get_for_user_and_date(employee.user_id, date_string_in_tz(now, company.time_zone))
        if not record or not record.is_open:
            return OperationResult.rejected(RejectionReason.NO_ACTIVE_SESSION, "No active session or already out")

        # Face check is optional on the way out.
        face_supplied = descriptor_supplied(face_descriptor)
        if face_supplied and not self._face_matches(employee, face_descriptor):
            return OperationResult.rejected(RejectionReason.FACE_MISMATCH, "Face mismatch, please try again")

        if image and len(image) > self._max_photo_bytes:
            return OperationResult.rejected(RejectionReason.PHOTO_TOO_LARGE, "Image too large")

        break_minutes = record.total_break_minutes + elapsed_break_minutes(record.break_start_at, now)
        net_hours = compute_net_hours(record.punch_in_time, now, break_minutes)
        key, photo_ref = self._photo_key("out", employee.user_id, image, now)

        updated = replace(
            record,
            punch_out_time=now,
            break_start_at=None,
            total_break_minutes=break_minutes,
            net_work_hours=net_hours,
            status=status_for_net_hours(net_hours),
            daily_report=clamp_str(daily_report.strip(), MAX_DAILY_REPORT_LENGTH),
            face_matched=True if face_supplied else record.face_matched,
            out_image=photo_ref or record.out_image,
        )
        self._attendance.update(updated)
        if key:
            self._photos.submit(key, image)
        return OperationResult.success(updated, "Punch out successful")

    # ------------------------------------------------------------------ reporting

    def company_attendance(
        self,
        *,
        current_role: Role,
        company_id: Optional[int],
        search: str = "",
    ) -> Sequence[AttendanceRecord]:
        if not current_role.is_hr:
            raise AuthorizationError("HR Access Required")
        if company_id is None:
            raise ValidationError("Company ID missing")
        return self._attendance.list_for_company(int(company_id), AttendanceSearch.parse(search))

    def employee_history(
        self,
        *,
        current_role: Role,
        actor_company_id: Optional[int],
        user_id: int,
        search: str = "",
    ) -> Sequence[AttendanceRecord]:
        """Full history of one employee, for HR of the same company."""
        if not current_role.is_hr:
            raise AuthorizationError("HR Access Required")
        if actor_company_id is None and current_role != Role.SUPER_ADMIN:
            raise ValidationError("Company missing")
        employee = self._employees.get_by_id(int(user_id))
        if not employee:
            raise NotFoundError("User not found")
        if current_role != Role.SUPER_ADMIN and employee.company_id != actor_company_id:
            raise AuthorizationError("Access denied")
        return self._attendance.list_for_user(employee.user_id, employee.company_id, AttendanceSearch.parse(search))

    def monthly_stats(self, user_id: int, *, now: datetime | None = None) -> AttendanceStats:
        """Day counts for the current month in the company's timezone."""
        employee, company = self._load(user_id)
        start, end = month_range(local_date(now or utc_now(), company.time_zone))
        records = self._attendance.list_for_user_between(employee.user_id, format_date(start), format_date(end))
        return summarize(records, window_start=start, window_end=end)

    # ------------------------------------------------------------------ HR override

    def manual_entry(
        self,
        *,
        current_role: Role,
        actor_id: int,
        actor_company_id: Optional[int],
        user_id: int,
        work_date: str,
        status: AttendanceStatus,
        in_time: str = "",
        out_time: str = "",
        remarks: str = "",
    ) -> OperationResult[AttendanceRecord]:
        if not current_role.is_hr:
            raise AuthorizationError("HR access required")

        day = parse_iso_date(work_date)
        employee, company = self._load(user_id)
        if current_role != Role.SUPER_ADMIN and actor_company_id != employee.company_id:
            raise AuthorizationError("Access denied")

        punch_in = punch_out = None
        net_hours = 0.0
        if status not in _NO_PUNCH_STATUSES:
            start = _wall_clock(in_time, "in_time") or SYNTHETIC_PUNCH_IN
            punch_in = local_time_to_utc(day, start, company.time_zone)
            end = _wall_clock(out_time, "out_time")
            if end is not None:
                punch_out = local_time_to_utc(day, end, company.time_zone)
            elif status == AttendanceStatus.HALF_DAY:
                punch_out = punch_in + timedelta(hours=HALF_DAY_HOURS)
            else:
                punch_out = local_time_to_utc(day, SYNTHETIC_PUNCH_OUT, company.time_zone)
            if punch_out < punch_in:
                raise ValidationError("Out time cannot be before in time")
            net_hours = compute_net_hours(punch_in, punch_out)

        record = AttendanceRecord(
            user_id=employee.user_id,
            company_id=employee.company_id,
            work_date=day.strftime("%Y-%m-%d"),
            status=status,
            mode=_MANUAL_MODES.get(status, AttendanceMode.MANUAL),
            source=AttendanceSource.MANUAL_HR,
            punch_in_time=punch_in,
            punch_out_time=punch_out,
            net_work_hours=net_hours,
            is_manual_entry=True,
            added_by=int(actor_id),
            remarks=clamp_str(remarks or "Manual entry by HR", MAX_REMARKS_LENGTH),
            is_edited=True,
            edited_by=int(actor_id),
        )
        attendance_id = self._attendance.upsert(record)
        logger.info("manual attendance %s for user %s on %s by %s", status.value, employee.user_id, record.work_date, actor_id)
        return OperationResult.success(replace(record, attendance_id=attendance_id), "Attendance updated")
