from __future__ import annotations

from typing import Any, Iterable, Optional, Sequence

from ..core.enums import AttendanceMode, AttendanceSource, AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import date_str, db_cursor, fetchall, fetchone, from_db_datetime, to_db_datetime
from ..geo.geofence import GeoPoint
from .model import AttendanceRecord, AttendanceSearch
from .repository import AttendanceRepository

_COLUMNS = """
    attendance_id, user_id, company_id, work_date, punch_in_time, punch_out_time, break_start_at,
    total_break_minutes, net_work_hours, status, mode, source, in_image, out_image,
    location_lat, location_lng, location_address, face_matched, daily_report, planned_tasks,
    is_manual_entry, added_by, remarks, is_edited, edited_by
"""

_WRITE_COLUMNS = (
    "user_id", "company_id", "work_date", "punch_in_time", "punch_out_time", "break_start_at",
    "total_break_minutes", "net_work_hours", "status", "mode", "source", "in_image", "out_image",
    "location_lat", "location_lng", "location_address", "face_matched", "daily_report", "planned_tasks",
    "is_manual_entry", "added_by", "remarks", "is_edited", "edited_by",
)


def _row_to_record(r: dict[str, Any]) -> AttendanceRecord:
    location = None
    if r.get("location_lat") is not None and r.get("location_lng") is not None:
        location = GeoPoint(
            lat=float(r["location_lat"]),
            lng=float(r["location_lng"]),
            address=r.get("location_address") or "",
        )

    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        user_id=int(r["user_id"]),
        company_id=int(r["company_id"]),
        work_date=date_str(r["work_date"]),
        punch_in_time=from_db_datetime(r.get("punch_in_time")),
        punch_out_time=from_db_datetime(r.get("punch_out_time")),
        break_start_at=from_db_datetime(r.get("break_start_at")),
        total_break_minutes=int(r.get("total_break_minutes") or 0),
        net_work_hours=float(r.get("net_work_hours") or 0),
        status=AttendanceStatus(r["status"]),
        mode=AttendanceMode(r["mode"]),
        source=AttendanceSource(r["source"]),
        in_image=r.get("in_image") or "",
        out_image=r.get("out_image") or "",
        location=location,
        face_matched=bool(r.get("face_matched")),
        daily_report=r.get("daily_report") or "",
        planned_tasks=r.get("planned_tasks") or "",
        is_manual_entry=bool(r.get("is_manual_entry")),
        added_by=r.get("added_by"),
        remarks=r.get("remarks") or "",
        is_edited=bool(r.get("is_edited")),
        edited_by=r.get("edited_by"),
    )


def _search_clause(search: AttendanceSearch) -> tuple[str, tuple]:
    if search.work_date is not None:
        return " AND work_date=%s", (search.work_date,)
    if search.text:
        escaped = search.text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
        pattern = f"%{escaped}%"
        return " AND (status LIKE %s OR mode LIKE %s)", (pattern, pattern)
    return "", ()


def _record_params(rec: AttendanceRecord) -> tuple:
    loc = rec.location
    return (
        rec.user_id,
        rec.company_id,
        rec.work_date,
        to_db_datetime(rec.punch_in_time),
        to_db_datetime(rec.punch_out_time),
        to_db_datetime(rec.break_start_at),
        int(rec.total_break_minutes),
        float(rec.net_work_hours),
        rec.status.value,
        rec.mode.value,
        rec.source.value,
        rec.in_image,
        rec.out_image,
        loc.lat if loc else None,
        loc.lng if loc else None,
        loc.address if loc else None,
        int(rec.face_matched),
        rec.daily_report,
        rec.planned_tasks,
        int(rec.is_manual_entry),
        rec.added_by,
        rec.remarks,
        int(rec.is_edited),
        rec.edited_by,
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_user_and_date(self, user_id: int, work_date: str) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_records WHERE user_id=%s AND work_date=%s",
                (int(user_id), work_date),
            )
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    def get_recent_for_user(self, user_id: int, limit: int) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE user_id=%s
                ORDER BY work_date DESC
                LIMIT %s
                """,
                (int(user_id), int(limit)),
            )
            return [_row_to_record(r) for r in fetchall(cur)]

    def list_for_user_between(self, user_id: int, start_date: str, end_date: str) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE user_id=%s AND work_date BETWEEN %s AND %s
                ORDER BY work_date ASC
                """,
                (int(user_id), start_date, end_date),
            )
            return [_row_to_record(r) for r in fetchall(cur)]

    def existing_dates(self, user_id: int, work_dates: Iterable[str]) -> set[str]:
        dates = list(work_dates)
        if not dates:
            return set()
        placeholders = ",".join(["%s"] * len(dates))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT work_date FROM attendance_records WHERE user_id=%s AND work_date IN ({placeholders})",
                tuple([int(user_id)] + dates),
            )
            return {date_str(r["work_date"]) for r in fetchall(cur)}

    def list_for_company(self, company_id: int, search: AttendanceSearch) -> Sequence[AttendanceRecord]:
        clause, params = _search_clause(search)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_records WHERE company_id=%s{clause} "
                "ORDER BY work_date DESC, user_id ASC",
                (int(company_id),) + params,
            )
            return [_row_to_record(r) for r in fetchall(cur)]

    def list_for_user(self, user_id: int, company_id: int, search: AttendanceSearch) -> Sequence[AttendanceRecord]:
        clause, params = _search_clause(search)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_records WHERE user_id=%s AND company_id=%s{clause} "
                "ORDER BY work_date DESC",
                (int(user_id), int(company_id)) + params,
            )
            return [_row_to_record(r) for r in fetchall(cur)]

    def create(self, record: AttendanceRecord) -> int:
        # The unique key (user_id, work_date) rejects a concurrent duplicate;
        # db_cursor turns that into DuplicateRecordError.
        placeholders = ",".join(["%s"] * len(_WRITE_COLUMNS))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"INSERT INTO attendance_records({', '.join(_WRITE_COLUMNS)}) VALUES({placeholders})",
                _record_params(record),
            )
            return int(cur.lastrowid)

    def update(self, record: AttendanceRecord) -> bool:
        if record.attendance_id is None:
            raise ValueError("update() needs a persisted record")
        assignments = ", ".join(f"{c}=%s" for c in _WRITE_COLUMNS)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"UPDATE attendance_records SET {assignments} WHERE attendance_id=%s",
                _record_params(record) + (int(record.attendance_id),),
            )
            return cur.rowcount > 0

    def upsert(self, record: AttendanceRecord) -> int:
        placeholders = ",".join(["%s"] * len(_WRITE_COLUMNS))
        updates = ", ".join(f"{c}=VALUES({c})" for c in _WRITE_COLUMNS if c not in {"user_id", "work_date"})
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                INSERT INTO attendance_records({', '.join(_WRITE_COLUMNS)}) VALUES({placeholders})
                ON DUPLICATE KEY UPDATE attendance_id=LAST_INSERT_ID(attendance_id), {updates}
                """,
                _record_params(record),
            )
            return int(cur.lastrowid)
