from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..core.enums import AttendanceMode, AttendanceSource, AttendanceStatus
from ..geo.geofence import GeoPoint


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one attendance record per (user, tenant-local day).

    ``work_date`` is the ``YYYY-MM-DD`` string in the company's timezone, not
    an instant. All ``*_time``/``*_at`` fields are timezone-aware UTC.
    """

    user_id: int
    company_id: int
    work_date: str
    status: AttendanceStatus = AttendanceStatus.NOT_STARTED
    mode: AttendanceMode = AttendanceMode.OFFICE
    source: AttendanceSource = AttendanceSource.GPS_FACE
    punch_in_time: Optional[datetime] = None
    punch_out_time: Optional[datetime] = None
    break_start_at: Optional[datetime] = None
    total_break_minutes: int = 0
    net_work_hours: float = 0.0
    in_image: str = ""
    out_image: str = ""
    location: Optional[GeoPoint] = None
    face_matched: bool = False
    daily_report: str = ""
    planned_tasks: str = ""
    is_manual_entry: bool = False
    added_by: Optional[int] = None
    remarks: str = ""
    is_edited: bool = False
    edited_by: Optional[int] = None
    attendance_id: Optional[int] = field(default=None, compare=False)

    @property
    def is_open(self) -> bool:
        """Punched in and not yet out."""
        return self.punch_in_time is not None and self.punch_out_time is None

    def to_dict(self) -> dict:
        def iso(v: Optional[datetime]) -> Optional[str]:
            return v.isoformat() if v else None

        return {
            "attendance_id": self.attendance_id,
            "user_id": self.user_id,
            "company_id": self.company_id,
            "date": self.work_date,
            "status": self.status.value,
            "mode": self.mode.value,
            "source": self.source.value,
            "punch_in_time": iso(self.punch_in_time),
            "punch_out_time": iso(self.punch_out_time),
            "break_start_at": iso(self.break_start_at),
            "total_break_minutes": self.total_break_minutes,
            "net_work_hours": self.net_work_hours,
            "in_image": self.in_image,
            "out_image": self.out_image,
            "location": self.location.as_dict() if self.location else None,
            "face_matched": self.face_matched,
            "daily_report": self.daily_report,
            "planned_tasks": self.planned_tasks,
            "is_manual_entry": self.is_manual_entry,
            "added_by": self.added_by,
            "remarks": self.remarks,
            "is_edited": self.is_edited,
            "edited_by": self.edited_by,
        }


_DATE_SEARCH = re.compile(r"^\d{4}-\d{2}-\d{2}$")


@dataclass(frozen=True)
class AttendanceSearch:
    """HR list filter: a ``YYYY-MM-DD`` term matches the date, anything else
    is a case-insensitive substring of status or mode."""

    work_date: Optional[str] = None
    text: str = ""

    @classmethod
    def parse(cls, raw: Optional[str]) -> "AttendanceSearch":
        term = (raw or "").strip()
        if _DATE_SEARCH.match(term):
            return cls(work_date=term)
        return cls(text=term)

    @property
    def is_empty(self) -> bool:
        return self.work_date is None and not self.text

    def matches(self, rec: AttendanceRecord) -> bool:
        if self.work_date is not None:
            return rec.work_date == self.work_date
        if not self.text:
            return True
        needle = self.text.lower()
        return needle in rec.status.value.lower() or needle in rec.mode.value.lower()
