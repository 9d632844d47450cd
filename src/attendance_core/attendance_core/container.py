from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .companies.mysql_company_repository import MySQLCompanyRepository
from .companies.repository import CompanyRepository
from .core import constants
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .face.cache import DescriptorCache
from .face.verifier import FaceVerifier
from .holidays.mysql_holiday_repository import MySQLHolidayRepository
from .holidays.repository import HolidayRepository
from .holidays.service import HolidayService
from .leaves.mysql_leave_repository import MySQLLeaveRepository
from .leaves.reconciler import LeaveReconciler
from .leaves.repository import LeaveRepository
from .leaves.service import LeaveService
from .payroll.service import PayrollService
from .storage.photo_store import BackgroundPhotoWriter, LocalPhotoStore


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    employees_repo: EmployeeRepository
    companies_repo: CompanyRepository
    attendance_repo: AttendanceRepository
    leaves_repo: LeaveRepository
    holidays_repo: HolidayRepository

    face_verifier: FaceVerifier
    photo_writer: Optional[BackgroundPhotoWriter]

    attendance_service: AttendanceService
    leave_service: LeaveService
    holiday_service: HolidayService
    payroll_service: PayrollService


def assemble(
    *,
    employees_repo: EmployeeRepository,
    companies_repo: CompanyRepository,
    attendance_repo: AttendanceRepository,
    leaves_repo: LeaveRepository,
    holidays_repo: HolidayRepository,
    photo_writer: Optional[BackgroundPhotoWriter] = None,
    conn: Optional[DatabaseConnection] = None,
    face_match_threshold: float = constants.FACE_MATCH_THRESHOLD,
    descriptor_cache_size: int = constants.DESCRIPTOR_CACHE_SIZE,
    default_geofence_radius: float = constants.DEFAULT_GEOFENCE_RADIUS_M,
    max_photo_bytes: int = constants.MAX_PHOTO_BYTES,
) -> Container:
    """Wire services over any repository implementation (MySQL or in-memory)."""
    face_verifier = FaceVerifier(
        stored_cache=DescriptorCache(descriptor_cache_size),
        incoming_cache=DescriptorCache(descriptor_cache_size),
        threshold=face_match_threshold,
    )

    attendance_service = AttendanceService(
        attendance_repo,
        employees_repo,
        companies_repo,
        face_verifier=face_verifier,
        photo_writer=photo_writer,
        max_photo_bytes=max_photo_bytes,
        default_geofence_radius=default_geofence_radius,
    )
    leave_service = LeaveService(leaves_repo, employees_repo, companies_repo, LeaveReconciler(attendance_repo))
    holiday_service = HolidayService(holidays_repo, attendance_repo, employees_repo)
    payroll_service = PayrollService(attendance_repo, holidays_repo, leaves_repo, employees_repo, companies_repo)

    return Container(
        conn=conn,
        employees_repo=employees_repo,
        companies_repo=companies_repo,
        attendance_repo=attendance_repo,
        leaves_repo=leaves_repo,
        holidays_repo=holidays_repo,
        face_verifier=face_verifier,
        photo_writer=photo_writer,
        attendance_service=attendance_service,
        leave_service=leave_service,
        holiday_service=holiday_service,
        payroll_service=payroll_service,
    )


def build_container(settings: Any) -> Container:
    """Production wiring from a settings module (see ``config``)."""
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(getattr(settings, "DB_CONFIG")))

    upload_dir = getattr(settings, "UPLOAD_DIR", "uploads/images")
    photo_writer = BackgroundPhotoWriter(
        LocalPhotoStore(upload_dir),
        max_workers=int(getattr(settings, "PHOTO_WRITER_WORKERS", 2)),
    )

    return assemble(
        employees_repo=MySQLEmployeeRepository(conn),
        companies_repo=MySQLCompanyRepository(
            conn, default_time_zone=getattr(settings, "DEFAULT_TIME_ZONE", constants.DEFAULT_TIME_ZONE)
        ),
        attendance_repo=MySQLAttendanceRepository(conn),
        leaves_repo=MySQLLeaveRepository(conn),
        holidays_repo=MySQLHolidayRepository(conn),
        photo_writer=photo_writer,
        conn=conn,
        face_match_threshold=float(getattr(settings, "FACE_MATCH_THRESHOLD", constants.FACE_MATCH_THRESHOLD)),
        descriptor_cache_size=int(getattr(settings, "DESCRIPTOR_CACHE_SIZE", constants.DESCRIPTOR_CACHE_SIZE)),
        default_geofence_radius=float(
            getattr(settings, "DEFAULT_GEOFENCE_RADIUS_M", constants.DEFAULT_GEOFENCE_RADIUS_M)
        ),
        max_photo_bytes=int(getattr(settings, "MAX_PHOTO_BYTES", constants.MAX_PHOTO_BYTES)),
    )
