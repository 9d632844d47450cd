from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Caller roles issued by the identity provider."""

    SUPER_ADMIN = "SuperAdmin"
    COMPANY_ADMIN = "CompanyAdmin"
    ADMIN = "Admin"
    EMPLOYEE = "Employee"

    @property
    def is_hr(self) -> bool:
        return self in {Role.SUPER_ADMIN, Role.COMPANY_ADMIN, Role.ADMIN}


class AttendanceStatus(str, Enum):
    NOT_STARTED = "Not Started"
    PRESENT = "Present"
    COMPLETED = "Completed"
    ON_BREAK = "On Break"
    HALF_DAY = "HalfDay"
    ABSENT = "Absent"
    ON_LEAVE = "On Leave"
    HOLIDAY = "Holiday"


class AttendanceMode(str, Enum):
    OFFICE = "Office"
    WFH = "WFH"
    MANUAL = "Manual"
    PAID_LEAVE = "Paid Leave"
    UNPAID_LEAVE = "Unpaid Leave"
    HOLIDAY = "Holiday"
    LEAVE = "Leave"


class AttendanceSource(str, Enum):
    """How a record was captured."""

    GPS_FACE = "GPS_FACE"
    MANUAL_HR = "MANUAL_HR"
    SYSTEM = "SYSTEM"


class LeaveType(str, Enum):
    PAID = "Paid"
    SICK = "Sick"
    CASUAL = "Casual"
    WFH = "WFH"
    UNPAID = "Unpaid"

    @property
    def is_paid(self) -> bool:
        return self in {LeaveType.PAID, LeaveType.SICK, LeaveType.CASUAL}


class DayType(str, Enum):
    FULL_DAY = "Full Day"
    HALF_DAY = "Half Day"


class RequestStatus(str, Enum):
    """Leave request approval workflow."""

    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"


class CompanyStatus(str, Enum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"
