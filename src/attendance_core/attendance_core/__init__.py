"""Attendance verification and payroll-accrual engine.

Feature modules (face, geo, attendance, leaves, holidays, payroll) each keep
their domain model, repository interface, MySQL repository and service apart,
with a thin Flask controller layer on top.
"""
