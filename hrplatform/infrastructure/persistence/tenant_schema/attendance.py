"""Shifts, daily attendance, timesheets and overtime."""
from datetime import date, datetime, time
from decimal import Decimal

from sqlalchemy import (Date, DateTime, ForeignKey, Numeric, String, Text, Time,
                        UniqueConstraint)
from sqlalchemy.orm import Mapped, mapped_column

from hrplatform.infrastructure.persistence.tenant_schema.base import (
    EmployeeOwnedMixin, TenantBase, TenantModel)


class Shift(TenantModel, TenantBase):
    __tablename__ = "shift"

    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    start_time: Mapped[time] = mapped_column(Time, nullable=False)
    end_time: Mapped[time] = mapped_column(Time, nullable=False)


class AttendanceRecord(EmployeeOwnedMixin, TenantModel, TenantBase):
    __tablename__ = "attendance_record"

    work_date: Mapped[date] = mapped_column(Date, nullable=False)
    shift_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("shift.id", ondelete="SET NULL"), nullable=True
    )
    check_in: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    check_out: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    status: Mapped[str] = mapped_column(String(30), nullable=False, default="present")

    __table_args__ = (
        UniqueConstraint("employee_id", "work_date", name="uq_attendance_employee_date"),
    )


class Timesheet(EmployeeOwnedMixin, TenantModel, TenantBase):
    __tablename__ = "timesheet"

    period_start: Mapped[date] = mapped_column(Date, nullable=False)
    period_end: Mapped[date] = mapped_column(Date, nullable=False)
    total_hours: Mapped[Decimal] = mapped_column(Numeric(8, 2), nullable=False, default=0)
    status: Mapped[str] = mapped_column(String(30), nullable=False, default="draft")


class OvertimeRequest(EmployeeOwnedMixin, TenantModel, TenantBase):
    __tablename__ = "overtime_request"

    work_date: Mapped[date] = mapped_column(Date, nullable=False)
    hours: Mapped[Decimal] = mapped_column(Numeric(6, 2), nullable=False)
    reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(String(30), nullable=False, default="pending")
