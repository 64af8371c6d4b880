"""Leave types, balances and requests, with the default leave types."""
from datetime import date
from decimal import Decimal

from sqlalchemy import (Boolean, Date, ForeignKey, Integer, Numeric, String, Text,
                        UniqueConstraint)
from sqlalchemy.orm import Mapped, mapped_column

from hrplatform.infrastructure.persistence.tenant_schema.base import (
    EmployeeOwnedMixin, TenantBase, TenantModel)


class LeaveType(TenantModel, TenantBase):
    __tablename__ = "leave_type"

    code: Mapped[str] = mapped_column(String(10), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    default_days: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_paid: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    requires_approval: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    color: Mapped[str | None] = mapped_column(String(7), nullable=True)  # '#RRGGBB'


class LeaveBalance(EmployeeOwnedMixin, TenantModel, TenantBase):
    __tablename__ = "leave_balance"

    leave_type_id: Mapped[str] = mapped_column(
        String, ForeignKey("leave_type.id", ondelete="CASCADE"), nullable=False
    )
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    entitled_days: Mapped[Decimal] = mapped_column(Numeric(6, 2), nullable=False, default=0)
    used_days: Mapped[Decimal] = mapped_column(Numeric(6, 2), nullable=False, default=0)

    __table_args__ = (
        UniqueConstraint("employee_id", "leave_type_id", "year", name="uq_leave_balance"),
    )


class LeaveRequest(EmployeeOwnedMixin, TenantModel, TenantBase):
    __tablename__ = "leave_request"

    leave_type_id: Mapped[str] = mapped_column(
        String, ForeignKey("leave_type.id", ondelete="RESTRICT"), nullable=False
    )
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    days: Mapped[Decimal] = mapped_column(Numeric(6, 2), nullable=False)
    reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(String(30), nullable=False, default="pending", index=True)
    approver_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("employee.id", ondelete="SET NULL"), nullable=True
    )


DEFAULT_LEAVE_TYPES = [
    {"code": "AL", "name": "Annual Leave", "default_days": 20, "is_paid": True, "color": "#4CAF50"},
    {"code": "SL", "name": "Sick Leave", "default_days": 10, "is_paid": True, "color": "#F44336"},
    {"code": "CL", "name": "Casual Leave", "default_days": 5, "is_paid": True, "color": "#2196F3"},
    {"code": "ML", "name": "Maternity Leave", "default_days": 90, "is_paid": True, "color": "#E91E63"},
    {"code": "PL", "name": "Paternity Leave", "default_days": 5, "is_paid": True, "color": "#9C27B0"},
    {"code": "UL", "name": "Unpaid Leave", "default_days": 0, "is_paid": False, "color": "#9E9E9E"},
    {"code": "CO", "name": "Compensatory Off", "default_days": 0, "is_paid": True, "color": "#FF9800"},
    {"code": "WFH", "name": "Work From Home", "default_days": 0, "is_paid": True, "color": "#00BCD4"},
]
