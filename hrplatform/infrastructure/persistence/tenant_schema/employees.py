"""Employee records and personal details."""
from datetime import date

from sqlalchemy import Boolean, Date, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from hrplatform.infrastructure.persistence.models.mixins import SoftDeleteMixin
from hrplatform.infrastructure.persistence.tenant_schema.base import (
    EmployeeOwnedMixin, TenantBase, TenantModel)


class Employee(SoftDeleteMixin, TenantModel, TenantBase):
    __tablename__ = "employee"

    employee_number: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(256), unique=True, nullable=False)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    date_of_birth: Mapped[date | None] = mapped_column(Date, nullable=True)
    hire_date: Mapped[date] = mapped_column(Date, nullable=False)
    termination_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    employment_type: Mapped[str] = mapped_column(String(30), nullable=False, default="full_time")
    status: Mapped[str] = mapped_column(String(30), nullable=False, default="active", index=True)

    department_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("department.id", ondelete="SET NULL"), nullable=True, index=True
    )
    position_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("position.id", ondelete="SET NULL"), nullable=True
    )
    location_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("location.id", ondelete="SET NULL"), nullable=True
    )
    # Self-reference; null for the top of the reporting chain
    reports_to_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("employee.id", ondelete="SET NULL"), nullable=True, index=True
    )
    user_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("user.id", ondelete="SET NULL"), nullable=True, unique=True
    )


class EmployeeAddress(EmployeeOwnedMixin, TenantModel, TenantBase):
    __tablename__ = "employee_address"

    address_type: Mapped[str] = mapped_column(String(30), nullable=False, default="home")
    line1: Mapped[str] = mapped_column(String(200), nullable=False)
    line2: Mapped[str | None] = mapped_column(String(200), nullable=True)
    city: Mapped[str | None] = mapped_column(String(100), nullable=True)
    postal_code: Mapped[str | None] = mapped_column(String(20), nullable=True)
    country: Mapped[str | None] = mapped_column(String(100), nullable=True)


class EmergencyContact(EmployeeOwnedMixin, TenantModel, TenantBase):
    __tablename__ = "emergency_contact"

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    relationship: Mapped[str | None] = mapped_column(String(50), nullable=True)
    phone: Mapped[str] = mapped_column(String(50), nullable=False)
    is_primary: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)


class EmployeeDependent(EmployeeOwnedMixin, TenantModel, TenantBase):
    __tablename__ = "employee_dependent"

    full_name: Mapped[str] = mapped_column(String(200), nullable=False)
    relationship: Mapped[str] = mapped_column(String(50), nullable=False)
    date_of_birth: Mapped[date | None] = mapped_column(Date, nullable=True)


class EmployeeBankAccount(EmployeeOwnedMixin, TenantModel, TenantBase):
    __tablename__ = "employee_bank_account"

    bank_name: Mapped[str] = mapped_column(String(200), nullable=False)
    account_name: Mapped[str] = mapped_column(String(200), nullable=False)
    account_number: Mapped[str] = mapped_column(String(100), nullable=False)
    branch: Mapped[str | None] = mapped_column(String(200), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
