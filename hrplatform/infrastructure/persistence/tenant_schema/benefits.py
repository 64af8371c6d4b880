"""Benefit plans and employee enrollments."""
from datetime import date
from decimal import Decimal

from sqlalchemy import Date, ForeignKey, Numeric, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from hrplatform.infrastructure.persistence.tenant_schema.base import (
    EmployeeOwnedMixin, TenantBase, TenantModel)


class BenefitPlan(TenantModel, TenantBase):
    __tablename__ = "benefit_plan"

    code: Mapped[str] = mapped_column(String(30), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    provider: Mapped[str | None] = mapped_column(String(200), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    employee_cost: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=0)
    employer_cost: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=0)


class BenefitEnrollment(EmployeeOwnedMixin, TenantModel, TenantBase):
    __tablename__ = "benefit_enrollment"

    benefit_plan_id: Mapped[str] = mapped_column(
        String, ForeignKey("benefit_plan.id", ondelete="CASCADE"), nullable=False
    )
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    status: Mapped[str] = mapped_column(String(30), nullable=False, default="active")

    __table_args__ = (
        UniqueConstraint("employee_id", "benefit_plan_id", name="uq_enrollment_employee_plan"),
    )


class BenefitEnrollmentDependent(TenantModel, TenantBase):
    __tablename__ = "benefit_enrollment_dependent"

    benefit_enrollment_id: Mapped[str] = mapped_column(
        String, ForeignKey("benefit_enrollment.id", ondelete="CASCADE"), nullable=False
    )
    dependent_id: Mapped[str] = mapped_column(
        String, ForeignKey("employee_dependent.id", ondelete="CASCADE"), nullable=False
    )

    __table_args__ = (
        UniqueConstraint(
            "benefit_enrollment_id", "dependent_id", name="uq_enrollment_dependent"
        ),
    )
