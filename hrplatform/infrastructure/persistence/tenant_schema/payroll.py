"""Salary structures, payroll runs and payslips, with the default salary components."""
from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import (Boolean, CheckConstraint, Date, DateTime, ForeignKey, Numeric,
                        String, UniqueConstraint)
from sqlalchemy.orm import Mapped, mapped_column

from hrplatform.domain.enums import SalaryComponentType
from hrplatform.infrastructure.persistence.tenant_schema.base import (
    EmployeeOwnedMixin, TenantBase, TenantModel)


class SalaryComponent(TenantModel, TenantBase):
    __tablename__ = "salary_component"

    code: Mapped[str] = mapped_column(String(20), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    component_type: Mapped[str] = mapped_column(String(20), nullable=False)
    is_taxable: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    taxable_percentage: Mapped[Decimal] = mapped_column(Numeric(5, 2), nullable=False, default=100)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    __table_args__ = (
        CheckConstraint(
            f"component_type IN {tuple(SalaryComponentType.values())}",
            name="salary_component_type_check",
        ),
    )


class EmployeeSalary(EmployeeOwnedMixin, TenantModel, TenantBase):
    __tablename__ = "employee_salary"

    basic_salary: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    currency: Mapped[str] = mapped_column(String(10), nullable=False)
    effective_from: Mapped[date] = mapped_column(Date, nullable=False)
    effective_to: Mapped[date | None] = mapped_column(Date, nullable=True)


class EmployeeSalaryComponent(TenantModel, TenantBase):
    __tablename__ = "employee_salary_component"

    employee_salary_id: Mapped[str] = mapped_column(
        String, ForeignKey("employee_salary.id", ondelete="CASCADE"), nullable=False
    )
    salary_component_id: Mapped[str] = mapped_column(
        String, ForeignKey("salary_component.id", ondelete="RESTRICT"), nullable=False
    )
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)

    __table_args__ = (
        UniqueConstraint(
            "employee_salary_id", "salary_component_id", name="uq_employee_salary_component"
        ),
    )


class PayrollRun(TenantModel, TenantBase):
    __tablename__ = "payroll_run"

    period_start: Mapped[date] = mapped_column(Date, nullable=False)
    period_end: Mapped[date] = mapped_column(Date, nullable=False)
    status: Mapped[str] = mapped_column(String(30), nullable=False, default="draft")
    processed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    __table_args__ = (UniqueConstraint("period_start", "period_end", name="uq_payroll_run_period"),)


class Payslip(EmployeeOwnedMixin, TenantModel, TenantBase):
    __tablename__ = "payslip"

    payroll_run_id: Mapped[str] = mapped_column(
        String, ForeignKey("payroll_run.id", ondelete="CASCADE"), nullable=False
    )
    gross_pay: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=0)
    total_deductions: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=0)
    net_pay: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=0)

    __table_args__ = (UniqueConstraint("payroll_run_id", "employee_id", name="uq_payslip_run_employee"),)


class PayslipLine(TenantModel, TenantBase):
    __tablename__ = "payslip_line"

    payslip_id: Mapped[str] = mapped_column(
        String, ForeignKey("payslip.id", ondelete="CASCADE"), nullable=False, index=True
    )
    salary_component_id: Mapped[str] = mapped_column(
        String, ForeignKey("salary_component.id", ondelete="RESTRICT"), nullable=False
    )
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)


_EARNING = SalaryComponentType.EARNING.value
_DEDUCTION = SalaryComponentType.DEDUCTION.value

DEFAULT_SALARY_COMPONENTS = [
    # Earnings
    {"code": "BASIC", "name": "Basic Salary", "component_type": _EARNING, "taxable_percentage": 100},
    {"code": "HRA", "name": "House Rent Allowance", "component_type": _EARNING, "taxable_percentage": 50},
    {"code": "TA", "name": "Transport Allowance", "component_type": _EARNING, "taxable_percentage": 100},
    {"code": "MA", "name": "Medical Allowance", "component_type": _EARNING, "taxable_percentage": 0},
    {"code": "BONUS", "name": "Bonus", "component_type": _EARNING, "taxable_percentage": 100},
    {"code": "OT", "name": "Overtime", "component_type": _EARNING, "taxable_percentage": 100},
    # Deductions
    {"code": "TAX", "name": "Income Tax", "component_type": _DEDUCTION, "is_taxable": False, "taxable_percentage": 0},
    {"code": "INS", "name": "Insurance", "component_type": _DEDUCTION, "is_taxable": False, "taxable_percentage": 0},
    {"code": "LOAN", "name": "Loan Repayment", "component_type": _DEDUCTION, "is_taxable": False, "taxable_percentage": 0},
    {"code": "PF", "name": "Provident Fund", "component_type": _DEDUCTION, "is_taxable": False, "taxable_percentage": 0},
]
