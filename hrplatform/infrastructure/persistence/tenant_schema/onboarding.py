"""Onboarding and offboarding checklists."""
from datetime import date, datetime

from sqlalchemy import (CheckConstraint, Date, DateTime, ForeignKey, Integer, String,
                        Text)
from sqlalchemy.orm import Mapped, mapped_column

from hrplatform.infrastructure.persistence.tenant_schema.base import (
    EmployeeOwnedMixin, TenantBase, TenantModel)


class ChecklistTemplate(TenantModel, TenantBase):
    __tablename__ = "checklist_template"

    name: Mapped[str] = mapped_column(String(200), unique=True, nullable=False)
    kind: Mapped[str] = mapped_column(String(20), nullable=False, default="onboarding")

    __table_args__ = (
        CheckConstraint("kind IN ('onboarding', 'offboarding')", name="checklist_template_kind_check"),
    )


class ChecklistTemplateTask(TenantModel, TenantBase):
    __tablename__ = "checklist_template_task"

    checklist_template_id: Mapped[str] = mapped_column(
        String, ForeignKey("checklist_template.id", ondelete="CASCADE"), nullable=False, index=True
    )
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    due_offset_days: Mapped[int] = mapped_column(Integer, nullable=False, default=0)


class EmployeeChecklist(EmployeeOwnedMixin, TenantModel, TenantBase):
    __tablename__ = "employee_checklist"

    checklist_template_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("checklist_template.id", ondelete="SET NULL"), nullable=True
    )
    kind: Mapped[str] = mapped_column(String(20), nullable=False)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    status: Mapped[str] = mapped_column(String(30), nullable=False, default="in_progress")


class EmployeeChecklistTask(TenantModel, TenantBase):
    __tablename__ = "employee_checklist_task"

    employee_checklist_id: Mapped[str] = mapped_column(
        String, ForeignKey("employee_checklist.id", ondelete="CASCADE"), nullable=False, index=True
    )
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    due_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
