"""Review cycles, reviews, goals and feedback."""
from datetime import date
from decimal import Decimal

from sqlalchemy import Date, ForeignKey, Integer, Numeric, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from hrplatform.infrastructure.persistence.tenant_schema.base import (
    EmployeeOwnedMixin, TenantBase, TenantModel)


class ReviewCycle(TenantModel, TenantBase):
    __tablename__ = "review_cycle"

    name: Mapped[str] = mapped_column(String(200), unique=True, nullable=False)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    status: Mapped[str] = mapped_column(String(30), nullable=False, default="draft")


class PerformanceReview(EmployeeOwnedMixin, TenantModel, TenantBase):
    __tablename__ = "performance_review"

    review_cycle_id: Mapped[str] = mapped_column(
        String, ForeignKey("review_cycle.id", ondelete="CASCADE"), nullable=False
    )
    reviewer_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("employee.id", ondelete="SET NULL"), nullable=True
    )
    rating: Mapped[Decimal | None] = mapped_column(Numeric(3, 1), nullable=True)
    comments: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(String(30), nullable=False, default="pending")

    __table_args__ = (
        UniqueConstraint("employee_id", "review_cycle_id", name="uq_review_employee_cycle"),
    )


class Goal(EmployeeOwnedMixin, TenantModel, TenantBase):
    __tablename__ = "goal"

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    # Self-reference for cascaded goals
    parent_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("goal.id", ondelete="SET NULL"), nullable=True
    )
    due_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    progress: Mapped[int] = mapped_column(Integer, nullable=False, default=0)  # percent
    status: Mapped[str] = mapped_column(String(30), nullable=False, default="open")


class Feedback(TenantModel, TenantBase):
    __tablename__ = "feedback"

    from_employee_id: Mapped[str] = mapped_column(
        String, ForeignKey("employee.id", ondelete="CASCADE"), nullable=False
    )
    to_employee_id: Mapped[str] = mapped_column(
        String, ForeignKey("employee.id", ondelete="CASCADE"), nullable=False, index=True
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
