"""Training courses, sessions, enrollments and certifications."""
from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import (Date, DateTime, ForeignKey, Numeric, String, Text,
                        UniqueConstraint)
from sqlalchemy.orm import Mapped, mapped_column

from hrplatform.infrastructure.persistence.tenant_schema.base import (
    EmployeeOwnedMixin, TenantBase, TenantModel)


class TrainingCourse(TenantModel, TenantBase):
    __tablename__ = "training_course"

    code: Mapped[str] = mapped_column(String(30), unique=True, nullable=False)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    duration_hours: Mapped[Decimal | None] = mapped_column(Numeric(6, 2), nullable=True)


class TrainingSession(TenantModel, TenantBase):
    __tablename__ = "training_session"

    training_course_id: Mapped[str] = mapped_column(
        String, ForeignKey("training_course.id", ondelete="CASCADE"), nullable=False, index=True
    )
    starts_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    ends_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    location: Mapped[str | None] = mapped_column(String(200), nullable=True)
    trainer: Mapped[str | None] = mapped_column(String(200), nullable=True)


class TrainingEnrollment(EmployeeOwnedMixin, TenantModel, TenantBase):
    __tablename__ = "training_enrollment"

    training_session_id: Mapped[str] = mapped_column(
        String, ForeignKey("training_session.id", ondelete="CASCADE"), nullable=False
    )
    status: Mapped[str] = mapped_column(String(30), nullable=False, default="enrolled")
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    score: Mapped[Decimal | None] = mapped_column(Numeric(5, 2), nullable=True)

    __table_args__ = (
        UniqueConstraint("employee_id", "training_session_id", name="uq_training_enrollment"),
    )


class Certification(EmployeeOwnedMixin, TenantModel, TenantBase):
    __tablename__ = "certification"

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    issuer: Mapped[str | None] = mapped_column(String(200), nullable=True)
    issued_on: Mapped[date | None] = mapped_column(Date, nullable=True)
    expires_on: Mapped[date | None] = mapped_column(Date, nullable=True)
