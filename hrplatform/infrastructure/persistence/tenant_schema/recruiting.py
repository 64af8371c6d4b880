"""Applicant tracking: openings, candidates, applications, interviews, offers."""
from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import (Date, DateTime, ForeignKey, Integer, Numeric, String, Text,
                        UniqueConstraint)
from sqlalchemy.orm import Mapped, mapped_column

from hrplatform.infrastructure.persistence.tenant_schema.base import TenantBase, TenantModel


class JobOpening(TenantModel, TenantBase):
    __tablename__ = "job_opening"

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    department_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("department.id", ondelete="SET NULL"), nullable=True
    )
    position_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("position.id", ondelete="SET NULL"), nullable=True
    )
    hiring_manager_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("employee.id", ondelete="SET NULL"), nullable=True
    )
    openings: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    status: Mapped[str] = mapped_column(String(30), nullable=False, default="draft", index=True)
    closes_on: Mapped[date | None] = mapped_column(Date, nullable=True)


class Candidate(TenantModel, TenantBase):
    __tablename__ = "candidate"

    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(256), unique=True, nullable=False)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    resume_url: Mapped[str | None] = mapped_column(String(500), nullable=True)


class JobApplication(TenantModel, TenantBase):
    __tablename__ = "job_application"

    job_opening_id: Mapped[str] = mapped_column(
        String, ForeignKey("job_opening.id", ondelete="CASCADE"), nullable=False
    )
    candidate_id: Mapped[str] = mapped_column(
        String, ForeignKey("candidate.id", ondelete="CASCADE"), nullable=False
    )
    stage: Mapped[str] = mapped_column(String(30), nullable=False, default="applied")
    applied_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    __table_args__ = (
        UniqueConstraint("job_opening_id", "candidate_id", name="uq_application_opening_candidate"),
    )


class Interview(TenantModel, TenantBase):
    __tablename__ = "interview"

    job_application_id: Mapped[str] = mapped_column(
        String, ForeignKey("job_application.id", ondelete="CASCADE"), nullable=False, index=True
    )
    interviewer_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("employee.id", ondelete="SET NULL"), nullable=True
    )
    scheduled_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    rating: Mapped[int | None] = mapped_column(Integer, nullable=True)
    feedback: Mapped[str | None] = mapped_column(Text, nullable=True)


class JobOffer(TenantModel, TenantBase):
    __tablename__ = "job_offer"

    job_application_id: Mapped[str] = mapped_column(
        String, ForeignKey("job_application.id", ondelete="CASCADE"), nullable=False, unique=True
    )
    salary: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    start_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    status: Mapped[str] = mapped_column(String(30), nullable=False, default="draft")
