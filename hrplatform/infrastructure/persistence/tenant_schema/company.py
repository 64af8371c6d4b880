"""Company-wide settings, holidays and work schedules."""
from datetime import date, time

from sqlalchemy import Boolean, Date, Integer, String, Time, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from hrplatform.infrastructure.persistence.tenant_schema.base import TenantBase, TenantModel


class CompanySetting(TenantModel, TenantBase):
    __tablename__ = "company_setting"

    company_name: Mapped[str] = mapped_column(String(200), nullable=False)
    legal_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    country: Mapped[str | None] = mapped_column(String(100), nullable=True)
    time_zone: Mapped[str | None] = mapped_column(String(100), nullable=True)
    currency: Mapped[str | None] = mapped_column(String(10), nullable=True)
    fiscal_year_start_month: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    logo_url: Mapped[str | None] = mapped_column(String(500), nullable=True)


class Holiday(TenantModel, TenantBase):
    __tablename__ = "holiday"

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    holiday_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    is_recurring: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    __table_args__ = (UniqueConstraint("name", "holiday_date", name="uq_holiday_name_date"),)


class WorkSchedule(TenantModel, TenantBase):
    __tablename__ = "work_schedule"

    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    start_time: Mapped[time] = mapped_column(Time, nullable=False)
    end_time: Mapped[time] = mapped_column(Time, nullable=False)
    working_days: Mapped[str] = mapped_column(
        String(50), nullable=False, default="MON,TUE,WED,THU,FRI"
    )
    is_default: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
