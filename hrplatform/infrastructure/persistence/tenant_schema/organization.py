"""Organization structure: locations, departments and positions."""
from sqlalchemy import Boolean, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from hrplatform.infrastructure.persistence.tenant_schema.base import TenantBase, TenantModel


class Location(TenantModel, TenantBase):
    __tablename__ = "location"

    name: Mapped[str] = mapped_column(String(200), unique=True, nullable=False)
    address: Mapped[str | None] = mapped_column(Text, nullable=True)
    city: Mapped[str | None] = mapped_column(String(100), nullable=True)
    country: Mapped[str | None] = mapped_column(String(100), nullable=True)
    is_headquarters: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)


class Department(TenantModel, TenantBase):
    __tablename__ = "department"

    code: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    # Self-reference; null for top-level departments
    parent_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("department.id", ondelete="SET NULL"), nullable=True, index=True
    )
    location_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("location.id", ondelete="SET NULL"), nullable=True
    )


class Position(TenantModel, TenantBase):
    __tablename__ = "position"

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    department_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("department.id", ondelete="SET NULL"), nullable=True, index=True
    )
    grade_level: Mapped[int | None] = mapped_column(Integer, nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
