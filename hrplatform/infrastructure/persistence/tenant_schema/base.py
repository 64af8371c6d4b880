"""
Declarative base and mixins for tenant database models.

Tenant tables live on their own metadata so they are never created in the
control-plane catalog, and vice versa.

Self-referencing hierarchies (department parent, employee reports-to, goal
parent, document category parent) are plain nullable foreign keys; no ORM
relationship graph is declared.
"""
from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import DeclarativeBase, Mapped, declared_attr, mapped_column

from hrplatform.infrastructure.persistence.models.mixins import (
    CuidMixin, TimestampMixin)


class TenantBase(DeclarativeBase):
    """Base class for tables inside a tenant database"""

    pass


class TenantModel(CuidMixin, TimestampMixin):
    """
    Standard columns for tenant tables.

    Provides:
        - id: CUID primary key
        - created_at: Creation timestamp
        - updated_at: Last update timestamp
    """

    pass


class EmployeeOwnedMixin:
    """
    Mixin for records owned by an employee.

    Provides:
        - employee_id: Foreign key to employee with cascade delete

    Usage:
        class LeaveBalance(EmployeeOwnedMixin, TenantModel, TenantBase):
            __tablename__ = "leave_balance"
    """

    @declared_attr
    def employee_id(cls) -> Mapped[str]:
        return mapped_column(
            String,
            ForeignKey("employee.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        )
