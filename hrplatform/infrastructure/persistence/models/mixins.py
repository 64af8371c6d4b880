"""
Column mixins shared by catalog and tenant database models.

Catalog tables use CuidMixin + TimestampMixin, and TenantMixin when the row
belongs to a registered tenant. Tenant database tables get the same id and
timestamp columns through tenant_schema.base.TenantModel.
"""
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String
from sqlalchemy.orm import Mapped, declared_attr, mapped_column
from sqlalchemy.sql import func

from hrplatform.shared.utils.generators import generate_cuid

CUID_LENGTH = 32


class CuidMixin:
    """String primary key filled client-side with a CUID"""

    id: Mapped[str] = mapped_column(
        String(CUID_LENGTH), primary_key=True, default=generate_cuid
    )


class TenantMixin:
    """
    Catalog rows owned by a tenant (provisioning jobs, schema state).

    Removing a tenant from the catalog removes these rows with it.
    """

    @declared_attr
    def tenant_id(cls) -> Mapped[str]:
        return mapped_column(
            String(CUID_LENGTH),
            ForeignKey("tenant.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        )


class TimestampMixin:
    # Server-side defaults so rows inserted through Core seeds get them too
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )


class SoftDeleteMixin:
    """
    Tombstone column for HR records that must outlive their removal
    (terminated employees, superseded documents).

    Live rows: .where(Model.deleted_at.is_(None))
    """

    deleted_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True, index=True
    )
