from sqlalchemy import String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from hrplatform.infrastructure.persistence.database import Base
from hrplatform.infrastructure.persistence.models.mixins import (
    CuidMixin, TenantMixin, TimestampMixin)


class TenantSchemaState(CuidMixin, TenantMixin, TimestampMixin, Base):
    """Schema version and last module applied to a tenant's database"""

    __tablename__ = "tenant_schema_state"

    schema_version: Mapped[str] = mapped_column(String(50), nullable=False)
    last_applied_module: Mapped[str] = mapped_column(String(100), nullable=False)

    __table_args__ = (UniqueConstraint("tenant_id", name="uq_tenant_schema_state_tenant"),)
