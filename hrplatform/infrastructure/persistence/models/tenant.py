from sqlalchemy import CheckConstraint, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from hrplatform.domain.enums import TenantStatus
from hrplatform.infrastructure.persistence.database import Base
from hrplatform.infrastructure.persistence.models.mixins import (
    CuidMixin, TimestampMixin)


class Tenant(CuidMixin, TimestampMixin, Base):
    """
    Catalog entry for one tenant and the coordinates of its database.

    Note: Tenant does not have a tenant_id since it is the root of the hierarchy.
    A tenant is never deleted; failed provisioning leaves it suspended.
    """

    __tablename__ = "tenant"

    # Business fields
    code: Mapped[str] = mapped_column(String(50), unique=True, nullable=False, index=True)
    company_name: Mapped[str] = mapped_column(String(200), nullable=False)
    legal_name: Mapped[str] = mapped_column(String(200), nullable=False)
    country: Mapped[str] = mapped_column(String(100), nullable=False)
    time_zone: Mapped[str] = mapped_column(String(100), nullable=False)
    currency: Mapped[str] = mapped_column(String(10), nullable=False)
    # Stored lower-cased; uniqueness spans all tenant databases and is checked at registration
    admin_email: Mapped[str] = mapped_column(String(256), nullable=False, index=True)

    # Tenant database coordinates
    db_name: Mapped[str] = mapped_column(String(63), nullable=False)
    db_host: Mapped[str] = mapped_column(String(255), nullable=False)
    db_port: Mapped[int] = mapped_column(Integer, nullable=False)

    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=TenantStatus.PROVISIONING.value, index=True
    )

    __table_args__ = (
        CheckConstraint(f"status IN {tuple(TenantStatus.values())}", name="tenant_status_check"),
    )
