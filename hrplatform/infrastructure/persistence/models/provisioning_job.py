from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from hrplatform.domain.enums import ProvisioningJobStatus
from hrplatform.infrastructure.persistence.database import Base
from hrplatform.infrastructure.persistence.models.mixins import (
    CuidMixin, TenantMixin, TimestampMixin)


class ProvisioningJob(CuidMixin, TenantMixin, TimestampMixin, Base):
    """
    One provisioning attempt for a tenant.

    Created in_progress together with the tenant row; its terminal state
    (completed or failed) is written exactly once.
    """

    __tablename__ = "provisioning_job"

    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=ProvisioningJobStatus.IN_PROGRESS.value, index=True
    )
    started_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    last_error: Mapped[str | None] = mapped_column(String(2000), nullable=True)
    failed_step: Mapped[str | None] = mapped_column(String(50), nullable=True)

    __table_args__ = (
        CheckConstraint(
            f"status IN {tuple(ProvisioningJobStatus.values())}",
            name="provisioning_job_status_check",
        ),
    )
