"""Company announcements and read receipts."""
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from hrplatform.infrastructure.persistence.tenant_schema.base import TenantBase, TenantModel


class Announcement(TenantModel, TenantBase):
    __tablename__ = "announcement"

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    body: Mapped[str] = mapped_column(Text, nullable=False)
    published_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    expires_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    author_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("user.id", ondelete="SET NULL"), nullable=True
    )
    # Null targets the whole company
    department_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("department.id", ondelete="SET NULL"), nullable=True
    )


class AnnouncementRead(TenantModel, TenantBase):
    __tablename__ = "announcement_read"

    announcement_id: Mapped[str] = mapped_column(
        String, ForeignKey("announcement.id", ondelete="CASCADE"), nullable=False
    )
    user_id: Mapped[str] = mapped_column(
        String, ForeignKey("user.id", ondelete="CASCADE"), nullable=False
    )
    read_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    __table_args__ = (
        UniqueConstraint("announcement_id", "user_id", name="uq_announcement_read"),
    )
