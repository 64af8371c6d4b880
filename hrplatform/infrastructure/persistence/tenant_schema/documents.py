"""Document categories and stored documents, with the default categories."""
from sqlalchemy import BigInteger, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from hrplatform.infrastructure.persistence.models.mixins import SoftDeleteMixin
from hrplatform.infrastructure.persistence.tenant_schema.base import TenantBase, TenantModel


class DocumentCategory(TenantModel, TenantBase):
    __tablename__ = "document_category"

    name: Mapped[str] = mapped_column(String(200), unique=True, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    # Self-reference for nested categories
    parent_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("document_category.id", ondelete="SET NULL"), nullable=True
    )


class Document(SoftDeleteMixin, TenantModel, TenantBase):
    __tablename__ = "document"

    document_category_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("document_category.id", ondelete="SET NULL"), nullable=True, index=True
    )
    # Null for company-wide documents
    employee_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("employee.id", ondelete="CASCADE"), nullable=True, index=True
    )
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    file_name: Mapped[str] = mapped_column(String(255), nullable=False)
    storage_path: Mapped[str] = mapped_column(String(500), nullable=False)
    content_type: Mapped[str | None] = mapped_column(String(100), nullable=True)
    size_bytes: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    uploaded_by: Mapped[str | None] = mapped_column(
        String, ForeignKey("user.id", ondelete="SET NULL"), nullable=True
    )


DEFAULT_DOCUMENT_CATEGORIES = [
    {"name": "Personal Documents", "description": "ID cards, certificates and personal records"},
    {"name": "Employment Documents", "description": "Contracts, offer letters and employment records"},
    {"name": "Policies", "description": "Company policies and handbooks"},
    {"name": "Training Materials", "description": "Training guides and course materials"},
    {"name": "Templates", "description": "Document templates"},
]
