"""
Identity tables: users, roles, permissions and their assignments.

Also holds the default permission catalog and roles seeded into every
tenant database.
"""
from datetime import datetime
from typing import TypedDict

from sqlalchemy import Boolean, DateTime, ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from hrplatform.infrastructure.persistence.tenant_schema.base import TenantBase, TenantModel

COMPANY_ADMIN_ROLE = "CompanyAdmin"


class User(TenantModel, TenantBase):
    """
    Login identity inside a tenant.

    Email is stored lower-cased; lookups compare case-insensitively.
    """

    __tablename__ = "user"

    email: Mapped[str] = mapped_column(String(256), unique=True, nullable=False, index=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    full_name: Mapped[str] = mapped_column(String(200), nullable=False)
    email_confirmed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    last_login_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)


class Role(TenantModel, TenantBase):
    __tablename__ = "role"

    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_system: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False
    )  # System roles cannot be modified or deleted


class Permission(TenantModel, TenantBase):
    __tablename__ = "permission"

    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)  # e.g. 'leave.approve'
    module: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)


class UserRole(TenantModel, TenantBase):
    __tablename__ = "user_role"

    user_id: Mapped[str] = mapped_column(
        String, ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    role_id: Mapped[str] = mapped_column(
        String, ForeignKey("role.id", ondelete="CASCADE"), nullable=False, index=True
    )

    __table_args__ = (UniqueConstraint("user_id", "role_id", name="uq_user_role"),)


class RolePermission(TenantModel, TenantBase):
    __tablename__ = "role_permission"

    role_id: Mapped[str] = mapped_column(
        String, ForeignKey("role.id", ondelete="CASCADE"), nullable=False, index=True
    )
    permission_id: Mapped[str] = mapped_column(
        String, ForeignKey("permission.id", ondelete="CASCADE"), nullable=False
    )

    __table_args__ = (UniqueConstraint("role_id", "permission_id", name="uq_role_permission"),)


class RefreshToken(TenantModel, TenantBase):
    __tablename__ = "refresh_token"

    user_id: Mapped[str] = mapped_column(
        String, ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    token_hash: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    revoked_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)


class RoleData(TypedDict):
    """Type definition for role configuration"""

    description: str
    permissions: list[str]


# (name, module, description)
SYSTEM_PERMISSIONS = [
    # Employees
    ("employees.view", "Employees", "View employees"),
    ("employees.create", "Employees", "Create employees"),
    ("employees.edit", "Employees", "Edit employees"),
    ("employees.delete", "Employees", "Delete employees"),
    # Attendance
    ("attendance.view", "Attendance", "View attendance"),
    ("attendance.manage", "Attendance", "Manage attendance"),
    # Leave
    ("leave.view", "Leave", "View leave"),
    ("leave.request", "Leave", "Request leave"),
    ("leave.approve", "Leave", "Approve leave"),
    ("leave.manage", "Leave", "Manage leave"),
    # Payroll
    ("payroll.view", "Payroll", "View payroll"),
    ("payroll.manage", "Payroll", "Manage payroll"),
    # Reports
    ("reports.view", "Reports", "View reports"),
    ("reports.export", "Reports", "Export reports"),
    # Settings
    ("settings.view", "Settings", "View settings"),
    ("settings.manage", "Settings", "Manage settings"),
    # Recruiting
    ("recruiting.view", "Recruiting", "View recruiting"),
    ("recruiting.manage", "Recruiting", "Manage recruiting"),
    # Performance
    ("performance.view", "Performance", "View performance"),
    ("performance.manage", "Performance", "Manage performance"),
    # Training
    ("training.view", "Training", "View training"),
    ("training.manage", "Training", "Manage training"),
]


# Default roles with permission grants ("*" = everything, "leave.*" = whole module)
DEFAULT_ROLES: dict[str, RoleData] = {
    COMPANY_ADMIN_ROLE: {
        "description": "Company Administrator with full access",
        "permissions": ["*"],
    },
    "HRManager": {
        "description": "HR Manager",
        "permissions": [
            "employees.*",
            "attendance.*",
            "leave.*",
            "payroll.view",
            "reports.*",
            "recruiting.*",
            "performance.*",
            "training.*",
        ],
    },
    "DepartmentManager": {
        "description": "Department Manager",
        "permissions": [
            "employees.view",
            "attendance.view",
            "leave.view",
            "leave.approve",
            "performance.*",
            "reports.view",
        ],
    },
    "HiringManager": {
        "description": "Hiring Manager",
        "permissions": ["recruiting.*", "employees.view"],
    },
    "Manager": {
        "description": "Manager",
        "permissions": [
            "employees.view",
            "attendance.view",
            "leave.view",
            "leave.approve",
            "performance.view",
        ],
    },
    "Employee": {
        "description": "Employee",
        "permissions": ["leave.view", "leave.request", "attendance.view", "training.view"],
    },
}

PERMISSION_ROWS = [
    {"name": name, "module": module, "description": description}
    for name, module, description in SYSTEM_PERMISSIONS
]

ROLE_ROWS = [
    {"name": name, "description": data["description"], "is_system": True}
    for name, data in DEFAULT_ROLES.items()
]

ROLE_GRANTS = {name: data["permissions"] for name, data in DEFAULT_ROLES.items()}
