"""
Domain exceptions for the HR platform control plane.

This module defines domain-level exceptions that represent business rule violations.
These exceptions are independent of infrastructure concerns.
"""

from typing import Any


class PlatformException(Exception):
    """
    Base exception for all HR platform errors.

    All custom exceptions should inherit from this class to allow
    for consistent error handling and logging.

    Attributes:
        message: Human-readable error description
        error_code: Machine-readable error code for API responses
        details: Additional error context
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class TenantNotFoundException(PlatformException):
    """Raised when tenant is not found."""

    def __init__(self, tenant_id: str):
        super().__init__(
            f"Tenant not found: {tenant_id}",
            "TENANT_NOT_FOUND",
            {"tenant_id": tenant_id},
        )


class PreflightConflictError(PlatformException):
    """
    Registration rejected before any durable side effect.

    Raised by duplicate checks; no catalog row, job, or database exists
    for the rejected request.
    """

    def __init__(self, message: str, error_code: str, details: dict[str, Any]):
        super().__init__(message, error_code, details)


class TenantCodeConflictError(PreflightConflictError):
    """Raised when the generated tenant code is already registered."""

    def __init__(self, tenant_code: str):
        super().__init__(
            f"Tenant code already exists: {tenant_code}",
            "TENANT_CODE_CONFLICT",
            {"tenant_code": tenant_code},
        )


class AdminEmailConflictError(PreflightConflictError):
    """Raised when the admin email is already a user in an active tenant."""

    def __init__(self, email: str, tenant_code: str):
        super().__init__(
            f"Email already registered: {email}",
            "ADMIN_EMAIL_CONFLICT",
            {"email": email, "tenant_code": tenant_code},
        )


class TenantProvisioningError(PlatformException):
    """
    Provisioning failed after the tenant was registered in the catalog.

    By the time this is raised the job is marked failed and the tenant
    suspended. The underlying error is chained as __cause__.
    """

    def __init__(self, tenant_code: str, step: str, reason: str):
        self.tenant_code = tenant_code
        self.step = step
        self.reason = reason
        super().__init__(
            f"Provisioning of tenant {tenant_code} failed at step '{step}': {reason}",
            "TENANT_PROVISIONING_FAILED",
            {"tenant_code": tenant_code, "step": step, "reason": reason},
        )


class InvalidStatusTransitionError(PlatformException):
    """Raised when a tenant or job status change violates the lifecycle."""

    def __init__(self, entity: str, entity_id: str, current: str, target: str):
        super().__init__(
            f"Cannot move {entity} {entity_id} from '{current}' to '{target}'",
            "INVALID_STATUS_TRANSITION",
            {"entity": entity, "entity_id": entity_id, "current": current, "target": target},
        )
