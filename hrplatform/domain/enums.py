"""Domain enumerations for the HR platform control plane."""

from enum import Enum


class TenantStatus(str, Enum):
    """Lifecycle of a tenant in the control-plane catalog"""

    PROVISIONING = "provisioning"
    ACTIVE = "active"
    SUSPENDED = "suspended"

    @classmethod
    def values(cls) -> list[str]:
        return [status.value for status in cls]

    @property
    def is_terminal(self) -> bool:
        return self is not TenantStatus.PROVISIONING


class ProvisioningJobStatus(str, Enum):
    """Lifecycle of a single provisioning attempt"""

    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    FAILED = "failed"

    @classmethod
    def values(cls) -> list[str]:
        return [status.value for status in cls]

    @property
    def is_terminal(self) -> bool:
        return self is not ProvisioningJobStatus.IN_PROGRESS


class ProvisioningStep(str, Enum):
    """Saga steps run after the tenant is registered in the catalog"""

    CREATE_DATABASE = "create_database"
    WAIT_FOR_DATABASE = "wait_for_database"
    APPLY_SCHEMA = "apply_schema"
    BOOTSTRAP_IDENTITY = "bootstrap_identity"
    NOTIFY_ADMIN = "notify_admin"
    ACTIVATE_TENANT = "activate_tenant"


class SalaryComponentType(str, Enum):
    EARNING = "earning"
    DEDUCTION = "deduction"

    @classmethod
    def values(cls) -> list[str]:
        return [component_type.value for component_type in cls]
