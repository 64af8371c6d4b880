import re
from dataclasses import dataclass

TENANT_CODE_MAX_LENGTH = 12


@dataclass(frozen=True)
class TenantCode:
    """
    Value object for Tenant Code

    Tenant codes are:
    - 4-12 characters
    - uppercase letters and digits only
    - a company-name prefix of at most 8 characters followed by a 4-digit suffix
    """

    value: str

    def __post_init__(self):
        if not isinstance(self.value, str) or not self.value:
            raise ValueError("Tenant code must be a non-empty string")
        if not 4 <= len(self.value) <= TENANT_CODE_MAX_LENGTH:
            raise ValueError(f"Tenant code must be 4-{TENANT_CODE_MAX_LENGTH} characters")
        if not re.match(r"^[A-Z0-9]*[0-9]{4}$", self.value):
            raise ValueError(
                "Tenant code must be uppercase alphanumeric ending in 4 digits "
                "(e.g., 'ACME1234')"
            )

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class EmailAddress:
    """Value object for a normalized (trimmed, lower-cased) email address"""

    value: str

    def __post_init__(self):
        if not isinstance(self.value, str) or not self.value:
            raise ValueError("Email must be a non-empty string")
        if not re.match(r"^[^@\s]+@[^@\s]+$", self.value):
            raise ValueError("Email must look like name@domain")
        if self.value != self.value.strip().lower():
            raise ValueError("Email must be normalized; use EmailAddress.parse")

    @classmethod
    def parse(cls, raw: str) -> "EmailAddress":
        return cls(raw.strip().lower())

    def __str__(self) -> str:
        return self.value
