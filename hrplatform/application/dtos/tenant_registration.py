from pydantic import BaseModel, Field, field_validator

from hrplatform.domain.value_objects import EmailAddress
from hrplatform.infrastructure.security.password import BCRYPT_MAX_PASSWORD_BYTES

REGISTRATION_SUCCESS_MESSAGE = "Tenant created successfully. Check your email for login details."


class RegisterTenantRequest(BaseModel):
    """Schema for registering a new tenant company"""

    company_name: str = Field(min_length=1, max_length=200)
    legal_name: str = Field(min_length=1, max_length=200)
    country: str = Field(min_length=1, max_length=100)
    time_zone: str = Field(min_length=1, max_length=100)
    currency: str = Field(min_length=1, max_length=10)
    admin_email: str = Field(max_length=256)
    admin_password: str = Field(min_length=8)
    admin_full_name: str = Field(default="Admin", max_length=200)

    @field_validator("admin_email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        """Validate and lower-case the admin email"""
        return EmailAddress.parse(v).value

    @field_validator("admin_password")
    @classmethod
    def validate_password_length(cls, v: str) -> str:
        """bcrypt only accepts passwords up to 72 bytes"""
        if len(v.encode("utf-8")) > BCRYPT_MAX_PASSWORD_BYTES:
            raise ValueError(f"Password must be at most {BCRYPT_MAX_PASSWORD_BYTES} bytes")
        return v


class RegisterTenantResponse(BaseModel):
    """Schema for a successful tenant registration"""

    tenant_id: str
    tenant_code: str
    company_name: str
    login_url: str
    message: str = REGISTRATION_SUCCESS_MESSAGE
