"""
Tenant administrator notifications.

Email transport is an external concern; the shipped gateway writes the
registration message to the log.
"""
import logging

from hrplatform.shared.telemetry.logging import get_logger


class LoggingNotificationGateway:
    """Notification gateway that logs messages instead of sending them"""

    def __init__(self, logger: logging.Logger | None = None):
        self.logger = logger or get_logger(__name__)

    async def send_tenant_registration_email(
        self, admin_email: str, tenant_code: str, company_name: str, login_url: str
    ) -> None:
        self.logger.info(
            f"Registration email to {admin_email}: {company_name} is ready "
            f"(tenant code {tenant_code}). Sign in at {login_url}"
        )
