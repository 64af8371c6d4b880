"""
Register and provision a tenant from the command line.

Usage:
    python -m scripts.register_tenant "Acme Inc" admin@acme.com --password 'S3cure-pass' \
        --legal-name "Acme Incorporated" --country US --time-zone America/New_York --currency USD
"""
import asyncio
import sys

from pydantic import ValidationError

from hrplatform.application.dtos.tenant_registration import RegisterTenantRequest
from hrplatform.application.services.tenant_provisioning_service import \
    TenantProvisioningService
from hrplatform.domain.exceptions import PlatformException
from hrplatform.infrastructure.config.settings import get_settings
from hrplatform.infrastructure.persistence.database import (create_catalog_engine,
                                                           create_session_factory)
from hrplatform.shared.telemetry.logging import setup_logging


async def register_tenant(request: RegisterTenantRequest) -> int:
    settings = get_settings()
    engine = create_catalog_engine(settings)
    try:
        async with create_session_factory(engine)() as session:
            service = TenantProvisioningService.from_settings(session, settings)
            try:
                response = await service.register_tenant(request)
            except PlatformException as e:
                print(f"❌ {e.message}")
                for key, value in e.details.items():
                    print(f"   {key}: {value}")
                return 1
    finally:
        await engine.dispose()

    print("✅ " + response.message)
    print(f"  Tenant ID:   {response.tenant_id}")
    print(f"  Tenant Code: {response.tenant_code}")
    print(f"  Login URL:   {response.login_url}")
    return 0


def main():
    """CLI entry point"""
    import argparse

    parser = argparse.ArgumentParser(
        description="Register a new tenant and provision its database",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("company_name", help="Company display name")
    parser.add_argument("admin_email", help="Email of the first administrator")
    parser.add_argument("--password", required=True, help="Administrator password (min 8 chars)")
    parser.add_argument("--legal-name", help="Registered legal name (defaults to company name)")
    parser.add_argument("--country", default="US")
    parser.add_argument("--time-zone", default="UTC")
    parser.add_argument("--currency", default="USD")
    parser.add_argument("--admin-name", default="Admin", help="Administrator full name")

    args = parser.parse_args()
    setup_logging()

    try:
        request = RegisterTenantRequest(
            company_name=args.company_name,
            legal_name=args.legal_name or args.company_name,
            country=args.country,
            time_zone=args.time_zone,
            currency=args.currency,
            admin_email=args.admin_email,
            admin_password=args.password,
            admin_full_name=args.admin_name,
        )
    except ValidationError as e:
        print(f"❌ Invalid registration:\n{e}")
        sys.exit(2)

    sys.exit(asyncio.run(register_tenant(request)))


if __name__ == "__main__":
    main()
