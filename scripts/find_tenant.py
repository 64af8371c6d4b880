"""
Look up the tenant an administrator email was registered with, or list
every tenant when no email is given.

Usage:
    python -m scripts.find_tenant admin@acme.com
    python -m scripts.find_tenant
"""
import asyncio

from hrplatform.infrastructure.config.settings import get_settings
from hrplatform.infrastructure.persistence.catalog import TenantCatalog
from hrplatform.infrastructure.persistence.database import (create_catalog_engine,
                                                           create_session_factory)


async def list_tenants():
    settings = get_settings()
    engine = create_catalog_engine(settings)
    try:
        async with create_session_factory(engine)() as session:
            tenants = await TenantCatalog(session).list_all()
    finally:
        await engine.dispose()

    if not tenants:
        print("No tenants registered")
    for tenant in tenants:
        print(f"📦 {tenant.code:<12} {tenant.status:<12} {tenant.company_name} <{tenant.admin_email}>")


async def find_tenant(email: str):
    settings = get_settings()
    engine = create_catalog_engine(settings)
    try:
        async with create_session_factory(engine)() as session:
            catalog = TenantCatalog(session)
            tenant = await catalog.get_by_admin_email(email)
            if tenant is None:
                print(f"No tenant registered for {email}")
                return

            print(f"📦 {tenant.company_name} ({tenant.code})")
            print(f"  Status:   {tenant.status}")
            print(f"  Database: {tenant.db_name} on {tenant.db_host}:{tenant.db_port}")
            for job in await catalog.list_jobs(tenant.id):
                print(f"  Job {job.id}: {job.status} (started {job.started_at:%Y-%m-%d %H:%M:%S})")
                if job.last_error:
                    print(f"    failed at {job.failed_step}: {job.last_error}")
    finally:
        await engine.dispose()


def main():
    """CLI entry point"""
    import argparse

    parser = argparse.ArgumentParser(description="Find a tenant by administrator email")
    parser.add_argument("email", nargs="?", help="Administrator email (omit to list all tenants)")
    args = parser.parse_args()

    if args.email:
        asyncio.run(find_tenant(args.email))
    else:
        asyncio.run(list_tenants())


if __name__ == "__main__":
    main()
