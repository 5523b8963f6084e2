#!/usr/bin/env python
"""Register the first administrator employee."""

import asyncio
import sys
from pathlib import Path

# Add src directory to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from skills_audit_api.config import get_settings
from skills_audit_api.models.domain.employee import EmployeeRole
from skills_audit_api.repositories.record_store import Collection, SqlRecordStore


async def create_admin(external_id: str, email: str, name: str) -> bool:
    """Create an admin employee, or promote an existing one."""
    settings = get_settings()
    engine = create_async_engine(settings.async_database_url, echo=False)
    store = SqlRecordStore(
        async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False),
        timeout=settings.store_timeout_seconds,
    )

    try:
        existing = await store.query(Collection.EMPLOYEES, "external_id", external_id)
        if existing:
            employee = existing[0]
            if employee.is_admin:
                print(f"Employee {email} is already an admin")
                return False
            await store.update(
                Collection.EMPLOYEES, employee.id, {"role": EmployeeRole.ADMIN.value}
            )
            print(f"Employee {email} promoted to admin")
            return True

        await store.create(
            Collection.EMPLOYEES,
            {
                "external_id": external_id,
                "name": name,
                "email": email.lower(),
                "role": EmployeeRole.ADMIN.value,
                "is_active": True,
            },
        )
        print(f"Admin employee created: {email}")
        return True
    finally:
        await engine.dispose()


if __name__ == "__main__":
    import argparse
    parser = argparse.ArgumentParser(description="Register an administrator employee")
    parser.add_argument("--external-id", required=True, help="Identity provider subject")
    parser.add_argument("--email", required=True, help="Email address")
    parser.add_argument("--name", required=True, help="Full name")
    args = parser.parse_args()

    asyncio.run(create_admin(args.external_id, args.email, args.name))
