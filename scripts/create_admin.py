#!/usr/bin/env python3
"""
Script to create the first admin account.

If an account with the email already exists it is promoted to admin and
keeps its password. Otherwise a new admin is created, with a generated
password unless one is given.

Usage:
  python scripts/create_admin.py --email admin@example.com --name "Shelter Admin"
"""

import asyncio
import secrets
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from petadoption.application.errors import AppError
from petadoption.application.use_cases.auth import register_user
from petadoption.config.settings import get_settings
from petadoption.domain.value_objects.role import Role
from petadoption.infrastructure.auth.password import PasswordHasher
from petadoption.infrastructure.db.session import (
    SQLAlchemyUnitOfWork,
    create_engine,
    create_session_factory,
)


async def create_admin(email: str, name: str, password: str | None) -> None:
    settings = get_settings()
    engine = create_engine(settings.database_url)
    session_factory = create_session_factory(engine)
    password_hasher = PasswordHasher()

    try:
        uow = SQLAlchemyUnitOfWork(session_factory)
        async with uow:
            existing_user = await uow.users.get_by_email(email)
            if existing_user:
                if existing_user.role is Role.ADMIN:
                    print(f"ℹ️  {email} is already an admin (ID: {existing_user.id})")
                    return
                await uow.users.update(existing_user.id, {"role": Role.ADMIN})
                await uow.commit()
                print(f"\n✅ Existing user {email} promoted to admin (ID: {existing_user.id})")
                print("   User can log in with their current password")
                return

        generated = password is None
        password = password or secrets.token_urlsafe(16)
        uow = SQLAlchemyUnitOfWork(session_factory)
        async with uow:
            user = await register_user.execute(
                uow=uow,
                payload=register_user.RegisterUserInput(
                    name=name, email=email, password=password, role=Role.ADMIN
                ),
                password_hasher=password_hasher,
                allow_admin_signup=True,
            )

        print("\n✅ Admin created successfully!")
        print(f"   User ID: {user.id}")
        print(f"   Email: {user.email}")
        if generated:
            print(f"\n🔑 Generated password: {password}")
            print("   Change it after the first login")
    except AppError as exc:
        print(f"\n❌ Error creating admin: {exc.message}")
        sys.exit(1)
    finally:
        await engine.dispose()


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Create or promote an admin account")
    parser.add_argument("--email", required=True, help="Email of the admin")
    parser.add_argument("--name", default="Administrator", help="Display name")
    parser.add_argument("--password", help="Password (optional, generated when omitted)")

    args = parser.parse_args()
    if args.password is not None and len(args.password) < 6:
        print("❌ Error: password must be at least 6 characters")
        sys.exit(1)

    print("=" * 60)
    print("🚀 Admin Creator - Pet Adoption API")
    print("=" * 60)

    asyncio.run(create_admin(args.email, args.name, args.password))

    print("\n" + "=" * 60)
    print("✨ Process completed")
    print("=" * 60)
