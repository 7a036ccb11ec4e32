"""Create an admin account, or reset the password of an existing one."""

import argparse
import asyncio
import getpass
import sys

from sqlalchemy import func, select

from reelfolio.database import AsyncSessionLocal
from reelfolio.models.admin_user import AdminUser
from reelfolio.services.admin_auth import hash_password

MIN_PASSWORD_LENGTH = 10


async def create_admin(email: str, password: str, name: str | None = None) -> AdminUser:
    email = email.strip().lower()
    async with AsyncSessionLocal() as session:
        result = await session.execute(select(AdminUser).where(func.lower(AdminUser.email) == email))
        admin = result.scalar_one_or_none()

        if admin is None:
            admin = AdminUser(email=email, name=name, password_hash=hash_password(password))
            session.add(admin)
            print(f"Created admin {email}")
        else:
            admin.password_hash = hash_password(password)
            if name:
                admin.name = name
            print(f"Updated password for {email}")

        await session.commit()
        return admin


def main() -> None:
    parser = argparse.ArgumentParser(description="Create or update a CMS admin account.")
    parser.add_argument("email", help="Admin login email")
    parser.add_argument("--name", default=None, help="Display name")
    args = parser.parse_args()

    password = getpass.getpass("Password: ")
    if len(password) < MIN_PASSWORD_LENGTH:
        print(f"Password must be at least {MIN_PASSWORD_LENGTH} characters", file=sys.stderr)
        sys.exit(1)
    if password != getpass.getpass("Repeat password: "):
        print("Passwords don't match", file=sys.stderr)
        sys.exit(1)

    asyncio.run(create_admin(args.email, password, args.name))


if __name__ == "__main__":
    main()
