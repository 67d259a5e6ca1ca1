"""
Create or reset the administrator account.

    python -m clinicpos.scripts.create_super_admin --password s3cret

The ``admin`` role bypasses every permission check. An existing user with
the same username gets the new password, is re-activated and moved to that
role.
"""

import argparse
import asyncio

from clinicpos.core.permissions import PERMISSION_ACTIONS, PERMISSION_MODULES
from clinicpos.core.security import get_password_hash
from clinicpos.domain.auth.models import User
from clinicpos.domain.auth.repository import RoleRepository, UserRepository
from clinicpos.infrastructure.database import AsyncSessionLocal, close_db, init_db


async def create_super_admin(username: str, password: str, full_name: str) -> User:
    await init_db()
    async with AsyncSessionLocal() as db:
        roles = RoleRepository(db)
        role = await roles.get_by_name("admin")
        all_permissions = {key: {a: True for a in PERMISSION_ACTIONS} for key, _ in PERMISSION_MODULES}
        if role is None:
            role = await roles.create({
                "name": "admin",
                "description": "Super administrator",
                "permissions": all_permissions,
            })
        else:
            role = await roles.update(role, {"permissions": all_permissions})

        users = UserRepository(db)
        data = {
            "password": get_password_hash(password),
            "full_name": full_name,
            "role_id": role.id,
            "is_active": True,
        }
        user = await users.get_by_username(username)
        if user is None:
            user = await users.create({"username": username, **data})
        else:
            user = await users.update(user, data)
        return user


def main() -> None:
    parser = argparse.ArgumentParser(description="Create or reset the ClinicPOS administrator")
    parser.add_argument("--username", default="admin")
    parser.add_argument("--password", required=True)
    parser.add_argument("--full-name", default="Administrator")
    args = parser.parse_args()

    async def run():
        try:
            user = await create_super_admin(args.username, args.password, args.full_name)
            print(f"Administrator '{user.username}' is ready (id={user.id})")
        finally:
            await close_db()

    asyncio.run(run())


if __name__ == "__main__":
    main()
