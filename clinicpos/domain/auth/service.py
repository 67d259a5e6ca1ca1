from typing import Any, Dict, List, Optional, Tuple

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from clinicpos.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from clinicpos.core.permissions import has_permission, merge_permissions
from clinicpos.core.security import (
    create_access_token,
    get_password_hash,
    is_password_hashed,
    verify_password,
    verify_token,
)
from clinicpos.domain.auth.models import ActivityLog, Role, User
from clinicpos.domain.auth.repository import ActivityLogRepository, RoleRepository, UserRepository


class ActivityLogService:
    """Append-only audit trail of administrative changes"""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.repo = ActivityLogRepository(db)

    async def log(
        self,
        action: str,
        module: str,
        description: str,
        actor: Optional[User] = None,
        metadata: Optional[Dict[str, Any]] = None
    ) -> ActivityLog:
        return await self.repo.create({
            "action": action,
            "module": module,
            "description": description,
            "user_id": actor.id if actor else None,
            "user_name": actor.full_name if actor else None,
            "details": metadata,
        })

    async def create(self, data: Dict[str, Any]) -> ActivityLog:
        data = dict(data)
        data["details"] = data.pop("metadata", None)
        return await self.repo.create(data)

    async def recent(self, limit: int = 100) -> List[ActivityLog]:
        return await self.repo.get_recent(limit)

    async def clear(self) -> None:
        await self.repo.clear()


class AuthenticationService:
    """Service layer for authentication operations"""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.user_repo = UserRepository(db)
        self.role_repo = RoleRepository(db)

    async def authenticate(self, username: Optional[str], password: Optional[str]) -> Tuple[User, str]:
        """Check credentials and issue an access token"""
        if not username or not password:
            raise ValidationError("Username and password are required")

        user = await self.user_repo.get_by_username(username)
        if not user or not verify_password(password, user.password):
            logger.warning(f"Failed login attempt for '{username}'")
            raise AuthenticationError("Invalid username or password")

        if not user.is_active:
            raise AuthorizationError("Account is deactivated", error_code="ACCOUNT_DEACTIVATED")

        if not is_password_hashed(user.password):
            # Legacy plaintext row: upgrade in place now that we know the password
            user = await self.user_repo.update(user, {"password": get_password_hash(password)})
            logger.info(f"Upgraded legacy password hash for user {user.username}")

        token = create_access_token(str(user.id), {"username": user.username})
        logger.info(f"User {user.username} logged in")
        return user, token

    async def get_user_from_token(self, token: Optional[str]) -> User:
        if not token:
            raise AuthenticationError()
        payload = verify_token(token)
        if not payload or not payload.get("sub"):
            raise AuthenticationError()

        try:
            user_id = int(payload["sub"])
        except (TypeError, ValueError):
            raise AuthenticationError()

        user = await self.user_repo.get_by_id(user_id)
        if not user or not user.is_active:
            raise AuthenticationError()
        return user

    async def get_role(self, user: User) -> Optional[Role]:
        if user.role_id is None:
            return None
        return await self.role_repo.get_by_id(user.role_id)

    async def profile(self, user: User) -> Dict[str, Any]:
        role = await self.get_role(user)
        return {
            "id": user.id,
            "username": user.username,
            "full_name": user.full_name,
            "email": user.email,
            "role_id": user.role_id,
            "role": role.name if role else "User",
            "permissions": merge_permissions(role.permissions if role else None),
        }

    async def check_permission(self, user: User, module: str, action: str) -> None:
        role = await self.get_role(user)
        role_name = role.name if role else None
        perms = merge_permissions(role.permissions if role else None)
        if not has_permission(perms, module, action, role_name):
            logger.info(f"Denied {action} on {module} for user {user.username}")
            raise AuthorizationError()

    async def change_password(
        self,
        user_id: Optional[int],
        current_password: Optional[str],
        new_password: Optional[str]
    ) -> None:
        if not user_id or not current_password or not new_password:
            raise ValidationError("user_id, current_password and new_password are required")

        user = await self.user_repo.get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")

        if not verify_password(current_password, user.password):
            raise AuthenticationError("Current password is incorrect")

        await self.user_repo.update(user, {"password": get_password_hash(new_password)})
        logger.info(f"Password changed for user {user.username}")


class UserService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.repo = UserRepository(db)
        self.activity = ActivityLogService(db)

    async def list_users(self) -> List[Dict[str, Any]]:
        rows = await self.repo.get_all_with_roles()
        return [{**user_to_dict(user), "role_name": role_name} for user, role_name in rows]

    async def get_user(self, user_id: int) -> User:
        user = await self.repo.get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")
        return user

    async def create_user(self, data: Dict[str, Any], actor: Optional[User] = None) -> User:
        if await self.repo.get_by_username(data["username"]):
            raise ConflictError("Username already exists")

        data = dict(data)
        data["password"] = get_password_hash(data["password"])
        user = await self.repo.create(data)
        await self.activity.log("create", "User Management", f"Created user {user.username}", actor)
        return user

    async def update_user(self, user_id: int, data: Dict[str, Any], actor: Optional[User] = None) -> User:
        user = await self.get_user(user_id)
        data = dict(data)

        if data.get("password"):
            data["password"] = get_password_hash(data["password"])
        else:
            data.pop("password", None)

        new_username = data.get("username")
        if new_username and new_username != user.username and await self.repo.get_by_username(new_username):
            raise ConflictError("Username already exists")

        user = await self.repo.update(user, data)
        await self.activity.log("update", "User Management", f"Updated user {user.username}", actor)
        return user

    async def delete_user(self, user_id: int, actor: Optional[User] = None) -> None:
        user = await self.get_user(user_id)
        username = user.username
        await self.repo.delete(user)
        await self.activity.log("delete", "User Management", f"Deleted user {username}", actor)


class RoleService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.repo = RoleRepository(db)
        self.activity = ActivityLogService(db)

    async def list_roles(self) -> List[Role]:
        return await self.repo.get_all()

    async def get_role(self, role_id: int) -> Role:
        role = await self.repo.get_by_id(role_id)
        if not role:
            raise NotFoundError("Role not found")
        return role

    async def create_role(self, data: Dict[str, Any], actor: Optional[User] = None) -> Role:
        if await self.repo.get_by_name(data["name"]):
            raise ConflictError("Role already exists")
        role = await self.repo.create(data)
        await self.activity.log("create", "Role Management", f"Created role {role.name}", actor)
        return role

    async def update_role(self, role_id: int, data: Dict[str, Any], actor: Optional[User] = None) -> Role:
        role = await self.get_role(role_id)
        role = await self.repo.update(role, data)
        await self.activity.log("update", "Role Management", f"Updated role {role.name}", actor)
        return role

    async def delete_role(self, role_id: int, actor: Optional[User] = None) -> None:
        role = await self.get_role(role_id)
        name = role.name
        await self.repo.delete(role)
        await self.activity.log("delete", "Role Management", f"Deleted role {name}", actor)


def user_to_dict(user: User) -> Dict[str, Any]:
    """Public user fields; the password column never leaves the service"""
    return {
        "id": user.id,
        "username": user.username,
        "full_name": user.full_name,
        "email": user.email,
        "phone": user.phone,
        "role_id": user.role_id,
        "is_active": user.is_active,
        "created_at": user.created_at,
    }
