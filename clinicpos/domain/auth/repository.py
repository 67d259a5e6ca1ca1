from typing import List, Optional, Tuple

from sqlalchemy import delete, select

from clinicpos.domain.auth.models import ActivityLog, Role, User
from clinicpos.domain.base import BaseRepository


class RoleRepository(BaseRepository[Role]):
    """Repository for role data access operations"""
    model = Role
    default_order = Role.name.asc()

    async def get_by_name(self, name: str) -> Optional[Role]:
        result = await self.db.execute(select(Role).where(Role.name == name))
        return result.scalar_one_or_none()


class UserRepository(BaseRepository[User]):
    """Repository for user data access operations"""
    model = User
    default_order = User.username.asc()

    async def get_by_username(self, username: str) -> Optional[User]:
        result = await self.db.execute(select(User).where(User.username == username))
        return result.scalar_one_or_none()

    async def get_all_with_roles(self) -> List[Tuple[User, Optional[str]]]:
        """Users paired with their role name (None when unassigned)"""
        result = await self.db.execute(
            select(User, Role.name)
            .outerjoin(Role, Role.id == User.role_id)
            .order_by(User.created_at.desc(), User.id.desc())
        )
        return [(user, role_name) for user, role_name in result.all()]


class ActivityLogRepository(BaseRepository[ActivityLog]):
    model = ActivityLog

    async def get_recent(self, limit: int = 100) -> List[ActivityLog]:
        result = await self.db.execute(
            select(ActivityLog)
            .order_by(ActivityLog.created_at.desc(), ActivityLog.id.desc())
            .limit(limit)
        )
        return list(result.scalars().all())

    async def clear(self) -> None:
        await self.db.execute(delete(ActivityLog))
        await self.db.commit()
