"""
Shared data-access helpers for the domain repositories.

Every table keys on an integer ``id``; repositories subclass
``BaseRepository`` and set ``model``.
"""

from typing import Any, Dict, Generic, Iterable, List, Optional, Type, TypeVar

from sqlalchemy import delete, func, inspect, select
from sqlalchemy.ext.asyncio import AsyncSession

from clinicpos.core.exceptions import ValidationError
from clinicpos.infrastructure.database import Base

ModelT = TypeVar("ModelT", bound=Base)


def model_to_dict(obj: Base, **extra: Any) -> Dict[str, Any]:
    """Column attributes of a mapped object, plus any joined-in extras"""
    data = {attr.key: getattr(obj, attr.key) for attr in inspect(obj).mapper.column_attrs}
    data.update(extra)
    return data


class BaseRepository(Generic[ModelT]):
    """Generic CRUD operations over one model"""

    model: Type[ModelT]
    # An ordering expression such as ``Model.name.asc()``; a bare mapped
    # attribute here would bind to the repository as a descriptor.
    default_order = None

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, data: Dict[str, Any]) -> ModelT:
        obj = self.model(**data)
        self.db.add(obj)
        await self.db.commit()
        await self.db.refresh(obj)
        return obj

    async def add(self, data: Dict[str, Any]) -> ModelT:
        """Stage a new row and flush it for its id; the caller commits"""
        obj = self.model(**data)
        self.db.add(obj)
        await self.db.flush()
        return obj

    async def get_by_id(self, obj_id: int) -> Optional[ModelT]:
        result = await self.db.execute(select(self.model).where(self.model.id == obj_id))
        return result.scalar_one_or_none()

    async def get_all(self, order_by=None) -> List[ModelT]:
        query = select(self.model)
        order = order_by if order_by is not None else self.default_order
        if order is not None:
            query = query.order_by(order)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def update(self, obj: ModelT, data: Dict[str, Any]) -> ModelT:
        for field, value in data.items():
            setattr(obj, field, value)
        await self.db.commit()
        await self.db.refresh(obj)
        return obj

    async def delete(self, obj: ModelT) -> None:
        await self.db.delete(obj)
        await self.db.commit()

    async def delete_by_id(self, obj_id: int) -> None:
        """Delete without loading; a missing row is not an error"""
        await self.db.execute(delete(self.model).where(self.model.id == obj_id))
        await self.db.commit()

    async def delete_many(self, ids: Iterable[int]) -> int:
        ids = list(ids)
        result = await self.db.execute(delete(self.model).where(self.model.id.in_(ids)))
        await self.db.commit()
        return result.rowcount or 0

    async def count(self, *criteria) -> int:
        query = select(func.count()).select_from(self.model)
        if criteria:
            query = query.where(*criteria)
        result = await self.db.execute(query)
        return result.scalar_one()

    async def max_id(self) -> int:
        result = await self.db.execute(select(func.max(self.model.id)))
        return result.scalar() or 0


async def bulk_delete(repo: BaseRepository, ids: List[int]) -> int:
    """Delete the given ids; the count echoes the request"""
    if not ids:
        raise ValidationError("No IDs provided")
    await repo.delete_many(ids)
    return len(ids)
