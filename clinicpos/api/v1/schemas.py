from typing import Any, ClassVar, List, Tuple

from pydantic import BaseModel, ConfigDict, model_validator


class ORMModel(BaseModel):
    """Base for responses built from SQLAlchemy rows"""
    model_config = ConfigDict(from_attributes=True)


class PartialUpdate(BaseModel):
    """
    Body of a partial update, dumped with ``exclude_unset=True``.

    Omitted fields are left alone. An explicit ``null`` is accepted only
    for columns that may be cleared; fields named in ``non_nullable`` back
    NOT NULL columns and reject it.
    """
    non_nullable: ClassVar[Tuple[str, ...]] = ()

    @model_validator(mode="before")
    @classmethod
    def reject_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            cleared = [name for name in cls.non_nullable if name in data and data[name] is None]
            if cleared:
                raise ValueError(f"{', '.join(cleared)} cannot be null")
        return data


class SuccessResponse(BaseModel):
    success: bool = True


class BulkDeleteRequest(BaseModel):
    ids: List[int] = []


class BulkDeleteResponse(BaseModel):
    success: bool = True
    deleted: int
