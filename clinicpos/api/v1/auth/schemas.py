from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import AliasChoices, BaseModel, EmailStr, Field, field_validator

from clinicpos.api.v1.schemas import ORMModel, PartialUpdate
from clinicpos.core.permissions import PermissionMap, merge_permissions


class LoginRequest(BaseModel):
    """Both fields optional so a missing one is reported as a 400 by the service"""
    username: Optional[str] = None
    password: Optional[str] = None


class UserProfile(BaseModel):
    id: int
    username: str
    full_name: str
    email: Optional[str] = None
    role_id: Optional[int] = None
    role: str = "User"
    permissions: PermissionMap = {}


class LoginResponse(UserProfile):
    access_token: str
    token_type: str = "bearer"


class ChangePasswordRequest(BaseModel):
    user_id: Optional[int] = None
    current_password: Optional[str] = None
    new_password: Optional[str] = Field(None, min_length=1)


class UserCreate(BaseModel):
    username: str = Field(..., min_length=1, max_length=100)
    password: str = Field(..., min_length=1)
    full_name: str = Field(..., min_length=1)
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    role_id: Optional[int] = None
    is_active: bool = True


class UserUpdate(PartialUpdate):
    non_nullable = ("username", "password", "full_name", "is_active")

    username: Optional[str] = Field(None, min_length=1, max_length=100)
    password: Optional[str] = None
    full_name: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    role_id: Optional[int] = None
    is_active: Optional[bool] = None


class UserResponse(ORMModel):
    id: int
    username: str
    full_name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    role_id: Optional[int] = None
    is_active: bool
    created_at: Optional[datetime] = None


class UserListItem(UserResponse):
    role_name: Optional[str] = None


class RoleCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None
    permissions: Dict[str, Dict[str, bool]] = {}


class RoleUpdate(PartialUpdate):
    non_nullable = ("name",)

    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = None
    permissions: Optional[Dict[str, Dict[str, bool]]] = None


class RoleResponse(ORMModel):
    id: int
    name: str
    description: Optional[str] = None
    permissions: PermissionMap
    created_at: Optional[datetime] = None

    @field_validator("permissions", mode="before")
    @classmethod
    def normalize_permissions(cls, v: Any) -> PermissionMap:
        return merge_permissions(v)


class ActivityLogCreate(BaseModel):
    action: str = Field(..., min_length=1)
    module: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    user_id: Optional[int] = None
    user_name: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None


class ActivityLogResponse(ORMModel):
    id: int
    action: str
    module: str
    description: str
    user_id: Optional[int] = None
    user_name: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = Field(None, validation_alias=AliasChoices("details", "metadata"))
    created_at: Optional[datetime] = None
