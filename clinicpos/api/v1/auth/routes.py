from typing import List

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from clinicpos.api.deps import get_current_user
from clinicpos.api.v1.auth.schemas import (
    ActivityLogCreate,
    ActivityLogResponse,
    ChangePasswordRequest,
    LoginRequest,
    LoginResponse,
    RoleCreate,
    RoleResponse,
    RoleUpdate,
    UserCreate,
    UserListItem,
    UserProfile,
    UserResponse,
    UserUpdate,
)
from clinicpos.api.v1.schemas import SuccessResponse
from clinicpos.core.config import settings
from clinicpos.domain.auth.models import User
from clinicpos.domain.auth.service import (
    ActivityLogService,
    AuthenticationService,
    RoleService,
    UserService,
)
from clinicpos.infrastructure.database import get_db

router = APIRouter(prefix="/auth", tags=["Authentication"])
users_router = APIRouter(prefix="/users", tags=["Users"])
roles_router = APIRouter(prefix="/roles", tags=["Roles"])
activity_router = APIRouter(prefix="/activity-logs", tags=["Activity Logs"])


@router.post("/login", response_model=LoginResponse)
async def login(login_data: LoginRequest, response: Response, db: AsyncSession = Depends(get_db)):
    """Authenticate with username and password; the token is also set as a cookie"""
    auth_service = AuthenticationService(db)
    user, token = await auth_service.authenticate(login_data.username, login_data.password)

    response.set_cookie(
        key=settings.AUTH_COOKIE_NAME,
        value=token,
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite="lax",
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
    )
    profile = await auth_service.profile(user)
    return LoginResponse(**profile, access_token=token)


@router.post("/logout", response_model=SuccessResponse)
async def logout(response: Response):
    response.delete_cookie(settings.AUTH_COOKIE_NAME)
    return SuccessResponse()


@router.get("/me", response_model=UserProfile)
async def me(current_user: User = Depends(get_current_user), db: AsyncSession = Depends(get_db)):
    return await AuthenticationService(db).profile(current_user)


@router.post("/change-password", response_model=SuccessResponse)
async def change_password(
    request: ChangePasswordRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    await AuthenticationService(db).change_password(
        request.user_id, request.current_password, request.new_password
    )
    return SuccessResponse()


# Users
@users_router.get("", response_model=List[UserListItem])
async def list_users(db: AsyncSession = Depends(get_db)):
    return await UserService(db).list_users()


@users_router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    user_in: UserCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    return await UserService(db).create_user(user_in.model_dump(), actor=current_user)


@users_router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: int,
    user_in: UserUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    return await UserService(db).update_user(user_id, user_in.model_dump(exclude_unset=True), actor=current_user)


@users_router.delete("/{user_id}", response_model=SuccessResponse)
async def delete_user(
    user_id: int,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    await UserService(db).delete_user(user_id, actor=current_user)
    return SuccessResponse()


# Roles
@roles_router.get("", response_model=List[RoleResponse])
async def list_roles(db: AsyncSession = Depends(get_db)):
    return await RoleService(db).list_roles()


@roles_router.post("", response_model=RoleResponse, status_code=status.HTTP_201_CREATED)
async def create_role(
    role_in: RoleCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    return await RoleService(db).create_role(role_in.model_dump(), actor=current_user)


@roles_router.put("/{role_id}", response_model=RoleResponse)
async def update_role(
    role_id: int,
    role_in: RoleUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    return await RoleService(db).update_role(role_id, role_in.model_dump(exclude_unset=True), actor=current_user)


@roles_router.delete("/{role_id}", response_model=SuccessResponse)
async def delete_role(
    role_id: int,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    await RoleService(db).delete_role(role_id, actor=current_user)
    return SuccessResponse()


# Activity log
@activity_router.get("", response_model=List[ActivityLogResponse])
async def list_activity_logs(
    limit: int = Query(100, ge=1, le=1000),
    db: AsyncSession = Depends(get_db)
):
    return await ActivityLogService(db).recent(limit)


@activity_router.post("", response_model=ActivityLogResponse, status_code=status.HTTP_201_CREATED)
async def create_activity_log(log_in: ActivityLogCreate, db: AsyncSession = Depends(get_db)):
    return await ActivityLogService(db).create(log_in.model_dump())


@activity_router.delete("", response_model=SuccessResponse)
async def clear_activity_logs(db: AsyncSession = Depends(get_db)):
    await ActivityLogService(db).clear()
    return SuccessResponse()
