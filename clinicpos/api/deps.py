from typing import Optional

from fastapi import Depends, Query, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from clinicpos.core.config import settings
from clinicpos.core.permissions import method_to_action, resolve_module, should_skip_permission_check
from clinicpos.domain.auth.models import User
from clinicpos.domain.auth.service import AuthenticationService
from clinicpos.infrastructure.database import get_db
from clinicpos.utils.date_range import DateRange, get_date_range

bearer_scheme = HTTPBearer(auto_error=False)


def extract_token(request: Request, credentials: Optional[HTTPAuthorizationCredentials]) -> Optional[str]:
    """Bearer header first, then the session cookie set at login"""
    if credentials and credentials.credentials:
        return credentials.credentials
    return request.cookies.get(settings.AUTH_COOKIE_NAME)


async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db)
) -> User:
    token = extract_token(request, credentials)
    return await AuthenticationService(db).get_user_from_token(token)


async def require_permission(
    request: Request,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
) -> User:
    """Authorize the request's module/action from its path and HTTP method"""
    path = request.url.path
    if should_skip_permission_check(path):
        return current_user

    module = resolve_module(path)
    if module is None:
        return current_user

    await AuthenticationService(db).check_permission(current_user, module, method_to_action(request.method))
    return current_user


def date_range_params(
    period: str = Query("all", description="all, today, yesterday, this_week, last_week, "
                                           "this_month, last_month, custom or month_year"),
    from_date: str = Query("", alias="from"),
    to_date: str = Query("", alias="to"),
    month: str = Query("", description="YYYY-MM, used with period=month_year")
) -> Optional[DateRange]:
    return get_date_range(period, custom_from=from_date, custom_to=to_date, month_year=month)
