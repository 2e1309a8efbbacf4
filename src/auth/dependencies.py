from fastapi import Depends, HTTPException, status, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.database import get_async_session
from src.users.models import User, UserRole, ADMIN_ROLES

# Mock auth: the login endpoint sets these cookies, nothing signs them.
ROLE_COOKIE = "mock-role"
USER_ID_COOKIE = "user-id"


async def get_requester_role(request: Request) -> UserRole | None:
    raw = request.cookies.get(ROLE_COOKIE)
    try:
        return UserRole(raw) if raw else None
    except ValueError:
        return None


async def get_admin_role(role: UserRole | None = Depends(get_requester_role)) -> UserRole:
    if role not in ADMIN_ROLES:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Unauthorized")
    return role


async def get_current_user(request: Request, session: AsyncSession = Depends(get_async_session)) -> User:
    raw = request.cookies.get(USER_ID_COOKIE)
    if not raw:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated.")
    try:
        user_id = int(raw)
    except ValueError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated.")

    user = await session.get(User, user_id)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found.")
    return user
