from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from src.auth.dependencies import ROLE_COOKIE, USER_ID_COOKIE, get_current_user
from src.auth.passwords import verify_password
from src.database import get_async_session
from src.users.models import User
from src.users.schemas import EmployeeRead, LoginRequest

router = APIRouter()

SESSION_MAX_AGE = 60 * 60 * 24 * 7


@router.post("/auth/login")
async def login(data: LoginRequest, session: AsyncSession = Depends(get_async_session)):
    result = await session.execute(select(User).where(User.email == data.email))
    user = result.scalar_one_or_none()
    if not user or not verify_password(data.password, user.hashed_password):
        raise HTTPException(status_code=401, detail="Invalid email or password")

    response = JSONResponse(content={
        "id": user.id,
        "email": user.email,
        "role": user.role.value,
        "name": user.name,
        "lastName": user.last_name,
    })
    response.set_cookie(USER_ID_COOKIE, str(user.id), httponly=True, samesite="Lax", max_age=SESSION_MAX_AGE, path="/")
    response.set_cookie(ROLE_COOKIE, user.role.value, samesite="Lax", max_age=SESSION_MAX_AGE, path="/")
    return response


@router.post("/auth/logout")
async def logout():
    response = JSONResponse(content={"success": True})
    response.delete_cookie(USER_ID_COOKIE, path="/")
    response.delete_cookie(ROLE_COOKIE, path="/")
    return response


@router.get("/me", response_model=EmployeeRead)
async def get_me(user: User = Depends(get_current_user)):
    return user
