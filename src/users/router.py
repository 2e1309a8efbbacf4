import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from src.auth.dependencies import get_admin_role
from src.auth.passwords import hash_password
from src.database import get_async_session
from src.users import schemas
from src.users.models import User, UserRole, ADMIN_ROLES

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Employees"])


async def get_user_or_404(session: AsyncSession, user_id: int) -> User:
    user = await session.get(User, user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user


def check_can_manage(requester_role: UserRole, target: User):
    if requester_role == UserRole.ADMIN and target.role in ADMIN_ROLES:
        raise HTTPException(
            status_code=403,
            detail="Access denied: Admins cannot modify other admins or super admins",
        )


@router.get("", response_model=list[schemas.EmployeeRead])
async def list_employees(session: AsyncSession = Depends(get_async_session)):
    result = await session.execute(select(User).order_by(User.id))
    return result.scalars().all()


@router.post("", response_model=schemas.EmployeeRead, status_code=status.HTTP_201_CREATED)
async def create_employee(
    data: schemas.EmployeeCreate,
    session: AsyncSession = Depends(get_async_session),
    requester_role: UserRole = Depends(get_admin_role),
):
    if requester_role == UserRole.ADMIN and data.role in ADMIN_ROLES:
        raise HTTPException(status_code=403, detail="Admins cannot create other Admins")

    user = User(
        name=data.name,
        last_name=data.last_name,
        email=data.email,
        hashed_password=hash_password(data.password),
        role=data.role,
        monthly_cost=data.monthly_cost,
        remaining_vacation_days=data.remaining_vacation_days,
    )
    session.add(user)
    try:
        await session.commit()
    except IntegrityError:
        await session.rollback()
        raise HTTPException(status_code=409, detail="A user with this email already exists")

    logger.info("Employee %s created by %s", user.id, requester_role.value)
    return user


@router.get("/{user_id}", response_model=schemas.EmployeeRead)
async def get_employee(user_id: int, session: AsyncSession = Depends(get_async_session)):
    return await get_user_or_404(session, user_id)


@router.put("/{user_id}", response_model=schemas.EmployeeRead)
async def update_employee(
    user_id: int,
    data: schemas.EmployeeUpdate,
    session: AsyncSession = Depends(get_async_session),
    requester_role: UserRole = Depends(get_admin_role),
):
    user = await get_user_or_404(session, user_id)
    check_can_manage(requester_role, user)
    if requester_role == UserRole.ADMIN and data.role in ADMIN_ROLES:
        raise HTTPException(status_code=403, detail="Admins cannot promote users to Admin")

    user.name = data.name
    user.last_name = data.last_name
    user.email = data.email
    user.monthly_cost = data.monthly_cost
    user.remaining_vacation_days = data.remaining_vacation_days
    # only the system admin changes roles
    if requester_role == UserRole.SYSTEM_ADMIN and data.role is not None:
        user.role = data.role

    try:
        await session.commit()
    except IntegrityError:
        await session.rollback()
        raise HTTPException(status_code=409, detail="A user with this email already exists")
    return user


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_employee(
    user_id: int,
    session: AsyncSession = Depends(get_async_session),
    requester_role: UserRole = Depends(get_admin_role),
):
    result = await session.execute(
        select(User)
        .where(User.id == user_id)
        .options(selectinload(User.assignments), selectinload(User.time_logs))
    )
    user = result.scalar_one_or_none()
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    check_can_manage(requester_role, user)

    try:
        await session.delete(user)
        await session.commit()
    except IntegrityError:
        await session.rollback()
        raise HTTPException(status_code=400, detail="User is still referenced by other records")

    logger.info("Employee %s deleted by %s", user_id, requester_role.value)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
