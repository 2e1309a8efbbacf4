import logging
from decimal import Decimal

from fastapi import HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.config import VACATION_DAY_HOURS
from src.projects.models import Project, ProjectAssignment
from src.time_logs.models import TimeLog, TimeLogType
from src.time_logs.schemas import TimeLogCreate
from src.users.models import User, ADMIN_ROLES

logger = logging.getLogger(__name__)


def vacation_days(hours: Decimal | None) -> Decimal:
    """Vacation days a log of ``hours`` takes; a log without hours is one day."""
    if not hours:
        return Decimal("1")
    return Decimal(hours) / Decimal(VACATION_DAY_HOURS)


async def check_can_log_work(session: AsyncSession, user_id: int, project_id: int):
    if not await session.get(Project, project_id):
        raise HTTPException(status_code=404, detail="Project not found")

    q = await session.execute(
        select(ProjectAssignment.id).where(
            ProjectAssignment.user_id == user_id,
            ProjectAssignment.project_id == project_id,
        )
    )
    if q.scalar_one_or_none() is not None:
        return

    user = await session.get(User, user_id)
    if not user or user.role not in ADMIN_ROLES:
        raise HTTPException(status_code=403, detail="User is not assigned to this project")


async def deduct_vacation(session: AsyncSession, user_id: int, hours: Decimal | None):
    days = vacation_days(hours)
    user = await session.get(User, user_id)
    if not user or user.remaining_vacation_days is None or user.remaining_vacation_days < days:
        raise HTTPException(status_code=400, detail="Not enough vacation days remaining")
    user.remaining_vacation_days = user.remaining_vacation_days - days


async def add_time_log(session: AsyncSession, data: TimeLogCreate) -> TimeLog:
    """Validate one log and stage it on the session; the caller commits."""
    if data.type == TimeLogType.WORK:
        if data.project_id is None:
            raise HTTPException(status_code=400, detail="projectId is required for WORK logs")
        if data.hours is None:
            raise HTTPException(status_code=400, detail="hours is required for WORK logs")
        await check_can_log_work(session, data.user_id, data.project_id)
        project_id = data.project_id
        hours = data.hours
    else:
        await deduct_vacation(session, data.user_id, data.hours)
        project_id = None
        hours = data.hours or Decimal(VACATION_DAY_HOURS)

    log = TimeLog(
        user_id=data.user_id,
        project_id=project_id,
        date=data.date,
        hours=hours,
        type=data.type,
    )
    session.add(log)
    return log


async def remove_time_log(session: AsyncSession, log: TimeLog):
    """Delete a log, giving vacation days back for VACATION entries."""
    if log.type == TimeLogType.VACATION:
        user = await session.get(User, log.user_id)
        if user:
            user.remaining_vacation_days = (user.remaining_vacation_days or 0) + vacation_days(log.hours)
            logger.info("Refunded %s vacation days to user %s", vacation_days(log.hours), user.id)
    await session.delete(log)
