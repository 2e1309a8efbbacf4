import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from src.database import get_async_session
from src.projects.models import Project, ProjectAssignment
from src.projects.schemas import ProjectRead
from src.time_logs.models import TimeLog
from src.time_logs.schemas import TimeLogCreate, TimeLogRead
from src.time_logs.service import add_time_log, remove_time_log
from src.utils.query_params import date_range

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Employee"])


@router.get("/projects", response_model=list[ProjectRead])
async def employee_projects(
    user_id: int = Query(..., alias="userId"),
    session: AsyncSession = Depends(get_async_session),
):
    result = await session.execute(
        select(Project)
        .join(ProjectAssignment, ProjectAssignment.project_id == Project.id)
        .where(ProjectAssignment.user_id == user_id)
        .options(selectinload(Project.assignments).selectinload(ProjectAssignment.user))
        .order_by(Project.id)
    )
    return result.scalars().all()


@router.get("/time-logs", response_model=list[TimeLogRead])
async def list_time_logs(
    user_id: int = Query(..., alias="userId"),
    date_from: Optional[str] = Query(None, alias="dateFrom"),
    date_to: Optional[str] = Query(None, alias="dateTo"),
    session: AsyncSession = Depends(get_async_session),
):
    start, end = date_range(date_from, date_to)
    stmt = select(TimeLog).where(TimeLog.user_id == user_id).options(selectinload(TimeLog.project))
    if start:
        stmt = stmt.where(TimeLog.date >= start)
    if end:
        stmt = stmt.where(TimeLog.date <= end)

    result = await session.execute(stmt.order_by(TimeLog.date.desc(), TimeLog.id.desc()))
    return result.scalars().all()


@router.post("/time-logs", response_model=list[TimeLogRead], status_code=status.HTTP_201_CREATED)
async def create_time_logs(
    payload: TimeLogCreate | list[TimeLogCreate],
    session: AsyncSession = Depends(get_async_session),
):
    """Create one log or a batch; the batch is all-or-nothing."""
    entries = payload if isinstance(payload, list) else [payload]

    logs = [await add_time_log(session, entry) for entry in entries]
    await session.commit()
    logger.info("Created %d time log(s) for user(s) %s", len(logs), sorted({log.user_id for log in logs}))

    result = await session.execute(
        select(TimeLog)
        .where(TimeLog.id.in_([log.id for log in logs]))
        .options(selectinload(TimeLog.project))
        .order_by(TimeLog.id)
        .execution_options(populate_existing=True)
    )
    return result.scalars().all()


@router.delete("/time-logs/{log_id}")
async def delete_time_log(log_id: int, session: AsyncSession = Depends(get_async_session)):
    log = await session.get(TimeLog, log_id)
    if not log:
        raise HTTPException(status_code=404, detail="Time log not found")

    await remove_time_log(session, log)
    await session.commit()
    return {"success": True}
