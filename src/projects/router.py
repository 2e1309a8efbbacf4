import logging
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.config import DEFAULT_DAILY_HOURS
from src.database import get_async_session
from src.projections.schemas import ProjectCostsRead
from src.projections.service import compute_project_costs, format_duration, round_amount
from src.projects import schemas
from src.projects.models import Project, ProjectAssignment
from src.projects.service import get_project_or_404, load_assignment, project_options, to_snapshot
from src.users.models import User

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Projects"])


@router.get("", response_model=list[schemas.ProjectRead])
async def list_projects(session: AsyncSession = Depends(get_async_session)):
    result = await session.execute(select(Project).options(*project_options()).order_by(Project.id))
    return result.scalars().all()


@router.post("", response_model=schemas.ProjectRead, status_code=status.HTTP_201_CREATED)
async def create_project(data: schemas.ProjectCreate, session: AsyncSession = Depends(get_async_session)):
    if data.owner_id is not None and not await session.get(User, data.owner_id):
        raise HTTPException(status_code=404, detail="Owner not found")

    project = Project(**data.model_dump())
    session.add(project)
    await session.commit()
    logger.info("Project %s created", project.id)
    return await get_project_or_404(session, project.id)


@router.get("/{project_id}", response_model=schemas.ProjectDetail)
async def get_project(project_id: int, session: AsyncSession = Depends(get_async_session)):
    return await get_project_or_404(session, project_id, detail=True)


@router.put("/{project_id}", response_model=schemas.ProjectRead)
async def update_project(
    project_id: int,
    data: schemas.ProjectUpdate,
    session: AsyncSession = Depends(get_async_session),
):
    project = await get_project_or_404(session, project_id)
    for field, value in data.model_dump(exclude_unset=True).items():
        setattr(project, field, value)
    await session.commit()
    return project


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_project(project_id: int, session: AsyncSession = Depends(get_async_session)):
    project = await get_project_or_404(session, project_id, detail=True)
    await session.delete(project)
    await session.commit()
    logger.info("Project %s deleted", project_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{project_id}/costs", response_model=ProjectCostsRead)
async def get_project_costs(project_id: int, session: AsyncSession = Depends(get_async_session)):
    project = await get_project_or_404(session, project_id, detail=True)
    costs = compute_project_costs(to_snapshot(project), date.today())
    return ProjectCostsRead(
        revenue=round_amount(costs.revenue),
        effective_cost=round_amount(costs.effective_cost),
        estimated_cost=round_amount(costs.estimated_cost),
        effective_margin=round_amount(costs.effective_margin),
        estimated_margin=round_amount(costs.estimated_margin),
        effective_roi=costs.effective_roi,
        estimated_roi=costs.estimated_roi,
        duration=format_duration(project.start_date, project.end_date),
    )


@router.post("/{project_id}/members", response_model=schemas.AssignmentRead, status_code=status.HTTP_201_CREATED)
async def add_member(
    project_id: int,
    data: schemas.MemberCreate,
    session: AsyncSession = Depends(get_async_session),
):
    await get_project_or_404(session, project_id)
    if not await session.get(User, data.user_id):
        raise HTTPException(status_code=404, detail="User not found")

    daily_hours = data.daily_hours if data.daily_hours and data.daily_hours > 0 else DEFAULT_DAILY_HOURS
    assignment = ProjectAssignment(
        project_id=project_id,
        user_id=data.user_id,
        daily_hours=daily_hours,
        start_date=data.start_date,
        end_date=data.end_date,
    )
    session.add(assignment)
    try:
        await session.commit()
    except IntegrityError:
        await session.rollback()
        raise HTTPException(status_code=409, detail="User already assigned")

    return await load_assignment(session, assignment.id)


@router.delete("/{project_id}/members", status_code=status.HTTP_204_NO_CONTENT)
async def remove_member(
    project_id: int,
    user_id: int = Query(..., alias="userId"),
    session: AsyncSession = Depends(get_async_session),
):
    await get_project_or_404(session, project_id)
    await session.execute(
        delete(ProjectAssignment).where(
            ProjectAssignment.project_id == project_id,
            ProjectAssignment.user_id == user_id,
        )
    )
    await session.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
