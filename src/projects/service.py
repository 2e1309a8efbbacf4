from typing import Iterable

from fastapi import HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from src.projects.models import Project, ProjectAssignment, ProjectStatus
from src.projections.schemas import ProjectSnapshot
from src.time_logs.models import TimeLog, TimeLogType

# Projects that still generate revenue and cost
FORECAST_STATUSES = (ProjectStatus.ACTIVE, ProjectStatus.PLANNED)


def project_options(detail: bool = False):
    options = [selectinload(Project.assignments).selectinload(ProjectAssignment.user)]
    if detail:
        options += [selectinload(Project.owner), selectinload(Project.time_logs)]
    return options


async def get_project_or_404(session: AsyncSession, project_id: int, detail: bool = False) -> Project:
    result = await session.execute(
        select(Project)
        .where(Project.id == project_id)
        .options(*project_options(detail))
        .execution_options(populate_existing=True)
    )
    project = result.scalar_one_or_none()
    if not project:
        raise HTTPException(status_code=404, detail="Project not found")
    return project


async def load_assignment(session: AsyncSession, assignment_id: int) -> ProjectAssignment:
    result = await session.execute(
        select(ProjectAssignment)
        .where(ProjectAssignment.id == assignment_id)
        .options(selectinload(ProjectAssignment.user))
        .execution_options(populate_existing=True)
    )
    return result.scalar_one()


async def load_forecast_projects(session: AsyncSession) -> list[ProjectSnapshot]:
    """ACTIVE and PLANNED projects with members and WORK logs, ready for the calculator."""
    result = await session.execute(
        select(Project)
        .where(Project.status.in_(FORECAST_STATUSES))
        .options(
            selectinload(Project.assignments).selectinload(ProjectAssignment.user),
            selectinload(Project.time_logs.and_(TimeLog.type == TimeLogType.WORK)),
        )
    )
    return to_snapshots(result.scalars().all())


def to_snapshot(project: Project) -> ProjectSnapshot:
    return ProjectSnapshot.model_validate(project)


def to_snapshots(projects: Iterable[Project]) -> list[ProjectSnapshot]:
    return [to_snapshot(p) for p in projects]
