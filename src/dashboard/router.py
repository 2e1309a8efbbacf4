from datetime import date

from fastapi import APIRouter, Depends
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.database import get_async_session
from src.projections.schemas import DashboardStats
from src.projections.service import estimated_monthly_revenue
from src.projects.models import Project, ProjectStatus
from src.projects.service import load_forecast_projects
from src.users.models import User, UserRole

router = APIRouter(tags=["Dashboard"])


@router.get("/stats", response_model=DashboardStats)
async def dashboard_stats(session: AsyncSession = Depends(get_async_session)):
    active_q = await session.execute(
        select(func.count(Project.id)).where(Project.status == ProjectStatus.ACTIVE)
    )
    employees_q = await session.execute(
        select(func.count(User.id)).where(User.role == UserRole.EMPLOYEE)
    )
    projects = await load_forecast_projects(session)

    return DashboardStats(
        active_project_count=active_q.scalar() or 0,
        total_employee_count=employees_q.scalar() or 0,
        estimated_monthly_revenue=estimated_monthly_revenue(projects, date.today()),
    )
