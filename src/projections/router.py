from datetime import date

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.database import get_async_session
from src.projections.schemas import MonthProjection
from src.projections.service import build_projections
from src.projects.service import load_forecast_projects

router = APIRouter(tags=["Projections"])


@router.get("", response_model=list[MonthProjection])
async def get_projections(session: AsyncSession = Depends(get_async_session)):
    """Revenue, cost and margin for each month of the window starting this month."""
    projects = await load_forecast_projects(session)
    return build_projections(projects, date.today())
