from datetime import date
from decimal import Decimal
from pydantic import Field

from src.time_logs.models import TimeLogType
from src.utils.schemas import CamelModel


class TimeLogCreate(CamelModel):
    user_id: int
    project_id: int | None = None
    date: date
    hours: Decimal | None = Field(None, gt=0, le=24)
    type: TimeLogType = TimeLogType.WORK


class ProjectName(CamelModel):
    id: int
    name: str

    class Config:
        from_attributes = True


class TimeLogRead(CamelModel):
    id: int
    user_id: int
    project_id: int | None = None
    date: date
    hours: float
    type: TimeLogType
    project: ProjectName | None = None

    class Config:
        from_attributes = True
