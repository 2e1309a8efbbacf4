from datetime import date
from decimal import Decimal
from pydantic import Field

from src.projects.models import PaymentType, FixedCostType, ProjectStatus
from src.time_logs.models import TimeLogType
from src.users.schemas import UserBrief
from src.utils.schemas import CamelModel


class ProjectBase(CamelModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: str | None = None
    start_date: date | None = None
    end_date: date | None = None
    payment_type: PaymentType = PaymentType.HOURLY
    total_project_price: Decimal | None = Field(None, ge=0)
    fixed_cost_type: FixedCostType | None = None
    total_fixed_cost: Decimal | None = Field(None, ge=0)
    status: ProjectStatus = ProjectStatus.PLANNED


class ProjectCreate(ProjectBase):
    owner_id: int | None = None


class ProjectUpdate(CamelModel):
    """Partial update: only the fields present in the body are written.

    Nullable columns accept an explicit null to clear them; name, paymentType
    and status may be omitted but not nulled.
    """
    name: str = Field(None, min_length=1, max_length=200)
    description: str | None = None
    start_date: date | None = None
    end_date: date | None = None
    payment_type: PaymentType = None
    total_project_price: Decimal | None = Field(None, ge=0)
    fixed_cost_type: FixedCostType | None = None
    total_fixed_cost: Decimal | None = Field(None, ge=0)
    status: ProjectStatus = None


class OwnerRead(CamelModel):
    id: int
    name: str
    last_name: str
    email: str

    class Config:
        from_attributes = True


class AssignmentRead(CamelModel):
    id: int
    user_id: int
    project_id: int
    daily_hours: float
    start_date: date | None = None
    end_date: date | None = None
    user: UserBrief

    class Config:
        from_attributes = True


class ProjectTimeLogRead(CamelModel):
    id: int
    user_id: int
    date: date
    hours: float
    type: TimeLogType

    class Config:
        from_attributes = True


class ProjectRead(CamelModel):
    id: int
    name: str
    description: str | None = None
    start_date: date | None = None
    end_date: date | None = None
    payment_type: PaymentType
    total_project_price: float | None = None
    fixed_cost_type: FixedCostType | None = None
    total_fixed_cost: float | None = None
    status: ProjectStatus
    owner_id: int | None = None
    assignments: list[AssignmentRead] = []

    class Config:
        from_attributes = True


class ProjectDetail(ProjectRead):
    owner: OwnerRead | None = None
    time_logs: list[ProjectTimeLogRead] = []


class MemberCreate(CamelModel):
    user_id: int
    daily_hours: Decimal | None = None
    start_date: date | None = None
    end_date: date | None = None
