from datetime import date
from decimal import Decimal
from pydantic import BaseModel, Field

from src.projects.models import PaymentType, FixedCostType
from src.time_logs.models import TimeLogType
from src.utils.schemas import CamelModel


# Calculator input: plain snapshots built from ORM rows (or by hand in tests)

class UserCostSnapshot(BaseModel):
    id: int
    monthly_cost: Decimal | None = None

    class Config:
        from_attributes = True


class AssignmentSnapshot(BaseModel):
    user_id: int
    daily_hours: Decimal | None = None
    start_date: date | None = None
    end_date: date | None = None
    user: UserCostSnapshot | None = None

    class Config:
        from_attributes = True


class WorkLogSnapshot(BaseModel):
    user_id: int
    date: date
    hours: Decimal = Decimal("0")
    type: TimeLogType = TimeLogType.WORK

    class Config:
        from_attributes = True


class ProjectSnapshot(BaseModel):
    id: int | None = None
    payment_type: PaymentType = PaymentType.HOURLY
    total_project_price: Decimal | None = None
    fixed_cost_type: FixedCostType | None = None
    total_fixed_cost: Decimal | None = None
    start_date: date | None = None
    end_date: date | None = None
    assignments: list[AssignmentSnapshot] = Field(default_factory=list)
    time_logs: list[WorkLogSnapshot] = Field(default_factory=list)

    class Config:
        from_attributes = True


class MonthFigures(BaseModel):
    revenue: Decimal
    labor_cost: Decimal
    fixed_cost: Decimal

    @property
    def cost(self) -> Decimal:
        return self.labor_cost + self.fixed_cost


class ProjectCosts(BaseModel):
    revenue: Decimal
    effective_labor: Decimal
    estimated_labor: Decimal
    fixed_costs: Decimal
    effective_cost: Decimal
    estimated_cost: Decimal
    effective_margin: Decimal
    estimated_margin: Decimal
    effective_roi: str
    estimated_roi: str


# API output

class MonthProjection(CamelModel):
    month: str
    year: int
    month_index: int  # 0-based, January = 0
    revenue: int
    cost: int
    margin: int


class DashboardStats(CamelModel):
    active_project_count: int
    total_employee_count: int
    estimated_monthly_revenue: int


class ProjectCostsRead(CamelModel):
    revenue: int
    effective_cost: int
    estimated_cost: int
    effective_margin: int
    estimated_margin: int
    effective_roi: str
    estimated_roi: str
    duration: str
