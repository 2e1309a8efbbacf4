from decimal import Decimal
from pydantic import BaseModel, Field

from src.utils.schemas import CamelModel
from src.users.models import UserRole


class EmployeeCreate(CamelModel):
    name: str = Field(..., min_length=1)
    last_name: str = ""
    email: str = Field(..., min_length=3)
    password: str = Field(..., min_length=1)
    role: UserRole = UserRole.EMPLOYEE
    monthly_cost: Decimal | None = Field(None, ge=0)
    remaining_vacation_days: Decimal = Field(Decimal("0"), ge=0)


class EmployeeUpdate(CamelModel):
    name: str = Field(..., min_length=1)
    last_name: str = ""
    email: str = Field(..., min_length=3)
    role: UserRole | None = None
    monthly_cost: Decimal | None = Field(None, ge=0)
    remaining_vacation_days: Decimal = Field(Decimal("0"), ge=0)


class UserBrief(CamelModel):
    id: int
    name: str
    last_name: str
    role: UserRole
    monthly_cost: float | None = None

    class Config:
        from_attributes = True


class EmployeeRead(UserBrief):
    email: str
    remaining_vacation_days: float


class LoginRequest(BaseModel):
    email: str
    password: str
