from datetime import datetime
from enum import Enum

from sqlalchemy import Column, Integer, String, DateTime, Enum as SqlEnum, Numeric
from sqlalchemy.orm import relationship
from src.database import Base


class UserRole(str, Enum):
    SYSTEM_ADMIN = "SYSTEM_ADMIN"
    ADMIN = "ADMIN"
    EMPLOYEE = "EMPLOYEE"


ADMIN_ROLES = (UserRole.ADMIN, UserRole.SYSTEM_ADMIN)


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    last_name = Column(String, nullable=False, default="")
    email = Column(String, unique=True, nullable=False, index=True)
    hashed_password = Column(String, nullable=False)
    role = Column(SqlEnum(UserRole, name="user_role"), nullable=False, default=UserRole.EMPLOYEE)
    monthly_cost = Column(Numeric(12, 2), nullable=True)
    # days may be fractional: a 4h vacation log takes half a day
    remaining_vacation_days = Column(Numeric(6, 2), nullable=False, default=0)

    created_at = Column(DateTime, default=datetime.utcnow)

    assignments = relationship("ProjectAssignment", back_populates="user", cascade="all, delete-orphan")
    time_logs = relationship("TimeLog", back_populates="user", cascade="all, delete-orphan")
