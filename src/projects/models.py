import enum
from datetime import datetime

from sqlalchemy import Column, Integer, String, Text, Date, DateTime, Enum, ForeignKey, Numeric, UniqueConstraint
from sqlalchemy.orm import relationship
from src.database import Base


class PaymentType(str, enum.Enum):
    HOURLY = "HOURLY"
    FIXED = "FIXED"


class FixedCostType(str, enum.Enum):
    TOTAL = "TOTAL"
    MONTHLY = "MONTHLY"


class ProjectStatus(str, enum.Enum):
    PLANNED = "PLANNED"
    ACTIVE = "ACTIVE"
    ARCHIVED = "ARCHIVED"


class Project(Base):
    __tablename__ = "projects"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    payment_type = Column(Enum(PaymentType, name="payment_type"), nullable=False, default=PaymentType.HOURLY)
    # hourly rate for HOURLY projects, agreed total for FIXED ones
    total_project_price = Column(Numeric(12, 2), nullable=True)
    fixed_cost_type = Column(Enum(FixedCostType, name="fixed_cost_type"), nullable=True)
    total_fixed_cost = Column(Numeric(12, 2), nullable=True)
    start_date = Column(Date, nullable=True)
    end_date = Column(Date, nullable=True)  # NULL = open-ended
    status = Column(Enum(ProjectStatus, name="project_status"), nullable=False, default=ProjectStatus.PLANNED)
    owner_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    owner = relationship("User", foreign_keys=[owner_id])
    assignments = relationship("ProjectAssignment", back_populates="project", cascade="all, delete-orphan")
    time_logs = relationship("TimeLog", back_populates="project", cascade="all, delete-orphan")


class ProjectAssignment(Base):
    __tablename__ = "project_assignments"
    __table_args__ = (UniqueConstraint("user_id", "project_id", name="uq_project_assignment_user_project"),)

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    project_id = Column(Integer, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True)
    daily_hours = Column(Numeric(4, 2), nullable=False, default=8)
    # narrows the project window for this member
    start_date = Column(Date, nullable=True)
    end_date = Column(Date, nullable=True)

    user = relationship("User", back_populates="assignments")
    project = relationship("Project", back_populates="assignments")
