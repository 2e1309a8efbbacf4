import enum
from datetime import datetime

from sqlalchemy import Column, Index, Integer, Date, DateTime, Enum, ForeignKey, Numeric
from sqlalchemy.orm import relationship
from src.database import Base


class TimeLogType(str, enum.Enum):
    WORK = "WORK"
    VACATION = "VACATION"


class TimeLog(Base):
    __tablename__ = "time_logs"
    __table_args__ = (Index("ix_time_logs_user_id_date", "user_id", "date"),)

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    project_id = Column(Integer, ForeignKey("projects.id", ondelete="CASCADE"), nullable=True, index=True)  # WORK only
    date = Column(Date, nullable=False)
    hours = Column(Numeric(5, 2), nullable=False)
    type = Column(Enum(TimeLogType, name="time_log_type"), nullable=False, default=TimeLogType.WORK)
    created_at = Column(DateTime, default=datetime.utcnow)

    user = relationship("User", back_populates="time_logs")
    project = relationship("Project", back_populates="time_logs")
