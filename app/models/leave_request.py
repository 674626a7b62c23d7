from sqlalchemy import Column, Integer, String, Date, Float, Boolean, ForeignKey, DateTime, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.database import Base
import enum


class LeaveType(str, enum.Enum):
    CASUAL = "casual"
    SICK = "sick"


class HalfDayPeriod(str, enum.Enum):
    MORNING = "morning"
    AFTERNOON = "afternoon"


class LeaveStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


# Statuses that count against a leave balance
COUNTED_STATUSES = (LeaveStatus.PENDING.value, LeaveStatus.APPROVED.value)


class LeaveRequest(Base):
    __tablename__ = "leave_requests"

    id = Column(Integer, primary_key=True, index=True)
    employee_id = Column(Integer, ForeignKey("employees.id", ondelete="CASCADE"), nullable=False, index=True)
    leave_type = Column(String, nullable=False, index=True)
    from_date = Column(Date, nullable=False, index=True)
    end_date = Column(Date, nullable=False)  # inclusive
    is_half_day = Column(Boolean, default=False, nullable=False)
    half_day_period = Column(String, nullable=True)
    reason = Column(Text, nullable=False)
    status = Column(String, default=LeaveStatus.PENDING.value, nullable=False, index=True)  # Enum value stored as string
    total_days = Column(Float, nullable=False)
    applied_date = Column(DateTime(timezone=True), server_default=func.now())

    # Review
    reviewed_at = Column(DateTime(timezone=True), nullable=True)
    reviewed_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    admin_comments = Column(Text, nullable=True)

    employee = relationship("Employee", back_populates="leave_requests")
    reviewer = relationship("User", foreign_keys=[reviewed_by])
