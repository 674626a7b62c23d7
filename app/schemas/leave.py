from pydantic import BaseModel, ConfigDict
from datetime import date, datetime
from typing import Dict, List, Optional
from app.models.leave_request import LeaveType, LeaveStatus, HalfDayPeriod


class LeaveApply(BaseModel):
    """
    Leave application payload.
    Required fields are checked by the leave service so the rejection
    carries a readable reason instead of a schema error.
    """
    user_id: Optional[int] = None
    leave_type: Optional[LeaveType] = None
    from_date: Optional[date] = None
    end_date: Optional[date] = None
    reason: Optional[str] = None
    is_half_day: bool = False
    half_day_period: Optional[HalfDayPeriod] = None


class LeaveStatusUpdate(BaseModel):
    status: LeaveStatus
    admin_comments: Optional[str] = None


class LeaveRequestResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    employee_id: int
    leave_type: str
    from_date: date
    end_date: date
    is_half_day: bool
    half_day_period: Optional[str] = None
    reason: str
    status: str
    total_days: float
    applied_date: Optional[datetime] = None
    reviewed_at: Optional[datetime] = None
    reviewed_by: Optional[int] = None
    admin_comments: Optional[str] = None


class LeaveListResponse(BaseModel):
    success: bool = True
    leaves: List[LeaveRequestResponse]
    total: int
    page: int
    page_size: int


class AppliedBalance(BaseModel):
    available: float
    used: float
    remaining: float
    monthly_allocation: float
    doj: date


class LeaveApplyResponse(BaseModel):
    success: bool = True
    message: str
    leave: LeaveRequestResponse
    leave_balance: AppliedBalance


class LeaveTypeBalance(BaseModel):
    available: float
    used: float
    remaining: float
    monthly_allocation: float


class LeaveBalanceResponse(BaseModel):
    success: bool = True
    casual: LeaveTypeBalance
    sick: LeaveTypeBalance
    doj: date
    current_year: int


class MonthBreakdown(BaseModel):
    month: str
    month_number: int
    allocated: Dict[str, float]
    taken: Dict[str, float]


class LeaveBreakdownResponse(BaseModel):
    success: bool = True
    year: int
    doj: date
    monthly_allocation: Dict[str, float]
    breakdown: List[MonthBreakdown]


class OnLeaveToday(BaseModel):
    leave_id: int
    employee_id: int
    name: str
    leave_type: str
    from_date: date
    end_date: date
    is_half_day: bool
    half_day_period: Optional[str] = None
