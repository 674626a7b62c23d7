from datetime import date
from typing import Dict

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy import func
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.department import Department
from app.models.employee import Employee
from app.models.leave_request import LeaveRequest, LeaveStatus
from app.routers.auth_deps import require_admin
from app.services import leave_accrual

router = APIRouter(
    prefix="/dashboard",
    tags=["dashboard"],
    dependencies=[Depends(require_admin())]
)


class DashboardSummary(BaseModel):
    success: bool = True
    total_employees: int
    total_departments: int
    monthly_pay: float
    leave_summary: Dict[str, int]
    year: int


@router.get("/summary", response_model=DashboardSummary)
def get_dashboard_summary(db: Session = Depends(get_db)):
    """
    Headcount, payroll total and this year's leave counts by status.
    """
    year = date.today().year
    year_start, year_end = leave_accrual.year_bounds(year)

    counts = dict(
        db.query(LeaveRequest.status, func.count(LeaveRequest.id))
        .filter(LeaveRequest.from_date >= year_start, LeaveRequest.from_date <= year_end)
        .group_by(LeaveRequest.status)
        .all()
    )
    leave_summary = {s.value: counts.get(s.value, 0) for s in LeaveStatus}
    leave_summary["applied"] = sum(leave_summary.values())

    return DashboardSummary(
        total_employees=db.query(func.count(Employee.id)).scalar() or 0,
        total_departments=db.query(func.count(Department.id)).scalar() or 0,
        monthly_pay=float(db.query(func.coalesce(func.sum(Employee.salary), 0.0)).scalar() or 0.0),
        leave_summary=leave_summary,
        year=year,
    )
