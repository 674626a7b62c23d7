"""
Leave Service Layer

Applies the accrual rules in app.services.leave_accrual against stored
leave requests: submitting a request, reporting balances and month-wise
breakdowns, and reviewing pending requests.

Architecture:
- Router -> Service (this module) -> Models / leave_accrual
- Balance checks read then write without locking. Two submissions for
  the same employee that race can both pass the check.
"""
import calendar
import logging
from datetime import date, datetime, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from app.core.exceptions import (
    InsufficientLeaveBalance,
    InvalidStatusTransition,
    NotFoundError,
    ValidationFailed,
)
from app.models.employee import Employee
from app.models.leave_request import COUNTED_STATUSES, LeaveRequest, LeaveStatus, LeaveType
from app.models.user import User
from app.schemas.leave import LeaveApply
from app.services import leave_accrual

logger = logging.getLogger(__name__)


def get_employee_by_user(db: Session, user_id: int) -> Employee:
    employee = db.query(Employee).filter(Employee.user_id == user_id).first()
    if not employee:
        raise NotFoundError("Employee not found")
    return employee


def _require_doj(employee: Employee) -> date:
    if not employee.doj:
        raise ValidationFailed("Employee date of joining not found. Please contact HR.")
    return employee.doj


def used_leaves(db: Session, employee_id: int, leave_type: str, year: int) -> float:
    """Sum of days for pending and approved requests starting in the given year."""
    year_start, year_end = leave_accrual.year_bounds(year)
    leaves = db.query(LeaveRequest).filter(
        LeaveRequest.employee_id == employee_id,
        LeaveRequest.leave_type == leave_type,
        LeaveRequest.status.in_(COUNTED_STATUSES),
        LeaveRequest.from_date >= year_start,
        LeaveRequest.from_date <= year_end,
    ).all()
    return leave_accrual.sum_days(leaves)


def _type_balance(db: Session, employee: Employee, leave_type: str, today: date) -> Dict[str, float]:
    available = leave_accrual.calculate_available_leaves(employee.doj, leave_type, today)
    used = used_leaves(db, employee.id, leave_type, today.year)
    return {
        "available": float(available),
        "used": used,
        "remaining": float(available) - used,
        "monthly_allocation": float(leave_accrual.monthly_rate(leave_type)),
    }


def _validate_application(data: LeaveApply) -> None:
    if not (data.user_id and data.leave_type and data.from_date and data.end_date and data.reason):
        raise ValidationFailed("All fields are required")
    if not data.reason.strip():
        raise ValidationFailed("All fields are required")
    if data.is_half_day and not data.half_day_period:
        raise ValidationFailed("Half day period is required when selecting half day leave")


def check_and_apply_leave(db: Session, data: LeaveApply, today: Optional[date] = None) -> Dict[str, Any]:
    """
    Validate a leave application against the employee's accrued balance and
    persist it as pending.

    Returns:
        Dict with the saved leave and the balance after this request.
    Raises:
        ValidationFailed, NotFoundError, InsufficientLeaveBalance
    """
    today = today or date.today()
    _validate_application(data)

    employee = get_employee_by_user(db, data.user_id)
    doj = _require_doj(employee)

    leave_type = data.leave_type.value
    total_days = leave_accrual.count_leave_days(data.from_date, data.end_date, data.is_half_day)

    balance = _type_balance(db, employee, leave_type, today)
    if total_days > balance["remaining"]:
        logger.info(
            "Leave rejected for insufficient balance",
            extra={"employee_id": employee.id, "leave_type": leave_type, "requested": total_days}
        )
        raise InsufficientLeaveBalance(leave_type, balance["remaining"], balance["available"], total_days)

    leave = LeaveRequest(
        employee_id=employee.id,
        leave_type=leave_type,
        from_date=data.from_date,
        end_date=data.end_date,
        reason=data.reason.strip(),
        total_days=total_days,
        is_half_day=data.is_half_day,
        half_day_period=data.half_day_period.value if data.is_half_day else None,
        status=LeaveStatus.PENDING.value,
    )
    db.add(leave)
    db.commit()
    db.refresh(leave)
    logger.info(f"Leave {leave.id} submitted for employee {employee.id} ({total_days:g} {leave_type} days)")

    return {
        "leave": leave,
        "leave_balance": {
            "available": balance["available"],
            "used": balance["used"] + total_days,
            "remaining": balance["remaining"] - total_days,
            "monthly_allocation": balance["monthly_allocation"],
            "doj": doj,
        },
    }


def get_leave_balance(db: Session, user_id: int, today: Optional[date] = None) -> Dict[str, Any]:
    today = today or date.today()
    employee = get_employee_by_user(db, user_id)
    doj = _require_doj(employee)

    result: Dict[str, Any] = {
        leave_type.value: _type_balance(db, employee, leave_type.value, today)
        for leave_type in LeaveType
    }
    result["doj"] = doj
    result["current_year"] = today.year
    return result


def get_leave_breakdown(
    db: Session,
    user_id: int,
    year: Optional[int] = None,
    today: Optional[date] = None
) -> Dict[str, Any]:
    """
    Month-wise allocation and days taken for one calendar year.

    A request is counted in every month it overlaps and contributes its
    full total_days to each of them.
    """
    today = today or date.today()
    target_year = year or today.year
    employee = get_employee_by_user(db, user_id)
    doj = _require_doj(employee)

    breakdown: List[Dict[str, Any]] = []
    start_month = leave_accrual.breakdown_start_month(doj, target_year)

    year_start, year_end = leave_accrual.year_bounds(target_year)
    # Everything touching the year; per-month overlap is resolved in memory
    leaves = db.query(LeaveRequest).filter(
        LeaveRequest.employee_id == employee.id,
        LeaveRequest.status.in_(COUNTED_STATUSES),
        LeaveRequest.from_date <= year_end,
        LeaveRequest.end_date >= year_start,
    ).all()

    for month in range(start_month, 13):
        month_start, month_end = leave_accrual.month_bounds(target_year, month)
        month_leaves = [
            leave for leave in leaves
            if leave_accrual.overlaps(leave.from_date, leave.end_date, month_start, month_end)
        ]
        breakdown.append({
            "month": calendar.month_name[month],
            "month_number": month,
            "allocated": {k: float(v) for k, v in leave_accrual.MONTHLY_LEAVE_ALLOCATION.items()},
            "taken": {
                leave_type.value: leave_accrual.sum_days(
                    leave for leave in month_leaves if leave.leave_type == leave_type.value
                )
                for leave_type in LeaveType
            },
        })

    return {
        "year": target_year,
        "doj": doj,
        "monthly_allocation": {k: float(v) for k, v in leave_accrual.MONTHLY_LEAVE_ALLOCATION.items()},
        "breakdown": breakdown,
    }


def get_leave(db: Session, leave_id: int) -> LeaveRequest:
    leave = db.query(LeaveRequest).filter(LeaveRequest.id == leave_id).first()
    if not leave:
        raise NotFoundError("Leave request not found")
    return leave


def review_leave(
    db: Session,
    leave_id: int,
    new_status: LeaveStatus,
    reviewer: User,
    admin_comments: Optional[str] = None
) -> LeaveRequest:
    """Move a pending request to approved or rejected. Both are terminal."""
    leave = get_leave(db, leave_id)

    if leave.status != LeaveStatus.PENDING.value or new_status == LeaveStatus.PENDING:
        raise InvalidStatusTransition(leave.status, new_status.value)

    leave.status = new_status.value
    leave.reviewed_at = datetime.now(timezone.utc)
    leave.reviewed_by = reviewer.id
    leave.admin_comments = admin_comments
    db.commit()
    db.refresh(leave)

    logger.info(f"Leave {leave.id} {leave.status} by user {reviewer.id}")
    return leave


def list_leaves(
    db: Session,
    status: Optional[LeaveStatus] = None,
    leave_type: Optional[LeaveType] = None,
    employee_id: Optional[int] = None,
    page: int = 1,
    page_size: int = 20
) -> Dict[str, Any]:
    query = db.query(LeaveRequest)
    if status:
        query = query.filter(LeaveRequest.status == status.value)
    if leave_type:
        query = query.filter(LeaveRequest.leave_type == leave_type.value)
    if employee_id:
        query = query.filter(LeaveRequest.employee_id == employee_id)

    total = query.count()
    leaves = query.order_by(LeaveRequest.applied_date.desc(), LeaveRequest.id.desc()) \
        .offset((page - 1) * page_size).limit(page_size).all()
    return {"leaves": leaves, "total": total, "page": page, "page_size": page_size}


def employee_history(db: Session, user_id: int) -> List[LeaveRequest]:
    employee = get_employee_by_user(db, user_id)
    return db.query(LeaveRequest).filter(LeaveRequest.employee_id == employee.id) \
        .order_by(LeaveRequest.applied_date.desc(), LeaveRequest.id.desc()).all()


def on_leave_today(db: Session, today: Optional[date] = None) -> List[Dict[str, Any]]:
    today = today or date.today()
    leaves = db.query(LeaveRequest).filter(
        LeaveRequest.status == LeaveStatus.APPROVED.value,
        LeaveRequest.from_date <= today,
        LeaveRequest.end_date >= today,
    ).all()
    return [
        {
            "leave_id": leave.id,
            "employee_id": leave.employee_id,
            "name": leave.employee.user.name,
            "leave_type": leave.leave_type,
            "from_date": leave.from_date,
            "end_date": leave.end_date,
            "is_half_day": leave.is_half_day,
            "half_day_period": leave.half_day_period,
        }
        for leave in leaves
    ]
