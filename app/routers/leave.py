from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.leave_request import LeaveStatus, LeaveType
from app.models.user import User
from app.routers.auth_deps import get_current_user, require_admin, check_self_or_admin
from app.schemas.leave import (
    LeaveApply,
    LeaveApplyResponse,
    LeaveBalanceResponse,
    LeaveBreakdownResponse,
    LeaveListResponse,
    LeaveRequestResponse,
    LeaveStatusUpdate,
    OnLeaveToday,
)
from app.services import leave_service

router = APIRouter(
    prefix="/leave",
    tags=["leave"]
)


@router.post("/add", response_model=LeaveApplyResponse)
def add_leave(
    data: LeaveApply,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    # Employees apply for themselves; admins may apply on someone's behalf
    if data.user_id is None:
        data.user_id = current_user.id
    check_self_or_admin(current_user, data.user_id)

    result = leave_service.check_and_apply_leave(db, data)
    return {
        "success": True,
        "message": "Leave application submitted successfully",
        "leave": result["leave"],
        "leave_balance": result["leave_balance"],
    }


@router.get("/balance/{user_id}", response_model=LeaveBalanceResponse)
def get_leave_balance(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    check_self_or_admin(current_user, user_id)
    return leave_service.get_leave_balance(db, user_id)


@router.get("/breakdown/{user_id}", response_model=LeaveBreakdownResponse)
def get_leave_breakdown(
    user_id: int,
    year: Optional[int] = Query(None, ge=1970, le=9999),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    check_self_or_admin(current_user, user_id)
    return leave_service.get_leave_breakdown(db, user_id, year)


@router.get("", response_model=LeaveListResponse)
def list_leave_requests(
    status: Optional[LeaveStatus] = None,
    leave_type: Optional[LeaveType] = None,
    employee_id: Optional[int] = None,
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin())
):
    return leave_service.list_leaves(db, status, leave_type, employee_id, page, page_size)


@router.get("/on-leave-today", response_model=List[OnLeaveToday])
def who_is_on_leave_today(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin())
):
    return leave_service.on_leave_today(db)


@router.get("/employee/{user_id}", response_model=List[LeaveRequestResponse])
def get_employee_leaves(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    check_self_or_admin(current_user, user_id)
    return leave_service.employee_history(db, user_id)


@router.get("/{leave_id}", response_model=LeaveRequestResponse)
def get_leave_request(
    leave_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    leave = leave_service.get_leave(db, leave_id)
    check_self_or_admin(current_user, leave.employee.user_id)
    return leave


@router.put("/{leave_id}/status", response_model=LeaveRequestResponse)
def update_leave_status(
    leave_id: int,
    update: LeaveStatusUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin())
):
    return leave_service.review_leave(db, leave_id, update.status, current_user, update.admin_comments)
