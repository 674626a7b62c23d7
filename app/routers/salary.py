from datetime import date
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
import logging

from app.database import get_db
from app.models.salary import Salary
from app.models.user import User
from app.routers.auth_deps import get_current_user, require_admin, check_self_or_admin
from app.schemas.salary import SalaryCreate, SalaryResponse, SalaryHistoryResponse
from app.services import employee_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/salary", tags=["salary"])


def _history(db: Session, employee) -> dict:
    """Salary records of one employee, newest pay date first."""
    salaries = db.query(Salary).filter(Salary.employee_id == employee.id) \
        .order_by(Salary.pay_date.desc(), Salary.id.desc()).all()
    return {"success": True, "salaries": salaries}


@router.post("", response_model=SalaryResponse)
def add_salary(
    data: SalaryCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin())
):
    employee = employee_service.get_employee(db, data.employee_id)
    salary = Salary(
        employee_id=employee.id,
        basic_salary=data.basic_salary,
        allowances=data.allowances,
        deductions=data.deductions,
        net_salary=data.basic_salary + data.allowances - data.deductions,
        pay_date=data.pay_date or date.today(),
    )
    db.add(salary)
    db.commit()
    db.refresh(salary)
    logger.info(f"Salary {salary.id} recorded for employee {employee.id}")
    return salary


@router.get("/user/{user_id}", response_model=SalaryHistoryResponse)
def get_user_salary_history(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    check_self_or_admin(current_user, user_id)
    return _history(db, employee_service.get_employee_by_user(db, user_id))


@router.get("/{employee_id}", response_model=SalaryHistoryResponse)
def get_salary_history(
    employee_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    employee = employee_service.get_employee(db, employee_id)
    check_self_or_admin(current_user, employee.user_id)
    return _history(db, employee)
