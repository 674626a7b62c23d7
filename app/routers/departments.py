from fastapi import APIRouter, Depends
from sqlalchemy import func
from sqlalchemy.orm import Session
import logging

from app.core.exceptions import ConflictError, NotFoundError
from app.database import get_db
from app.models.department import Department
from app.models.employee import Employee
from app.models.user import User
from app.routers.auth_deps import get_current_user, require_admin
from app.schemas.department import (
    DepartmentCreate, DepartmentUpdate, DepartmentResponse, DepartmentListResponse
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/department", tags=["departments"])


def _get_department(db: Session, id: int) -> Department:
    department = db.get(Department, id)
    if not department:
        raise NotFoundError("Department not found")
    return department


def _employee_count(db: Session, id: int) -> int:
    return db.query(func.count(Employee.id)).filter(Employee.department_id == id).scalar() or 0


def _to_response(db: Session, department: Department) -> DepartmentResponse:
    response = DepartmentResponse.model_validate(department)
    response.employee_count = _employee_count(db, department.id)
    return response


@router.post("", response_model=DepartmentResponse)
def add_department(
    data: DepartmentCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin())
):
    department = Department(dep_name=data.dep_name, description=data.description)
    db.add(department)
    db.commit()
    db.refresh(department)
    logger.info(f"Department {department.id} created: {department.dep_name}")
    return _to_response(db, department)


@router.get("", response_model=DepartmentListResponse)
def get_departments(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    departments = db.query(Department).order_by(Department.id).all()
    return {"success": True, "departments": [_to_response(db, d) for d in departments]}


@router.get("/{id}", response_model=DepartmentResponse)
def get_department(
    id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return _to_response(db, _get_department(db, id))


@router.put("/{id}", response_model=DepartmentResponse)
def update_department(
    id: int,
    data: DepartmentUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin())
):
    department = _get_department(db, id)
    for field, value in data.model_dump(exclude_unset=True).items():
        if field == "dep_name" and value is None:
            continue
        setattr(department, field, value)
    db.commit()
    db.refresh(department)
    return _to_response(db, department)


@router.delete("/{id}")
def delete_department(
    id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin())
):
    department = _get_department(db, id)
    if _employee_count(db, id):
        raise ConflictError("Department still has employees assigned")
    db.delete(department)
    db.commit()
    logger.info(f"Department {id} deleted")
    return {"success": True, "message": "Department deleted successfully"}
