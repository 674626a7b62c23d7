from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile
from pydantic import EmailStr
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.user import User, UserRole
from app.routers.auth_deps import get_current_user, require_admin, check_self_or_admin
from app.schemas.employee import (
    EmployeeCreate, EmployeeUpdate, EmployeeResponse, EmployeeListResponse
)
from app.services import employee_service

router = APIRouter(prefix="/employees", tags=["employees"])


@router.post("", response_model=EmployeeResponse)
def add_employee(
    name: str = Form(...),
    email: EmailStr = Form(...),
    password: str = Form(..., min_length=6),
    employee_code: str = Form(...),
    doj: date = Form(...),
    dob: Optional[date] = Form(None),
    gender: Optional[str] = Form(None),
    phone_number: Optional[str] = Form(None),
    department_id: Optional[int] = Form(None),
    salary: float = Form(0.0, ge=0),
    role: UserRole = Form(UserRole.EMPLOYEE),
    bank_branch: Optional[str] = Form(None),
    bank_ifsc: Optional[str] = Form(None),
    account_number: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin())
):
    """Create the login user and the employee profile (multipart form, optional image)."""
    data = EmployeeCreate(
        name=name, email=email, password=password, role=role,
        employee_code=employee_code, dob=dob, doj=doj, gender=gender,
        phone_number=phone_number, department_id=department_id, salary=salary,
        bank_branch=bank_branch, bank_ifsc=bank_ifsc, account_number=account_number,
    )
    employee = employee_service.create_employee(db, data, image or None)
    return employee_service.serialize_employee(employee)


@router.get("", response_model=EmployeeListResponse)
def get_employees(
    department_id: Optional[int] = None,
    search: Optional[str] = None,
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin())
):
    result = employee_service.list_employees(db, department_id, search, page, page_size)
    result["employees"] = [employee_service.serialize_employee(e) for e in result["employees"]]
    return result


@router.get("/department/{department_id}", response_model=EmployeeListResponse)
def get_employees_by_department(
    department_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin())
):
    employees = employee_service.employees_by_department(db, department_id)
    return {
        "employees": [employee_service.serialize_employee(e) for e in employees],
        "total": len(employees),
        "page": 1,
        "page_size": len(employees),
    }


@router.get("/user/{user_id}", response_model=EmployeeResponse)
def get_employee_by_user(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Profile of the given user; employees use this for their own record."""
    check_self_or_admin(current_user, user_id)
    return employee_service.serialize_employee(employee_service.get_employee_by_user(db, user_id))


@router.get("/{id}", response_model=EmployeeResponse)
def get_employee(
    id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    employee = employee_service.get_employee(db, id)
    check_self_or_admin(current_user, employee.user_id)
    return employee_service.serialize_employee(employee)


@router.put("/{id}", response_model=EmployeeResponse)
def update_employee(
    id: int,
    name: Optional[str] = Form(None),
    email: Optional[EmailStr] = Form(None),
    employee_code: Optional[str] = Form(None),
    dob: Optional[date] = Form(None),
    doj: Optional[date] = Form(None),
    gender: Optional[str] = Form(None),
    phone_number: Optional[str] = Form(None),
    department_id: Optional[int] = Form(None),
    salary: Optional[float] = Form(None, ge=0),
    role: Optional[UserRole] = Form(None),
    bank_branch: Optional[str] = Form(None),
    bank_ifsc: Optional[str] = Form(None),
    account_number: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin())
):
    data = EmployeeUpdate(
        name=name, email=email, role=role, employee_code=employee_code,
        dob=dob, doj=doj, gender=gender, phone_number=phone_number,
        department_id=department_id, salary=salary, bank_branch=bank_branch,
        bank_ifsc=bank_ifsc, account_number=account_number,
    )
    employee = employee_service.update_employee(db, id, data, image or None)
    return employee_service.serialize_employee(employee)


@router.delete("/{id}")
def delete_employee(
    id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin())
):
    employee_service.delete_employee(db, id)
    return {"success": True, "message": "Employee deleted successfully"}
