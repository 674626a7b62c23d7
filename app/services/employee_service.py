"""
Employee Service Layer

Creates, updates and removes employees together with their login user,
profile image and banking details.
"""
import logging
from typing import Any, Dict, List, Optional

from fastapi import UploadFile
from sqlalchemy import or_
from sqlalchemy.orm import Session

from app.core.exceptions import ConflictError, NotFoundError
from app.core.security import decrypt_data, encrypt_data, mask_value
from app.models.department import Department
from app.models.employee import Employee
from app.models.user import User
from app.schemas.employee import EmployeeCreate, EmployeeDepartment, EmployeeUpdate, EmployeeUser
from app.services import auth as auth_service
from app.services import storage

logger = logging.getLogger(__name__)

_USER_FIELDS = ("name", "email", "role")


def serialize_employee(employee: Employee) -> Dict[str, Any]:
    """Employee as a response dict, with the account number masked."""
    account_number = decrypt_data(employee.account_number) if employee.account_number else None
    return {
        "id": employee.id,
        "employee_code": employee.employee_code,
        "user": EmployeeUser.model_validate(employee.user),
        "department": EmployeeDepartment.model_validate(employee.department) if employee.department else None,
        "dob": employee.dob,
        "doj": employee.doj,
        "gender": employee.gender,
        "phone_number": employee.phone_number,
        "salary": employee.salary or 0.0,
        "bank_branch": employee.bank_branch,
        "bank_ifsc": employee.bank_ifsc,
        "account_number": mask_value(account_number) if account_number else None,
        "created_at": employee.created_at,
    }


def _check_department(db: Session, department_id: Optional[int]) -> None:
    if department_id is not None and not db.get(Department, department_id):
        raise NotFoundError("Department not found")


def create_employee(db: Session, data: EmployeeCreate, image: Optional[UploadFile] = None) -> Employee:
    if db.query(User).filter(User.email == data.email).first():
        raise ConflictError("User already registered")
    if db.query(Employee).filter(Employee.employee_code == data.employee_code).first():
        raise ConflictError("Employee ID already in use")
    _check_department(db, data.department_id)

    filename = storage.save_profile_image(image) if image else None

    try:
        user = User(
            name=data.name,
            email=data.email,
            hashed_password=auth_service.get_password_hash(data.password),
            role=data.role,
            profile_image=filename,
        )
        db.add(user)
        db.flush()

        employee = Employee(
            user_id=user.id,
            employee_code=data.employee_code,
            dob=data.dob,
            doj=data.doj,
            gender=data.gender,
            phone_number=data.phone_number,
            department_id=data.department_id,
            salary=data.salary,
            bank_branch=data.bank_branch,
            bank_ifsc=data.bank_ifsc,
            account_number=encrypt_data(data.account_number) if data.account_number else None,
        )
        db.add(employee)
        db.commit()
    except Exception:
        db.rollback()
        storage.delete_profile_image(filename)
        raise

    db.refresh(employee)
    logger.info(f"Employee {employee.employee_code} created for user {user.id}")
    return employee


def list_employees(
    db: Session,
    department_id: Optional[int] = None,
    search: Optional[str] = None,
    page: int = 1,
    page_size: int = 20
) -> Dict[str, Any]:
    query = db.query(Employee).join(User, Employee.user_id == User.id)
    if department_id:
        query = query.filter(Employee.department_id == department_id)
    if search:
        pattern = f"%{search.strip()}%"
        query = query.filter(or_(
            User.name.ilike(pattern),
            User.email.ilike(pattern),
            Employee.employee_code.ilike(pattern),
        ))

    total = query.count()
    employees = query.order_by(Employee.id).offset((page - 1) * page_size).limit(page_size).all()
    return {"employees": employees, "total": total, "page": page, "page_size": page_size}


def get_employee(db: Session, employee_id: int) -> Employee:
    employee = db.get(Employee, employee_id)
    if not employee:
        raise NotFoundError("Employee not found")
    return employee


def get_employee_by_user(db: Session, user_id: int) -> Employee:
    """Profile owned by a user. Employee and user ids are separate sequences."""
    employee = db.query(Employee).filter(Employee.user_id == user_id).first()
    if not employee:
        raise NotFoundError("Employee not found")
    return employee


def employees_by_department(db: Session, department_id: int) -> List[Employee]:
    return db.query(Employee).filter(Employee.department_id == department_id).order_by(Employee.id).all()


def update_employee(
    db: Session,
    employee_id: int,
    data: EmployeeUpdate,
    image: Optional[UploadFile] = None
) -> Employee:
    employee = db.get(Employee, employee_id)
    if not employee:
        raise NotFoundError("Employee not found")
    user = employee.user
    if not user:
        raise NotFoundError("User associated with employee not found")

    changes = data.model_dump(exclude_unset=True, exclude_none=True)

    if "email" in changes and changes["email"] != user.email:
        if db.query(User).filter(User.email == changes["email"], User.id != user.id).first():
            raise ConflictError("Email already in use")
    if "employee_code" in changes and changes["employee_code"] != employee.employee_code:
        if db.query(Employee).filter(
            Employee.employee_code == changes["employee_code"], Employee.id != employee.id
        ).first():
            raise ConflictError("Employee ID already in use")
    if "department_id" in changes:
        _check_department(db, changes["department_id"])

    for field in _USER_FIELDS:
        if field in changes:
            setattr(user, field, changes.pop(field))

    if "account_number" in changes:
        changes["account_number"] = encrypt_data(changes["account_number"])
    for field, value in changes.items():
        setattr(employee, field, value)

    previous_image = new_image = None
    if image:
        previous_image = user.profile_image
        new_image = storage.save_profile_image(image)
        user.profile_image = new_image

    try:
        db.commit()
    except Exception:
        db.rollback()
        storage.delete_profile_image(new_image)
        raise
    # Old file goes only once the new one is committed
    storage.delete_profile_image(previous_image)
    db.refresh(employee)
    logger.info(f"Employee {employee.id} updated")
    return employee


def delete_employee(db: Session, employee_id: int) -> None:
    employee = db.get(Employee, employee_id)
    if not employee:
        raise NotFoundError("Employee not found")
    user = employee.user
    if not user:
        raise NotFoundError("User associated with employee not found")

    image = user.profile_image
    # Deleting the user cascades to the profile, its leave requests and salaries
    db.delete(user)
    db.commit()
    storage.delete_profile_image(image)
    logger.info(f"Employee {employee_id} and user {user.id} deleted")
