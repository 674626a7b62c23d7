from pydantic import BaseModel, EmailStr, ConfigDict
from typing import Optional, List
from datetime import date, datetime
from app.models.user import UserRole


class EmployeeCreate(BaseModel):
    name: str
    email: EmailStr
    password: str
    role: UserRole = UserRole.EMPLOYEE
    employee_code: str
    dob: Optional[date] = None
    doj: date
    gender: Optional[str] = None
    phone_number: Optional[str] = None
    department_id: Optional[int] = None
    salary: float = 0.0
    bank_branch: Optional[str] = None
    bank_ifsc: Optional[str] = None
    account_number: Optional[str] = None


class EmployeeUpdate(BaseModel):
    """Partial update; only fields that are set are written."""
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    role: Optional[UserRole] = None
    employee_code: Optional[str] = None
    dob: Optional[date] = None
    doj: Optional[date] = None
    gender: Optional[str] = None
    phone_number: Optional[str] = None
    department_id: Optional[int] = None
    salary: Optional[float] = None
    bank_branch: Optional[str] = None
    bank_ifsc: Optional[str] = None
    account_number: Optional[str] = None


class EmployeeUser(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: EmailStr
    role: UserRole
    profile_image: Optional[str] = None


class EmployeeDepartment(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    dep_name: str


class EmployeeResponse(BaseModel):
    id: int
    employee_code: str
    user: EmployeeUser
    department: Optional[EmployeeDepartment] = None
    dob: Optional[date] = None
    doj: Optional[date] = None
    gender: Optional[str] = None
    phone_number: Optional[str] = None
    salary: float = 0.0
    bank_branch: Optional[str] = None
    bank_ifsc: Optional[str] = None
    account_number: Optional[str] = None  # masked
    created_at: Optional[datetime] = None


class EmployeeListResponse(BaseModel):
    success: bool = True
    employees: List[EmployeeResponse]
    total: int
    page: int
    page_size: int
