# Models package
# Importing modules here ensures they are registered with SQLAlchemy Base
from . import user, department, employee, salary, leave_request

# Explicit class exports for cleaner imports
from .user import User, UserRole
from .department import Department
from .employee import Employee
from .salary import Salary
from .leave_request import LeaveRequest, LeaveStatus, LeaveType, HalfDayPeriod

__all__ = [
    "User",
    "UserRole",
    "Department",
    "Employee",
    "Salary",
    "LeaveRequest",
    "LeaveStatus",
    "LeaveType",
    "HalfDayPeriod",
]
