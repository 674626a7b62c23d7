"""
Employee profile attached one-to-one to a User.
The date of joining (doj) drives leave accrual.
"""
from sqlalchemy import Column, Integer, String, Date, Float, DateTime, ForeignKey
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from app.database import Base


class Employee(Base):
    __tablename__ = "employees"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)
    employee_code = Column(String, unique=True, index=True, nullable=False)

    dob = Column(Date, nullable=True)
    doj = Column(Date, nullable=True)  # Legacy rows may lack it; leave endpoints refuse those
    gender = Column(String, nullable=True)
    phone_number = Column(String, nullable=True)

    department_id = Column(Integer, ForeignKey("departments.id"), nullable=True, index=True)
    salary = Column(Float, default=0.0)

    # Banking
    bank_branch = Column(String, nullable=True)
    bank_ifsc = Column(String, nullable=True)
    account_number = Column(String, nullable=True)  # Fernet-encrypted

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    user = relationship("User", back_populates="employee_profile")
    department = relationship("Department", back_populates="employees")
    leave_requests = relationship("LeaveRequest", back_populates="employee", cascade="all, delete-orphan")
    salaries = relationship("Salary", back_populates="employee", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Employee {self.employee_code}>"
