from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List
from datetime import date, datetime


class SalaryCreate(BaseModel):
    employee_id: int
    basic_salary: float = Field(..., ge=0)
    allowances: float = Field(0.0, ge=0)
    deductions: float = Field(0.0, ge=0)
    pay_date: Optional[date] = None


class SalaryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    employee_id: int
    basic_salary: float
    allowances: float
    deductions: float
    net_salary: float
    pay_date: date
    created_at: Optional[datetime] = None


class SalaryHistoryResponse(BaseModel):
    success: bool = True
    salaries: List[SalaryResponse]
