from pydantic import BaseModel, Field, ConfigDict, field_validator
from typing import Optional, List
from datetime import datetime


class DepartmentBase(BaseModel):
    """Base schema for department data."""
    dep_name: str = Field(..., max_length=100)
    description: Optional[str] = None

    @field_validator("dep_name")
    @classmethod
    def dep_name_not_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Department name is required")
        return v.strip()


class DepartmentCreate(DepartmentBase):
    """Schema for creating a new department."""
    pass


class DepartmentUpdate(BaseModel):
    """Schema for updating a department."""
    dep_name: Optional[str] = Field(None, max_length=100)
    description: Optional[str] = None

    @field_validator("dep_name")
    @classmethod
    def dep_name_not_blank(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            raise ValueError("Department name cannot be blank")
        return v.strip() if v else v


class DepartmentResponse(DepartmentBase):
    """Schema for department response."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    # Computed
    employee_count: Optional[int] = None


class DepartmentListResponse(BaseModel):
    success: bool = True
    departments: List[DepartmentResponse]
