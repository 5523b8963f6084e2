"""Employee domain model."""

from datetime import datetime
from enum import StrEnum
from uuid import UUID

from pydantic import BaseModel, EmailStr


class EmployeeRole(StrEnum):
    """Employee role enum."""

    EMPLOYEE = "employee"
    ADMIN = "admin"


class Employee(BaseModel):
    """Employee domain model."""

    id: UUID
    external_id: str
    name: str
    email: EmailStr
    phone: str = ""
    profession: str = ""
    role: EmployeeRole = EmployeeRole.EMPLOYEE
    profile_image_url: str | None = None
    is_active: bool = True
    created_at: datetime
    updated_at: datetime

    class Config:
        """Pydantic config."""

        from_attributes = True

    @property
    def is_admin(self) -> bool:
        """Check if the employee holds the admin role."""
        return self.role == EmployeeRole.ADMIN
