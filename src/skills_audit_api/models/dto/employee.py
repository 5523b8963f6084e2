"""Employee DTOs."""

from pydantic import BaseModel, EmailStr, Field

from skills_audit_api.models.domain.employee import Employee
from skills_audit_api.models.domain.qualification import Qualification
from skills_audit_api.models.domain.skill import Skill
from skills_audit_api.models.domain.training import Training


class EmployeeCreate(BaseModel):
    """DTO for registering an employee.

    The identity provider account must already exist; only its subject is stored.
    """

    external_id: str = Field(min_length=1, max_length=255, description="Identity provider subject")
    name: str = Field(min_length=1, max_length=255, description="Full name of the employee")
    email: EmailStr = Field(description="Employee email address")
    phone: str = Field(default="", max_length=50, description="Cell number")
    profession: str = Field(default="", max_length=255, description="Profession or job title")


class EmployeeUpdate(BaseModel):
    """DTO for editing an employee profile. Role and identity are not editable."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    email: EmailStr | None = None
    phone: str | None = Field(default=None, max_length=50)
    profession: str | None = Field(default=None, max_length=255)
    profile_image_url: str | None = Field(default=None, max_length=1000)


class EmployeeStatistics(BaseModel):
    """Per-employee record counts shown on the details page."""

    total_qualifications: int = 0
    approved_qualifications: int = 0
    pending_qualifications: int = 0
    completed_trainings: int = 0
    in_progress_trainings: int = 0
    total_skills: int = 0


class EmployeeDetails(BaseModel):
    """Employee joined with all of its sub-records."""

    employee: Employee
    qualifications: list[Qualification]
    trainings: list[Training]
    skills: list[Skill]
    statistics: EmployeeStatistics


class EmployeeDeletionResult(BaseModel):
    """What was removed when an employee was deleted."""

    employee_id: str
    qualifications_deleted: int
    trainings_deleted: int
    skills_deleted: int
    certificates_released: int
