"""Dashboard DTOs."""

from uuid import UUID

from pydantic import BaseModel

from skills_audit_api.models.domain.employee import Employee
from skills_audit_api.models.domain.qualification import Qualification
from skills_audit_api.models.domain.training import Training


class DashboardResponse(BaseModel):
    """Dashboard response DTO."""

    total_employees: int
    active_employees: int
    total_qualifications: int
    pending_approvals: int
    completed_trainings: int
    in_progress_trainings: int
    recent_employees: list[Employee]
    pending_qualifications: list[Qualification]
    suggested_trainings: list[Training]

    # Chart data
    employees_by_profession: dict[str, int]
    training_status_distribution: dict[str, int]
    skill_categories: dict[str, int]

    # Set when some sections or employees could not be loaded
    partial: bool = False
    failed_employee_ids: list[UUID] = []
