"""Report DTOs consumed by document renderers."""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel

from skills_audit_api.models.domain.employee import Employee
from skills_audit_api.models.domain.qualification import Qualification
from skills_audit_api.models.domain.skill import Skill
from skills_audit_api.models.domain.training import Training


class EmployeeBundle(BaseModel):
    """One employee joined with its sub-records.

    ``complete`` is False when a sub-query failed and the lists were left empty.
    """

    employee: Employee
    qualifications: list[Qualification] = []
    trainings: list[Training] = []
    skills: list[Skill] = []
    complete: bool = True


class EmployeeTotals(BaseModel):
    """Per-employee sub-record counts."""

    employee_id: UUID
    qualifications: int
    trainings: int
    skills: int
    complete: bool = True


class EmployeeListRow(BaseModel):
    """Row of the flat employee list."""

    name: str
    email: str
    phone: str
    profession: str
    status: str  # Active / Inactive
    created_at: date


class EmployeeListReport(BaseModel):
    """Flat employee list."""

    generated_at: datetime
    rows: list[EmployeeListRow]


class EmployeeDetailReport(BaseModel):
    """Per-employee detailed bundle."""

    generated_at: datetime
    employees: list[EmployeeBundle]
    partial: bool = False


class SkillsAuditSummary(BaseModel):
    """Skills by category and employees by profession."""

    skill_categories: dict[str, int]
    employees_by_profession: dict[str, int]


class QualificationStatusRow(BaseModel):
    """Qualification status breakdown for one employee."""

    employee_id: UUID
    employee_name: str
    total: int
    approved: int
    pending: int
    rejected: int


class QualificationsSummary(BaseModel):
    """Qualification status breakdown per employee, with grand totals."""

    rows: list[QualificationStatusRow]
    total: int
    approved: int
    pending: int
    rejected: int
    partial: bool = False


class TrainingStatusRow(BaseModel):
    """Training status breakdown for one employee."""

    employee_id: UUID
    employee_name: str
    total: int
    completed: int
    in_progress: int
    not_started: int
    suggested: int


class TrainingOverview(BaseModel):
    """Training status breakdown per employee, with grand totals."""

    rows: list[TrainingStatusRow]
    total: int
    completed: int
    in_progress: int
    not_started: int
    suggested: int
    partial: bool = False


class SkillEntry(BaseModel):
    """Skill as listed in the gap analysis."""

    name: str
    proficiency_level: str
    category: str


class SkillsGapRow(BaseModel):
    """Skills held by one employee."""

    employee_id: UUID
    employee_name: str
    skills: list[SkillEntry]


class SkillsGapAnalysis(BaseModel):
    """Per-employee skills plus the overall category distribution."""

    rows: list[SkillsGapRow]
    skill_categories: dict[str, int]
    partial: bool = False


class WorkforcePlanning(BaseModel):
    """Headcount, distributions and employees grouped by profession."""

    total_employees: int
    active_employees: int
    employees_by_profession: dict[str, int]
    training_status_distribution: dict[str, int]
    employees_grouped: dict[str, list[Employee]]


class TrainingProgressRow(BaseModel):
    """Row of the training progress sheet."""

    training_name: str
    employee_id: UUID
    status: str
    progress: int
    start_date: date | None = None
    end_date: date | None = None


class TrainingProgressReport(BaseModel):
    """Progress of every training."""

    generated_at: datetime
    rows: list[TrainingProgressRow]
