"""Acting user context passed into workflow operations."""

from uuid import UUID

from pydantic import BaseModel

from skills_audit_api.models.domain.employee import EmployeeRole


class ActorContext(BaseModel):
    """The authenticated employee performing an operation."""

    employee_id: UUID
    external_id: str
    email: str
    role: EmployeeRole = EmployeeRole.EMPLOYEE

    @property
    def is_admin(self) -> bool:
        """Check if the actor holds the admin role."""
        return self.role == EmployeeRole.ADMIN

    def can_access_employee(self, employee_id: UUID) -> bool:
        """Admins see everyone; employees only see their own records."""
        return self.is_admin or self.employee_id == employee_id
