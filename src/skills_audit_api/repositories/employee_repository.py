"""Employee repository."""

from skills_audit_api.models.orm.employee import EmployeeORM
from skills_audit_api.repositories.base import BaseRepository


class EmployeeRepository(BaseRepository[EmployeeORM]):
    """Repository for employee operations."""

    model = EmployeeORM
