"""Domain-specific exceptions for the skills audit API.

These exceptions provide a clean separation between service-layer errors
and HTTP responses, avoiding string matching in routers.
"""

from typing import Any


class SkillsAuditError(Exception):
    """Base exception for all skills audit errors."""

    def __init__(self, message: str = "An error occurred", details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


# =============================================================================
# Resource Not Found Errors (404)
# =============================================================================


class NotFoundError(SkillsAuditError):
    """Base class for resource not found errors."""

    pass


class EmployeeNotFoundError(NotFoundError):
    """Raised when an employee cannot be found."""

    def __init__(self, employee_id: str | None = None) -> None:
        message = "Employee not found"
        details = {"employee_id": str(employee_id)} if employee_id else {}
        super().__init__(message, details)


class QualificationNotFoundError(NotFoundError):
    """Raised when a qualification cannot be found."""

    def __init__(self, qualification_id: str | None = None) -> None:
        message = "Qualification not found"
        details = {"qualification_id": str(qualification_id)} if qualification_id else {}
        super().__init__(message, details)


class TrainingNotFoundError(NotFoundError):
    """Raised when a training cannot be found."""

    def __init__(self, training_id: str | None = None) -> None:
        message = "Training not found"
        details = {"training_id": str(training_id)} if training_id else {}
        super().__init__(message, details)


class SkillNotFoundError(NotFoundError):
    """Raised when a skill cannot be found."""

    def __init__(self, skill_id: str | None = None) -> None:
        message = "Skill not found"
        details = {"skill_id": str(skill_id)} if skill_id else {}
        super().__init__(message, details)


# =============================================================================
# Conflict Errors (409)
# =============================================================================


class ConflictError(SkillsAuditError):
    """Base class for resource conflict errors."""

    pass


class EmployeeAlreadyExistsError(ConflictError):
    """Raised when an employee with the same identity reference exists."""

    def __init__(self, external_id: str | None = None) -> None:
        message = "Employee with this identity already exists"
        details = {"external_id": external_id} if external_id else {}
        super().__init__(message, details)


class DependencyMissingError(SkillsAuditError):
    """Base class for records whose required related record is gone."""

    pass


class OwnerNotFoundError(DependencyMissingError):
    """Raised when the employee owning a record no longer exists."""

    def __init__(self, employee_id: str | None = None, record_id: str | None = None) -> None:
        message = "Associated employee not found"
        details: dict[str, Any] = {}
        if employee_id:
            details["employee_id"] = str(employee_id)
        if record_id:
            details["record_id"] = str(record_id)
        super().__init__(message, details)


# =============================================================================
# Validation Errors (400)
# =============================================================================


class ValidationFailedError(SkillsAuditError):
    """Base class for validation errors."""

    pass


class InvalidTransitionError(ValidationFailedError):
    """Raised when a workflow status change is not allowed."""

    def __init__(self, entity: str, current: str, target: str) -> None:
        message = f"Cannot change {entity} status from '{current}' to '{target}'"
        super().__init__(message, {"entity": entity, "current": current, "target": target})


# =============================================================================
# Store Errors (503)
# =============================================================================


class StoreUnavailableError(SkillsAuditError):
    """Raised when the record store cannot serve a request."""

    def __init__(self, operation: str, collection: str, reason: str | None = None) -> None:
        message = "Record store unavailable"
        details = {"operation": operation, "collection": collection}
        if reason:
            details["reason"] = reason
        super().__init__(message, details)
