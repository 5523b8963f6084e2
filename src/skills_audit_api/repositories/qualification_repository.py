"""Qualification repository."""

from skills_audit_api.models.orm.qualification import QualificationORM
from skills_audit_api.repositories.base import BaseRepository


class QualificationRepository(BaseRepository[QualificationORM]):
    """Repository for qualification operations."""

    model = QualificationORM
