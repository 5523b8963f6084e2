"""Training repository."""

from skills_audit_api.models.orm.training import TrainingORM
from skills_audit_api.repositories.base import BaseRepository


class TrainingRepository(BaseRepository[TrainingORM]):
    """Repository for training operations."""

    model = TrainingORM
