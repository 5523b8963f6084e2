"""Record store adapter over the four workforce collections.

Callers address records by collection name and use single-field equality
queries only. Joins and aggregates are the caller's job.
"""

import asyncio
import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from enum import StrEnum
from typing import Any, Protocol, TypeVar, Union
from uuid import UUID

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from skills_audit_api.exceptions import (
    ConflictError,
    StoreUnavailableError,
    ValidationFailedError,
)
from skills_audit_api.models.domain.employee import Employee
from skills_audit_api.models.domain.qualification import Qualification
from skills_audit_api.models.domain.skill import Skill
from skills_audit_api.models.domain.training import Training
from skills_audit_api.repositories.base import BaseRepository
from skills_audit_api.repositories.employee_repository import EmployeeRepository
from skills_audit_api.repositories.qualification_repository import QualificationRepository
from skills_audit_api.repositories.skill_repository import SkillRepository
from skills_audit_api.repositories.training_repository import TrainingRepository
from skills_audit_api.utils.secure_logging import log_warning

logger = logging.getLogger(__name__)

R = TypeVar("R")

Record = Union[Employee, Qualification, Training, Skill]


class Collection(StrEnum):
    """Record collections."""

    EMPLOYEES = "employees"
    QUALIFICATIONS = "qualifications"
    TRAININGS = "trainings"
    SKILLS = "skills"


RECORD_TYPES: dict[Collection, type[Record]] = {
    Collection.EMPLOYEES: Employee,
    Collection.QUALIFICATIONS: Qualification,
    Collection.TRAININGS: Training,
    Collection.SKILLS: Skill,
}

REPOSITORIES: dict[Collection, type[BaseRepository]] = {
    Collection.EMPLOYEES: EmployeeRepository,
    Collection.QUALIFICATIONS: QualificationRepository,
    Collection.TRAININGS: TrainingRepository,
    Collection.SKILLS: SkillRepository,
}


def resolve_collection(collection: Collection | str) -> Collection:
    """Coerce a collection name into a Collection.

    Raises:
        ValidationFailedError: If the name is not a known collection
    """
    try:
        return Collection(collection)
    except ValueError as e:
        raise ValidationFailedError(
            f"Unknown collection '{collection}'", {"collection": str(collection)}
        ) from e


class RecordStore(Protocol):
    """Uniform CRUD and equality-query access to the record collections.

    Implementations must be safe to share between concurrent tasks. Every
    operation may raise StoreUnavailableError; none of them retry.
    """

    async def get(self, collection: Collection | str, id: UUID) -> Record | None:
        """Get a record by ID, or None if absent."""
        ...

    async def query(self, collection: Collection | str, field: str, value: Any) -> list[Record]:
        """Get records whose field equals value, in insertion order."""
        ...

    async def list_all(self, collection: Collection | str) -> list[Record]:
        """Full collection scan in insertion order."""
        ...

    async def create(self, collection: Collection | str, values: dict[str, Any]) -> UUID:
        """Create a record and return its assigned ID."""
        ...

    async def update(
        self,
        collection: Collection | str,
        id: UUID,
        values: dict[str, Any],
        expected: dict[str, Any] | None = None,
    ) -> bool:
        """Apply a partial update.

        With expected, the write happens atomically and only while the record
        still holds those values. False if the record does not exist or no
        longer matches.
        """
        ...

    async def delete(self, collection: Collection | str, id: UUID) -> bool:
        """Delete a record. False if the record does not exist."""
        ...


class SqlRecordStore:
    """RecordStore backed by SQLAlchemy asyncio sessions.

    Each call opens its own session from the shared session factory, so a
    single instance can serve concurrent requests and fan-out tasks.
    """

    def __init__(
        self,
        session_maker: async_sessionmaker[AsyncSession],
        timeout: float = 10.0,
    ) -> None:
        """Initialize store with a session factory and per-call timeout in seconds."""
        self.session_maker = session_maker
        self.timeout = timeout

    @asynccontextmanager
    async def _session(self, operation: str, collection: Collection) -> AsyncIterator[AsyncSession]:
        """Open a session, commit on success and translate driver errors."""
        async with self.session_maker() as session:
            try:
                yield session
                await session.commit()
            except IntegrityError as e:
                raise ConflictError(
                    "Record conflicts with an existing record",
                    {"collection": collection.value},
                ) from e
            except (SQLAlchemyError, OSError) as e:
                log_warning(logger, f"Store {operation} on {collection.value} failed", e)
                raise StoreUnavailableError(operation, collection.value, type(e).__name__) from e

    async def _run(
        self,
        operation: str,
        collection: Collection,
        func: Callable[[], Awaitable[R]],
    ) -> R:
        """Run a store call under the per-call timeout."""
        try:
            return await asyncio.wait_for(func(), timeout=self.timeout)
        except TimeoutError as e:
            logger.warning(f"Store {operation} on {collection.value} timed out after {self.timeout}s")
            raise StoreUnavailableError(operation, collection.value, "timeout") from e

    def _to_record(self, collection: Collection, instance: Any) -> Record:
        return RECORD_TYPES[collection].model_validate(instance)

    async def get(self, collection: Collection | str, id: UUID) -> Record | None:
        """Get a record by ID.

        Args:
            collection: Collection name
            id: Record UUID

        Returns:
            Domain record or None if not found
        """
        coll = resolve_collection(collection)

        async def op() -> Record | None:
            async with self._session("get", coll) as session:
                instance = await REPOSITORIES[coll](session).get(id)
                return None if instance is None else self._to_record(coll, instance)

        return await self._run("get", coll, op)

    async def query(self, collection: Collection | str, field: str, value: Any) -> list[Record]:
        """Get records matching a single-field equality filter.

        Args:
            collection: Collection name
            field: Column name
            value: Value to match

        Returns:
            Matching domain records in insertion order
        """
        coll = resolve_collection(collection)

        async def op() -> list[Record]:
            async with self._session("query", coll) as session:
                rows = await REPOSITORIES[coll](session).find_by(field, value)
                return [self._to_record(coll, row) for row in rows]

        return await self._run("query", coll, op)

    async def list_all(self, collection: Collection | str) -> list[Record]:
        """Load a whole collection.

        Args:
            collection: Collection name

        Returns:
            All domain records in insertion order
        """
        coll = resolve_collection(collection)

        async def op() -> list[Record]:
            async with self._session("list_all", coll) as session:
                rows = await REPOSITORIES[coll](session).get_all()
                return [self._to_record(coll, row) for row in rows]

        return await self._run("list_all", coll, op)

    async def create(self, collection: Collection | str, values: dict[str, Any]) -> UUID:
        """Create a record.

        Args:
            collection: Collection name
            values: Field values

        Returns:
            ID assigned to the new record
        """
        coll = resolve_collection(collection)

        async def op() -> UUID:
            async with self._session("create", coll) as session:
                instance = await REPOSITORIES[coll](session).create(**values)
                return instance.id

        return await self._run("create", coll, op)

    async def update(
        self,
        collection: Collection | str,
        id: UUID,
        values: dict[str, Any],
        expected: dict[str, Any] | None = None,
    ) -> bool:
        """Apply a partial update.

        Args:
            collection: Collection name
            id: Record UUID
            values: Fields to change
            expected: Values the record must still hold for the write to apply

        Returns:
            True if updated, False if not found or no longer matching
        """
        coll = resolve_collection(collection)

        async def op() -> bool:
            async with self._session("update", coll) as session:
                repository = REPOSITORIES[coll](session)
                if expected is not None:
                    return await repository.update_if(id, expected, values)
                instance = await repository.update(id, **values)
                return instance is not None

        return await self._run("update", coll, op)

    async def delete(self, collection: Collection | str, id: UUID) -> bool:
        """Delete a record.

        Args:
            collection: Collection name
            id: Record UUID

        Returns:
            True if deleted, False if not found
        """
        coll = resolve_collection(collection)

        async def op() -> bool:
            async with self._session("delete", coll) as session:
                return await REPOSITORIES[coll](session).delete(id)

        return await self._run("delete", coll, op)
