"""Base repository with common database operations."""

from collections.abc import Iterable
from typing import Any, Generic, TypeVar
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from skills_audit_api.exceptions import ValidationFailedError
from skills_audit_api.models.orm.base import Base

T = TypeVar("T", bound=Base)


class BaseRepository(Generic[T]):
    """Base repository with common CRUD operations."""

    model: type[T]

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session."""
        self.session = session

    @classmethod
    def filterable_fields(cls) -> frozenset[str]:
        """Column names that may be used in equality filters."""
        return frozenset(cls.model.__table__.columns.keys())

    def _check_fields(self, fields: Iterable[str]) -> None:
        for field in fields:
            if field not in self.filterable_fields():
                raise ValidationFailedError(
                    f"Unknown filter field '{field}'",
                    {"table": self.model.__tablename__, "field": field},
                )

    async def get(self, id: UUID) -> T | None:
        """Get a record by ID.

        Args:
            id: Record UUID

        Returns:
            Record or None if not found
        """
        result = await self.session.execute(
            select(self.model).where(self.model.id == id)
        )
        return result.scalar_one_or_none()

    async def get_all(self) -> list[T]:
        """Get all records in insertion order.

        Returns:
            List of records
        """
        result = await self.session.execute(
            select(self.model).order_by(self.model.created_at.asc())
        )
        return list(result.scalars().all())

    async def find_by(self, field: str, value: Any) -> list[T]:
        """Get records whose field equals the given value.

        Args:
            field: Column name (whitelisted against the model's columns)
            value: Value to compare against

        Returns:
            Matching records in insertion order

        Raises:
            ValidationFailedError: If the field is not a column of the model
        """
        self._check_fields([field])
        column = getattr(self.model, field)
        result = await self.session.execute(
            select(self.model).where(column == value).order_by(self.model.created_at.asc())
        )
        return list(result.scalars().all())

    async def create(self, **kwargs: Any) -> T:
        """Create a new record.

        Args:
            **kwargs: Field values

        Returns:
            Created record
        """
        instance = self.model(**kwargs)
        self.session.add(instance)
        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def update(self, id: UUID, **kwargs: Any) -> T | None:
        """Update a record by ID.

        Args:
            id: Record UUID
            **kwargs: Fields to update

        Returns:
            Updated record or None if not found
        """
        instance = await self.get(id)
        if instance is None:
            return None

        for key, value in kwargs.items():
            if hasattr(instance, key):
                setattr(instance, key, value)

        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def update_if(
        self, id: UUID, expected: dict[str, Any], values: dict[str, Any]
    ) -> bool:
        """Update a record only while it still holds the expected values.

        Runs as a single UPDATE ... WHERE statement, so two concurrent callers
        expecting the same state cannot both succeed.

        Args:
            id: Record UUID
            expected: Column values the record must currently hold
            values: Fields to update

        Returns:
            True if a row was updated, False if the record is missing or changed

        Raises:
            ValidationFailedError: If a field is not a column of the model
        """
        self._check_fields([*expected, *values])
        stmt = (
            update(self.model)
            .where(
                self.model.id == id,
                *(getattr(self.model, field) == value for field, value in expected.items()),
            )
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount > 0

    async def delete(self, id: UUID) -> bool:
        """Delete a record by ID.

        Args:
            id: Record UUID

        Returns:
            True if deleted, False if not found
        """
        instance = await self.get(id)
        if instance is None:
            return False

        await self.session.delete(instance)
        await self.session.flush()
        return True
