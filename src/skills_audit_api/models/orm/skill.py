"""Skill ORM model."""

from datetime import date
from uuid import UUID

from sqlalchemy import Date, Index, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from skills_audit_api.models.orm.base import Base, TimestampMixin, UUIDMixin


class SkillORM(Base, UUIDMixin, TimestampMixin):
    """Skill database model."""

    __tablename__ = "skills"

    employee_id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    category: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    proficiency_level: Mapped[str] = mapped_column(String(20), nullable=False, default="beginner")
    years_of_experience: Mapped[int | None] = mapped_column(Integer, nullable=True)
    last_used: Mapped[date | None] = mapped_column(Date, nullable=True)

    __table_args__ = (
        Index("idx_skills_employee_id", "employee_id"),
        Index("idx_skills_category", "category"),
    )
