"""Qualification ORM model."""

from datetime import datetime
from uuid import UUID

from sqlalchemy import DateTime, Index, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from skills_audit_api.models.orm.base import Base, TimestampMixin, UUIDMixin


class QualificationORM(Base, UUIDMixin, TimestampMixin):
    """Qualification database model."""

    __tablename__ = "qualifications"

    # Owner reference; not a foreign key, children are removed by the service layer
    employee_id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), nullable=False)
    institution: Mapped[str] = mapped_column(String(255), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    year_obtained: Mapped[int | None] = mapped_column(Integer, nullable=True)
    certificate_url: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="pending")
    approved_by: Mapped[UUID | None] = mapped_column(Uuid(as_uuid=True), nullable=True)
    approved_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    rejection_reason: Mapped[str | None] = mapped_column(Text, nullable=True)

    __table_args__ = (
        Index("idx_qualifications_employee_id", "employee_id"),
        Index("idx_qualifications_status", "status"),
    )
