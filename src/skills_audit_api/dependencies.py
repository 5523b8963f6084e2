"""Centralized dependency injection factories for FastAPI.

The record store and the HTTP collaborators are process-wide singletons;
services are cheap wrappers built per request around them.
"""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from skills_audit_api.config import get_settings
from skills_audit_api.repositories.record_store import RecordStore, SqlRecordStore
from skills_audit_api.services.aggregation_service import AggregationService
from skills_audit_api.services.employee_service import EmployeeService
from skills_audit_api.services.notification_service import HttpPushTransport, NotificationService
from skills_audit_api.services.qualification_service import QualificationService
from skills_audit_api.services.report_service import ReportService
from skills_audit_api.services.skill_service import SkillService
from skills_audit_api.services.storage_service import BlobStorage, StorageService
from skills_audit_api.services.training_service import TrainingService


# =============================================================================
# Shared Collaborators
# =============================================================================


@lru_cache
def get_record_store() -> RecordStore:
    """Get the shared record store."""
    from skills_audit_api.database import async_session_maker

    settings = get_settings()
    return SqlRecordStore(async_session_maker, timeout=settings.store_timeout_seconds)


@lru_cache
def get_notification_service() -> NotificationService:
    """Get the shared NotificationService instance."""
    settings = get_settings()
    transport = HttpPushTransport(
        settings.push_gateway_url,
        token=settings.push_gateway_token,
        timeout=settings.push_timeout_seconds,
    )
    return NotificationService(transport)


@lru_cache
def get_storage_service() -> BlobStorage:
    """Get the shared blob storage client."""
    settings = get_settings()
    return StorageService(
        settings.storage_api_base,
        settings.storage_bucket,
        token=settings.storage_token,
    )


StoreDep = Annotated[RecordStore, Depends(get_record_store)]
NotificationsDep = Annotated[NotificationService, Depends(get_notification_service)]
StorageDep = Annotated[BlobStorage, Depends(get_storage_service)]


# =============================================================================
# Service Factories
# =============================================================================


def get_employee_service(
    store: StoreDep,
    notifications: NotificationsDep,
    storage: StorageDep,
) -> EmployeeService:
    """Get EmployeeService instance."""
    return EmployeeService(store, notifications, storage)


def get_qualification_service(
    store: StoreDep,
    notifications: NotificationsDep,
    storage: StorageDep,
) -> QualificationService:
    """Get QualificationService instance."""
    return QualificationService(store, notifications, storage)


def get_training_service(store: StoreDep, notifications: NotificationsDep) -> TrainingService:
    """Get TrainingService instance."""
    return TrainingService(store, notifications)


def get_skill_service(store: StoreDep) -> SkillService:
    """Get SkillService instance."""
    return SkillService(store)


def get_aggregation_service(store: StoreDep) -> AggregationService:
    """Get AggregationService instance."""
    settings = get_settings()
    return AggregationService(
        store,
        concurrency=settings.fanout_concurrency,
        preview_limit=settings.dashboard_preview_limit,
    )


def get_report_service(
    aggregation: Annotated[AggregationService, Depends(get_aggregation_service)],
) -> ReportService:
    """Get ReportService instance."""
    return ReportService(aggregation)
