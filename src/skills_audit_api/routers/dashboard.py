"""Dashboard router."""

from typing import Annotated

from fastapi import APIRouter, Depends

from skills_audit_api.dependencies import get_aggregation_service
from skills_audit_api.models.dto.dashboard import DashboardResponse
from skills_audit_api.security.auth import AdminActor
from skills_audit_api.services.aggregation_service import AggregationService

router = APIRouter()


@router.get("", response_model=DashboardResponse)
async def get_dashboard(
    current_user: AdminActor,
    aggregation_service: Annotated[AggregationService, Depends(get_aggregation_service)],
) -> DashboardResponse:
    """Get dashboard overview data.

    Returns headcount, approval and training counts, previews of pending
    work and chart distributions. ``partial`` is set when some of the data
    could not be loaded.
    """
    return await aggregation_service.get_dashboard()
