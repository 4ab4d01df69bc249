"""Dashboard API routes."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ledgerly.domain.entities.access_level import AccessLevel
from ledgerly.domain.entities.feature import DASHBOARD
from ledgerly.domain.services import DashboardService
from ledgerly.infrastructure.api.dependencies import require_feature
from ledgerly.infrastructure.api.schemas import ActivityItemResponse, DashboardStatsResponse
from ledgerly.infrastructure.persistence.database import get_db_session

router = APIRouter(dependencies=[Depends(require_feature(DASHBOARD, AccessLevel.VIEW))])


@router.get("/stats", response_model=DashboardStatsResponse)
async def get_dashboard_stats(
    session: AsyncSession = Depends(get_db_session),
) -> DashboardStatsResponse:
    """Get revenue, expenses, profit, customer count and pending invoices.

    Revenue counts paid invoices only; pending means status 'sent'.
    """
    stats = await DashboardService(session).get_stats()
    return DashboardStatsResponse.model_validate(stats)


@router.get("/activity", response_model=list[ActivityItemResponse])
async def get_recent_activity(
    limit: int = Query(10, ge=1, le=50),
    session: AsyncSession = Depends(get_db_session),
) -> list[ActivityItemResponse]:
    """Latest invoices and expenses merged, newest first."""
    activity = await DashboardService(session).get_recent_activity(limit=limit)
    return [ActivityItemResponse.model_validate(item) for item in activity]
