"""
Dashboard API endpoints.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from personnel_records.api.deps import get_current_user
from personnel_records.models.base import get_db
from personnel_records.schemas.stats import DashboardStatsResponse
from personnel_records.services.stats_service import StatsService

router = APIRouter(
    prefix="/api/dashboard",
    tags=["Dashboard"],
    dependencies=[Depends(get_current_user)],
)


@router.get("/stats", response_model=DashboardStatsResponse)
def dashboard_stats(db: Session = Depends(get_db)):
    """Record totals: all, created today, with and without arrests."""
    return DashboardStatsResponse(**StatsService(db).dashboard())
