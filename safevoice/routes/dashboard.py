"""Dashboard overview endpoints."""

from fastapi import APIRouter

from safevoice.models.case import DashboardStats
from safevoice.services.dashboard_service import get_dashboard_stats

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("/stats", response_model=DashboardStats)
def dashboard_stats():
    return get_dashboard_stats()
