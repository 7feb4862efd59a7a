"""Panic alert endpoints."""

from enum import Enum
from fastapi import APIRouter, Query
import logging

from safevoice.services.panic_service import PanicAlertService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/panic-alerts", tags=["Panic Alerts"])


class AlertStatusFilter(str, Enum):
    ALL = "all"
    ACTIVE = "active"
    RESPONDING = "responding"
    RESOLVED = "resolved"


@router.get("")
def list_panic_alerts(
    search: str = Query("", max_length=200, description="Match on user name, location or alert id"),
    status: AlertStatusFilter = Query(AlertStatusFilter.ALL),
):
    """
    Panic alerts, newest first.

    A failed read returns an empty list so the alert panel keeps rendering.
    """
    try:
        return PanicAlertService().list_alerts(search=search, status=status.value)
    except Exception as e:
        logger.error(f"Failed to get panic alerts: {e}", exc_info=True)
        return []
