"""
Dashboard Service - headline numbers for the overview cards.
"""

from safevoice.services.case_service import CaseService
from safevoice.services.user_service import UserService
from typing import Dict
import logging

logger = logging.getLogger(__name__)


def get_dashboard_stats(db=None) -> Dict[str, int]:
    """
    Total cases, open urgent cases, active staff and resolution rate (%).

    Read failures are logged and yield zeros so the overview still renders.
    """
    try:
        case_stats = CaseService(db).get_stats()
        active_users = UserService(db).count_active()
    except Exception as e:
        logger.error(f"Error fetching dashboard stats: {e}", exc_info=True)
        return {"total_cases": 0, "urgent_cases": 0, "active_users": 0, "resolution_rate": 0}

    total = case_stats["total"]
    # Half-up rounding, as the dashboard cards always showed
    resolution_rate = int(case_stats["resolved"] * 100 / total + 0.5) if total > 0 else 0

    return {
        "total_cases": total,
        "urgent_cases": case_stats["urgent"],
        "active_users": active_users,
        "resolution_rate": resolution_rate,
    }
