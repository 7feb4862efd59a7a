"""
Hotspot routes - concentration centers of panic alerts and cases.

Recomputation reads two whole collections and runs an O(n^2) scan, so it is
executed in the thread pool rather than on the event loop.
"""

from typing import Optional
from fastapi import APIRouter, HTTPException
import asyncio
import logging

from safevoice.models.severity import HotspotRecomputeRequest, HotspotRecomputeResponse, HotspotSnapshot
from safevoice.services.hotspot_service import HotspotService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/hotspots", tags=["Hotspots"])


@router.get("", response_model=Optional[HotspotSnapshot])
async def get_hotspots():
    """Last stored snapshot; null if it has never been computed."""
    loop = asyncio.get_event_loop()
    try:
        return await loop.run_in_executor(None, lambda: HotspotService().get_snapshot())
    except Exception as e:
        logger.error(f"Failed to read hotspot snapshot: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Failed to read hotspots: {str(e)}")


@router.post("", response_model=HotspotRecomputeResponse)
async def recompute_hotspots(request: Optional[HotspotRecomputeRequest] = None):
    request = request or HotspotRecomputeRequest()
    loop = asyncio.get_event_loop()
    try:
        return await loop.run_in_executor(
            None,
            lambda: HotspotService().recompute(request.panic_radius, request.case_radius),
        )
    except Exception as e:
        logger.error(f"❌ Hotspot recomputation failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Hotspot recomputation failed: {str(e)}")


@router.get("/events")
async def map_events():
    """
    Valid panic and case coordinates for the heat-map overlay.

    Returns empty lists instead of an error so the map still renders.
    """
    loop = asyncio.get_event_loop()
    try:
        return await loop.run_in_executor(None, lambda: HotspotService().get_map_events())
    except Exception as e:
        logger.error(f"Failed to get map events: {e}", exc_info=True)
        return {"panic_events": [], "cases": []}
