"""Reverse geocoding for coordinates shown on the dashboard."""

from fastapi import APIRouter, Query
import asyncio

from safevoice.services.geocoding import get_geocoder

router = APIRouter(prefix="/geocode", tags=["Geocoding"])


@router.get("/reverse")
async def reverse_geocode(
    lat: float = Query(..., ge=-90, le=90),
    lon: float = Query(..., ge=-180, le=180),
):
    """Address fields for a point; empty fields when the provider has nothing."""
    loop = asyncio.get_event_loop()
    return await loop.run_in_executor(None, get_geocoder().reverse_geocode, lat, lon)
