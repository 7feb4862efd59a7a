"""
Liveness and Firestore readiness probes for the deployment.
"""

from fastapi import APIRouter, HTTPException
from safevoice.config.firebase import get_db
from safevoice.core.settings import settings
from safevoice.utils.firestore_helpers import utcnow

# Collections the dashboard reads; missing ones usually mean an unseeded project
EXPECTED_COLLECTIONS = ("users", "cases", "panic_events", "danger_zones")

router = APIRouter(prefix="/health", tags=["Health"])


@router.get("")
async def health_check():
    return {
        "status": "healthy",
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "timestamp": utcnow().isoformat(),
    }


@router.get("/db")
def database_health():
    """
    503 when Firestore cannot be reached.

    `missing_collections` lists expected collections with no documents yet.
    """
    try:
        names = {collection.id for collection in get_db().collections()}
    except Exception as e:
        raise HTTPException(status_code=503, detail=f"Database connection failed: {str(e)}")

    return {
        "status": "healthy",
        "database": "firestore",
        "connected": True,
        "collections_count": len(names),
        "missing_collections": [name for name in EXPECTED_COLLECTIONS if name not in names],
        "timestamp": utcnow().isoformat(),
    }
