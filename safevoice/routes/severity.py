"""
Severity analysis endpoint.

POST classifies a description (Gemini, falling back to keyword rules) and can
write the elaborated description back to one or more cases. GET reports
whether the backing services are configured.
"""

from fastapi import APIRouter, HTTPException
import asyncio
import logging

from safevoice.config.firebase import is_db_configured
from safevoice.models.severity import SeverityRequest, SeverityResponse, SeverityServiceStatus
from safevoice.services.severity.registry import analyze_severity, get_severity_registry
from safevoice.services.severity_index import apply_elaborated_description
from safevoice.utils.firestore_helpers import utcnow

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/analyze-severity", tags=["Severity"])


@router.post("", response_model=SeverityResponse)
async def analyze(request: SeverityRequest):
    loop = asyncio.get_event_loop()
    try:
        result = await loop.run_in_executor(None, analyze_severity, request.description)
    except Exception as e:
        logger.error(f"Severity analysis failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Internal server error: {str(e)}")

    response = result.to_dict()
    response.pop("error", None)

    if request.update_database:
        update_report = await loop.run_in_executor(
            None,
            lambda: apply_elaborated_description(
                result.elaborated_description,
                case_id=request.case_id,
                case_ids=request.case_ids,
            ),
        )
        response.update(update_report)

    logger.info(f"Analysis result: {response['priority']} ({response['score']}), fallback={response['fallback_used']}")
    return response


@router.get("", response_model=SeverityServiceStatus)
async def analyzer_status():
    return {
        "status": "API is running",
        "gemini_configured": get_severity_registry().gemini_configured(),
        "db_configured": is_db_configured(),
        "timestamp": utcnow(),
    }
