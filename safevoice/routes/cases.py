"""
Case endpoints - list, triage and annotate harassment cases.
"""

from typing import List, Optional
from fastapi import APIRouter, HTTPException, Query, status
import logging

from safevoice.models.case import (
    CaseCreate,
    CaseNoteCreate,
    CaseResponse,
    CaseStats,
    CaseStatus,
    CaseUpdate,
)
from safevoice.models.severity import SeverityIndexRequest
from safevoice.services.case_service import CaseNoteService, CaseService
from safevoice.services.evidence_service import EvidenceService
from safevoice.services.severity_index import store_severity_index
from safevoice.utils.description_formatter import (
    format_description_as_text,
    parse_description_sections,
    truncate_description,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/cases", tags=["Cases"])


def _require_case(service: CaseService, case_id: str) -> dict:
    case = service.get_by_id(case_id)
    if case is None:
        raise HTTPException(status_code=404, detail=f"Case {case_id} not found")
    return case


@router.get("", response_model=List[CaseResponse])
def list_cases(status_filter: Optional[CaseStatus] = Query(None, alias="status")):
    try:
        service = CaseService()
        return service.get_by_status(status_filter.value) if status_filter else service.get_all()
    except Exception as e:
        logger.error(f"Failed to list cases: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Failed to retrieve cases: {str(e)}")


@router.get("/urgent", response_model=List[CaseResponse])
def urgent_cases():
    try:
        return CaseService().get_urgent_cases()
    except Exception as e:
        logger.error(f"Failed to list urgent cases: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Failed to retrieve urgent cases: {str(e)}")


@router.get("/stats", response_model=CaseStats)
def case_stats():
    try:
        return CaseService().get_stats()
    except Exception as e:
        logger.error(f"Failed to compute case stats: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Failed to compute case stats: {str(e)}")


@router.get("/{case_id}", response_model=CaseResponse)
def get_case(case_id: str):
    return _require_case(CaseService(), case_id)


@router.get("/{case_id}/description")
def get_case_description(case_id: str, max_length: int = Query(200, ge=20, le=5000)):
    """Structured, plain-text and preview renderings of the case description."""
    case = _require_case(CaseService(), case_id)
    description = case.get("description") or ""
    return {
        "id": case_id,
        "sections": parse_description_sections(description),
        "text": format_description_as_text(description),
        "preview": truncate_description(description, max_length),
    }


@router.post("", status_code=status.HTTP_201_CREATED)
def create_case(case: CaseCreate):
    try:
        case_id = CaseService().create(case.model_dump(mode="json"))
        return {"id": case_id}
    except Exception as e:
        logger.error(f"❌ Case creation failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Case creation failed: {str(e)}")


@router.patch("/{case_id}")
def update_case(case_id: str, case: CaseUpdate):
    changes = case.model_dump(mode="json", exclude_unset=True)
    if not changes:
        raise HTTPException(status_code=400, detail="No fields to update")

    service = CaseService()
    _require_case(service, case_id)
    try:
        service.update(case_id, changes)
        return {"id": case_id, "updated_fields": sorted(changes)}
    except Exception as e:
        logger.error(f"❌ Update of case {case_id} failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Case update failed: {str(e)}")


@router.post("/{case_id}/severity-index")
def score_case(case_id: str, request: Optional[SeverityIndexRequest] = None):
    """
    Score the case description and store priority/panicScore on the case.

    Uses the stored description unless one is supplied.
    """
    case = _require_case(CaseService(), case_id)
    description = request.description if request else case.get("description", "")
    if not description:
        raise HTTPException(status_code=400, detail=f"Case {case_id} has no description to score")
    if not store_severity_index(case_id, description):
        raise HTTPException(status_code=502, detail=f"Severity index could not be stored for case {case_id}")
    updated = CaseService().get_by_id(case_id) or {}
    return {"id": case_id, "priority": updated.get("priority"), "panicScore": updated.get("panicScore")}


@router.get("/{case_id}/notes")
def list_case_notes(case_id: str):
    return CaseNoteService().get_by_case(case_id)


@router.post("/{case_id}/notes", status_code=status.HTTP_201_CREATED)
def add_case_note(case_id: str, note: CaseNoteCreate):
    _require_case(CaseService(), case_id)
    note_id = CaseNoteService().create(case_id, note.model_dump())
    return {"id": note_id, "caseId": case_id}


@router.get("/{case_id}/evidence")
def list_case_evidence(case_id: str):
    return EvidenceService().get_by_case(case_id)
