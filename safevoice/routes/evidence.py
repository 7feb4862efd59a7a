"""
Evidence endpoints - metadata for files attached to cases.
"""

from fastapi import APIRouter, HTTPException, status
import logging

from safevoice.models.case import EvidenceCreate
from safevoice.services.case_service import CaseService
from safevoice.services.evidence_service import EvidenceService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/evidence", tags=["Evidence"])


@router.get("")
def list_evidence():
    try:
        return EvidenceService().get_all()
    except Exception as e:
        logger.error(f"Failed to list evidence: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Failed to retrieve evidence: {str(e)}")


@router.post("", status_code=status.HTTP_201_CREATED)
def register_evidence(evidence: EvidenceCreate):
    if CaseService().get_by_id(evidence.caseId) is None:
        raise HTTPException(status_code=404, detail=f"Case {evidence.caseId} not found")
    evidence_id = EvidenceService().create(evidence.model_dump(mode="json"))
    return {"id": evidence_id}


@router.delete("/{evidence_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_evidence(evidence_id: str):
    EvidenceService().delete(evidence_id)
