"""
Severity Index Service - persist severity assessments on cases.

- store_severity_index: score one case and merge {priority, panicScore}
- apply_elaborated_description: write the elaborated description back to
  one case or a batch of cases
"""

from concurrent.futures import ThreadPoolExecutor, TimeoutError as FutureTimeoutError
from numbers import Real
from typing import Dict, List, Optional
import logging

from safevoice.config.firebase import get_db
from safevoice.core.settings import settings
from safevoice.services.severity.registry import analyze_severity

logger = logging.getLogger(__name__)

CASES_COLLECTION = "cases"


def store_severity_index(case_id: str, description: str, db=None, timeout_seconds: Optional[float] = None) -> bool:
    """
    Assess a case description and store the result on the case.

    Returns True when the case was updated, False on any failure.
    """
    if not case_id or not isinstance(case_id, str):
        logger.error("Invalid input: a valid case id string is required.")
        return False
    if not description or not isinstance(description, str):
        logger.error("Invalid input: a valid description string is required.")
        return False

    timeout_seconds = timeout_seconds or settings.AI_TIMEOUT_SECONDS

    try:
        db = db if db is not None else get_db()
        case_ref = db.collection(CASES_COLLECTION).document(case_id)
        if not case_ref.get().exists:
            logger.error(f"Case {case_id} does not exist in cases collection")
            return False

        # one worker per call so an abandoned assessment never delays the next one
        executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="severity")
        future = executor.submit(analyze_severity, description)
        try:
            result = future.result(timeout=timeout_seconds)
        except FutureTimeoutError:
            future.cancel()
            logger.error(f"Severity assessment timed out for case {case_id}")
            return False
        finally:
            executor.shutdown(wait=False)

        if not isinstance(result.priority, str) or not isinstance(result.score, Real) or isinstance(result.score, bool):
            logger.error(f"Invalid severity result for case {case_id}: {result.to_dict()}")
            return False

        case_ref.set({"priority": result.priority, "panicScore": result.score}, merge=True)
        logger.info(f"✅ Severity index stored for case {case_id}: {result.priority} ({result.score})")
        return True

    except Exception as e:
        logger.error(f"Error storing severity index for case {case_id}: {e}", exc_info=True)
        return False


def apply_elaborated_description(
    elaborated_description: str,
    case_id: Optional[str] = None,
    case_ids: Optional[List[str]] = None,
    db=None,
) -> Dict:
    """
    Write an elaborated description to one case or to many in a single batch.

    Returns the update report merged into the analyze-severity response.
    Database errors are reported, not raised.
    """
    if not case_id and not case_ids:
        logger.info("No case_id or case_ids provided, skipping database update")
        return {
            "updated": False,
            "updated_count": 0,
            "update_error": "No case_id or case_ids provided for update",
        }

    try:
        db = db if db is not None else get_db()
        cases_ref = db.collection(CASES_COLLECTION)

        if case_id:
            cases_ref.document(case_id).update({"description": elaborated_description})
            logger.info(f"Updated description of case {case_id}")
            return {"updated": True, "updated_count": 1, "updated_ids": [case_id]}

        batch = db.batch()
        for doc_id in case_ids:
            batch.update(cases_ref.document(doc_id), {"description": elaborated_description})
        batch.commit()
        logger.info(f"Updated description of {len(case_ids)} cases")
        return {"updated": True, "updated_count": len(case_ids), "updated_ids": list(case_ids)}

    except Exception as e:
        logger.error(f"Database update of case descriptions failed: {e}", exc_info=True)
        return {"updated": False, "updated_count": 0, "update_error": str(e)}
