"""
Parsing of model output into a (priority, score) pair.

The model is asked for bare JSON, but replies sometimes arrive wrapped in
Markdown fences or as prose. JSON is tried first, then a set of regexes.
"""

from typing import Optional, Tuple
import json
import logging
import re

from safevoice.services.severity.base import PRIORITIES

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"```json\s*|\s*```")
_NOISE_RE = re.compile(r"[{}\"\n\r\t]")

_PRIORITY_PATTERNS = [
    re.compile(r"priority\s*[:\-=]?\s*(low|medium|high)", re.IGNORECASE),
    re.compile(r"(low|medium|high)\s*priority", re.IGNORECASE),
    re.compile(r"\b(low|medium|high)\b", re.IGNORECASE),
]

_SCORE_PATTERNS = [
    re.compile(r"score\s*[:\-=]?\s*(\d{1,3})", re.IGNORECASE),
    re.compile(r"(\d{1,3})\s*/?\s*100", re.IGNORECASE),
    re.compile(r"\b(\d{1,3})\b"),
]


def normalize_priority(value) -> Optional[str]:
    """'HIGH' / 'high' / 'High' -> 'High'; anything else -> None."""
    if not isinstance(value, str) or not value:
        return None
    priority = value[0].upper() + value[1:].lower()
    return priority if priority in PRIORITIES else None


def normalize_score(value) -> Optional[int]:
    """Integer score in [0, 100], or None."""
    if isinstance(value, bool):
        return None
    try:
        score = int(value)
    except (TypeError, ValueError):
        return None
    return score if 0 <= score <= 100 else None


def strip_code_fences(text: str) -> str:
    return _FENCE_RE.sub("", text or "").strip()


def _parse_json(text: str) -> Optional[Tuple[str, int]]:
    try:
        parsed = json.loads(text)
    except (json.JSONDecodeError, TypeError):
        return None
    if not isinstance(parsed, dict) or "priority" not in parsed or "score" not in parsed:
        return None

    priority = normalize_priority(parsed["priority"])
    score = normalize_score(parsed["score"])
    if priority is None or score is None:
        logger.info(f"Rejected model JSON with priority={parsed['priority']!r} score={parsed['score']!r}")
        return None
    return priority, score


def _first_match(patterns, text: str) -> Optional[str]:
    for pattern in patterns:
        match = pattern.search(text)
        if match:
            return match.group(1)
    return None


def _parse_loose(text: str) -> Optional[Tuple[str, int]]:
    clean_text = _NOISE_RE.sub(" ", text)
    priority = normalize_priority(_first_match(_PRIORITY_PATTERNS, clean_text))
    score = normalize_score(_first_match(_SCORE_PATTERNS, clean_text))
    if priority is None or score is None:
        return None
    return priority, score


def parse_severity_response(text: str) -> Optional[Tuple[str, int]]:
    """
    Extract (priority, score) from a model reply.

    Returns None when neither JSON nor the regex fallback yield a valid pair.
    """
    cleaned = strip_code_fences(text)
    if not cleaned:
        return None

    result = _parse_json(cleaned)
    if result is not None:
        return result

    logger.debug("JSON parse failed, trying loose parsing")
    return _parse_loose(cleaned)
