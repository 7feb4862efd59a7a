"""
Keyword Severity Provider - fallback when Gemini is disabled or fails.

Rule-based keyword matching. No network calls, always available.
"""

from safevoice.services.severity.base import SeverityProvider, SeverityResult
import logging

logger = logging.getLogger(__name__)

HIGH_SEVERITY_KEYWORDS = [
    "threat", "violence", "kill", "hurt", "physical", "assault",
    "stalk", "follow", "attack", "weapon", "dangerous", "scared",
    "fear", "safety", "police", "emergency",
]

MEDIUM_SEVERITY_KEYWORDS = [
    "repeated", "continue", "persistent", "multiple", "again",
    "won't stop", "keeps", "harassment", "inappropriate", "uncomfortable",
]

HIGH_EXPLANATION = (
    "Fallback: High severity due to presence of critical keywords indicating "
    "potential danger or safety concerns."
)
MEDIUM_EXPLANATION = (
    "Fallback: Medium severity due to repeated or inappropriate behavior "
    "without explicit threats."
)
LOW_EXPLANATION = "Fallback: Low severity due to lack of repeated behavior or serious threats."


class KeywordSeverityProvider(SeverityProvider):
    """
    Deterministic keyword classifier.

    High keywords win over medium ones; anything else is Low.
    """

    MODEL_NAME = "keyword-rules-v1"

    def is_enabled(self) -> bool:
        return True

    def get_model_name(self) -> str:
        return self.MODEL_NAME

    def assess(self, description: str, fallback_used: bool = True) -> SeverityResult:
        text = (description or "").lower()

        if any(keyword in text for keyword in HIGH_SEVERITY_KEYWORDS):
            priority, score, explanation = "High", 75, HIGH_EXPLANATION
        elif any(keyword in text for keyword in MEDIUM_SEVERITY_KEYWORDS):
            priority, score, explanation = "Medium", 50, MEDIUM_EXPLANATION
        else:
            priority, score, explanation = "Low", 25, LOW_EXPLANATION

        return SeverityResult(
            priority=priority,
            score=score,
            explanation=explanation,
            original_description=description,
            model_name=self.MODEL_NAME,
            fallback_used=fallback_used,
        )
