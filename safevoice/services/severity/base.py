"""
Severity Provider Base Interface.

Defines the contract for severity classifiers.
All classifiers must implement this interface.
"""

from abc import ABC, abstractmethod
from typing import Dict, Optional

PRIORITIES = ("Low", "Medium", "High")


class SeverityResult:
    """
    Standardized severity assessment.

    All providers must return this structure.
    """

    def __init__(
        self,
        priority: str,
        score: int,
        explanation: str = "",
        original_description: str = "",
        elaborated_description: Optional[str] = None,
        model_name: str = "",
        fallback_used: bool = False,
        error: Optional[str] = None,
    ):
        self.priority = priority  # Low / Medium / High
        self.score = score  # 0-100
        self.explanation = explanation
        self.original_description = original_description
        self.elaborated_description = elaborated_description or original_description
        self.model_name = model_name
        self.fallback_used = fallback_used
        self.error = error  # If the provider failed, the reason is stored here

    def to_dict(self) -> Dict:
        result = {
            "priority": self.priority,
            "score": self.score,
            "explanation": self.explanation,
            "original_description": self.original_description,
            "elaborated_description": self.elaborated_description,
            "model_name": self.model_name,
            "fallback_used": self.fallback_used,
        }
        if self.error:
            result["error"] = self.error
        return result


class SeverityProvider(ABC):
    """
    Abstract base class for severity providers.

    Implementations MUST return a SeverityResult even on failure and never
    raise; the registry relies on `error` to move on to the next provider.
    """

    @abstractmethod
    def is_enabled(self) -> bool:
        pass

    @abstractmethod
    def get_model_name(self) -> str:
        pass

    @abstractmethod
    def assess(self, description: str) -> SeverityResult:
        """
        Classify the severity of a free-text incident description.

        Args:
            description: The reporter's account of the incident

        Returns:
            SeverityResult (may carry an error)
        """
        pass
