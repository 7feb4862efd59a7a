"""
Severity classification for incident descriptions.

Gemini when configured, keyword rules otherwise. Never blocks the caller
with an exception: the keyword classifier is the last resort.
"""

from safevoice.services.severity.base import SeverityProvider, SeverityResult
from safevoice.services.severity.gemini_provider import GeminiSeverityProvider
from safevoice.services.severity.keyword_provider import KeywordSeverityProvider
from safevoice.services.severity.registry import analyze_severity, get_severity_registry

__all__ = [
    "SeverityProvider",
    "SeverityResult",
    "GeminiSeverityProvider",
    "KeywordSeverityProvider",
    "analyze_severity",
    "get_severity_registry",
]
