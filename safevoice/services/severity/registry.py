"""
Severity Provider Registry.

Manages provider selection and fallback logic.
"""

from safevoice.services.severity.base import SeverityProvider, SeverityResult
from safevoice.services.severity.gemini_provider import GeminiSeverityProvider
from safevoice.services.severity.keyword_provider import KeywordSeverityProvider
from safevoice.core.settings import settings
from typing import List, Optional
import logging

logger = logging.getLogger(__name__)


class SeverityProviderRegistry:
    """
    Registry for severity providers with fallback logic.

    Providers are tried in priority order; the keyword classifier is always
    last and always succeeds.
    """

    def __init__(self, providers: Optional[List[SeverityProvider]] = None):
        if providers is not None:
            self.providers = list(providers)
        else:
            self.providers = []
            self._initialize_providers()

    def _initialize_providers(self):
        if not settings.AI_ENABLED:
            logger.info("⚠️ AI is disabled globally (AI_ENABLED=false), using keyword classifier only")
        else:
            gemini_provider = GeminiSeverityProvider()
            if gemini_provider.is_enabled():
                self.providers.append(gemini_provider)
                logger.info("✅ Gemini Severity Provider registered")

        self.providers.append(KeywordSeverityProvider())
        logger.info("✅ Keyword Severity Provider registered (fallback)")

    def gemini_configured(self) -> bool:
        return any(isinstance(p, GeminiSeverityProvider) and p.is_enabled() for p in self.providers)

    def assess_with_fallback(self, description: str) -> SeverityResult:
        """
        Assess severity using the best available provider.

        Always returns a valid SeverityResult.
        """
        for provider in self.providers:
            if not provider.is_enabled():
                continue
            try:
                result = provider.assess(description)
            except Exception as e:
                logger.warning(f"Provider {provider.get_model_name()} failed: {e}")
                continue

            if result.error:
                logger.warning(f"Provider {provider.get_model_name()} returned error: {result.error}")
                continue

            logger.info(f"Severity assessed by {provider.get_model_name()}: {result.priority} ({result.score})")
            return result

        logger.error("⚠️ All severity providers failed, using keyword classifier")
        return KeywordSeverityProvider().assess(description)


# Global registry instance (lazy singleton)
_registry: Optional[SeverityProviderRegistry] = None


def get_severity_registry() -> SeverityProviderRegistry:
    global _registry
    if _registry is None:
        _registry = SeverityProviderRegistry()
    return _registry


def analyze_severity(description: str) -> SeverityResult:
    """
    Main entry point for severity classification.

    Always returns a valid SeverityResult, even if every provider fails.
    """
    return get_severity_registry().assess_with_fallback(description)
