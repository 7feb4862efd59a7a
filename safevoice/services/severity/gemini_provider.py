"""
Gemini Severity Provider - real LLM integration.

Uses the Google Gemini API (google-generativeai) to:
1. Optionally elaborate a short incident description
2. Classify its priority and score
3. Explain the classification against a small book of reference cases

Fails gracefully: any error is returned on the result so the registry can
fall back to the keyword classifier.
"""

from collections import deque
from typing import Deque, Dict, Optional
import logging

import google.generativeai as genai

from safevoice.core.settings import settings
from safevoice.services.severity.base import SeverityProvider, SeverityResult
from safevoice.services.severity.keyword_provider import KeywordSeverityProvider
from safevoice.services.severity.parsing import parse_severity_response

logger = logging.getLogger(__name__)

REFERENCE_CASES = [
    {
        "case": "A coworker made a single inappropriate joke about my appearance.",
        "priority": "Low",
        "score": 20,
        "explanation": "A single inappropriate comment with no repetition or threat; minimal impact.",
    },
    {
        "case": "Someone sent me multiple unwanted messages over a week, making me uncomfortable.",
        "priority": "Medium",
        "score": 50,
        "explanation": "Repeated unwanted contact with moderate impact but no explicit threat.",
    },
    {
        "case": "I received a message threatening physical harm if I didn't comply with demands.",
        "priority": "High",
        "score": 80,
        "explanation": "Explicit threat of physical harm; direct safety concern.",
    },
    {
        "case": "A person followed me home after work and waited outside my house.",
        "priority": "High",
        "score": 90,
        "explanation": "Stalking behaviour with a clear threat to personal safety.",
    },
    {
        "case": "Repeatedly receiving offensive comments about my work in group chats.",
        "priority": "Medium",
        "score": 45,
        "explanation": "Persistent offensive comments creating a hostile environment, no physical threat.",
    },
]

SEVERITY_CRITERIA = """- Low (0-33): Minor issues, inappropriate comments, single incidents
- Medium (34-66): Repeated behavior, moderate impact, threats without violence
- High (67-100): Severe threats, physical harassment, stalking, safety concerns"""


class ReferenceCaseBook:
    """Bounded, most-recent-wins collection of classified cases used as prompt examples."""

    def __init__(self, capacity: int = 5, seed=None):
        self._cases: Deque[Dict] = deque(seed if seed is not None else REFERENCE_CASES, maxlen=capacity)

    def add(self, case: str, priority: str, score: int, explanation: str) -> None:
        self._cases.append({"case": case, "priority": priority, "score": score, "explanation": explanation})

    def as_prompt(self) -> str:
        lines = []
        for index, case in enumerate(self._cases, start=1):
            lines.append(
                f'{index}. Case: "{case["case"]}"\n'
                f'   - Priority: {case["priority"]}, Score: {case["score"]}\n'
                f'   - Explanation: {case["explanation"]}'
            )
        return "\n".join(lines)

    def __len__(self) -> int:
        return len(self._cases)


class GeminiSeverityProvider(SeverityProvider):
    """
    Google Gemini severity classifier.

    Requires GEMINI_API_KEY in environment variables.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model_name: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
        elaborate: Optional[bool] = None,
        case_book: Optional[ReferenceCaseBook] = None,
    ):
        self.api_key = api_key if api_key is not None else settings.GEMINI_API_KEY
        self.model_name = model_name or settings.GEMINI_MODEL
        self.timeout_seconds = timeout_seconds or settings.AI_TIMEOUT_SECONDS
        self.elaborate = settings.ELABORATE_DESCRIPTIONS if elaborate is None else elaborate
        self.case_book = case_book or ReferenceCaseBook()
        self.enabled = bool(self.api_key and self.api_key.strip())
        self._model = None

        if self.enabled:
            logger.info(f"✅ Gemini Severity Provider initialized: {self.model_name}")
        else:
            logger.info("⚠️ Gemini Severity Provider disabled: No API key configured")

    def is_enabled(self) -> bool:
        return self.enabled

    def get_model_name(self) -> str:
        return self.model_name

    def _get_model(self):
        if self._model is None:
            genai.configure(api_key=self.api_key)
            self._model = genai.GenerativeModel(self.model_name)
        return self._model

    def _generate(self, prompt: str) -> str:
        response = self._get_model().generate_content(
            prompt,
            request_options={"timeout": self.timeout_seconds},
        )
        return response.text.strip()

    def assess(self, description: str) -> SeverityResult:
        if not self.enabled:
            return SeverityResult(
                priority="Low",
                score=0,
                original_description=description,
                model_name=self.model_name,
                error="Gemini API key not configured",
            )

        try:
            elaborated = self.elaborate_description(description) if self.elaborate else description

            response_text = self._generate(self._build_classification_prompt(elaborated))
            logger.debug(f"Raw AI response: {response_text}")

            parsed = parse_severity_response(response_text)
            if parsed is None:
                logger.warning("Could not parse AI response, using keyword-based fallback")
                fallback = KeywordSeverityProvider().assess(description)
                fallback.elaborated_description = elaborated
                return fallback

            priority, score = parsed
            explanation = self._explain(elaborated)
            if explanation:
                self.case_book.add(description, priority, score, explanation)

            return SeverityResult(
                priority=priority,
                score=score,
                explanation=explanation,
                original_description=description,
                elaborated_description=elaborated,
                model_name=self.model_name,
            )

        except Exception as e:
            logger.warning(f"⚠️ Gemini severity call failed: {str(e)}")
            return SeverityResult(
                priority="Low",
                score=0,
                original_description=description,
                model_name=self.model_name,
                error=f"Gemini API error: {str(e)}",
            )

    def elaborate_description(self, description: str) -> str:
        """Expand a brief description; returns the original on any failure."""
        try:
            text = self._generate(self._build_elaboration_prompt(description))
            return text.strip("\"'") or description
        except Exception as e:
            logger.warning(f"Description elaboration failed: {e}")
            return description

    def _explain(self, description: str) -> str:
        try:
            return self._generate(self._build_explanation_prompt(description))
        except Exception as e:
            logger.warning(f"Severity explanation failed: {e}")
            return ""

    def _build_elaboration_prompt(self, description: str) -> str:
        return f"""You are a professional case documentation assistant. Take the following brief harassment report description and expand it into a more detailed, professional description while maintaining accuracy and sensitivity.

Original description: "{description}"

Guidelines:
1. Expand the description into 2-4 complete, well-structured sentences
2. Maintain the original meaning and facts - do not add fictional details
3. Use professional, objective language appropriate for official documentation
4. Focus on factual details and observed behaviors
5. Maintain sensitivity to the victim's experience
6. If the original is very brief or unclear, work with what's provided and note the limited information available
7. Do not invent specific details not present in the original

Respond with ONLY the elaborated description, no other text or formatting."""

    def _build_classification_prompt(self, description: str) -> str:
        return f"""You are a harassment severity analyzer. Analyze the following report and respond with ONLY a valid JSON object in this exact format:

{{"priority": "Low", "score": 25}}

Priority must be exactly one of: "Low", "Medium", "High"
Score must be a number between 0-100

Report to analyze: "{description}"

Criteria:
{SEVERITY_CRITERIA}

Respond with ONLY the JSON object, no other text, no markdown formatting, no backticks."""

    def _build_explanation_prompt(self, description: str) -> str:
        return f"""You are a harassment severity analyzer. Analyze the following report and provide a detailed explanation of its severity. Respond with a paragraph (3-5 sentences) explaining why the report is assigned a specific priority and score, referencing relevant criteria and comparing it to similar cases from the provided collection.

Report to analyze: "{description}"

Severity Criteria:
{SEVERITY_CRITERIA}

Case Collection:
{self.case_book.as_prompt()}

Respond with only the paragraph, no JSON or other text."""
