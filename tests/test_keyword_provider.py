import pytest

from safevoice.services.severity.keyword_provider import (
    HIGH_EXPLANATION,
    LOW_EXPLANATION,
    MEDIUM_EXPLANATION,
    KeywordSeverityProvider,
)


@pytest.mark.parametrize(
    "description, priority, score, explanation",
    [
        ("He threatened to hurt me after the meeting.", "High", 75, HIGH_EXPLANATION),
        ("Someone FOLLOWED me to the parking lot.", "High", 75, HIGH_EXPLANATION),
        ("He keeps sending me messages at night.", "Medium", 50, MEDIUM_EXPLANATION),
        ("His comments made me uncomfortable.", "Medium", 50, MEDIUM_EXPLANATION),
        ("A coworker made a joke once.", "Low", 25, LOW_EXPLANATION),
        ("", "Low", 25, LOW_EXPLANATION),
    ],
)
def test_keyword_classification(description, priority, score, explanation):
    result = KeywordSeverityProvider().assess(description)

    assert result.priority == priority
    assert result.score == score
    assert result.explanation == explanation


def test_high_keywords_take_precedence():
    result = KeywordSeverityProvider().assess("Repeated threats, he won't stop.")
    assert result.priority == "High"


def test_result_metadata():
    result = KeywordSeverityProvider().assess("He keeps calling me.")

    assert result.model_name == "keyword-rules-v1"
    assert result.fallback_used is True
    assert result.error is None
    assert result.original_description == "He keeps calling me."
    assert result.elaborated_description == "He keeps calling me."


def test_fallback_flag_can_be_cleared():
    result = KeywordSeverityProvider().assess("Anything", fallback_used=False)
    assert result.fallback_used is False


def test_to_dict_omits_error_when_unset():
    data = KeywordSeverityProvider().assess("He keeps calling me.").to_dict()

    assert "error" not in data
    assert data["priority"] == "Medium"
    assert data["score"] == 50
