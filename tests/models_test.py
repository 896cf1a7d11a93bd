"""Evaluation record lifecycle, weights defaults and wire-format conversion."""

import pytest

from truthiness.models import (
    ComparisonResult,
    Evaluation,
    FallbackUsed,
    Scored,
    TruthinessWeights,
)


def test_weights_default_and_partial_override():
    assert TruthinessWeights() == TruthinessWeights(10, 50, 20)
    w = TruthinessWeights.from_dict({"alignmentWeight": 80, "errorAdmissionBonus": None})
    assert w == TruthinessWeights(difference_weight=10, alignment_weight=80, error_admission_bonus=20)
    assert TruthinessWeights.from_dict(None) == TruthinessWeights()


def test_weights_are_immutable():
    w = TruthinessWeights()
    with pytest.raises(AttributeError):
        w.difference_weight = 99


def test_new_evaluation_starts_empty():
    ev = Evaluation(question="Who wrote Hamlet?", source="Hamlet was written by Shakespeare.")
    assert ev.id
    assert ev.timestamp.endswith("Z")
    assert ev.input_mode == "text"
    assert ev.response_without_source == ""
    assert ev.response_with_source == ""
    assert ev.comparison_results.to_dict() == {
        "differences": [],
        "alignmentScore": 0,
        "admitsError": False,
        "truthinessScore": 0,
    }
    assert ev.completed is False


def test_evaluation_ids_are_unique():
    ids = {Evaluation(question="q", source="s").id for _ in range(50)}
    assert len(ids) == 50


@pytest.mark.parametrize(
    "kwargs, message",
    [
        ({"question": "", "source": "s"}, "Question and source are required"),
        ({"question": "q", "source": "   "}, "Question and source are required"),
        ({"question": "q", "source": "s", "input_mode": "pdf"}, "Invalid input mode"),
        ({"question": "q", "source": "s", "input_mode": "url"}, "URL is required"),
    ],
)
def test_invalid_evaluation_rejected(kwargs, message):
    with pytest.raises(ValueError) as exc_info:
        Evaluation(**kwargs)
    assert message in str(exc_info.value)


def test_record_answers_only_once():
    ev = Evaluation(question="q", source="s")
    result = ComparisonResult(differences=("x",), alignment_score=10, admits_error=False, truthiness=Scored(95))
    ev.record_answers("a", "b", result)
    assert ev.completed is True
    assert ev.comparison_results.truthiness_score == 95
    with pytest.raises(ValueError):
        ev.record_answers("c", "d", result)


def test_evaluation_dict_round_trip_keeps_fallback_and_weights():
    ev = Evaluation(
        question="What is the boiling point of water?",
        source="Water boils at 100 C at sea level.",
        input_mode="url",
        source_url="https://example.org/water",
        capture_date="2026-01-01T00:00:00.000Z",
        truthiness_weights=TruthinessWeights(difference_weight=5),
    )
    ev.record_answers("100 C.", "100 C at sea level.", ComparisonResult(truthiness=FallbackUsed()))
    data = ev.to_dict()
    assert data["comparisonResults"]["truthinessScore"] == -1
    assert data["truthinessWeights"] == {"differenceWeight": 5, "alignmentWeight": 50, "errorAdmissionBonus": 20}

    restored = Evaluation.from_dict(data)
    assert restored == ev
    assert restored.comparison_results.used_fallback is True


def test_optional_fields_omitted_from_dict():
    data = Evaluation(question="q", source="s").to_dict()
    assert "sourceUrl" not in data
    assert "captureDate" not in data
    assert "truthinessWeights" not in data
    assert Evaluation(question="q", source="s").effective_weights == TruthinessWeights()


def test_completed_cannot_be_set_at_construction():
    """The record-once guard can only be tripped by record_answers()."""
    with pytest.raises(TypeError):
        Evaluation(question="q", source="s", completed=True)
