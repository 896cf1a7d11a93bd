"""Composite truthiness scoring and the compare() entry point. Pure code, no LLM, no I/O."""

import logging
import math

from truthiness.models import ComparisonResult, FallbackUsed, Scored, TruthinessScore, TruthinessWeights
from truthiness.scoring.admission import DEFAULT_ADMISSION_PHRASES, detect_error_admission
from truthiness.scoring.alignment import calculate_alignment_score
from truthiness.scoring.differences import extract_differences
from truthiness.utils import round_half_up

logger = logging.getLogger(__name__)

BASE_SCORE = 100
MAX_DIFFERENCE_PENALTY = 50


def calculate_truthiness_score(
    difference_count: int,
    alignment_score: float,
    admits_error: bool,
    used_fallback: bool = False,
    weights: TruthinessWeights | None = None,
) -> TruthinessScore:
    """
    100, minus the difference penalty (capped at 50), plus the weighted share of the
    alignment score, plus the admission bonus. Only the final value is clamped to 0..100
    and rounded; a NaN total (an infinite weight times zero) scores 0. Fallback answers yield
    FallbackUsed whatever the inputs.
    """
    weights = weights or TruthinessWeights()

    score = BASE_SCORE
    score -= min(MAX_DIFFERENCE_PENALTY, difference_count * weights.difference_weight)
    score += alignment_score * weights.alignment_weight / 100
    if admits_error:
        score += weights.error_admission_bonus

    if used_fallback:
        return FallbackUsed()

    if math.isnan(score):
        score = 0
    return Scored(round_half_up(max(0, min(100, score))))


def compare(
    answer_without_source: str,
    answer_with_source: str,
    source: str,
    used_fallback: bool = False,
    weights: TruthinessWeights | None = None,
    admission_phrases=DEFAULT_ADMISSION_PHRASES,
) -> ComparisonResult:
    """Compare the two answers against the source. Deterministic; never raises on string input."""
    differences = extract_differences(answer_without_source, answer_with_source)
    alignment_score = calculate_alignment_score(answer_with_source, source)
    admits_error = detect_error_admission(answer_with_source, admission_phrases)
    truthiness = calculate_truthiness_score(
        len(differences), alignment_score, admits_error, used_fallback, weights
    )
    logger.debug(
        "compare: differences=%d alignment=%d admits_error=%s truthiness=%d",
        len(differences), alignment_score, admits_error, truthiness.as_int(),
    )
    return ComparisonResult(
        differences=tuple(differences),
        alignment_score=alignment_score,
        admits_error=admits_error,
        truthiness=truthiness,
    )
