"""Deterministic comparison/scoring engine."""

from truthiness.scoring.admission import DEFAULT_ADMISSION_PHRASES, detect_error_admission
from truthiness.scoring.alignment import calculate_alignment_score
from truthiness.scoring.differences import extract_differences, split_sentences
from truthiness.scoring.engine import calculate_truthiness_score, compare

__all__ = [
    "DEFAULT_ADMISSION_PHRASES",
    "calculate_alignment_score",
    "calculate_truthiness_score",
    "compare",
    "detect_error_admission",
    "extract_differences",
    "split_sentences",
]
