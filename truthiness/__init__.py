"""Truthiness Evaluator - compare a model's answers with and without an authoritative source."""

from truthiness.models import ComparisonResult, Evaluation, FallbackUsed, Scored, TruthinessWeights
from truthiness.scoring import compare

__all__ = ["ComparisonResult", "Evaluation", "FallbackUsed", "Scored", "TruthinessWeights", "compare"]
