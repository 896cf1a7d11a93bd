"""Lexical alignment of an answer against the source text."""

import re

from truthiness.utils import round_half_up

# ASCII word characters only: "café" tokenizes as ["caf", ""].
NON_WORD = re.compile(r"\W+", re.ASCII)
MIN_TOKEN_LEN = 4


def tokenize(text: str) -> list[str]:
    return NON_WORD.split((text or "").lower())


def source_vocabulary(source: str) -> dict[str, None]:
    """Distinct source tokens longer than 3 chars, in order of first occurrence."""
    return dict.fromkeys(t for t in tokenize(source) if len(t) >= MIN_TOKEN_LEN)


def calculate_alignment_score(answer: str, source: str) -> int:
    """
    Percentage of the source vocabulary hit by the answer, capped at 100.

    Every answer token found in the vocabulary counts, repeats included, and the
    denominator is the vocabulary size (clamped to 1). Not a precision/recall metric.
    """
    vocab = source_vocabulary(source)
    match_count = sum(1 for t in tokenize(answer) if t in vocab and len(t) >= MIN_TOKEN_LEN)
    return min(100, round_half_up(match_count / max(1, len(vocab)) * 100))
