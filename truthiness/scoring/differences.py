"""Sentence differ: sentences of the source-grounded answer with no lexical counterpart in the other answer.

This is a containment heuristic, not contradiction detection. Two sentences "match" when either
one is a case-insensitive substring of the other, so short sentences match easily.
"""

import re

SENTENCE_BOUNDARY = re.compile(r"[.!?]+")


def split_sentences(text: str) -> list[str]:
    """Split on runs of . ! ? and drop empty/whitespace-only fragments. Fragments are NOT trimmed."""
    return [s for s in SENTENCE_BOUNDARY.split(text or "") if s.strip()]


def _contains_either_way(a: str, b: str) -> bool:
    a, b = a.lower(), b.lower()
    return a in b or b in a


def extract_differences(answer_without_source: str, answer_with_source: str) -> list[str]:
    """
    Return sentences of answer_with_source (trimmed, in order) that neither contain nor are
    contained in any sentence of answer_without_source.
    """
    baseline = split_sentences(answer_without_source)
    differences = []
    for sentence in split_sentences(answer_with_source):
        if not any(_contains_either_way(s, sentence) for s in baseline):
            differences.append(sentence.strip())
    return differences
