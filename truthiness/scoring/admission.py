"""Error-admission detector: phrase search over the source-grounded answer."""

# Lowercase literals, matched as substrings anywhere in the text. "correction" inside an
# unrelated sentence still counts.
DEFAULT_ADMISSION_PHRASES = (
    "i was incorrect",
    "i was wrong",
    "i made a mistake",
    "i apologize for the error",
    "correction",
    "incorrect information",
    "inaccurate",
    "mistaken",
    "error in my previous",
    "not accurate",
)


def detect_error_admission(answer: str, phrases=DEFAULT_ADMISSION_PHRASES) -> bool:
    text = (answer or "").lower()
    return any(p.lower() in text for p in phrases)


def matched_admission_phrases(answer: str, phrases=DEFAULT_ADMISSION_PHRASES) -> list[str]:
    """Phrases found in the answer, in phrase-list order. Used for run report diagnostics."""
    text = (answer or "").lower()
    return [p for p in phrases if p.lower() in text]
