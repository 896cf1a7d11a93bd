"""Evaluation records, scoring weights and comparison results."""

from dataclasses import dataclass, field

from truthiness.utils import iso_now, new_id

DEFAULT_DIFFERENCE_WEIGHT = 10
DEFAULT_ALIGNMENT_WEIGHT = 50
DEFAULT_ERROR_ADMISSION_BONUS = 20

INPUT_MODES = ("text", "url")

# Serialised value of FallbackUsed; callers must check it before reading the score as a percentage.
FALLBACK_SENTINEL = -1


@dataclass(frozen=True)
class TruthinessWeights:
    difference_weight: float = DEFAULT_DIFFERENCE_WEIGHT
    alignment_weight: float = DEFAULT_ALIGNMENT_WEIGHT
    error_admission_bonus: float = DEFAULT_ERROR_ADMISSION_BONUS

    @classmethod
    def from_dict(cls, data: dict | None) -> "TruthinessWeights":
        """Build from the camelCase wire form. Missing or null fields keep their default."""
        data = data or {}
        defaults = cls()
        return cls(
            difference_weight=_or_default(data.get("differenceWeight"), defaults.difference_weight),
            alignment_weight=_or_default(data.get("alignmentWeight"), defaults.alignment_weight),
            error_admission_bonus=_or_default(data.get("errorAdmissionBonus"), defaults.error_admission_bonus),
        )

    def to_dict(self) -> dict:
        return {
            "differenceWeight": self.difference_weight,
            "alignmentWeight": self.alignment_weight,
            "errorAdmissionBonus": self.error_admission_bonus,
        }


def _or_default(value, default):
    return default if value is None else value


@dataclass(frozen=True)
class Scored:
    """A meaningful 0-100 truthiness score."""

    value: int

    def as_int(self) -> int:
        return self.value


@dataclass(frozen=True)
class FallbackUsed:
    """Answers came from the offline fallback; there is no meaningful score."""

    def as_int(self) -> int:
        return FALLBACK_SENTINEL


TruthinessScore = Scored | FallbackUsed


def score_from_int(value: int) -> TruthinessScore:
    if value == FALLBACK_SENTINEL:
        return FallbackUsed()
    return Scored(value)


@dataclass(frozen=True)
class ComparisonResult:
    differences: tuple[str, ...] = ()
    alignment_score: int = 0
    admits_error: bool = False
    truthiness: TruthinessScore = Scored(0)

    @property
    def truthiness_score(self) -> int:
        """Integer form of the score; -1 when the fallback was used."""
        return self.truthiness.as_int()

    @property
    def used_fallback(self) -> bool:
        return isinstance(self.truthiness, FallbackUsed)

    def to_dict(self) -> dict:
        return {
            "differences": list(self.differences),
            "alignmentScore": self.alignment_score,
            "admitsError": self.admits_error,
            "truthinessScore": self.truthiness_score,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ComparisonResult":
        return cls(
            differences=tuple(data.get("differences", [])),
            alignment_score=int(data.get("alignmentScore", 0)),
            admits_error=bool(data.get("admitsError", False)),
            truthiness=score_from_int(int(data.get("truthinessScore", 0))),
        )


@dataclass
class Evaluation:
    """
    One question/source submission and, once available, the two answers and their comparison.
    Answers start empty and the comparison zeroed; record_answers() fills them in exactly once.
    """

    question: str
    source: str
    input_mode: str = "text"
    source_url: str | None = None
    capture_date: str | None = None
    truthiness_weights: TruthinessWeights | None = None
    id: str = field(default_factory=new_id)
    timestamp: str = field(default_factory=iso_now)
    response_without_source: str = ""
    response_with_source: str = ""
    comparison_results: ComparisonResult = field(default_factory=ComparisonResult)
    completed: bool = field(default=False, init=False)

    def __post_init__(self):
        if not (self.question or "").strip() or not (self.source or "").strip():
            raise ValueError("Question and source are required")
        if self.input_mode not in INPUT_MODES:
            raise ValueError(f"Invalid input mode: {self.input_mode!r} (expected one of {', '.join(INPUT_MODES)})")
        if self.input_mode == "url" and not self.source_url:
            raise ValueError("URL is required when using URL input mode")

    def record_answers(
        self,
        response_without_source: str,
        response_with_source: str,
        comparison_results: ComparisonResult,
    ) -> "Evaluation":
        """Attach both answers and their comparison. Raises ValueError if already recorded."""
        if self.completed:
            raise ValueError(f"Evaluation {self.id} already has answers recorded")
        self.response_without_source = response_without_source
        self.response_with_source = response_with_source
        self.comparison_results = comparison_results
        self.completed = True
        return self

    @property
    def effective_weights(self) -> TruthinessWeights:
        return self.truthiness_weights or TruthinessWeights()

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "question": self.question,
            "source": self.source,
            "responseWithoutSource": self.response_without_source,
            "responseWithSource": self.response_with_source,
            "comparisonResults": self.comparison_results.to_dict(),
            "timestamp": self.timestamp,
            "inputMode": self.input_mode,
        }
        if self.source_url is not None:
            data["sourceUrl"] = self.source_url
        if self.capture_date is not None:
            data["captureDate"] = self.capture_date
        if self.truthiness_weights is not None:
            data["truthinessWeights"] = self.truthiness_weights.to_dict()
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "Evaluation":
        weights = data.get("truthinessWeights")
        evaluation = cls(
            question=data["question"],
            source=data["source"],
            input_mode=data.get("inputMode") or "text",
            source_url=data.get("sourceUrl"),
            capture_date=data.get("captureDate"),
            truthiness_weights=TruthinessWeights.from_dict(weights) if weights is not None else None,
            id=data["id"],
            timestamp=data["timestamp"],
        )
        without = data.get("responseWithoutSource", "")
        with_source = data.get("responseWithSource", "")
        comparison = ComparisonResult.from_dict(data.get("comparisonResults") or {})
        if without or with_source:
            evaluation.record_answers(without, with_source, comparison)
        else:
            evaluation.comparison_results = comparison
        return evaluation
