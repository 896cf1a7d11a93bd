"""Generate run_report.json for auditability."""

import json
from pathlib import Path

from truthiness.models import Evaluation
from truthiness.scoring.admission import DEFAULT_ADMISSION_PHRASES, matched_admission_phrases
from truthiness.utils import hash_text, iso_now


def build_run_report(evaluation: Evaluation, admission_phrases=DEFAULT_ADMISSION_PHRASES) -> dict:
    """
    Report with hashes, weights, counts and scores.
    Question, source and answers are referenced by hash only; differences are included verbatim.
    """
    result = evaluation.comparison_results
    return {
        "evaluation_id": evaluation.id,
        "timestamp": iso_now(),
        "created_at": evaluation.timestamp,
        "input_mode": evaluation.input_mode,
        "source_url": evaluation.source_url,
        "capture_date": evaluation.capture_date,
        "question_hash": hash_text(evaluation.question),
        "source_hash": hash_text(evaluation.source),
        "response_without_source_hash": hash_text(evaluation.response_without_source),
        "response_with_source_hash": hash_text(evaluation.response_with_source),
        "weights": evaluation.effective_weights.to_dict(),
        "weights_overridden": evaluation.truthiness_weights is not None,
        "used_fallback": result.used_fallback,
        "num_differences": len(result.differences),
        "differences": list(result.differences),
        "alignment_score": result.alignment_score,
        "admits_error": result.admits_error,
        "admission_phrases_matched": matched_admission_phrases(
            evaluation.response_with_source, admission_phrases
        ),
        "truthiness_score": result.truthiness_score,
    }


def write_run_report(output_path: Path, evaluation: Evaluation, admission_phrases=DEFAULT_ADMISSION_PHRASES) -> dict:
    """Write run_report_<id>.json. Returns the report dict."""
    report = build_run_report(evaluation, admission_phrases)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(json.dumps(report, indent=2), encoding="utf-8")
    return report
