"""Audit trail for evaluations and CLI operations."""

import csv
import json
import logging
import os
from pathlib import Path

from truthiness.models import Evaluation
from truthiness.scoring.engine import MAX_DIFFERENCE_PENALTY
from truthiness.utils import iso_now

DEFAULT_LOG_DIR = Path(__file__).resolve().parent.parent / "logs"

CSV_HEADERS = [
    "timestamp",
    "evaluation_id",
    "used_fallback",
    "truthiness_score",
    "alignment_score",
    "admits_error",
    "num_differences",
    "difference_weight",
    "alignment_weight",
    "error_admission_bonus",
    "input_mode",
    "question_char_count",
    "source_char_count",
    "question_hash",
    "source_hash",
    "scoring_rationale",
]


def log_dir() -> Path:
    return Path(os.environ.get("TRUTHINESS_LOG_DIR") or DEFAULT_LOG_DIR)


def _ensure_log_dir() -> Path:
    path = log_dir()
    path.mkdir(parents=True, exist_ok=True)
    return path


def scoring_rationale(evaluation: Evaluation) -> str:
    """Plain-language account of how the truthiness score was reached."""
    result = evaluation.comparison_results
    weights = evaluation.effective_weights
    if result.used_fallback:
        return "Fallback answers were used; no truthiness score was computed."

    penalty = min(MAX_DIFFERENCE_PENALTY, len(result.differences) * weights.difference_weight)
    parts = [
        f"{len(result.differences)} difference(s): -{penalty:g}.",
        f"Alignment {result.alignment_score}% x {weights.alignment_weight:g}/100: "
        f"+{result.alignment_score * weights.alignment_weight / 100:g}.",
    ]
    if result.admits_error:
        parts.append(f"Error admission: +{weights.error_admission_bonus:g}.")
    parts.append(f"Final score {result.truthiness_score}.")
    return " ".join(parts)


def log_score_breakdown(evaluation: Evaluation, question_hash: str, source_hash: str):
    """
    Log each scored evaluation for later review of the weights: inputs, knobs, why it scored that way.
    Appends to score_breakdown.jsonl and score_breakdown.csv.
    """
    directory = _ensure_log_dir()
    result = evaluation.comparison_results
    weights = evaluation.effective_weights

    row = {
        "timestamp": iso_now(),
        "evaluation_id": evaluation.id,
        "used_fallback": result.used_fallback,
        "truthiness_score": result.truthiness_score,
        "alignment_score": result.alignment_score,
        "admits_error": result.admits_error,
        "num_differences": len(result.differences),
        "difference_weight": weights.difference_weight,
        "alignment_weight": weights.alignment_weight,
        "error_admission_bonus": weights.error_admission_bonus,
        "input_mode": evaluation.input_mode,
        "question_char_count": len(evaluation.question),
        "source_char_count": len(evaluation.source),
        "question_hash": question_hash,
        "source_hash": source_hash,
        "scoring_rationale": scoring_rationale(evaluation),
    }

    with open(directory / "score_breakdown.jsonl", "a", encoding="utf-8") as f:
        f.write(json.dumps({**row, "differences": list(result.differences)}, default=str) + "\n")

    csv_path = directory / "score_breakdown.csv"
    csv_exists = csv_path.exists()
    with open(csv_path, "a", encoding="utf-8", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=CSV_HEADERS)
        if not csv_exists:
            writer.writeheader()
        writer.writerow(row)


def audit_log(
    action: str,
    status: str,
    *,
    used_fallback: bool = False,
    evaluation_id: str | None = None,
    question_char_count: int | None = None,
    source_char_count: int | None = None,
    truthiness_score: int | None = None,
    error: str | None = None,
    extra: dict | None = None,
):
    """Append a structured audit entry to the audit log (JSONL)."""
    directory = _ensure_log_dir()
    entry = {
        "timestamp": iso_now(),
        "action": action,
        "status": status,
        "used_fallback": used_fallback,
    }
    if evaluation_id:
        entry["evaluation_id"] = evaluation_id
    if question_char_count is not None:
        entry["question_char_count"] = question_char_count
    if source_char_count is not None:
        entry["source_char_count"] = source_char_count
    if truthiness_score is not None:
        entry["truthiness_score"] = truthiness_score
    if error:
        entry["error"] = error
    if extra:
        entry.update(extra)

    with open(directory / "audit.log", "a", encoding="utf-8") as f:
        f.write(json.dumps(entry, default=str) + "\n")


LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def console_log_level() -> int:
    """Console verbosity from TRUTHINESS_LOG_LEVEL (name such as DEBUG or WARNING); INFO otherwise."""
    level = logging.getLevelName((os.environ.get("TRUTHINESS_LOG_LEVEL") or "INFO").upper())
    return level if isinstance(level, int) else logging.INFO


def setup_app_logging() -> logging.Logger:
    """
    Configure the "truthiness" logger once: console at console_log_level(), and
    DEBUG to app.log in the log directory, which also receives the scoring engine's
    per-comparison debug lines.
    """
    logger = logging.getLogger("truthiness")
    if logger.handlers:
        return logger
    logger.setLevel(logging.DEBUG)

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT)
    console = logging.StreamHandler()
    console.setLevel(console_log_level())
    app_log = logging.FileHandler(_ensure_log_dir() / "app.log", encoding="utf-8")
    app_log.setLevel(logging.DEBUG)
    for handler in (console, app_log):
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger
