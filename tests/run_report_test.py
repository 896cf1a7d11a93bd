"""Run report and audit trail: hashes instead of raw text, scores and rationale."""

import csv
import json
import logging

from truthiness.audit import audit_log, console_log_level, log_score_breakdown, scoring_rationale, setup_app_logging
from truthiness.models import ComparisonResult, Evaluation, FallbackUsed, TruthinessWeights
from truthiness.run_report import build_run_report, write_run_report
from truthiness.scoring import compare
from truthiness.utils import hash_text

QUESTION = "Is the sky blue?"
SOURCE = "The sky is blue and vast."
WITHOUT = "The sky is blue."
WITH = "The sky is blue. I was wrong earlier."


def _evaluation(**kwargs) -> Evaluation:
    ev = Evaluation(question=QUESTION, source=SOURCE, **kwargs)
    return ev.record_answers(WITHOUT, WITH, compare(WITHOUT, WITH, SOURCE, weights=ev.truthiness_weights))


def test_write_run_report(tmp_path):
    ev = _evaluation()
    path = tmp_path / "reports" / f"run_report_{ev.id}.json"
    write_run_report(path, ev)

    report = json.loads(path.read_text(encoding="utf-8"))
    assert report["evaluation_id"] == ev.id
    assert report["question_hash"] == hash_text(QUESTION)
    assert report["source_hash"] == hash_text(SOURCE)
    assert report["differences"] == ["I was wrong earlier"]
    assert report["admission_phrases_matched"] == ["i was wrong"]
    assert report["alignment_score"] == 50
    assert report["truthiness_score"] == 100
    assert report["weights"] == {"differenceWeight": 10, "alignmentWeight": 50, "errorAdmissionBonus": 20}
    assert report["weights_overridden"] is False
    assert QUESTION not in path.read_text(encoding="utf-8")


def test_run_report_for_fallback():
    ev = Evaluation(question=QUESTION, source=SOURCE)
    ev.record_answers("mock", "mock", ComparisonResult(truthiness=FallbackUsed()))
    report = build_run_report(ev)
    assert report["used_fallback"] is True
    assert report["truthiness_score"] == -1


def test_scoring_rationale():
    ev = _evaluation(truthiness_weights=TruthinessWeights(difference_weight=10, alignment_weight=50, error_admission_bonus=20))
    text = scoring_rationale(ev)
    assert "1 difference(s): -10." in text
    assert "Alignment 50% x 50/100: +25." in text
    assert "Error admission: +20." in text
    assert text.endswith("Final score 100.")


def test_audit_log_and_score_breakdown(tmp_path, monkeypatch):
    monkeypatch.setenv("TRUTHINESS_LOG_DIR", str(tmp_path))
    ev = _evaluation()

    audit_log("evaluate", "success", evaluation_id=ev.id, truthiness_score=100, extra={"k": "v"})
    log_score_breakdown(ev, hash_text(QUESTION), hash_text(SOURCE))
    log_score_breakdown(ev, hash_text(QUESTION), hash_text(SOURCE))

    entries = [json.loads(line) for line in (tmp_path / "audit.log").read_text(encoding="utf-8").splitlines()]
    assert len(entries) == 1
    assert entries[0]["action"] == "evaluate"
    assert entries[0]["evaluation_id"] == ev.id
    assert entries[0]["k"] == "v"
    assert "error" not in entries[0]

    with open(tmp_path / "score_breakdown.csv", encoding="utf-8", newline="") as f:
        rows = list(csv.DictReader(f))
    assert len(rows) == 2
    assert rows[0]["truthiness_score"] == "100"
    assert rows[0]["num_differences"] == "1"

    jsonl = (tmp_path / "score_breakdown.jsonl").read_text(encoding="utf-8").splitlines()
    assert json.loads(jsonl[0])["differences"] == ["I was wrong earlier"]


def test_console_log_level_from_env(monkeypatch):
    monkeypatch.setenv("TRUTHINESS_LOG_LEVEL", "warning")
    assert console_log_level() == logging.WARNING
    monkeypatch.setenv("TRUTHINESS_LOG_LEVEL", "chatty")
    assert console_log_level() == logging.INFO
    monkeypatch.delenv("TRUTHINESS_LOG_LEVEL")
    assert console_log_level() == logging.INFO


def test_app_logging_configured_once():
    """Repeated setup returns the same logger without stacking handlers; file handler writes app.log at DEBUG."""
    logger = setup_app_logging()
    handler_count = len(logger.handlers)
    assert setup_app_logging() is logger
    assert len(logger.handlers) == handler_count
    file_handlers = [h for h in logger.handlers if isinstance(h, logging.FileHandler)]
    assert file_handlers and file_handlers[0].baseFilename.endswith("app.log")
    assert file_handlers[0].level == logging.DEBUG
