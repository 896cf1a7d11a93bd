#!/usr/bin/env python3
"""CLI for scoring a model's answers with and without an authoritative source."""

import argparse
import json
import os
import sys
from pathlib import Path

import jsonschema
from dotenv import load_dotenv

load_dotenv()

from truthiness.audit import audit_log, log_score_breakdown, scoring_rationale, setup_app_logging
from truthiness.models import Evaluation, TruthinessWeights
from truthiness.run_report import write_run_report
from truthiness.scoring import compare
from truthiness.utils import hash_text
from truthiness.validation import validate_evaluation, validate_weights

REPORTS_DIR = os.environ.get("TRUTHINESS_REPORTS_DIR") or "artifacts"

log = setup_app_logging()


def _fail(message: str) -> None:
    print(f"Error: {message}", file=sys.stderr)
    sys.exit(1)


def _read_file(path: Path, label: str) -> str:
    if not path.exists():
        _fail(f"{label} file not found: {path}")
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        _fail(f"Cannot read {label.lower()} file {path}: {e}")


def _load_weights(args: argparse.Namespace) -> TruthinessWeights | None:
    """Weights from --weights JSON file, with individual flags taking precedence. None if nothing given."""
    data: dict = {}
    if args.weights:
        data = json.loads(_read_file(Path(args.weights), "Weights"))
        validate_weights(data)
    overrides = {
        "differenceWeight": args.difference_weight,
        "alignmentWeight": args.alignment_weight,
        "errorAdmissionBonus": args.error_admission_bonus,
    }
    data.update({k: v for k, v in overrides.items() if v is not None})
    if not data:
        return None
    return TruthinessWeights.from_dict(data)


def _print_result(result_dict: dict, rationale: str | None = None) -> None:
    score = result_dict["truthinessScore"]
    print("=== Comparison ===")
    print(f"Truthiness: {'N/A (fallback answers used)' if score == -1 else f'{score}%'}")
    print(f"Alignment: {result_dict['alignmentScore']}%")
    print(f"Admits error: {'yes' if result_dict['admitsError'] else 'no'}")
    print(f"\nDifferences ({len(result_dict['differences'])}):")
    for d in result_dict["differences"]:
        print(f"  • {d}")
    if rationale:
        print(f"\n{rationale}")


def cmd_score(args: argparse.Namespace) -> None:
    """Score two already-resolved answers against a source. No evaluation record, no report."""
    without = _read_file(Path(args.without), "Answer (without source)")
    with_source = _read_file(Path(args.with_source), "Answer (with source)")
    source = _read_file(Path(args.source), "Source")
    try:
        weights = _load_weights(args)
    except (ValueError, jsonschema.ValidationError) as e:
        log.warning("Invalid weights: %s", e)
        _fail(f"Invalid weights: {e}")

    result = compare(without, with_source, source, args.used_fallback, weights)
    log.info("Score complete: truthiness=%d differences=%d", result.truthiness_score, len(result.differences))

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        _print_result(result.to_dict())


def cmd_evaluate(args: argparse.Namespace) -> None:
    """Build an Evaluation, record answers + comparison, validate, write run report."""
    if args.question_file:
        question = _read_file(Path(args.question_file), "Question")
    else:
        question = args.question or ""
    source = _read_file(Path(args.source_file), "Source")
    without = _read_file(Path(args.without), "Answer (without source)")
    with_source = _read_file(Path(args.with_source), "Answer (with source)")

    try:
        weights = _load_weights(args)
        evaluation = Evaluation(
            question=question,
            source=source,
            input_mode=args.input_mode,
            source_url=args.source_url,
            capture_date=args.capture_date,
            truthiness_weights=weights,
        )
        log.info("Evaluation started: id=%s question_chars=%d source_chars=%d", evaluation.id, len(question), len(source))

        result = compare(without, with_source, source, args.used_fallback, weights)
        evaluation.record_answers(without, with_source, result)
        validate_evaluation(evaluation.to_dict())
    except (ValueError, jsonschema.ValidationError) as e:
        err_msg = e.message if isinstance(e, jsonschema.ValidationError) else str(e)
        audit_log(
            action="evaluate",
            status="error",
            used_fallback=args.used_fallback,
            question_char_count=len(question),
            source_char_count=len(source),
            error=err_msg,
        )
        log.warning("Evaluate failed: %s", err_msg)
        _fail(err_msg)

    reports_dir = Path(args.reports_dir)
    report_path = reports_dir / f"run_report_{evaluation.id}.json"
    write_run_report(report_path, evaluation)

    question_hash = hash_text(question)
    source_hash = hash_text(source)
    log_score_breakdown(evaluation, question_hash, source_hash)
    audit_log(
        action="evaluate",
        status="success",
        used_fallback=result.used_fallback,
        evaluation_id=evaluation.id,
        question_char_count=len(question),
        source_char_count=len(source),
        truthiness_score=result.truthiness_score,
        extra={
            "question_hash": question_hash,
            "source_hash": source_hash,
            "input_mode": evaluation.input_mode,
            "num_differences": len(result.differences),
            "report_path": str(report_path),
        },
    )
    log.info("Evaluation complete: id=%s truthiness=%d report=%s", evaluation.id, result.truthiness_score, report_path)
    print(f"Run report: {report_path}", file=sys.stderr)

    if args.json:
        print(json.dumps(evaluation.to_dict(), indent=2))
    else:
        print(f"Evaluation: {evaluation.id}")
        _print_result(result.to_dict(), scoring_rationale(evaluation))


def _add_scoring_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--without", type=Path, required=True, help="Answer given WITHOUT the source (text file)")
    p.add_argument("--with", dest="with_source", type=Path, required=True, help="Answer given WITH the source (text file)")
    p.add_argument("--used-fallback", action="store_true", help="Answers are offline fallbacks; score is reported as -1")
    p.add_argument("--weights", type=Path, help="JSON file with differenceWeight / alignmentWeight / errorAdmissionBonus")
    p.add_argument("--difference-weight", type=float, help="Penalty per difference (default 10)")
    p.add_argument("--alignment-weight", type=float, help="Alignment percentage multiplier (default 50)")
    p.add_argument("--error-admission-bonus", type=float, help="Bonus when the answer admits an error (default 20)")
    p.add_argument("--json", action="store_true", help="Output JSON")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Heuristic truthiness scoring of answers with and without a source")
    sub = parser.add_subparsers(dest="command", required=True)

    # score
    p_score = sub.add_parser("score", help="Compare two answers against a source and print the result")
    p_score.add_argument("--source", type=Path, required=True, help="Authoritative source (text file)")
    _add_scoring_args(p_score)
    p_score.set_defaults(func=cmd_score)

    # evaluate
    p_eval = sub.add_parser("evaluate", help="Build a full evaluation record and write its run report")
    q = p_eval.add_mutually_exclusive_group(required=True)
    q.add_argument("--question", help="Question text")
    q.add_argument("--question-file", type=Path, help="Question (text file)")
    p_eval.add_argument("--source-file", type=Path, required=True, help="Authoritative source (text file)")
    p_eval.add_argument("--input-mode", choices=["text", "url"], default="text", help="How the source was supplied")
    p_eval.add_argument("--source-url", help="Source URL (required with --input-mode url)")
    p_eval.add_argument("--capture-date", help="When the source URL was captured (ISO-8601)")
    p_eval.add_argument("--reports-dir", type=Path, default=Path(REPORTS_DIR), help="Directory for run_report_<id>.json")
    _add_scoring_args(p_eval)
    p_eval.set_defaults(func=cmd_evaluate)

    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    args.func(args)


if __name__ == "__main__":
    main()
