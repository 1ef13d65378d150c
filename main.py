#!/usr/bin/env python3
"""CLI for the Petra pet readiness assessment."""

import argparse
import json
import sys
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

from petra import generate_guide, profile_from_answers, recommend, render_assessment_pdf
from readiness import expand_questions, score_answers
from readiness.run_report import write_assessment_report


def _read_json(path: Path) -> dict:
    if not path.exists():
        print(f"Error: File not found: {path}", file=sys.stderr)
        sys.exit(1)
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        print(f"Error: {path} is not valid JSON: {e}", file=sys.stderr)
        sys.exit(1)


def cmd_score(args: argparse.Namespace) -> None:
    """Score an answers file and print the result."""
    answers = _read_json(args.answers)
    result = score_answers(answers)

    if args.report:
        write_assessment_report(args.report, answers, result)
        print(f"Assessment report: {args.report}", file=sys.stderr)

    if args.json:
        print(json.dumps(result, indent=2))
        return

    print("=== Readiness ===")
    print(f"Score: {result['score']}/100 ({result['tier']})")
    print(result["message"])
    print("\nPer category:")
    for cat in result["categories"].values():
        print(f"  {cat['label']}: {cat['points']}/{cat['max_points']}")
    if result["checklist"]:
        print("\nChecklist:")
        for item in result["checklist"]:
            print(f"  • [{item['priority']}] {item['task']}")


def cmd_questions(args: argparse.Namespace) -> None:
    """Print the questionnaire, expanded for the given pet types."""
    pet_types = [p.strip() for p in (args.pet_types or "").split(",") if p.strip()]
    print(json.dumps(expand_questions(pet_types), indent=2))


def cmd_recommend(args: argparse.Namespace) -> None:
    answers = _read_json(args.answers)
    result = recommend(profile_from_answers(answers), api_key=args.api_key, readiness=score_answers(answers))
    print(json.dumps(result, indent=2))


def cmd_guide(args: argparse.Namespace) -> None:
    profile = _read_json(args.profile)
    print(json.dumps(generate_guide(profile, args.source, api_key=args.api_key), indent=2))


def cmd_report(args: argparse.Namespace) -> None:
    """Write the readiness report PDF for an answers file."""
    answers = _read_json(args.answers)
    pdf_bytes = render_assessment_pdf(score_answers(answers), answers)
    args.output.parent.mkdir(parents=True, exist_ok=True)
    args.output.write_bytes(pdf_bytes)
    print(f"Readiness report saved to: {args.output}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Petra pet readiness assessment")
    parser.add_argument("--api-key", help="Groq API key (or GROQ_API_KEY env)")
    sub = parser.add_subparsers(dest="command", required=True)

    p_score = sub.add_parser("score", help="Score a questionnaire answers file")
    p_score.add_argument("answers", type=Path, help="Path to answers JSON")
    p_score.add_argument("--json", action="store_true", help="Output JSON")
    p_score.add_argument("--report", type=Path, help="Also write an assessment report JSON to this path")
    p_score.set_defaults(func=cmd_score)

    p_questions = sub.add_parser("questions", help="Print the questionnaire as JSON")
    p_questions.add_argument("--pet-types", help="Comma-separated pet types, e.g. dog,cat")
    p_questions.set_defaults(func=cmd_questions)

    p_rec = sub.add_parser("recommend", help="Recommend breeds for an answers file")
    p_rec.add_argument("answers", type=Path, help="Path to answers JSON")
    p_rec.set_defaults(func=cmd_recommend)

    p_guide = sub.add_parser("guide", help="Generate a pet parent guide")
    p_guide.add_argument("profile", type=Path, help="Path to profile JSON")
    p_guide.add_argument("--source", choices=("quiz", "direct"), default="quiz", help="Profile kind (default: quiz)")
    p_guide.set_defaults(func=cmd_guide)

    p_report = sub.add_parser("report", help="Write the readiness report PDF")
    p_report.add_argument("answers", type=Path, help="Path to answers JSON")
    p_report.add_argument("-o", "--output", type=Path, default=Path("readiness_report.pdf"),
                          help="Output PDF path (default: readiness_report.pdf)")
    p_report.set_defaults(func=cmd_report)

    args = parser.parse_args()
    args.func(args)


if __name__ == "__main__":
    main()
