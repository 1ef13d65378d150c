#!/usr/bin/env python3
"""
Repeatability harness: score the same answers N times; assert identical results.
Exits 0 if stable, 1 if unstable. Prints variance report on failure.
Prints provenance (answers_hash per fixture) so runs can be compared across machines.

Usage: python scripts/repeatability_check.py [--runs 10] [--answers path ...]

Default --answers is every *.json under tests/fixtures/. Key order of each payload is
shuffled between runs, so a pass also shows the score does not depend on field order.
"""

import argparse
import json
import random
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from readiness import score_answers
from readiness.utils import hash_answers

DEFAULT_RUNS = 10
FIXTURES_DIR = Path(__file__).resolve().parent.parent / "tests" / "fixtures"


def _shuffled(answers: dict, rng: random.Random) -> dict:
    items = list(answers.items())
    rng.shuffle(items)
    return dict(items)


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("--runs", type=int, default=DEFAULT_RUNS)
    parser.add_argument("--answers", nargs="*", type=Path, help="Answers JSON files (default: tests/fixtures/*.json)")
    parser.add_argument("--seed", type=int, default=0, help="Seed for key-order shuffling")
    args = parser.parse_args()

    paths = args.answers or sorted(FIXTURES_DIR.glob("*.json"))
    if not paths:
        print(f"Error: no answers files found in {FIXTURES_DIR}", file=sys.stderr)
        sys.exit(1)

    rng = random.Random(args.seed)
    variances = []
    summary = []

    for path in paths:
        if not path.exists():
            print(f"Error: Answers file not found: {path}", file=sys.stderr)
            sys.exit(1)
        answers = json.loads(path.read_text(encoding="utf-8"))

        print(f"Scoring {path.name} {args.runs} times...")
        results = [score_answers(_shuffled(answers, rng)) for _ in range(args.runs)]
        first = results[0]
        for run_num, r in enumerate(results[1:], start=2):
            if r["score"] != first["score"]:
                variances.append((path.name, "score", run_num, f"{r['score']} != {first['score']}"))
            if r["tier"] != first["tier"]:
                variances.append((path.name, "tier", run_num, f"{r['tier']} != {first['tier']}"))
            if r["categories"] != first["categories"]:
                variances.append((path.name, "categories", run_num, "category points differ"))
            if r["checklist"] != first["checklist"]:
                tasks = [c["task"] for c in r["checklist"]]
                variances.append((path.name, "checklist", run_num, f"tasks: {tasks[:3]}..."))
        summary.append((path.name, hash_answers(answers), first))

    if variances:
        print("\n=== VARIANCE REPORT ===\n")
        print(f"Runs: {args.runs} | Files: {len(paths)}")
        for name, stage, run, detail in variances:
            print(f"  {name} run {run} - {stage}: {detail}")
        print("\nRepeatability check FAILED.")
        sys.exit(1)

    print("\nPASS: Repeatability check passed.")
    print("\n--- Provenance ---")
    for name, answers_hash, first in summary:
        print(f"  {name}: answers_hash={answers_hash[:16]} score={first['score']} tier={first['tier']} "
              f"checklist={len(first['checklist'])}")
    sys.exit(0)


if __name__ == "__main__":
    main()
