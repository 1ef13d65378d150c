"""Generate assessment_report.json for auditability."""

import json
from pathlib import Path

from readiness.utils import hash_answers, iso_now


def write_assessment_report(output_path: Path, answers: dict, result: dict) -> None:
    """
    Write assessment report with answers hash, score, tier and category points.
    No PII beyond the answers hash.
    """
    report = {
        "timestamp": iso_now(),
        "answers_hash": hash_answers(answers),
        "score": result.get("score"),
        "tier": result.get("tier"),
        "points_earned": result.get("points_earned"),
        "points_possible": result.get("points_possible"),
        "category_points": {k: v["points"] for k, v in result.get("categories", {}).items()},
        "checklist_tasks": [item["task"] for item in result.get("checklist", [])],
    }
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(json.dumps(report, indent=2), encoding="utf-8")
