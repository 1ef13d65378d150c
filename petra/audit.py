"""Audit trail for assessments and API operations."""

import csv
import json
import logging
from datetime import datetime, timezone
from pathlib import Path

AUDIT_DIR = Path(__file__).resolve().parent.parent / "logs"

CSV_HEADERS = [
    "timestamp",
    "answers_hash",
    "score",
    "tier",
    "home_points",
    "lifestyle_points",
    "practical_points",
    "pet_specific_points",
    "pet_types",
    "checklist_count",
    "high_priority_count",
    "recommendation_source",
    "scoring_rationale",
]


def _ensure_log_dir():
    AUDIT_DIR.mkdir(parents=True, exist_ok=True)


def _iso_ts():
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"


def log_assessment(
    *,
    answers_hash: str,
    result: dict,
    pet_types: list[str],
    recommendation_source: str | None = None,
):
    """
    Log a scored assessment for later review: when, how it scored and why.
    Writes to assessments.jsonl (append) and assessments.csv. No PII.
    """
    _ensure_log_dir()
    ts = _iso_ts()

    categories = result.get("categories", {})
    checklist = result.get("checklist", [])
    points = {k: v.get("points", 0) for k, v in categories.items()}

    rationale_parts = [f"{result.get('points_earned')} of {result.get('points_possible')} points ({result.get('score')}%)."]
    weak = [v["label"] for v in categories.values() if v.get("points", 0) < v.get("max_points", 0) / 2]
    if weak:
        rationale_parts.append(f"Weak areas: {', '.join(weak)}.")
    scoring_rationale = " ".join(rationale_parts)

    entry = {
        "timestamp": ts,
        "answers_hash": answers_hash,
        "score": result.get("score"),
        "tier": result.get("tier"),
        "category_points": points,
        "pet_types": sorted(pet_types),
        "checklist_count": len(checklist),
        "high_priority_count": sum(1 for c in checklist if c.get("priority") == "high"),
        "recommendation_source": recommendation_source,
        "scoring_rationale": scoring_rationale,
        "checklist": checklist,
    }

    with open(AUDIT_DIR / "assessments.jsonl", "a", encoding="utf-8") as f:
        f.write(json.dumps(entry, default=str) + "\n")

    csv_path = AUDIT_DIR / "assessments.csv"
    csv_exists = csv_path.exists()
    with open(csv_path, "a", encoding="utf-8", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=CSV_HEADERS)
        if not csv_exists:
            writer.writeheader()
        writer.writerow({
            "timestamp": ts,
            "answers_hash": answers_hash,
            "score": result.get("score"),
            "tier": result.get("tier"),
            "home_points": points.get("home", 0),
            "lifestyle_points": points.get("lifestyle", 0),
            "practical_points": points.get("practical", 0),
            "pet_specific_points": points.get("pet_specific", 0),
            "pet_types": ",".join(sorted(pet_types)),
            "checklist_count": entry["checklist_count"],
            "high_priority_count": entry["high_priority_count"],
            "recommendation_source": recommendation_source or "",
            "scoring_rationale": scoring_rationale,
        })


def audit_log(
    action: str,
    status: str,
    *,
    model: str | None = None,
    score: int | None = None,
    source: str | None = None,
    error: str | None = None,
    extra: dict | None = None,
):
    """Append a structured audit entry to the audit log (JSONL)."""
    _ensure_log_dir()
    entry = {
        "timestamp": _iso_ts(),
        "action": action,
        "status": status,
    }
    if model:
        entry["model"] = model
    if score is not None:
        entry["score"] = score
    if source:
        entry["source"] = source
    if error:
        entry["error"] = error
    if extra:
        entry.update(extra)

    with open(AUDIT_DIR / "audit.log", "a", encoding="utf-8") as f:
        f.write(json.dumps(entry, default=str) + "\n")


def setup_app_logging():
    """Configure application logging to console and file."""
    _ensure_log_dir()
    logger = logging.getLogger("petra")
    if logger.handlers:
        return logger
    logger.setLevel(logging.DEBUG)

    fmt = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
    datefmt = "%Y-%m-%d %H:%M:%S"

    # Console
    ch = logging.StreamHandler()
    ch.setLevel(logging.INFO)
    ch.setFormatter(logging.Formatter(fmt, datefmt=datefmt))
    logger.addHandler(ch)

    # File
    fh = logging.FileHandler(AUDIT_DIR / "app.log", encoding="utf-8")
    fh.setLevel(logging.DEBUG)
    fh.setFormatter(logging.Formatter(fmt, datefmt=datefmt))
    logger.addHandler(fh)

    return logger
