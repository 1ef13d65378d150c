"""Deterministic readiness scoring engine."""

from readiness.scoring.engine import score_answers, tier_for_score
from readiness.scoring.checklist import build_checklist

__all__ = ["score_answers", "tier_for_score", "build_checklist"]
