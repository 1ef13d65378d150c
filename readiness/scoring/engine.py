"""Deterministic readiness scoring. Pure code, no LLM."""

import math

from readiness.answers import AssessmentAnswers
from readiness.scoring.checklist import build_checklist

CATEGORY_MAX = 25

# (min_score, tier, message, description), evaluated high to low
TIERS = [
    (80, "Highly Ready", "You're exceptionally well-prepared!",
     "You have the perfect setup and lifestyle for pet ownership."),
    (60, "Ready", "You're ready to welcome a pet!",
     "You have good preparation and can start looking for your perfect companion."),
    (40, "Needs Preparation", "A few adjustments needed",
     "Make some changes to your setup or lifestyle before getting a pet."),
    (0, "Not Ready", "More preparation recommended",
     "Consider waiting until your situation is more suitable for pet ownership."),
]


def _home_points(a: AssessmentAnswers) -> int:
    pts = 0
    if a.home_type in ("independent-house", "farmhouse"):
        pts += 10
    if a.has_outdoor_space():
        pts += 10
    if a.hours_empty in ("0-2", "3-5"):
        pts += 5
    return pts


def _lifestyle_points(a: AssessmentAnswers) -> int:
    pts = 0
    if a.daily_time_available in ("1-2", "2+"):
        pts += 10
    if a.travel_frequency in ("rarely", "monthly"):
        pts += 10
    if a.experience_level in ("some-experience", "very-experienced"):
        pts += 5
    return pts


def _practical_points(a: AssessmentAnswers) -> int:
    pts = 0
    if a.monthly_budget in ("3k-6k", "6k+"):
        pts += 10
    if a.family_support is True:
        pts += 10
    if a.has_allergies is False:
        pts += 5
    return pts


def _pet_specific_points(a: AssessmentAnswers) -> int:
    if not a.considering_pet_types:
        return 0
    pts = 10
    if a.considers("dog") and a.pet_answer("dog", "safeWalking"):
        pts += 5
    if a.considers("cat") and a.pet_answer("cat", "securedSpaces"):
        pts += 5
    if a.considers("bird") and a.pet_answer("bird", "noiseOk"):
        pts += 5
    return pts


CATEGORIES = [
    ("home", "Home suitability", _home_points),
    ("lifestyle", "Lifestyle fit", _lifestyle_points),
    ("practical", "Practical readiness", _practical_points),
    ("pet_specific", "Pet-specific readiness", _pet_specific_points),
]


def _round_half_up(x: float) -> int:
    # half-up, not banker's rounding
    return int(math.floor(x + 0.5))


def tier_for_score(score: int) -> dict:
    """Map a 0-100 score to its tier. Lower bounds are inclusive."""
    for min_score, tier, message, description in TIERS:
        if score >= min_score:
            return {"tier": tier, "message": message, "description": description}
    _, tier, message, description = TIERS[-1]
    return {"tier": tier, "message": message, "description": description}


def score_answers(answers) -> dict:
    """
    Score a questionnaire snapshot.
    Accepts an AssessmentAnswers or the raw answers dict. Total: never raises.
    Returns score, tier, per-category breakdown and the preparation checklist.
    """
    a = AssessmentAnswers.from_dict(answers)

    categories = {}
    earned = 0
    possible = 0
    for key, label, rule in CATEGORIES:
        pts = min(rule(a), CATEGORY_MAX)
        categories[key] = {"label": label, "points": pts, "max_points": CATEGORY_MAX}
        earned += pts
        possible += CATEGORY_MAX

    score = _round_half_up(earned / possible * 100) if possible else 0
    score = max(0, min(100, score))
    tier = tier_for_score(score)

    return {
        "score": score,
        "tier": tier["tier"],
        "message": tier["message"],
        "description": tier["description"],
        "points_earned": earned,
        "points_possible": possible,
        "categories": categories,
        "checklist": build_checklist(a),
    }
