"""Determinism test: same answers scored 10x → identical results, regardless of key order."""

import copy

from readiness import score_answers

SAMPLE_ANSWERS = {
    "homeType": "apartment",
    "outdoorAccess": ["balcony", "shared-area"],
    "hoursEmpty": "6-8",
    "dailyTimeAvailable": "1-2",
    "travelFrequency": "monthly",
    "experienceLevel": "first-time",
    "monthlyBudget": "1k-3k",
    "familySupport": True,
    "hasAllergies": False,
    "consideringPetTypes": ["cat", "dog"],
    "petSpecificAnswers": {"cats": {"securedSpaces": False}, "dogs": {"safeWalking": True}},
}


def test_score_answers_determinism():
    """Same inputs → identical results across 10 runs."""
    results = [score_answers(SAMPLE_ANSWERS) for _ in range(10)]
    first = results[0]
    for r in results[1:]:
        assert r == first


def test_key_and_set_order_do_not_matter():
    reordered = dict(reversed(list(SAMPLE_ANSWERS.items())))
    reordered["outdoorAccess"] = ["shared-area", "balcony"]
    reordered["consideringPetTypes"] = ["dog", "cat"]
    assert score_answers(reordered) == score_answers(SAMPLE_ANSWERS)


def test_scoring_does_not_mutate_input():
    snapshot = copy.deepcopy(SAMPLE_ANSWERS)
    score_answers(SAMPLE_ANSWERS)
    assert SAMPLE_ANSWERS == snapshot
