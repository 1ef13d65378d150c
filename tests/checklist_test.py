"""Preparation checklist: rule order, priorities and the indoor-space rule."""

from readiness import build_checklist, score_answers


def _tasks(answers):
    return [item["task"] for item in build_checklist(answers)]


def test_empty_answers_yield_indoor_space_item():
    assert build_checklist({}) == [
        {"task": "Set up safe indoor space for pet", "priority": "high", "completed": False}
    ]


def test_indoor_space_item_iff_outdoor_empty_or_contains_none():
    assert "Set up safe indoor space for pet" in _tasks({"outdoorAccess": []})
    assert "Set up safe indoor space for pet" in _tasks({"outdoorAccess": ["none"]})
    assert "Set up safe indoor space for pet" in _tasks({"outdoorAccess": ["terrace", "none"]})
    assert "Set up safe indoor space for pet" not in _tasks({"outdoorAccess": ["terrace"]})


def test_full_checklist_order():
    answers = {
        "outdoorAccess": ["none"],
        "hoursEmpty": "9+",
        "consideringPetTypes": ["fish", "bird", "cat", "dog"],
        "monthlyBudget": "up-to-1k",
        "hasAllergies": True,
    }
    assert _tasks(answers) == [
        "Set up safe indoor space for pet",
        "Arrange pet care for long absences",
        "Find safe walking routes near home",
        "Get dog essentials (leash, collar, bowls, bed)",
        "Secure windows and balconies",
        "Set up litter box area",
        "Set up cage in safe, ventilated area",
        "Set up aquarium with filter and heater",
        "Plan for unexpected vet expenses",
        "Consult doctor about pet allergies",
    ]


def test_priorities_and_completed_flags():
    checklist = build_checklist({"outdoorAccess": ["balcony"], "monthlyBudget": "up-to-1k"})
    assert checklist == [{"task": "Plan for unexpected vet expenses", "priority": "medium", "completed": False}]


def test_answered_pet_questions_suppress_items():
    answers = {
        "outdoorAccess": ["private-yard"],
        "consideringPetTypes": ["dog", "cat"],
        "petSpecificAnswers": {"dogs": {"safeWalking": True}, "cats": {"securedSpaces": "yes"}},
    }
    assert _tasks(answers) == ["Get dog essentials (leash, collar, bowls, bed)", "Set up litter box area"]


def test_small_animal_has_no_items():
    assert _tasks({"outdoorAccess": ["balcony"], "consideringPetTypes": ["small-animal"]}) == []


def test_checklist_is_independent_of_score():
    answers = {"outdoorAccess": ["none"], "consideringPetTypes": ["dog"]}
    assert score_answers(answers)["checklist"] == build_checklist(answers)
