"""Answer coercion from the questionnaire payload."""

import pytest

from readiness.answers import AssessmentAnswers, coerce_bool


@pytest.mark.parametrize(
    "value,expected",
    [
        (True, True),
        (False, False),
        ("yes", True),
        ("YES ", True),
        ("no", False),
        ("maybe", None),
        (None, None),
        (1, None),
        (0, None),
    ],
)
def test_coerce_bool(value, expected):
    assert coerce_bool(value) is expected


def test_from_dict_maps_camel_case_fields():
    a = AssessmentAnswers.from_dict({
        "homeType": "apartment",
        "outdoorAccess": ["balcony"],
        "hoursEmpty": "3-5",
        "dailyTimeAvailable": "30-60",
        "travelFrequency": "weekly",
        "experienceLevel": "first-time",
        "monthlyBudget": "1k-3k",
        "familySupport": "yes",
        "hasAllergies": False,
        "consideringPetTypes": ["cat"],
        "city": "kochi",
        "sizePreference": "small",
        "lookingFor": ["health"],
    })
    assert a.home_type == "apartment"
    assert a.outdoor_access == frozenset({"balcony"})
    assert a.hours_empty == "3-5"
    assert a.daily_time_available == "30-60"
    assert a.travel_frequency == "weekly"
    assert a.experience_level == "first-time"
    assert a.monthly_budget == "1k-3k"
    assert a.family_support is True
    assert a.has_allergies is False
    assert a.considers("cat") and not a.considers("dog")
    assert a.city == "kochi"
    assert a.size_preference == "small"
    assert a.looking_for == frozenset({"health"})


def test_single_string_multi_select_becomes_one_element_set():
    a = AssessmentAnswers.from_dict({"outdoorAccess": "terrace", "consideringPetTypes": "dog"})
    assert a.outdoor_access == frozenset({"terrace"})
    assert a.considers("dog")


def test_plural_pet_key_wins_over_singular():
    a = AssessmentAnswers.from_dict({
        "petSpecificAnswers": {"dogs": {"safeWalking": False}, "dog": {"safeWalking": True}},
    })
    assert a.pet_answer("dog", "safeWalking") is False


def test_unanswered_pet_question_is_false():
    a = AssessmentAnswers.from_dict({"consideringPetTypes": ["bird"]})
    assert a.pet_answer("bird", "noiseOk") is False


def test_outdoor_space():
    assert AssessmentAnswers.from_dict({"outdoorAccess": ["balcony"]}).has_outdoor_space()
    assert not AssessmentAnswers.from_dict({"outdoorAccess": ["balcony", "none"]}).has_outdoor_space()
    assert not AssessmentAnswers.from_dict({}).has_outdoor_space()


def test_from_dict_passes_through_existing_record():
    a = AssessmentAnswers(home_type="farmhouse")
    assert AssessmentAnswers.from_dict(a) is a
