"""Assessment answer record: coercion from the questionnaire payload."""

from dataclasses import dataclass, field

HOME_TYPES = ("apartment", "independent-house", "farmhouse", "hostel-pg")
OUTDOOR_ACCESS = ("balcony", "terrace", "private-yard", "shared-area", "none")
HOURS_EMPTY = ("0-2", "3-5", "6-8", "9+")
DAILY_TIME = ("15-30", "30-60", "1-2", "2+")
TRAVEL_FREQUENCY = ("rarely", "monthly", "few-times-month", "weekly")
EXPERIENCE_LEVELS = ("first-time", "some-experience", "very-experienced")
MONTHLY_BUDGETS = ("up-to-1k", "1k-3k", "3k-6k", "6k+")
PET_TYPES = ("dog", "cat", "bird", "fish", "small-animal")

# Pet type -> key under petSpecificAnswers
PET_ANSWER_KEYS = {
    "dog": "dogs",
    "cat": "cats",
    "bird": "birds",
    "fish": "fish",
    "small-animal": "smallAnimals",
}


def coerce_bool(value) -> bool | None:
    """True/"yes" -> True, False/"no" -> False, anything else -> None (unanswered)."""
    if value is True or value is False:
        return value
    if isinstance(value, str):
        v = value.strip().lower()
        if v == "yes":
            return True
        if v == "no":
            return False
    return None


def _coerce_choice(value) -> str | None:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def _coerce_multi(value) -> frozenset[str]:
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, (list, tuple, set, frozenset)):
        return frozenset()
    return frozenset(v.strip() for v in value if isinstance(v, str) and v.strip())


def _coerce_pet_answers(value) -> dict[str, dict]:
    """Index pet-specific answers by plural key; accepts singular pet-type keys too."""
    if not isinstance(value, dict):
        return {}
    out: dict[str, dict] = {}
    for pet_type, plural in PET_ANSWER_KEYS.items():
        nested = value.get(plural)
        if not isinstance(nested, dict):
            nested = value.get(pet_type)
        if isinstance(nested, dict):
            out[plural] = dict(nested)
    return out


@dataclass(frozen=True)
class AssessmentAnswers:
    home_type: str | None = None
    outdoor_access: frozenset[str] = field(default_factory=frozenset)
    hours_empty: str | None = None
    daily_time_available: str | None = None
    travel_frequency: str | None = None
    experience_level: str | None = None
    monthly_budget: str | None = None
    family_support: bool | None = None
    has_allergies: bool | None = None
    considering_pet_types: frozenset[str] = field(default_factory=frozenset)
    pet_specific_answers: dict[str, dict] = field(default_factory=dict)
    city: str | None = None
    size_preference: str | None = None
    looking_for: frozenset[str] = field(default_factory=frozenset)

    @classmethod
    def from_dict(cls, data) -> "AssessmentAnswers":
        """
        Build from the camelCase questionnaire payload.
        Never raises: non-dict input and malformed fields become unanswered.
        """
        if isinstance(data, cls):
            return data
        if not isinstance(data, dict):
            data = {}
        return cls(
            home_type=_coerce_choice(data.get("homeType")),
            outdoor_access=_coerce_multi(data.get("outdoorAccess")),
            hours_empty=_coerce_choice(data.get("hoursEmpty")),
            daily_time_available=_coerce_choice(data.get("dailyTimeAvailable")),
            travel_frequency=_coerce_choice(data.get("travelFrequency")),
            experience_level=_coerce_choice(data.get("experienceLevel")),
            monthly_budget=_coerce_choice(data.get("monthlyBudget")),
            family_support=coerce_bool(data.get("familySupport")),
            has_allergies=coerce_bool(data.get("hasAllergies")),
            considering_pet_types=_coerce_multi(data.get("consideringPetTypes")),
            pet_specific_answers=_coerce_pet_answers(data.get("petSpecificAnswers")),
            city=_coerce_choice(data.get("city")),
            size_preference=_coerce_choice(data.get("sizePreference")),
            looking_for=_coerce_multi(data.get("lookingFor")),
        )

    def considers(self, pet_type: str) -> bool:
        return pet_type in self.considering_pet_types

    def pet_answer(self, pet_type: str, key: str) -> bool:
        """Boolean pet-specific answer; unanswered counts as False."""
        nested = self.pet_specific_answers.get(PET_ANSWER_KEYS.get(pet_type, pet_type), {})
        return coerce_bool(nested.get(key)) is True

    def has_outdoor_space(self) -> bool:
        return bool(self.outdoor_access) and "none" not in self.outdoor_access
