"""Quick readiness questionnaire (2-3 minutes) and conditional pet-specific questions."""

import copy

from readiness.answers import PET_ANSWER_KEYS

PET_TYPE_QUESTION_KEY = "consideringPetTypes"

QUICK_ASSESSMENT_QUESTIONS = [
    # Home
    {
        "section": "home",
        "key": "city",
        "question": "Which city are you in?",
        "subtitle": "To check if Petra services are available",
        "type": "single-select",
        "options": [
            {"value": "kochi", "label": "Kochi"},
            {"value": "other", "label": "Other City"},
        ],
    },
    {
        "section": "home",
        "key": "homeType",
        "question": "What type of home do you live in?",
        "type": "single-select",
        "options": [
            {"value": "apartment", "label": "Apartment"},
            {"value": "independent-house", "label": "Independent House"},
            {"value": "farmhouse", "label": "Farmhouse"},
            {"value": "hostel-pg", "label": "Hostel / PG"},
        ],
    },
    {
        "section": "home",
        "key": "outdoorAccess",
        "question": "What outdoor spaces do you have?",
        "subtitle": "Select all that apply",
        "type": "multi-select",
        "options": [
            {"value": "balcony", "label": "Balcony"},
            {"value": "terrace", "label": "Terrace"},
            {"value": "private-yard", "label": "Private Yard"},
            {"value": "shared-area", "label": "Shared Area"},
            {"value": "none", "label": "No Outdoor Space"},
        ],
    },
    {
        "section": "home",
        "key": "hoursEmpty",
        "question": "How many hours is your home empty on weekdays?",
        "type": "single-select",
        "options": [
            {"value": "0-2", "label": "0-2 hours", "description": "Someone usually home"},
            {"value": "3-5", "label": "3-5 hours", "description": "Short periods alone"},
            {"value": "6-8", "label": "6-8 hours", "description": "Regular work hours"},
            {"value": "9+", "label": "9+ hours", "description": "Long periods alone"},
        ],
    },
    # Lifestyle
    {
        "section": "lifestyle",
        "key": "travelFrequency",
        "question": "How often do you travel overnight?",
        "type": "single-select",
        "options": [
            {"value": "rarely", "label": "Rarely", "description": "Few times a year"},
            {"value": "monthly", "label": "Once a Month"},
            {"value": "few-times-month", "label": "Few Times a Month"},
            {"value": "weekly", "label": "Weekly or More"},
        ],
    },
    {
        "section": "lifestyle",
        "key": "dailyTimeAvailable",
        "question": "Daily time you can give for pet care?",
        "subtitle": "Feeding, cleaning, play, walks, training",
        "type": "single-select",
        "options": [
            {"value": "15-30", "label": "15-30 minutes"},
            {"value": "30-60", "label": "30-60 minutes"},
            {"value": "1-2", "label": "1-2 hours"},
            {"value": "2+", "label": "2+ hours"},
        ],
    },
    {
        "section": "lifestyle",
        "key": "experienceLevel",
        "question": "Your pet parenting experience?",
        "type": "single-select",
        "options": [
            {"value": "first-time", "label": "First Time", "description": "Never had pets"},
            {"value": "some-experience", "label": "Some Experience", "description": "Had family pets"},
            {"value": "very-experienced", "label": "Very Experienced", "description": "Owned & cared for pets"},
        ],
    },
    # Preferences
    {
        "section": "preferences",
        "key": PET_TYPE_QUESTION_KEY,
        "question": "Which pets are you considering?",
        "subtitle": "Select all you're open to",
        "type": "multi-select",
        "options": [
            {"value": "dog", "label": "Dog"},
            {"value": "cat", "label": "Cat"},
            {"value": "bird", "label": "Bird"},
            {"value": "fish", "label": "Fish"},
            {"value": "small-animal", "label": "Rabbit / Guinea Pig / Hamster"},
        ],
    },
    {
        "section": "preferences",
        "key": "sizePreference",
        "question": "Size preference for your pet?",
        "type": "single-select",
        "options": [
            {"value": "small", "label": "Small", "description": "Easy to handle, less space"},
            {"value": "medium", "label": "Medium", "description": "Moderate size & needs"},
            {"value": "large", "label": "Large", "description": "Need more space & exercise"},
            {"value": "any", "label": "Any Size", "description": "Open to all"},
        ],
    },
    {
        "section": "preferences",
        "key": "lookingFor",
        "question": "What are you mainly looking for?",
        "subtitle": "Select all that apply",
        "type": "multi-select",
        "options": [
            {"value": "playful", "label": "Playful Companion"},
            {"value": "calm", "label": "Calm Companion"},
            {"value": "observe", "label": "To Observe & Enjoy"},
            {"value": "kids", "label": "For Kids to Learn"},
        ],
    },
    # Practical
    {
        "section": "practical",
        "key": "monthlyBudget",
        "question": "Comfortable monthly budget for pet care?",
        "subtitle": "Food, vet, grooming, supplies",
        "type": "single-select",
        "options": [
            {"value": "up-to-1k", "label": "Up to ₹1,000"},
            {"value": "1k-3k", "label": "₹1,000 - ₹3,000"},
            {"value": "3k-6k", "label": "₹3,000 - ₹6,000"},
            {"value": "6k+", "label": "₹6,000+"},
        ],
    },
    {
        "section": "practical",
        "key": "hasAllergies",
        "question": "Anyone in family with pet-related allergies?",
        "subtitle": "Fur, feathers, hay, dust",
        "type": "boolean",
        "options": [
            {"value": "no", "label": "No Allergies"},
            {"value": "yes", "label": "Yes, We Have Allergies"},
        ],
    },
    {
        "section": "practical",
        "key": "familySupport",
        "question": "Is everyone at home supportive of getting a pet?",
        "type": "boolean",
        "options": [
            {"value": "yes", "label": "Yes, Everyone's On Board!"},
            {"value": "no", "label": "Not Everyone Agrees"},
        ],
    },
]

CONDITIONAL_PET_QUESTIONS = {
    "dog": [
        {
            "key": "safeWalking",
            "question": "Do you have safe walking options near your home?",
            "type": "boolean",
            "options": [
                {"value": "yes", "label": "Yes, Safe Walking Areas"},
                {"value": "no", "label": "No Safe Areas"},
            ],
        },
        {
            "key": "indoorOutdoor",
            "question": "Where will the dog stay mostly?",
            "type": "single-select",
            "options": [
                {"value": "indoor", "label": "Indoors"},
                {"value": "outdoor", "label": "Outdoors"},
                {"value": "both", "label": "Both"},
            ],
        },
    ],
    "cat": [
        {
            "key": "indoorOnly",
            "question": "Will your cat be indoor-only?",
            "type": "boolean",
            "options": [
                {"value": "yes", "label": "Indoor Only", "description": "Safer & recommended"},
                {"value": "no", "label": "Indoor-Outdoor", "description": "Higher risks"},
            ],
        },
        {
            "key": "securedSpaces",
            "question": "Are windows & balconies secured?",
            "subtitle": "To prevent falls/escapes",
            "type": "boolean",
            "options": [
                {"value": "yes", "label": "Yes, Secured"},
                {"value": "no", "label": "Not Yet / No"},
            ],
        },
    ],
    "bird": [
        {
            "key": "noiseOk",
            "question": "Comfortable with bird noise?",
            "subtitle": "Chirping, squawking, especially mornings",
            "type": "boolean",
            "options": [
                {"value": "yes", "label": "Yes, It's Fine!"},
                {"value": "no", "label": "Prefer Quieter Pets"},
            ],
        },
    ],
    "fish": [
        {
            "key": "tankSizeReady",
            "question": "What tank size are you thinking?",
            "type": "single-select",
            "options": [
                {"value": "small", "label": "Small (< 50L)", "description": "Few fish"},
                {"value": "medium", "label": "Medium (50-150L)", "description": "Community tank"},
                {"value": "large", "label": "Large (150L+)", "description": "Full setup"},
            ],
        },
    ],
    "small-animal": [
        {
            "key": "freeRoamTime",
            "question": "Will they get supervised free-roam time?",
            "type": "boolean",
            "options": [
                {"value": "yes", "label": "Yes, Daily Free Time"},
                {"value": "no", "label": "Mostly in Enclosure"},
            ],
        },
    ],
}


def expand_questions(pet_types: list[str] | None = None) -> list[dict]:
    """
    Insert the selected pet types' sub-questions right after the pet-type question.
    Unknown pet types contribute nothing. Order follows pet_types.
    """
    base = copy.deepcopy(QUICK_ASSESSMENT_QUESTIONS)
    extra = []
    for pet_type in pet_types or []:
        for q in CONDITIONAL_PET_QUESTIONS.get(pet_type, []):
            extra.append({**copy.deepcopy(q), "section": "pet-specific", "petType": pet_type})

    if not extra:
        return base
    idx = next(i for i, q in enumerate(base) if q["key"] == PET_TYPE_QUESTION_KEY)
    return base[: idx + 1] + extra + base[idx + 1:]


def record_answer(answers: dict, question: dict, value) -> dict:
    """Return a copy of answers with value filed under the question's key."""
    new_answers = copy.deepcopy(answers)
    pet_type = question.get("petType")
    if pet_type:
        bucket = PET_ANSWER_KEYS.get(pet_type, pet_type)
        pet_answers = new_answers.setdefault("petSpecificAnswers", {})
        pet_answers.setdefault(bucket, {})[question["key"]] = value
    else:
        new_answers[question["key"]] = value
    return new_answers
