"""Breed recommendations: Groq first, fixed rule-based lists as fallback."""

import logging

import jsonschema

from petra import groq_client
from readiness.answers import AssessmentAnswers
from readiness.validation import validate_recommendations

log = logging.getLogger("petra.recommend")

# Pet breeds commonly available in Kerala (legally sold, standard breeds)
KERALA_AVAILABLE_BREEDS = {
    "dogs": [
        "Labrador Retriever", "Golden Retriever", "German Shepherd", "Beagle", "Pug",
        "Shih Tzu", "Cocker Spaniel", "Pomeranian", "Dachshund", "Rottweiler", "Doberman",
        "Boxer", "Siberian Husky", "Great Dane", "Bulldog", "French Bulldog",
        "Yorkshire Terrier", "Maltese",
    ],
    "cats": [
        "Persian Cat", "Siamese Cat", "British Shorthair", "Maine Coon", "Bengal Cat",
        "Ragdoll", "Himalayan Cat", "American Shorthair", "Exotic Shorthair", "Scottish Fold",
    ],
}

SITUATION_CONTEXT = {
    "thinking": "is researching pets. Recommend breeds that are good starter pets with clear expectations.",
    "getting-week": "is getting a pet THIS WEEK. Recommend readily available breeds that settle quickly.",
    "new-parent": "JUST GOT their first pet (0-3 months ago). Recommend what would have been best for them.",
    "experienced-new-breed": "is experienced but trying a new breed. Can handle more challenging breeds.",
}

EXPERIENCE_CONTEXT = {
    "first-time": "has NEVER owned a pet. Prioritize LOW MAINTENANCE, FORGIVING breeds. Avoid high-maintenance.",
    "family-pet": "had pets at home but never primary responsibility. Recommend MODERATE care needs.",
    "experienced": "is very experienced. Can handle HIGH MAINTENANCE and challenging breeds.",
}

CONCERN_CONTEXT = {
    "basic-care": "worried about daily routines. Recommend LOW MAINTENANCE breeds with simple care needs.",
    "health": "worried about vet visits and health. Recommend HEALTHY, ROBUST breeds with good health records.",
    "behavior": "worried about training. Recommend EASY TO TRAIN, INTELLIGENT, OBEDIENT breeds.",
    "emergency": "worried about emergencies. Recommend RESILIENT, HARDY breeds with stable temperaments.",
}

# Questionnaire experience values -> prompt experience keys
QUIZ_EXPERIENCE = {
    "first-time": "first-time",
    "some-experience": "family-pet",
    "very-experienced": "experienced",
}

SYSTEM_PROMPT = (
    "You are a pet expert in Kerala, India. You analyze each person's unique situation, lifestyle, "
    "and concerns before recommending breeds. Recommend only breeds available in Kerala."
)

FIRST_TIME_RECOMMENDATIONS = [
    {
        "breed": "Labrador Retriever",
        "type": "dog",
        "matchScore": 90,
        "bestFor": "Families and first-time owners",
        "whyRecommended": "Labs are friendly, easy to train, and great with families. Their gentle temperament and high intelligence make them ideal for beginners.",
        "climateNote": "Adapts well but needs AC/cool space during summer",
        "careLevel": "medium",
        "estimatedAge": "8-12 weeks",
        "keyTraits": ["friendly", "easy to train", "family-oriented", "gentle"],
        "considerations": "Need daily exercise and space to play. Moderate grooming required.",
    },
    {
        "breed": "Beagle",
        "type": "dog",
        "matchScore": 88,
        "bestFor": "Active first-time owners",
        "whyRecommended": "Beagles are friendly, great with children and relatively easy to care for. Their size suits apartments.",
        "climateNote": "Handles Kerala climate reasonably well",
        "careLevel": "medium",
        "estimatedAge": "8-10 weeks",
        "keyTraits": ["friendly", "playful", "compact size", "social"],
        "considerations": "Can be vocal (barking). Need daily walks and mental stimulation.",
    },
    {
        "breed": "Pug",
        "type": "dog",
        "matchScore": 92,
        "bestFor": "First-time owners in apartments",
        "whyRecommended": "Pugs are small, affectionate, low-energy and adapt well to apartment living.",
        "climateNote": "Moderate heat tolerance, needs cool indoor space",
        "careLevel": "low",
        "estimatedAge": "8-10 weeks",
        "keyTraits": ["affectionate", "low-energy", "compact", "family-friendly"],
        "considerations": "Watch for breathing issues in hot weather. Keep indoors during peak heat.",
    },
    {
        "breed": "Persian Cat",
        "type": "cat",
        "matchScore": 89,
        "bestFor": "Indoor-only, calm environments",
        "whyRecommended": "Persian cats are calm, gentle and enjoy a peaceful indoor home.",
        "climateNote": "Needs AC in hot weather due to thick coat",
        "careLevel": "medium",
        "estimatedAge": "3-4 months",
        "keyTraits": ["calm", "gentle", "indoor-friendly", "quiet"],
        "considerations": "Requires daily grooming due to long coat. Must be kept indoors in AC.",
    },
]

EXPERIENCED_RECOMMENDATIONS = [
    {
        "breed": "German Shepherd",
        "type": "dog",
        "matchScore": 94,
        "bestFor": "Experienced owners",
        "whyRecommended": "Highly intelligent, loyal and versatile. Excellent in training and strong family bonds.",
        "climateNote": "Needs cool environment, AC recommended",
        "careLevel": "high",
        "estimatedAge": "8-10 weeks",
        "keyTraits": ["intelligent", "loyal", "protective", "trainable"],
        "considerations": "Need significant exercise, mental stimulation, and space.",
    },
    {
        "breed": "Golden Retriever",
        "type": "dog",
        "matchScore": 91,
        "bestFor": "Active families",
        "whyRecommended": "Friendly, intelligent and excellent with families. Highly trainable companions.",
        "climateNote": "Adapts well but needs AC during hot months",
        "careLevel": "medium",
        "estimatedAge": "8-12 weeks",
        "keyTraits": ["friendly", "intelligent", "gentle", "active"],
        "considerations": "Need daily exercise. Regular grooming and coat care needed.",
    },
    {
        "breed": "Doberman",
        "type": "dog",
        "matchScore": 88,
        "bestFor": "Experienced owners with space",
        "whyRecommended": "Intelligent, protective and loyal. A good fit for handlers who want a protective companion.",
        "climateNote": "Short coat handles Kerala heat reasonably well",
        "careLevel": "high",
        "estimatedAge": "8-10 weeks",
        "keyTraits": ["loyal", "protective", "intelligent", "alert"],
        "considerations": "Need space, regular exercise, and consistent training.",
    },
    {
        "breed": "Bengal Cat",
        "type": "cat",
        "matchScore": 87,
        "bestFor": "Active, experienced cat owners",
        "whyRecommended": "Intelligent, active and highly interactive. Can be trained.",
        "climateNote": "Short coat handles Kerala climate well",
        "careLevel": "medium",
        "estimatedAge": "3-4 months",
        "keyTraits": ["intelligent", "active", "playful", "trainable"],
        "considerations": "Very active, needs lots of play and stimulation.",
    },
]


def profile_from_answers(answers) -> dict:
    """Build the recommendation profile (situation, experience, concern) from quiz answers."""
    a = AssessmentAnswers.from_dict(answers)
    return {
        "situation": "thinking",
        "experienceLevel": QUIZ_EXPERIENCE.get(a.experience_level or "", "first-time"),
        "concern": ",".join(sorted(a.looking_for)) or "basic-care",
    }


def build_prompt(profile: dict, readiness: dict | None = None) -> str:
    situation = profile.get("situation") or "thinking"
    experience = profile.get("experienceLevel") or "first-time"
    concerns = [c.strip() for c in (profile.get("concern") or "basic-care").split(",") if c.strip()]
    concern_context = " ALSO ".join(CONCERN_CONTEXT[c] for c in concerns if c in CONCERN_CONTEXT)
    readiness_line = ""
    if readiness:
        readiness_line = f"- Readiness: {readiness.get('score')}/100 ({readiness.get('tier')})"

    breed_list = ", ".join(KERALA_AVAILABLE_BREEDS["dogs"] + KERALA_AVAILABLE_BREEDS["cats"])
    replacements = {
        "{{situation}}": situation,
        "{{situation_context}}": SITUATION_CONTEXT.get(situation, ""),
        "{{experience}}": experience,
        "{{experience_context}}": EXPERIENCE_CONTEXT.get(experience, ""),
        "{{concerns}}": ", ".join(concerns),
        "{{concern_context}}": concern_context,
        "{{readiness_line}}": readiness_line,
        "{{breed_list}}": breed_list,
    }
    prompt = groq_client.load_prompt("recommend_breeds")
    for placeholder, value in replacements.items():
        prompt = prompt.replace(placeholder, value)
    return prompt


def rule_based_recommendations(profile: dict) -> list[dict]:
    if (profile.get("experienceLevel") or "first-time") == "first-time":
        return [dict(r) for r in FIRST_TIME_RECOMMENDATIONS]
    return [dict(r) for r in EXPERIENCED_RECOMMENDATIONS]


def recommend(profile: dict, api_key: str | None = None, readiness: dict | None = None) -> dict:
    """
    Recommend 4-5 breeds for a quiz profile.
    Falls back to rule-based lists when the API key is unset or the AI output is unusable.
    Returns {"recommendations": [...], "source": "ai" | "rules", "model": str | None}.
    """
    key = groq_client.get_api_key(api_key)
    if not key:
        log.info("GROQ_API_KEY not set; using rule-based breed recommendations")
        return {"recommendations": rule_based_recommendations(profile), "source": "rules", "model": None}

    try:
        data = groq_client.call_groq(key, SYSTEM_PROMPT, build_prompt(profile, readiness))
        validate_recommendations(data)
        return {"recommendations": data["recommendations"], "source": "ai", "model": groq_client.MODEL}
    except (ValueError, jsonschema.ValidationError) as e:
        log.warning("AI recommendations unusable, using fallback: %s", e)
    except Exception:
        log.exception("AI recommendation call failed, using fallback")
    return {"recommendations": rule_based_recommendations(profile), "source": "rules", "model": None}
