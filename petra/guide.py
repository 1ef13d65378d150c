"""Pet parent guide generation: Groq-personalised sections with a static fallback."""

import logging

import jsonschema

from petra import groq_client
from readiness.validation import validate_guide

log = logging.getLogger("petra.guide")

SYSTEM_PROMPT = (
    "You are an expert pet care advisor in Kerala, India. You carefully analyze each user's unique "
    "situation before providing advice, then provide highly personalized guidance."
)

SITUATION_MAP = {
    "thinking": "is researching and considering getting their first pet",
    "getting-week": "is getting a pet THIS WEEK and needs immediate preparation advice",
    "new-parent": "just got their first pet within the last 0-3 months",
    "experienced-new-breed": "is an experienced pet owner but new to this specific breed",
}

EXPERIENCE_MAP = {
    "first-time": "has NEVER owned a pet before (complete beginner)",
    "family-pet": "grew up with family pets but never had personal responsibility",
    "experienced": "is an experienced pet owner with years of hands-on experience",
}

CONCERN_MAP = {
    "basic-care": "BASIC DAILY CARE (feeding, grooming, routines)",
    "health": "HEALTH & WELLNESS (vet visits, vaccinations, illnesses)",
    "behavior": "BEHAVIOR & TRAINING (commands, socialization, discipline)",
    "emergency": "EMERGENCY PREPAREDNESS (first aid, emergencies)",
}

CONCERN_FOCUS = {
    "health": "CRITICAL: Prioritize HEALTH topics heavily: vet schedules, vaccination timelines, signs of illness, preventive care.",
    "behavior": "CRITICAL: Prioritize TRAINING and BEHAVIOR heavily: commands, unwanted behaviors, socialization, positive reinforcement.",
    "emergency": "CRITICAL: Prioritize EMERGENCY PREP heavily: first aid basics, emergency vet contacts, common emergencies, warning signs.",
}


def _concerns(profile: dict) -> list[str]:
    raw = profile.get("concern") or "basic-care"
    return [c.strip() for c in raw.split(",") if c.strip()]


def _age_in_weeks(profile: dict) -> int:
    try:
        return int(profile.get("ageInWeeks") or 8)
    except (TypeError, ValueError):
        return 8


def build_prompt(profile: dict, source: str = "quiz") -> str:
    """Build the guide prompt for a quiz profile or a direct breed + age entry."""
    breed = profile.get("breed")
    if source == "quiz":
        situation = profile.get("situation") or "new-parent"
        experience = profile.get("experienceLevel") or "first-time"
        concerns = _concerns(profile)
        if len(concerns) > 1:
            concern_text = "is concerned about multiple areas: " + ", ".join(
                CONCERN_MAP[c] for c in concerns if c in CONCERN_MAP
            )
        else:
            concern_text = f"is most concerned about {CONCERN_MAP.get(concerns[0], concerns[0])}"
        context = f"User {SITUATION_MAP.get(situation, situation)}, {EXPERIENCE_MAP.get(experience, experience)}, and {concern_text}."
        if breed:
            context += f" They have selected a {breed}."

        if situation == "getting-week":
            specific = ("CRITICAL: They need IMMEDIATE action items for THIS WEEK: what to buy TODAY, "
                        "how to pet-proof home NOW, emergency contacts to set up BEFORE pet arrives.")
        elif situation == "new-parent":
            specific = ("CRITICAL: They ALREADY HAVE the pet (0-3 months). Focus on immediate challenges: "
                        "current issues, the first few weeks, handling accidents and mistakes.")
        elif len(concerns) > 1:
            specific = "CRITICAL: User has MULTIPLE concerns. Distribute advice across all of them evenly."
        else:
            specific = CONCERN_FOCUS.get(concerns[0], "")
        priority_description = {
            "getting-week": "Urgent prep before pet arrives",
            "new-parent": "Critical first steps for new parents",
        }.get(situation, "Most important things to focus on right now")
    else:
        weeks = _age_in_weeks(profile)
        context = f"User has a {breed or 'pet'}, currently {round(weeks / 4)} month(s) old ({weeks} weeks)."
        if weeks < 52:
            specific = ("CRITICAL: This is a YOUNG pet. Focus on development milestones, feeding frequency, "
                        "sleep needs, early socialization windows, teething and growth.")
        else:
            specific = ("CRITICAL: This is an ADULT pet. Focus on adult care, health and fitness, "
                        "behavior maintenance, long-term care.")
        if breed:
            specific += f"\nCRITICAL: Make ALL advice SPECIFIC to {breed}: health issues, exercise, grooming, temperament."
        priority_description = "Most important things to focus on right now"

    replacements = {
        "{{context}}": context,
        "{{specific_requirements}}": specific,
        "{{pet}}": breed or "their pet",
        "{{priority_description}}": priority_description,
    }
    prompt = groq_client.load_prompt("pet_guide")
    for placeholder, value in replacements.items():
        prompt = prompt.replace(placeholder, value)
    return prompt


def _tip(tip_id: int, title: str, content: str, category: str, difficulty: str, premium: bool, order: int) -> dict:
    return {
        "id": str(tip_id),
        "title": title,
        "content": content,
        "category": category,
        "difficulty": difficulty,
        "isPremium": premium,
        "order": order,
    }


def _exercise_tip(breed: str | None) -> str:
    b = (breed or "").lower()
    if any(k in b for k in ("husky", "shepherd", "retriever")):
        return "This high-energy breed needs 60-90 minutes of vigorous exercise daily. Mental challenges are equally important."
    if any(k in b for k in ("bulldog", "pug")):
        return "Flat-faced breeds need 20-30 minutes daily in cooler temperatures. Avoid overexertion and watch for breathing difficulties."
    if "cat" in b:
        return "Cats need 20-30 minutes of active play daily. Use interactive toys and climbing structures."
    return "Most pets need 30-60 minutes of daily exercise. Adjust for age, health, energy level and the Kerala heat."


def _grooming_tip(breed: str | None) -> str:
    b = (breed or "").lower()
    if any(k in b for k in ("shih tzu", "maltese")):
        return "Brush daily and book professional grooming every 4-6 weeks. Keep the coat trimmed short in humid months."
    if any(k in b for k in ("husky", "retriever")):
        return "Expect heavy shedding. Brush 2-3 times weekly, daily in shedding season. Dry ears after bathing."
    if any(k in b for k in ("persian", "maine coon")):
        return "Long-haired cats need daily brushing to prevent mats. Clean face folds daily on flat-faced breeds."
    return "Brush weekly, trim nails monthly, clean ears as needed. Check for skin issues and parasites while grooming."


def _health_tip(breed: str | None) -> str:
    b = (breed or "").lower()
    if any(k in b for k in ("shepherd", "retriever", "labrador")):
        return "This breed is prone to hip and elbow dysplasia. Keep weight healthy and watch for limping or difficulty rising."
    if any(k in b for k in ("bulldog", "pug")):
        return "Flat-faced breeds overheat easily in hot, humid weather. Monitor breathing and keep skin folds clean and dry."
    if any(k in b for k in ("persian", "siamese")):
        return "Monitor for kidney disease and ensure plenty of water intake. Schedule regular dental cleanings."
    return "Keep vaccinations current and use monthly flea, tick and heartworm prevention. Address changes in appetite promptly."


def _training_tip(breed: str | None) -> str:
    b = (breed or "").lower()
    if "shepherd" in b:
        return "This intelligent breed learns quickly but needs mental stimulation. Teach advanced commands and use puzzle toys."
    if any(k in b for k in ("bulldog", "beagle")):
        return "This breed can be stubborn. Use high-value treats and short, frequent sessions."
    if "cat" in b:
        return "Cats respond to positive reinforcement. Keep sessions to 2-3 minutes and focus on litter and scratching-post habits."
    return "Use positive reinforcement consistently. Start with basic commands and keep sessions short and fun."


def static_guide(profile: dict, source: str = "quiz") -> dict:
    """Deterministic fallback guide personalised by first-time, puppy and concern flags."""
    situation = profile.get("situation")
    is_new_parent = situation in ("new-parent", "getting-week")
    is_first_time = (profile.get("experienceLevel") or "first-time") == "first-time"
    weeks = _age_in_weeks(profile)
    is_puppy = weeks < 52
    concern = _concerns(profile)[0]
    breed = profile.get("breed")

    sections = [
        {
            "title": "Today's Priority",
            "description": "Critical first steps for new pet parents" if is_new_parent else "Most important things to focus on right now",
            "contents": [
                _tip(1, "Set Up Essential Supplies" if is_first_time else "Review Your Setup",
                     "Get the basics ready: food and water bowls, bed, collar with ID tag, leash, and age-appropriate food."
                     if is_first_time else
                     "Double-check that all essentials are in place and ID tags carry current contact information.",
                     "priority", "beginner", False, 1),
                _tip(2, "Establish Feeding Routine",
                     f"Puppies need {'4 meals' if weeks < 16 else '3 meals'} per day at consistent times. Never free-feed."
                     if is_puppy else
                     "Adult pets do well with 2 meals daily at consistent times. Avoid feeding human food.",
                     "priority", "beginner", False, 2),
                _tip(3, "Schedule Urgent Vet Visit" if concern == "health" else "Book Wellness Check",
                     "Book a vet appointment within 48 hours and bring any medical records from the breeder."
                     if concern == "health" else
                     "Schedule a wellness check within the first week to establish a baseline for future care.",
                     "priority", "beginner", True, 3),
                _tip(4, "Create Safe Environment",
                     "Remove toxic plants, secure cabinets, cover electrical cords and set up a quiet retreat space.",
                     "priority", "beginner", True, 4),
            ],
        },
        {
            "title": "This Week's Focus",
            "description": "Key activities and milestones for the next 7 days",
            "contents": [
                _tip(5, "Start Training Basics" if concern == "behavior" else "Begin House Training",
                     "Start with sit, stay and come using treats and praise in 5-10 minute sessions."
                     if concern == "behavior" else
                     "Take your pet outside every 2 hours, after meals and naps. Praise immediately for success.",
                     "weekly", "intermediate", False, 1),
                _tip(6, "Start Early Socialization" if is_puppy else "Maintain Social Skills",
                     "Introduce new people, sounds and sights in a controlled, positive way."
                     if is_puppy else
                     "Keep exposing your pet to varied situations through walks and controlled interactions.",
                     "weekly", "intermediate", False, 2),
                _tip(7, "Establish Daily Routine",
                     "Create a consistent schedule for feeding, walks, play and sleep, and involve the whole family.",
                     "weekly", "beginner", True, 3),
                _tip(8, "Prepare Emergency Kit" if concern == "emergency" else "Plan Exercise Routine",
                     "Assemble a first aid kit and save a 24-hour vet clinic contact. Learn to handle heatstroke."
                     if concern == "emergency" else
                     "Plan age and breed-appropriate exercise, mixing walks with training and puzzle toys.",
                     "weekly", "intermediate", True, 4),
            ],
        },
        {
            "title": "Common Mistakes to Avoid",
            "description": "Learn from others and skip these pitfalls",
            "contents": [
                _tip(9, "Expecting Too Much Too Soon" if is_first_time else "Inconsistent Rules",
                     "Your pet needs 3 days to 3 weeks to adjust. Focus on bonding before intensive training."
                     if is_first_time else
                     "Everyone in the household must enforce the same rules and commands.",
                     "mistakes", "beginner", False, 1),
                _tip(10, "Overfeeding Treats",
                     "Treats should be under 10% of daily calories. Use tiny pieces or part of regular food.",
                     "mistakes", "beginner", False, 2),
                _tip(11, "Skipping Socialization" if is_puppy else "Neglecting Exercise",
                     "The socialization window is 3-14 weeks. Missing it leads to fearful adult behavior."
                     if is_puppy else
                     "Insufficient exercise leads to destructive behavior, obesity and anxiety.",
                     "mistakes", "advanced", True, 3),
                _tip(12, "Using Punishment-Based Training",
                     "Yelling or dominance methods damage trust. Reward good behavior and redirect unwanted behavior.",
                     "mistakes", "intermediate", True, 4),
            ],
        },
        {
            "title": f"{breed} Specific Tips" if source == "direct" and breed else "Breed-Specific Alerts",
            "description": "Important considerations for your pet",
            "contents": [
                _tip(13, "Exercise Requirements", _exercise_tip(breed), "alerts", "intermediate", False, 1),
                _tip(14, "Grooming Essentials", _grooming_tip(breed), "alerts", "beginner", False, 2),
                _tip(15, "Health Watch Points", _health_tip(breed), "alerts", "advanced", True, 3),
                _tip(16, "Training Considerations", _training_tip(breed), "alerts", "intermediate", True, 4),
            ],
        },
    ]
    return {"sections": sections}


def generate_guide(profile: dict, source: str = "quiz", api_key: str | None = None) -> dict:
    """
    Generate a pet parent guide.
    Returns {"sections": [...], "source": "ai" | "static", "model": str | None}.
    """
    profile = profile or {}
    key = groq_client.get_api_key(api_key)
    if key:
        try:
            data = groq_client.call_groq(
                key, SYSTEM_PROMPT, build_prompt(profile, source), max_tokens=3000
            )
            validate_guide(data)
            return {"sections": data["sections"], "source": "ai", "model": groq_client.MODEL}
        except (ValueError, jsonschema.ValidationError) as e:
            log.warning("AI guide unusable, using static content: %s", e)
        except Exception:
            log.exception("AI guide call failed, using static content")
    else:
        log.info("GROQ_API_KEY not set; using static guide content")

    return {**static_guide(profile, source), "source": "static", "model": None}
