"""Pet parent guide: AI generation, prompt building and the static fallback."""

from petra.guide import build_prompt, generate_guide, static_guide

AI_GUIDE = {
    "sections": [
        {
            "title": "Today's Priority",
            "description": "Urgent prep before pet arrives",
            "contents": [
                {"id": "1", "title": "Buy a crate", "content": "Get a ventilated crate today.", "isPremium": False, "order": 1},
            ],
        }
    ]
}


def _titles(guide):
    return [s["title"] for s in guide["sections"]]


def test_static_guide_shape():
    guide = static_guide({})
    assert _titles(guide) == [
        "Today's Priority",
        "This Week's Focus",
        "Common Mistakes to Avoid",
        "Breed-Specific Alerts",
    ]
    for section in guide["sections"]:
        assert len(section["contents"]) == 4
        assert [c["order"] for c in section["contents"]] == [1, 2, 3, 4]
        assert [c["isPremium"] for c in section["contents"]] == [False, False, True, True]


def test_static_guide_first_time_vs_experienced():
    first = static_guide({"experienceLevel": "first-time"})
    experienced = static_guide({"experienceLevel": "experienced"})
    assert first["sections"][0]["contents"][0]["title"] == "Set Up Essential Supplies"
    assert experienced["sections"][0]["contents"][0]["title"] == "Review Your Setup"
    assert first["sections"][2]["contents"][0]["title"] == "Expecting Too Much Too Soon"
    assert experienced["sections"][2]["contents"][0]["title"] == "Inconsistent Rules"


def test_static_guide_puppy_feeding_and_socialization():
    young = static_guide({"ageInWeeks": 10}, "direct")
    puppy = static_guide({"ageInWeeks": 20}, "direct")
    adult = static_guide({"ageInWeeks": 104}, "direct")
    assert "4 meals" in young["sections"][0]["contents"][1]["content"]
    assert "3 meals" in puppy["sections"][0]["contents"][1]["content"]
    assert "2 meals" in adult["sections"][0]["contents"][1]["content"]
    assert puppy["sections"][1]["contents"][1]["title"] == "Start Early Socialization"
    assert adult["sections"][1]["contents"][1]["title"] == "Maintain Social Skills"


def test_static_guide_concern_variants():
    health = static_guide({"concern": "health"})
    behavior = static_guide({"concern": "behavior"})
    emergency = static_guide({"concern": "emergency"})
    assert health["sections"][0]["contents"][2]["title"] == "Schedule Urgent Vet Visit"
    assert behavior["sections"][1]["contents"][0]["title"] == "Start Training Basics"
    assert emergency["sections"][1]["contents"][3]["title"] == "Prepare Emergency Kit"


def test_static_guide_breed_section_for_direct_source():
    guide = static_guide({"breed": "Siberian Husky", "ageInWeeks": 30}, "direct")
    section = guide["sections"][3]
    assert section["title"] == "Siberian Husky Specific Tips"
    assert "60-90 minutes" in section["contents"][0]["content"]
    assert "shedding" in section["contents"][1]["content"]


def test_quiz_source_keeps_generic_breed_title():
    guide = static_guide({"breed": "Pug"}, "quiz")
    assert guide["sections"][3]["title"] == "Breed-Specific Alerts"
    assert "Flat-faced" in guide["sections"][3]["contents"][0]["content"]


def test_generate_guide_without_key_is_static(no_groq_key):
    guide = generate_guide({"experienceLevel": "first-time"})
    assert guide["source"] == "static"
    assert guide["model"] is None
    assert len(guide["sections"]) == 4


def test_generate_guide_uses_ai(fake_groq):
    calls = fake_groq(AI_GUIDE)
    guide = generate_guide({"situation": "getting-week", "experienceLevel": "first-time", "concern": "health"})
    assert guide["source"] == "ai"
    assert guide["sections"] == AI_GUIDE["sections"]
    assert calls[0]["max_tokens"] == 3000


def test_generate_guide_invalid_ai_output_falls_back(fake_groq):
    fake_groq({"sections": [{"title": "Missing contents"}]})
    guide = generate_guide({"breed": "Beagle", "ageInWeeks": 12}, "direct")
    assert guide["source"] == "static"
    assert guide["sections"][3]["title"] == "Beagle Specific Tips"


def test_quiz_prompt_for_multiple_concerns():
    prompt = build_prompt({"situation": "thinking", "experienceLevel": "family-pet", "concern": "health,behavior"})
    assert "multiple areas" in prompt
    assert "HEALTH & WELLNESS" in prompt
    assert "BEHAVIOR & TRAINING" in prompt
    assert "MULTIPLE concerns" in prompt
    assert "{{" not in prompt


def test_direct_prompt_for_young_and_adult_pets():
    young = build_prompt({"breed": "Labrador Retriever", "ageInWeeks": 12}, "direct")
    adult = build_prompt({"breed": "Labrador Retriever", "ageInWeeks": 156}, "direct")
    assert "YOUNG pet" in young
    assert "12 weeks" in young
    assert "ADULT pet" in adult
    assert "SPECIFIC to Labrador Retriever" in adult
