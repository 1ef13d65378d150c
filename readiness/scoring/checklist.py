"""Preparation checklist derived from assessment answers (independent of the score)."""

from readiness.answers import AssessmentAnswers


def _item(task: str, priority: str = "high") -> dict:
    return {"task": task, "priority": priority, "completed": False}


def build_checklist(answers) -> list[dict]:
    """
    Evaluate the checklist rules in display order.
    Every item starts with completed=False.
    """
    a = AssessmentAnswers.from_dict(answers)
    checklist = []

    # Home
    if not a.outdoor_access or "none" in a.outdoor_access:
        checklist.append(_item("Set up safe indoor space for pet"))
    if a.hours_empty == "9+":
        checklist.append(_item("Arrange pet care for long absences"))

    # Pet-specific
    if a.considers("dog"):
        if not a.pet_answer("dog", "safeWalking"):
            checklist.append(_item("Find safe walking routes near home"))
        checklist.append(_item("Get dog essentials (leash, collar, bowls, bed)"))
    if a.considers("cat"):
        if not a.pet_answer("cat", "securedSpaces"):
            checklist.append(_item("Secure windows and balconies"))
        checklist.append(_item("Set up litter box area"))
    if a.considers("bird"):
        checklist.append(_item("Set up cage in safe, ventilated area"))
    if a.considers("fish"):
        checklist.append(_item("Set up aquarium with filter and heater"))

    # Budget
    if a.monthly_budget == "up-to-1k":
        checklist.append(_item("Plan for unexpected vet expenses", "medium"))

    # Family
    if a.has_allergies is True:
        checklist.append(_item("Consult doctor about pet allergies"))

    return checklist
