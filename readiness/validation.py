"""Schema validation for request payloads and AI output."""

import json
from pathlib import Path

import jsonschema

SCHEMAS_DIR = Path(__file__).resolve().parent.parent / "schemas"


def _load_schema(name: str) -> dict:
    path = SCHEMAS_DIR / f"{name}.schema.json"
    return json.loads(path.read_text(encoding="utf-8"))


def validate_answers_payload(data) -> None:
    """Shape check only (object, list/str multi-selects). Values are never rejected."""
    jsonschema.validate(data, _load_schema("assessment_answers"))


def validate_recommendations(data: dict) -> None:
    """Validate parsed breed recommendations. Raises jsonschema.ValidationError if invalid."""
    jsonschema.validate(data, _load_schema("recommendations"))


def validate_guide(data: dict) -> None:
    """Validate a generated pet parent guide. Raises jsonschema.ValidationError if invalid."""
    jsonschema.validate(data, _load_schema("pet_guide"))


def validate_lead(kind: str, data: dict) -> None:
    """Validate a lead-capture form (pet_request | waitlist | product_notify | pet_finder)."""
    jsonschema.validate(data, _load_schema(kind))
