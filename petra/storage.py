"""JSON-file storage: CMS content, leads, subscription plans, subscriptions and payments."""

import json
import os
import uuid
from pathlib import Path

from readiness.utils import iso_now

DATA_DIR = Path(os.environ.get("PETRA_DATA_DIR") or Path(__file__).resolve().parent.parent / "data")

# Prices are in paise, as the payment gateway reports amounts.
DEFAULT_PLANS = [
    {
        "id": "plus",
        "name": "Pet Parent Plus",
        "description": "Everything in Basic plus monthly vet tele-consults and grooming discounts",
        "price_monthly": 49900,
        "price_yearly": 499000,
        "features": [
            "Unlimited guide PDFs",
            "Monthly vet tele-consult",
            "10% off grooming",
            "Priority pet matching",
        ],
        "is_active": True,
    },
    {
        "id": "basic",
        "name": "Pet Parent Basic",
        "description": "Downloadable guides and care reminders",
        "price_monthly": 19900,
        "price_yearly": 199000,
        "features": ["Unlimited guide PDFs", "Vaccination reminders", "Breed care library"],
        "is_active": True,
    },
    {
        "id": "founders",
        "name": "Founders Circle",
        "description": "Early-access plan, closed to new members",
        "price_monthly": 9900,
        "price_yearly": None,
        "features": ["Unlimited guide PDFs"],
        "is_active": False,
    },
]


def _ensure_data_dir() -> Path:
    DATA_DIR.mkdir(parents=True, exist_ok=True)
    return DATA_DIR


def _read_json(name: str, default):
    path = DATA_DIR / name
    if not path.exists():
        return default
    return json.loads(path.read_text(encoding="utf-8"))


def _write_json(name: str, data) -> Path:
    _ensure_data_dir()
    path = DATA_DIR / name
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")
    return path


# --- CMS content ---

def save_content(content: dict) -> Path:
    """Overwrite content.json with the given content. Creates the data directory on demand."""
    return _write_json("content.json", content)


def load_content() -> dict | None:
    """Return saved CMS content, or None when nothing has been saved yet."""
    return _read_json("content.json", None)


# --- Leads ---

def save_lead(kind: str, data: dict) -> dict:
    """Append a lead record to leads.jsonl. Returns the stored record."""
    _ensure_data_dir()
    record = {"id": uuid.uuid4().hex, "kind": kind, "submitted_at": iso_now(), **data}
    with open(DATA_DIR / "leads.jsonl", "a", encoding="utf-8") as f:
        f.write(json.dumps(record, default=str) + "\n")
    return record


def load_leads(kind: str | None = None) -> list[dict]:
    path = DATA_DIR / "leads.jsonl"
    if not path.exists():
        return []
    leads = [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines() if line.strip()]
    if kind:
        leads = [lead for lead in leads if lead.get("kind") == kind]
    return leads


# --- Plans ---

def load_plans() -> list[dict]:
    """All plans: plans.json in the data directory if present, else the built-in defaults."""
    return _read_json("plans.json", None) or [dict(p) for p in DEFAULT_PLANS]


def active_plans() -> list[dict]:
    """Active plans ordered by monthly price, cheapest first."""
    plans = [p for p in load_plans() if p.get("is_active")]
    return sorted(plans, key=lambda p: p.get("price_monthly") or 0)


def get_plan(plan_id: str) -> dict | None:
    return next((p for p in load_plans() if p.get("id") == plan_id), None)


# --- Subscriptions ---

def load_subscriptions() -> list[dict]:
    return _read_json("subscriptions.json", [])


def save_subscription(subscription: dict) -> dict:
    """Insert or replace a subscription row keyed by id."""
    subs = load_subscriptions()
    row = {"id": subscription.get("id") or uuid.uuid4().hex, "updated_at": iso_now(), **subscription}
    subs = [s for s in subs if s["id"] != row["id"]] + [row]
    _write_json("subscriptions.json", subs)
    return row


def find_subscription(gateway_subscription_id: str) -> dict | None:
    return next(
        (s for s in load_subscriptions() if s.get("gateway_subscription_id") == gateway_subscription_id),
        None,
    )


def update_subscription(subscription_id: str, **fields) -> dict | None:
    """Update fields on one subscription row. Returns the updated row, or None if it does not exist."""
    subs = load_subscriptions()
    for sub in subs:
        if sub["id"] == subscription_id:
            sub.update(fields)
            sub["updated_at"] = iso_now()
            _write_json("subscriptions.json", subs)
            return sub
    return None


def active_subscription(user_id: str | None) -> dict | None:
    """The user's active subscription with its plan attached, or None."""
    if not user_id:
        return None
    for sub in load_subscriptions():
        if sub.get("user_id") == user_id and sub.get("status") == "active":
            return {**sub, "plan": get_plan(sub.get("plan_id", ""))}
    return None


# --- Payments ---

def load_payments() -> list[dict]:
    return _read_json("payments.json", [])


def record_payment(payment: dict) -> dict:
    payments = load_payments()
    row = {"id": uuid.uuid4().hex, "created_at": iso_now(), **payment}
    payments.append(row)
    _write_json("payments.json", payments)
    return row
