"""JSON-file storage: CMS content, leads, plans and subscriptions."""

import json

from petra import storage


def test_load_content_missing_returns_none(data_dir):
    assert storage.load_content() is None


def test_save_content_creates_directory(data_dir):
    assert not data_dir.exists()
    path = storage.save_content({"hero": {"title": "Find your pet"}})
    assert path == data_dir / "content.json"
    assert storage.load_content() == {"hero": {"title": "Find your pet"}}


def test_save_content_overwrites(data_dir):
    storage.save_content({"v": 1})
    storage.save_content({"v": 2})
    assert storage.load_content() == {"v": 2}


def test_leads_append_and_filter(data_dir):
    storage.save_lead("waitlist", {"email": "a@example.com"})
    record = storage.save_lead("pet_request", {"fullName": "Anu", "phone": "999", "petType": "dog"})
    assert record["kind"] == "pet_request"
    assert record["id"]
    assert len(storage.load_leads()) == 2
    assert [lead["fullName"] for lead in storage.load_leads("pet_request")] == ["Anu"]


def test_active_plans_sorted_by_monthly_price(data_dir):
    plans = storage.active_plans()
    assert [p["id"] for p in plans] == ["basic", "plus"]
    assert all(p["is_active"] for p in plans)


def test_plans_file_overrides_defaults(data_dir):
    data_dir.mkdir()
    (data_dir / "plans.json").write_text(json.dumps([
        {"id": "gold", "name": "Gold", "price_monthly": 99900, "is_active": True},
        {"id": "silver", "name": "Silver", "price_monthly": 49900, "is_active": True},
    ]), encoding="utf-8")
    assert [p["id"] for p in storage.active_plans()] == ["silver", "gold"]


def test_active_subscription_lookup(data_dir):
    assert storage.active_subscription(None) is None
    assert storage.active_subscription("user-1") is None

    sub = storage.save_subscription({"user_id": "user-1", "plan_id": "plus", "status": "paused"})
    assert storage.active_subscription("user-1") is None

    storage.update_subscription(sub["id"], status="active")
    active = storage.active_subscription("user-1")
    assert active["id"] == sub["id"]
    assert active["plan"]["name"] == "Pet Parent Plus"
    assert storage.active_subscription("user-2") is None


def test_update_unknown_subscription_returns_none(data_dir):
    assert storage.update_subscription("missing", status="active") is None


def test_save_subscription_replaces_by_id(data_dir):
    sub = storage.save_subscription({"user_id": "u", "status": "created"})
    storage.save_subscription({**sub, "status": "active"})
    subs = storage.load_subscriptions()
    assert len(subs) == 1
    assert subs[0]["status"] == "active"
