#!/usr/bin/env python3
"""Flask web app for the Petra pet readiness assessment and pet parent services."""

import json
import os
from io import BytesIO

import jsonschema
from dotenv import load_dotenv
from flask import Flask, jsonify, render_template, request, send_file

from petra import groq_client, storage
from petra.audit import audit_log, log_assessment, setup_app_logging
from petra.guide import generate_guide
from petra.leads import LeadDeliveryError, submit_lead
from petra.payments import (
    PaymentVerificationError,
    WebhookSignatureError,
    apply_webhook_event,
    verify_payment_signature,
    verify_webhook_signature,
)
from petra.pdf_generator import render_assessment_pdf, render_guide_pdf
from petra.recommend import profile_from_answers, recommend
from readiness import AssessmentAnswers, expand_questions, score_answers
from readiness.utils import hash_answers
from readiness.validation import validate_answers_payload, validate_guide

load_dotenv()

log = setup_app_logging()

app = Flask(__name__)
app.config["MAX_CONTENT_LENGTH"] = 2 * 1024 * 1024  # 2MB


def _user_id() -> str | None:
    """Caller identity, set by the login proxy in front of the app."""
    return (request.headers.get("X-User-Id") or "").strip() or None


def _json_object() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _answers_from_body(data: dict) -> dict:
    # Accept {"answers": {...}} or the bare answers object
    answers = data.get("answers", data) if isinstance(data, dict) else data
    validate_answers_payload(answers)
    return answers


@app.route("/")
def index():
    return render_template("index.html", groq_enabled=bool(groq_client.get_api_key()))


@app.route("/api/questions", methods=["GET"])
def api_questions():
    """Questionnaire with sub-questions for the selected pet types (?petTypes=dog,cat)."""
    pet_types = [p.strip() for p in request.args.get("petTypes", "").split(",") if p.strip()]
    return jsonify({"questions": expand_questions(pet_types)})


@app.route("/api/assessment", methods=["POST"])
def api_assessment():
    """Score questionnaire answers. Optionally attach breed recommendations."""
    data = request.get_json(silent=True) or {}
    try:
        answers = _answers_from_body(data)
    except jsonschema.ValidationError as e:
        audit_log(action="assessment", status="error", error=e.message)
        return jsonify({"error": f"Invalid answers: {e.message}"}), 400

    try:
        result = score_answers(answers)
        answers_hash = hash_answers(answers)
        body = {**result, "answers_hash": answers_hash}

        recommendation_source = None
        if data.get("includeRecommendations"):
            rec = recommend(profile_from_answers(answers), readiness=result)
            body["recommendations"] = rec["recommendations"]
            body["recommendation_source"] = recommendation_source = rec["source"]

        pet_types = list(AssessmentAnswers.from_dict(answers).considering_pet_types)
        log_assessment(
            answers_hash=answers_hash,
            result=result,
            pet_types=pet_types,
            recommendation_source=recommendation_source,
        )
        audit_log(
            action="assessment",
            status="success",
            score=result["score"],
            source=recommendation_source,
            extra={"answers_hash": answers_hash, "tier": result["tier"], "pet_types": sorted(pet_types)},
        )
        log.info("Assessment scored: score=%d tier=%s", result["score"], result["tier"])
        return jsonify(body)
    except Exception as e:
        audit_log(action="assessment", status="error", error=str(e))
        log.exception("Assessment failed")
        return jsonify({"error": str(e)}), 500


@app.route("/api/assessment/pdf", methods=["POST"])
def api_assessment_pdf():
    """Readiness report PDF for the given answers."""
    data = request.get_json(silent=True) or {}
    try:
        answers = _answers_from_body(data)
    except jsonschema.ValidationError as e:
        return jsonify({"error": f"Invalid answers: {e.message}"}), 400

    try:
        result = score_answers(answers)
        pdf_bytes = render_assessment_pdf(result, answers)
        audit_log(
            action="assessment_pdf",
            status="success",
            score=result["score"],
            extra={"answers_hash": hash_answers(answers), "pdf_bytes": len(pdf_bytes)},
        )
        return send_file(
            BytesIO(pdf_bytes),
            mimetype="application/pdf",
            as_attachment=True,
            download_name="Petra_Readiness_Report.pdf",
        )
    except Exception as e:
        audit_log(action="assessment_pdf", status="error", error=str(e))
        log.exception("Assessment PDF failed")
        return jsonify({"error": str(e)}), 500


@app.route("/api/recommend-breeds", methods=["POST"])
def api_recommend_breeds():
    """Breed recommendations from a quiz profile, or from raw answers ({"answers": {...}})."""
    data = _json_object()
    readiness = None
    if isinstance(data.get("answers"), dict):
        profile = profile_from_answers(data["answers"])
        readiness = score_answers(data["answers"])
    else:
        profile = data

    try:
        result = recommend(profile, api_key=data.get("api_key"), readiness=readiness)
        audit_log(
            action="recommend_breeds",
            status="success",
            model=result["model"],
            source=result["source"],
            extra={"count": len(result["recommendations"]), "experience": profile.get("experienceLevel")},
        )
        log.info("Recommendations: source=%s count=%d", result["source"], len(result["recommendations"]))
        return jsonify(result)
    except Exception as e:
        audit_log(action="recommend_breeds", status="error", error=str(e))
        log.exception("Recommendations failed")
        return jsonify({"error": "Failed to generate recommendations"}), 500


@app.route("/api/generate-pet-guide", methods=["POST"])
def api_generate_pet_guide():
    """Pet parent guide for {"profile": {...}, "source": "quiz" | "direct"}."""
    data = _json_object()
    profile = data.get("profile")
    source = data.get("source") or "quiz"
    if not isinstance(profile, dict):
        return jsonify({"error": "profile is required"}), 400
    if source not in ("quiz", "direct"):
        return jsonify({"error": "source must be 'quiz' or 'direct'"}), 400

    try:
        guide = generate_guide(profile, source, api_key=data.get("api_key"))
        audit_log(
            action="generate_pet_guide",
            status="success",
            model=guide["model"],
            source=guide["source"],
            extra={"profile_source": source, "breed": profile.get("breed"), "sections": len(guide["sections"])},
        )
        return jsonify(guide)
    except Exception as e:
        audit_log(action="generate_pet_guide", status="error", error=str(e))
        log.exception("Pet guide generation failed")
        return jsonify({"error": "Failed to generate pet guide"}), 500


@app.route("/api/generate-pdf", methods=["POST"])
def api_generate_pdf():
    """Guide PDF behind the paywall: active subscription or a verified one-off payment."""
    data = _json_object()
    guide = data.get("guide_data")
    user_email = str(data.get("user_email") or "").strip()
    if not guide or not user_email:
        return jsonify({"error": "Missing required fields: guide_data and user_email are required"}), 400
    try:
        validate_guide(guide)
    except jsonschema.ValidationError as e:
        audit_log(action="generate_pdf", status="error", error=e.message)
        return jsonify({"error": f"Invalid guide_data: {e.message}"}), 400

    user_id = _user_id()
    has_subscription = storage.active_subscription(user_id) is not None
    payment_id = data.get("razorpay_payment_id")

    if not has_subscription and not payment_id:
        audit_log(action="generate_pdf", status="payment_required", extra={"user_id": user_id})
        return jsonify({"error": "Payment required", "code": "PAYMENT_REQUIRED"}), 402

    if not has_subscription:
        try:
            valid = verify_payment_signature(
                data.get("razorpay_order_id", ""), payment_id, data.get("razorpay_signature", "")
            )
        except PaymentVerificationError as e:
            log.warning("Payment verification failed: %s", e)
            valid = False
        if not valid:
            audit_log(action="generate_pdf", status="invalid_payment", extra={"payment_id": payment_id})
            return jsonify({"error": "Payment verification failed", "code": "INVALID_PAYMENT"}), 402

    pet_name = data.get("pet_name")
    try:
        pdf_bytes = render_guide_pdf(guide, pet_name=pet_name, owner_name=data.get("owner_name"))
        audit_log(
            action="generate_pdf",
            status="success",
            extra={
                "user_id": user_id,
                "payment_id": payment_id,
                "subscription": has_subscription,
                "pdf_bytes": len(pdf_bytes),
            },
        )
        filename = f"{(pet_name or 'Pet').replace(' ', '_')}_Parent_Guide.pdf"
        return send_file(BytesIO(pdf_bytes), mimetype="application/pdf", as_attachment=True, download_name=filename)
    except Exception as e:
        audit_log(action="generate_pdf", status="error", error=str(e))
        log.exception("Guide PDF generation failed")
        return jsonify({"error": "Failed to generate PDF", "code": "GENERATION_FAILED"}), 500


@app.route("/api/verify-payment", methods=["POST"])
def api_verify_payment():
    """Verify a checkout payment signature."""
    data = _json_object()
    try:
        valid = verify_payment_signature(
            data.get("razorpay_order_id", ""),
            data.get("razorpay_payment_id", ""),
            data.get("razorpay_signature", ""),
        )
    except PaymentVerificationError as e:
        audit_log(action="verify_payment", status="error", error=str(e))
        return jsonify({"success": False, "error": str(e)}), 400

    audit_log(
        action="verify_payment",
        status="success" if valid else "invalid",
        extra={"payment_id": data.get("razorpay_payment_id")},
    )
    if not valid:
        return jsonify({"success": False}), 400
    return jsonify({"success": True})


@app.route("/api/subscriptions/plans", methods=["GET"])
def api_subscription_plans():
    try:
        return jsonify({"plans": storage.active_plans()})
    except Exception:
        log.exception("Failed to load plans")
        return jsonify({"error": "Failed to fetch plans"}), 500


@app.route("/api/subscriptions/mine", methods=["GET"])
def api_my_subscription():
    user_id = _user_id()
    if not user_id:
        return jsonify({"error": "Unauthorized"}), 401
    try:
        return jsonify({"subscription": storage.active_subscription(user_id)})
    except Exception:
        log.exception("Failed to load subscription")
        return jsonify({"error": "Failed to fetch subscription"}), 500


@app.route("/api/subscriptions/webhook", methods=["POST"])
def api_subscription_webhook():
    """Payment gateway webhook. The signature covers the raw request body."""
    raw_body = request.get_data()
    try:
        verify_webhook_signature(raw_body, request.headers.get("X-Razorpay-Signature", ""))
    except WebhookSignatureError as e:
        audit_log(action="webhook", status="rejected", error=str(e))
        log.warning("Webhook rejected: %s", e)
        return jsonify({"error": str(e)}), 400

    try:
        event = json.loads(raw_body)
        outcome = apply_webhook_event(event)
        audit_log(action="webhook", status=outcome, extra={"event": event.get("event")})
        return jsonify({"received": True})
    except Exception as e:
        audit_log(action="webhook", status="error", error=str(e))
        log.exception("Webhook processing failed")
        return jsonify({"error": "Webhook processing failed"}), 500


def _lead_response(kind: str):
    data = _json_object()
    try:
        record = submit_lead(kind, data)
    except jsonschema.ValidationError as e:
        audit_log(action=kind, status="error", error=e.message)
        return jsonify({"error": "Missing required fields", "details": e.message}), 400
    except LeadDeliveryError as e:
        audit_log(action=kind, status="error", error=str(e))
        return jsonify({"error": str(e)}), 500
    except Exception as e:
        audit_log(action=kind, status="error", error=str(e))
        log.exception("Lead submission failed: kind=%s", kind)
        return jsonify({"error": str(e)}), 500

    note = record.get("note")
    audit_log(action=kind, status="success", extra={"lead_id": record["id"], "note": note})
    if note:
        return jsonify({"success": True, "message": "Request received successfully", "note": note, "id": record["id"]})
    return jsonify({"success": True, "message": "Email sent successfully", "id": record["id"]})


@app.route("/api/pet-request", methods=["POST"])
def api_pet_request():
    return _lead_response("pet_request")


@app.route("/api/waitlist", methods=["POST"])
def api_waitlist():
    return _lead_response("waitlist")


@app.route("/api/product-notify", methods=["POST"])
def api_product_notify():
    return _lead_response("product_notify")


@app.route("/api/pet-finder", methods=["POST"])
def api_pet_finder():
    return _lead_response("pet_finder")


@app.route("/api/admin/content", methods=["GET"])
def api_get_content():
    try:
        content = storage.load_content()
    except Exception:
        log.exception("Failed to load content")
        return jsonify({"success": False, "error": "Failed to load content"}), 500
    if content is None:
        return jsonify({"success": True, "content": None, "message": "No saved content found"})
    return jsonify({"success": True, "content": content})


@app.route("/api/admin/content", methods=["POST"])
def api_save_content():
    content = request.get_json(silent=True)
    if not isinstance(content, dict):
        return jsonify({"success": False, "error": "Content must be a JSON object"}), 400
    try:
        path = storage.save_content(content)
        audit_log(action="save_content", status="success", extra={"path": str(path)})
        return jsonify({"success": True, "message": "Content saved successfully"})
    except Exception as e:
        audit_log(action="save_content", status="error", error=str(e))
        log.exception("Failed to save content")
        return jsonify({"success": False, "error": "Failed to save content"}), 500


if __name__ == "__main__":
    api_key_set = bool(groq_client.get_api_key())
    log.info(
        "Petra starting on http://127.0.0.1:5000 | GROQ_API_KEY set: %s | Logs: logs/app.log | Audit: logs/audit.log",
        api_key_set,
    )
    if not api_key_set:
        log.warning("GROQ_API_KEY not found in .env - recommendations and guides will use fallback content")
    if not os.environ.get("RAZORPAY_KEY_SECRET"):
        log.warning("RAZORPAY_KEY_SECRET not set - paid PDF downloads will be rejected")
    app.run(debug=True, port=5000)
