"""Lead capture: pet requests, pet-finder requests, waitlist signups and product-launch notices,
stored and e-mailed to the Petra inbox."""

import logging
import os
import smtplib
from email.message import EmailMessage
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from petra import storage
from readiness.utils import iso_now
from readiness.validation import validate_lead

log = logging.getLogger("petra.leads")

EMAIL_TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates" / "email"
SMTP_HOST = "smtp.gmail.com"
SMTP_PORT = 465
DEFAULT_NOTIFY_EMAIL = "petragroupofficial@gmail.com"
NOT_CONFIGURED_NOTE = "Email service not configured"

# Lead kinds that still succeed when mail credentials are missing
MAIL_OPTIONAL_KINDS = {"waitlist", "product_notify", "pet_finder"}

PRODUCT_DESCRIPTIONS = {
    "Food": "Premium nutrition for every life stage",
    "Accessories": "Quality toys, collars, beds & more",
    "Health": "Supplements, vitamins & care products",
}

_env = Environment(
    loader=FileSystemLoader(str(EMAIL_TEMPLATES_DIR)),
    autoescape=select_autoescape(["html"]),
)


class LeadDeliveryError(Exception):
    """The lead could not be e-mailed; message is safe to show to the user."""


class EmailNotConfigured(LeadDeliveryError):
    """GMAIL_USER or GMAIL_APP_PASSWORD is not set."""


def _subject(kind: str, data: dict) -> str:
    if kind == "pet_request":
        return f"New Pet Request – {data.get('petType')}"
    if kind == "product_notify":
        return f"New Product Interest – {data.get('product')}"
    if kind == "pet_finder":
        return f"New Pet Finder Request from {data.get('name')}"
    return f"New Waitlist Signup – {data.get('plan')} Plan"


def render_lead_email(kind: str, data: dict) -> str:
    """Render the HTML body for a lead notification from templates/email/<kind>.html."""
    template = _env.get_template(f"{kind}.html")
    return template.render(
        lead=data,
        submitted_at=iso_now(),
        product_description=PRODUCT_DESCRIPTIONS.get(data.get("product"), "Premium pet products"),
    )


def send_email(subject: str, html: str, *, reply_to: str | None = None) -> None:
    """Send one HTML e-mail to the Petra inbox through Gmail SMTP."""
    user = os.environ.get("GMAIL_USER", "").strip()
    password = os.environ.get("GMAIL_APP_PASSWORD", "").strip()
    if not user or not password:
        log.error("Email configuration missing (GMAIL_USER set=%s, GMAIL_APP_PASSWORD set=%s)", bool(user), bool(password))
        raise EmailNotConfigured("Email configuration missing")

    msg = EmailMessage()
    msg["Subject"] = subject
    msg["From"] = user
    msg["To"] = os.environ.get("PETRA_NOTIFY_EMAIL", DEFAULT_NOTIFY_EMAIL)
    if reply_to:
        msg["Reply-To"] = reply_to
    msg.set_content("This message requires an HTML-capable mail client.")
    msg.add_alternative(html, subtype="html")

    try:
        with smtplib.SMTP_SSL(SMTP_HOST, SMTP_PORT, timeout=20) as smtp:
            smtp.login(user, password)
            smtp.send_message(msg)
    except smtplib.SMTPAuthenticationError as e:
        log.error("SMTP authentication failed: %s", e)
        raise LeadDeliveryError("Email authentication failed. Please check credentials.") from e
    except (smtplib.SMTPConnectError, smtplib.SMTPServerDisconnected, ConnectionError, TimeoutError) as e:
        log.error("SMTP connection failed: %s", e)
        raise LeadDeliveryError("Connection to email server failed.") from e
    except smtplib.SMTPException as e:
        log.error("SMTP send failed: %s", e)
        raise LeadDeliveryError(f"Failed to send email: {e}") from e


def submit_lead(kind: str, data: dict) -> dict:
    """
    Validate, store and e-mail a lead (kind: pet_request | waitlist | product_notify | pet_finder).
    Raises jsonschema.ValidationError for bad input, LeadDeliveryError if the mail fails.
    The record is stored before the e-mail is sent. For MAIL_OPTIONAL_KINDS a missing mail
    configuration is not an error: the returned record carries a "note" instead.
    """
    validate_lead(kind, data)
    record = storage.save_lead(kind, data)
    log.info("Lead stored: kind=%s id=%s", kind, record["id"])
    try:
        send_email(_subject(kind, data), render_lead_email(kind, data), reply_to=data.get("email") or None)
    except EmailNotConfigured:
        if kind not in MAIL_OPTIONAL_KINDS:
            raise
        log.warning("Lead received without e-mail: kind=%s id=%s", kind, record["id"])
        return {**record, "note": NOT_CONFIGURED_NOTE}
    log.info("Lead e-mailed: kind=%s id=%s", kind, record["id"])
    return record
