"""SendGrid v3 client: transactional mail and marketing contacts.

Both calls return ``{"ok": True}`` or ``{"ok": False, "error": "reason"}``
and never raise, so callers decide whether a failure matters.
"""

import logging

import requests

from models import ContactRecord, NotificationJob

logger = logging.getLogger(__name__)

SENDGRID_MAIL_URL = "https://api.sendgrid.com/v3/mail/send"
SENDGRID_CONTACTS_URL = "https://api.sendgrid.com/v3/marketing/contacts"


def _headers(api_key: str) -> dict:
    return {
        "Authorization": f"Bearer {api_key}",
        "Content-Type": "application/json",
    }


def build_mail_payload(job: NotificationJob) -> dict:
    return {
        "personalizations": [{"to": [{"email": job.recipient}]}],
        "from": {"email": job.sender_email, "name": job.sender_name},
        "subject": job.subject,
        "content": [{"type": "text/html", "value": job.html}],
    }


def send_email(job: NotificationJob, api_key: str, timeout: float | None = None) -> dict:
    if not api_key:
        return {"ok": False, "error": "SENDGRID_API_KEY is not set"}

    try:
        resp = requests.post(
            SENDGRID_MAIL_URL,
            json=build_mail_payload(job),
            headers=_headers(api_key),
            timeout=timeout,
        )
    except requests.RequestException as e:
        return {"ok": False, "error": f"SendGrid request failed: {e}"}

    if not resp.ok:
        return {"ok": False, "error": f"SendGrid HTTP {resp.status_code}: {resp.text}"}

    logger.info("Email '%s' sent to %s", job.label, job.recipient)
    return {"ok": True}


def upsert_contacts(contacts: list[ContactRecord], api_key: str, timeout: float | None = None) -> dict:
    """Add or update marketing contacts in one batched call."""
    if not contacts:
        return {"ok": True}
    if not api_key:
        return {"ok": False, "error": "SENDGRID_API_KEY is not set"}

    try:
        resp = requests.put(
            SENDGRID_CONTACTS_URL,
            json={"contacts": [c.to_payload() for c in contacts]},
            headers=_headers(api_key),
            timeout=timeout,
        )
    except requests.RequestException as e:
        return {"ok": False, "error": f"SendGrid contacts request failed: {e}"}

    if not resp.ok:
        return {"ok": False, "error": f"SendGrid contacts HTTP {resp.status_code}: {resp.text}"}

    logger.info("Upserted %d contact(s)", len(contacts))
    return {"ok": True}
