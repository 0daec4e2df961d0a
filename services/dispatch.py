"""Outbound notifications for a validated submission.

``build_plan`` turns a submission into an ordered list of email jobs plus the
contact records to upsert; ``dispatch`` runs them one after another. Only a
critical job can fail the request. Everything else is logged and dropped.
"""

import logging
from datetime import datetime, timezone

from config import Settings
from errors import ConfigurationError, UpstreamError
from models import (
    AlphaSubmission,
    ContactRecord,
    DispatchPlan,
    NotificationJob,
    Priority,
    ReferralSubmission,
    Submission,
    WaitlistSubmission,
)
from services import templates
from services.referral import generate_referral_code
from services.sendgrid import send_email, upsert_contacts

logger = logging.getLogger(__name__)

SENDER_NAME = "Neural Commander"
WAITLIST_ADMIN_SENDER = "NC Waitlist"
REFERRAL_ADMIN_SENDER = "NC Referrals"
ALPHA_ADMIN_SENDER = "NC Alpha Signups"


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def _waitlist_plan(sub: WaitlistSubmission, settings: Settings) -> DispatchPlan:
    return DispatchPlan(
        jobs=[
            NotificationJob(
                label="user confirmation",
                recipient=sub.email,
                sender_email=settings.from_email,
                sender_name=SENDER_NAME,
                subject=templates.waitlist_subject(sub),
                html=templates.waitlist_body(sub),
                priority=Priority.CRITICAL,
            ),
            NotificationJob(
                label="admin notification",
                recipient=settings.admin_email,
                sender_email=settings.from_email,
                sender_name=WAITLIST_ADMIN_SENDER,
                subject=templates.waitlist_admin_subject(sub),
                html=templates.waitlist_admin_body(sub),
            ),
        ],
        contacts=[
            ContactRecord(
                email=sub.email,
                first_name=sub.name or "",
                custom_fields={
                    "signup_type": sub.signup_type.value,
                    "signup_date": _timestamp(),
                },
            ),
        ],
    )


def _referral_plan(sub: ReferralSubmission, settings: Settings) -> DispatchPlan:
    code = generate_referral_code(sub.referrer_email)
    return DispatchPlan(
        jobs=[
            NotificationJob(
                label="friend invite",
                recipient=sub.friend_email,
                sender_email=settings.from_email,
                sender_name=SENDER_NAME,
                subject=templates.referral_invite_subject(sub),
                html=templates.referral_invite_body(sub, code),
                priority=Priority.CRITICAL,
            ),
            NotificationJob(
                label="admin notification",
                recipient=settings.admin_email,
                sender_email=settings.from_email,
                sender_name=REFERRAL_ADMIN_SENDER,
                subject=templates.referral_admin_subject(sub),
                html=templates.referral_admin_body(sub, code),
            ),
            NotificationJob(
                label="referrer confirmation",
                recipient=sub.referrer_email,
                sender_email=settings.from_email,
                sender_name=SENDER_NAME,
                subject=templates.referral_confirmation_subject(sub),
                html=templates.referral_confirmation_body(sub),
            ),
        ],
        contacts=[
            ContactRecord(
                email=sub.referrer_email,
                first_name=sub.referrer_name,
                custom_fields={
                    "referral_code": code,
                    "counterparty_address": sub.counterparty_address or "",
                    "referrals_sent": "1",
                },
            ),
            ContactRecord(
                email=sub.friend_email,
                first_name=sub.friend_name,
                custom_fields={
                    "referred_by": sub.referrer_email,
                    "referral_code_used": code,
                    "signup_type": "referral",
                },
            ),
        ],
    )


def _alpha_plan(sub: AlphaSubmission, settings: Settings) -> DispatchPlan:
    return DispatchPlan(
        jobs=[
            NotificationJob(
                label="user confirmation",
                recipient=sub.email,
                sender_email=settings.alpha_from_email,
                sender_name=SENDER_NAME,
                subject=templates.alpha_subject(sub),
                html=templates.alpha_body(sub),
                priority=Priority.CRITICAL,
            ),
            NotificationJob(
                label="admin notification",
                recipient=settings.admin_email,
                sender_email=settings.alpha_from_email,
                sender_name=ALPHA_ADMIN_SENDER,
                subject=templates.alpha_admin_subject(sub),
                html=templates.alpha_admin_body(sub),
            ),
        ],
        contacts=[
            ContactRecord(
                email=sub.email,
                first_name=sub.name,
                custom_fields={
                    "signup_type": "alpha",
                    "github_username": sub.github,
                    "discovery_source": sub.discovery,
                    "signup_date": _timestamp(),
                },
            ),
        ],
    )


def build_plan(submission: Submission, settings: Settings) -> DispatchPlan:
    if isinstance(submission, WaitlistSubmission):
        return _waitlist_plan(submission, settings)
    if isinstance(submission, ReferralSubmission):
        return _referral_plan(submission, settings)
    if isinstance(submission, AlphaSubmission):
        return _alpha_plan(submission, settings)
    raise TypeError(f"Unsupported submission: {type(submission).__name__}")


def _send_best_effort(job: NotificationJob, api_key: str, timeout: float | None) -> dict:
    try:
        result = send_email(job, api_key, timeout=timeout)
    except Exception as e:
        logger.exception("SendGrid error (%s, ignored)", job.label)
        return {"ok": False, "error": f"{type(e).__name__}: {e}"}
    if not result["ok"]:
        logger.error("SendGrid error (%s, ignored): %s", job.label, result["error"])
    return result


def _upsert_best_effort(contacts: list[ContactRecord], api_key: str, timeout: float | None) -> dict:
    try:
        result = upsert_contacts(contacts, api_key, timeout=timeout)
    except Exception as e:
        logger.exception("Failed to add to contact list")
        return {"ok": False, "error": f"{type(e).__name__}: {e}"}
    if not result["ok"]:
        logger.error("Failed to add to contact list: %s", result["error"])
    return result


def dispatch(plan: DispatchPlan, api_key: str, timeout: float | None = None) -> list[dict]:
    """Run every job in order, then upsert contacts.

    Raises UpstreamError as soon as a critical job fails; nothing after it is
    attempted. Best-effort jobs and the upsert never raise, whatever goes
    wrong inside them. Returns the per-job results for logging and tests.
    """
    results = []
    for job in plan.jobs:
        if not job.critical:
            results.append(_send_best_effort(job, api_key, timeout))
            continue

        result = send_email(job, api_key, timeout=timeout)
        results.append(result)
        if not result["ok"]:
            logger.error("SendGrid error (%s): %s", job.label, result["error"])
            raise UpstreamError(f"Failed to send {job.label}")

    results.append(_upsert_best_effort(plan.contacts, api_key, timeout))
    return results


def notify(submission: Submission, settings: Settings) -> bool:
    """Send every notification for ``submission``. Returns False when skipped.

    With no SendGrid key the request either fails (``require_email_service``)
    or goes through with nothing sent and an error in the log.
    """
    if not settings.email_configured:
        if settings.require_email_service:
            logger.error("SendGrid API key not configured")
            raise ConfigurationError("Email service not configured")
        logger.error("SendGrid API key not configured - %s submission accepted, no emails sent", submission.kind.value)
        return False

    dispatch(build_plan(submission, settings), settings.sendgrid_api_key, timeout=settings.http_timeout)
    return True
