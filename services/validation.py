"""Submission validation. Pure functions, no I/O.

Rules run in a fixed order and the first failure wins, so the same bad
payload always produces the same message.
"""

import re

from errors import ValidationError
from models import (
    AlphaSubmission,
    ReferralSubmission,
    SignupType,
    Submission,
    SubmissionKind,
    WaitlistSubmission,
)

GITHUB_USERNAME = re.compile(r"[A-Za-z0-9](?:[A-Za-z0-9]|-(?!-)){0,38}")
MIN_MOTIVATION_LENGTH = 20


def _text(payload: dict, key: str) -> str:
    value = payload.get(key)
    if not isinstance(value, str):
        return ""
    return value.strip()


def _looks_like_email(value: str) -> bool:
    # Shape only; deliverability is the provider's problem.
    return "@" in value


def validate_waitlist(payload: dict) -> WaitlistSubmission:
    email = _text(payload, "email")
    if not email or not _looks_like_email(email):
        raise ValidationError("Valid email required")

    return WaitlistSubmission(
        email=email,
        name=_text(payload, "name") or None,
        signup_type=SignupType.parse(_text(payload, "type")),
    )


def validate_referral(payload: dict) -> ReferralSubmission:
    referrer_name = _text(payload, "referrerName")
    referrer_email = _text(payload, "referrerEmail")
    friend_name = _text(payload, "friendName")
    friend_email = _text(payload, "friendEmail")

    if not all([referrer_name, referrer_email, friend_name, friend_email]):
        raise ValidationError("All required fields must be provided")
    if not _looks_like_email(referrer_email) or not _looks_like_email(friend_email):
        raise ValidationError("Valid email addresses required")
    if referrer_email.lower() == friend_email.lower():
        raise ValidationError("You cannot refer yourself")

    return ReferralSubmission(
        referrer_name=referrer_name,
        referrer_email=referrer_email,
        friend_name=friend_name,
        friend_email=friend_email,
        counterparty_address=_text(payload, "counterpartyAddress") or None,
    )


def validate_alpha(payload: dict) -> AlphaSubmission:
    name = _text(payload, "name")
    email = _text(payload, "email")
    github = _text(payload, "github")
    discovery = _text(payload, "discovery")
    motivation = _text(payload, "motivation")

    if not all([name, email, github, discovery, motivation]):
        raise ValidationError("All fields are required")
    if not _looks_like_email(email):
        raise ValidationError("Valid email required")
    if len(motivation) < MIN_MOTIVATION_LENGTH:
        raise ValidationError("Please provide a more detailed motivation")
    if not GITHUB_USERNAME.fullmatch(github):
        raise ValidationError("Invalid GitHub username format")

    return AlphaSubmission(
        name=name,
        email=email,
        github=github,
        discovery=discovery,
        motivation=motivation,
        bot_token=_text(payload, "turnstileToken") or None,
    )


_VALIDATORS = {
    SubmissionKind.WAITLIST: validate_waitlist,
    SubmissionKind.REFERRAL: validate_referral,
    SubmissionKind.ALPHA: validate_alpha,
}


def validate_submission(kind: SubmissionKind, payload: dict) -> Submission:
    """Validate a raw JSON payload for the given endpoint kind."""
    return _VALIDATORS[kind](payload)
