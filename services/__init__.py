from services.dispatch import build_plan, dispatch, notify
from services.referral import generate_referral_code
from services.sendgrid import send_email, upsert_contacts
from services.turnstile import verify_turnstile_token
from services.validation import validate_alpha, validate_referral, validate_submission, validate_waitlist

__all__ = [
    "build_plan",
    "dispatch",
    "generate_referral_code",
    "notify",
    "send_email",
    "upsert_contacts",
    "validate_alpha",
    "validate_referral",
    "validate_submission",
    "validate_waitlist",
    "verify_turnstile_token",
]
