"""Signup form endpoints: waitlist, referral invites and alpha-access requests.

Every handler runs validate -> verify bot token -> dispatch -> respond, and
holds no state between requests.
"""

import logging

from fastapi import APIRouter, Depends, Request

from config import Settings, get_settings
from errors import SignupError, VerificationError
from models import SubmissionKind
from responses import error_response, signup_error_response, success_response
from services import notify, validate_submission, verify_turnstile_token
from services.templates import discovery_label

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


def client_ip(request: Request) -> str | None:
    """Caller address as seen by the edge proxy.

    ``x-real-ip`` is set by the platform and cannot be forged by the client.
    Failing that, the rightmost ``X-Forwarded-For`` hop is the one our proxy
    appended; entries to its left come from the client.
    """
    real_ip = request.headers.get("x-real-ip", "").strip()
    if real_ip:
        return real_ip
    hops = [h.strip() for h in request.headers.get("x-forwarded-for", "").split(",") if h.strip()]
    if hops:
        return hops[-1]
    return request.client.host if request.client else None


def _process(kind: SubmissionKind, payload: dict, settings: Settings, request: Request,
             success: str, failure: str):
    try:
        submission = validate_submission(kind, payload)

        if kind is SubmissionKind.ALPHA:
            verified = verify_turnstile_token(
                submission.bot_token,
                settings.turnstile_secret_key,
                remote_ip=client_ip(request),
                timeout=settings.http_timeout,
            )
            if not verified:
                raise VerificationError("Bot verification failed. Please try again.")
            logger.info(
                "New alpha signup: name=%s email=%s github=%s discovery=%s motivation=%s...",
                submission.name,
                submission.email,
                submission.github,
                discovery_label(submission.discovery),
                submission.motivation[:100],
            )
        else:
            logger.info("New %s submission", kind.value)

        notify(submission, settings)
    except SignupError as e:
        if e.status_code >= 500:
            logger.error("%s submission failed: %s", kind.value, e.message)
        return signup_error_response(e, failure)
    except Exception:
        logger.exception("Unhandled error processing %s submission", kind.value)
        return error_response(failure, 500)

    return success_response(success)


@router.post("/waitlist")
def join_waitlist(request: Request, payload: dict, settings: Settings = Depends(get_settings)):
    return _process(
        SubmissionKind.WAITLIST, payload, settings, request,
        success="Successfully joined the waitlist!",
        failure="Failed to process signup",
    )


@router.post("/referral")
def send_referral(request: Request, payload: dict, settings: Settings = Depends(get_settings)):
    return _process(
        SubmissionKind.REFERRAL, payload, settings, request,
        success="Referral sent successfully!",
        failure="Failed to process referral",
    )


@router.post("/alpha-signup")
def alpha_signup(request: Request, payload: dict, settings: Settings = Depends(get_settings)):
    return _process(
        SubmissionKind.ALPHA, payload, settings, request,
        success="Alpha access request submitted!",
        failure="Failed to process signup",
    )
