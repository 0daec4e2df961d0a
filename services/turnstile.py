import logging

import requests

logger = logging.getLogger(__name__)

TURNSTILE_VERIFY_URL = "https://challenges.cloudflare.com/turnstile/v0/siteverify"


def verify_turnstile_token(
    token: str | None,
    secret_key: str | None,
    remote_ip: str | None = None,
    timeout: float | None = None,
) -> bool:
    """Check a Turnstile token server-side.

    Passes everything when no secret is configured (local/dev). With a secret
    set, an empty token fails without a network call, and any transport or
    parse error counts as a failed check. Single attempt, no retry.
    """
    if not secret_key:
        logger.warning("Turnstile secret key not configured - skipping verification")
        return True

    if not token:
        logger.info("No Turnstile token provided")
        return False

    form = {"secret": secret_key, "response": token}
    if remote_ip:
        form["remoteip"] = remote_ip

    try:
        resp = requests.post(TURNSTILE_VERIFY_URL, data=form, timeout=timeout)
        result = resp.json()
    except (requests.RequestException, ValueError) as e:
        logger.error("Turnstile verification error: %s", e)
        return False

    if not isinstance(result, dict):
        logger.error("Turnstile returned unexpected payload: %r", result)
        return False

    success = result.get("success") is True
    if not success:
        logger.info("Turnstile verification failed: %s", result.get("error-codes"))
    return success
