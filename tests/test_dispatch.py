from dataclasses import replace
from unittest.mock import patch

import pytest
import requests

from errors import ConfigurationError, UpstreamError
from models import (
    AlphaSubmission,
    ContactRecord,
    DispatchPlan,
    NotificationJob,
    Priority,
    ReferralSubmission,
    WaitlistSubmission,
)
from services.dispatch import build_plan, dispatch, notify
from services.sendgrid import SENDGRID_CONTACTS_URL, SENDGRID_MAIL_URL, send_email, upsert_contacts

REFERRAL = ReferralSubmission(
    referrer_name="Ann",
    referrer_email="ann@example.com",
    friend_name="<Bob>",
    friend_email="bob@example.com",
)


def _job(label, priority=Priority.BEST_EFFORT):
    return NotificationJob(
        label=label,
        recipient=f"{label}@example.com",
        sender_email="noreply@example.com",
        sender_name="NC",
        subject=label,
        html="<p>hi</p>",
        priority=priority,
    )


# ── Planning ─────────────────────────────────────────────────────────────────
def test_referral_plan_without_counterparty(settings):
    plan = build_plan(REFERRAL, settings)

    assert [j.label for j in plan.jobs] == ["friend invite", "admin notification", "referrer confirmation"]
    assert plan.jobs[0].subject == "Ann invited you to try Neural Commander"
    assert plan.jobs[1].subject == "🔗 New Referral: Ann → <Bob>"
    assert "Tip: Add your Counterparty address" in plan.jobs[2].html
    assert "&lt;Bob&gt;" in plan.jobs[2].html and "<Bob>" not in plan.jobs[2].html
    assert plan.contacts[0].custom_fields["counterparty_address"] == ""
    assert plan.contacts[1].custom_fields["signup_type"] == "referral"


def test_waitlist_plan_senders(settings):
    plan = build_plan(WaitlistSubmission(email="a@b.com", name=None), settings)

    assert plan.jobs[0].sender_name == "Neural Commander"
    assert plan.jobs[1].sender_name == "NC Waitlist"
    assert plan.jobs[1].recipient == "admin@example.com"
    assert "Not provided" in plan.jobs[1].html
    assert plan.contacts[0].first_name == ""


def test_alpha_plan_unknown_discovery_passes_through(settings):
    sub = AlphaSubmission(
        name="Ann", email="a@b.com", github="ann", discovery="podcast", motivation="m" * 30,
    )
    plan = build_plan(sub, settings)

    assert plan.jobs[1].subject == "🧪 Alpha Request: ann (Ann)"
    assert "podcast" in plan.jobs[1].html


def test_build_plan_rejects_unknown_submission(settings):
    with pytest.raises(TypeError):
        build_plan(object(), settings)


# ── Execution ────────────────────────────────────────────────────────────────
def test_dispatch_runs_jobs_in_order_then_upserts():
    plan = DispatchPlan(
        jobs=[_job("user", Priority.CRITICAL), _job("admin")],
        contacts=[ContactRecord(email="a@b.com", first_name="Ann")],
    )
    with (
        patch("services.dispatch.send_email", return_value={"ok": True}) as send,
        patch("services.dispatch.upsert_contacts", return_value={"ok": True}) as upsert,
    ):
        results = dispatch(plan, "key")

    assert [c.args[0].label for c in send.call_args_list] == ["user", "admin"]
    upsert.assert_called_once()
    assert results == [{"ok": True}] * 3


def test_critical_failure_stops_dispatch():
    plan = DispatchPlan(jobs=[_job("user", Priority.CRITICAL), _job("admin")], contacts=[])
    with (
        patch("services.dispatch.send_email", return_value={"ok": False, "error": "401"}) as send,
        patch("services.dispatch.upsert_contacts") as upsert,
    ):
        with pytest.raises(UpstreamError):
            dispatch(plan, "key")

    assert send.call_count == 1
    upsert.assert_not_called()


def test_notify_skips_when_unconfigured(settings):
    with patch("services.dispatch.send_email") as send:
        assert notify(WaitlistSubmission(email="a@b.com", name=None), replace(settings, sendgrid_api_key="")) is False
    send.assert_not_called()

    with pytest.raises(ConfigurationError):
        notify(
            WaitlistSubmission(email="a@b.com", name=None),
            replace(settings, sendgrid_api_key="", require_email_service=True),
        )


# ── SendGrid client ──────────────────────────────────────────────────────────
def test_send_email_payload(http_response):
    with patch("services.sendgrid.requests.post", return_value=http_response(202)) as post:
        assert send_email(_job("user"), "SG.key", timeout=5) == {"ok": True}

    assert post.call_args.args == (SENDGRID_MAIL_URL,)
    kwargs = post.call_args.kwargs
    assert kwargs["headers"]["Authorization"] == "Bearer SG.key"
    assert kwargs["timeout"] == 5
    assert kwargs["json"] == {
        "personalizations": [{"to": [{"email": "user@example.com"}]}],
        "from": {"email": "noreply@example.com", "name": "NC"},
        "subject": "user",
        "content": [{"type": "text/html", "value": "<p>hi</p>"}],
    }


def test_send_email_reports_http_and_transport_errors(http_response):
    with patch("services.sendgrid.requests.post", return_value=http_response(400, text="bad from")):
        result = send_email(_job("user"), "SG.key")
    assert result["ok"] is False
    assert "bad from" in result["error"]

    with patch("services.sendgrid.requests.post", side_effect=requests.Timeout("slow")):
        assert send_email(_job("user"), "SG.key")["ok"] is False


def test_upsert_contacts_batches_records(http_response):
    contacts = [
        ContactRecord(email="a@b.com", first_name="Ann", custom_fields={"referral_code": "NC-1"}),
        ContactRecord(email="c@d.com", first_name="Bob"),
    ]
    with patch("services.sendgrid.requests.put", return_value=http_response(202)) as put:
        assert upsert_contacts(contacts, "SG.key") == {"ok": True}

    assert put.call_args.args == (SENDGRID_CONTACTS_URL,)
    sent = put.call_args.kwargs["json"]["contacts"]
    assert [c["email"] for c in sent] == ["a@b.com", "c@d.com"]
    assert sent[0]["custom_fields"] == {"referral_code": "NC-1"}


def test_upsert_contacts_without_records_is_a_no_op():
    with patch("services.sendgrid.requests.put") as put:
        assert upsert_contacts([], "SG.key") == {"ok": True}
    put.assert_not_called()


def test_best_effort_exceptions_are_contained():
    plan = DispatchPlan(
        jobs=[_job("user", Priority.CRITICAL), _job("admin"), _job("referrer")],
        contacts=[ContactRecord(email="a@b.com", first_name="Ann")],
    )
    with (
        patch("services.dispatch.send_email", side_effect=[{"ok": True}, ValueError("bad"), {"ok": True}]) as send,
        patch("services.dispatch.upsert_contacts", side_effect=RuntimeError("down")),
    ):
        results = dispatch(plan, "key")

    assert send.call_count == 3
    assert [r["ok"] for r in results] == [True, False, True, False]
    assert results[1]["error"] == "ValueError: bad"


def test_critical_exception_still_propagates():
    plan = DispatchPlan(jobs=[_job("user", Priority.CRITICAL), _job("admin")], contacts=[])
    with (
        patch("services.dispatch.send_email", side_effect=RuntimeError("down")) as send,
        patch("services.dispatch.upsert_contacts") as upsert,
    ):
        with pytest.raises(RuntimeError):
            dispatch(plan, "key")

    assert send.call_count == 1
    upsert.assert_not_called()


def test_sendgrid_calls_without_key_make_no_request():
    with (
        patch("services.sendgrid.requests.post") as post,
        patch("services.sendgrid.requests.put") as put,
    ):
        assert send_email(_job("user"), "") == {"ok": False, "error": "SENDGRID_API_KEY is not set"}
        result = upsert_contacts([ContactRecord(email="a@b.com", first_name="Ann")], "")
        assert result == {"ok": False, "error": "SENDGRID_API_KEY is not set"}

    post.assert_not_called()
    put.assert_not_called()


def test_sendgrid_uses_no_client_timeout_by_default(http_response):
    with patch("services.sendgrid.requests.post", return_value=http_response(202)) as post:
        send_email(_job("user"), "SG.key")

    assert post.call_args.kwargs["timeout"] is None
