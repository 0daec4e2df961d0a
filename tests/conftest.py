from unittest.mock import MagicMock, patch

import pytest
from starlette.testclient import TestClient

from config import Settings, get_settings
from main import app


@pytest.fixture()
def settings():
    return Settings(
        sendgrid_api_key="SG.test-key",
        turnstile_secret_key="",
        admin_email="admin@example.com",
        from_email="noreply@example.com",
        alpha_from_email="hello@example.com",
    )


@pytest.fixture()
def client(settings):
    app.dependency_overrides[get_settings] = lambda: settings
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture()
def sendgrid():
    """Outbound SendGrid calls as mocks; every call succeeds unless changed."""
    with (
        patch("services.dispatch.send_email", return_value={"ok": True}) as send,
        patch("services.dispatch.upsert_contacts", return_value={"ok": True}) as upsert,
    ):
        yield MagicMock(send=send, upsert=upsert)


@pytest.fixture()
def http_response():
    """Factory for fake ``requests`` responses."""

    def make(status_code=200, json_body=None, text=""):
        resp = MagicMock()
        resp.status_code = status_code
        resp.ok = 200 <= status_code < 300
        resp.text = text
        resp.json.return_value = json_body if json_body is not None else {}
        return resp

    return make
