"""Email backends and templates."""
import json
import logging
from datetime import date
from types import SimpleNamespace

import httpx
import pytest

from ojt_tracker.config import settings
from ojt_tracker.services import email_templates
from ojt_tracker.services.notifications import (
    LoggingNotifier,
    MailerSendNotifier,
    NotifierFactory,
    html_to_text,
)


def mailersend(handler, api_key="ms-test-key"):
    return MailerSendNotifier(
        api_key=api_key,
        api_url="https://api.mailersend.test/v1/email",
        transport=httpx.MockTransport(handler),
    )


async def test_mailersend_posts_message():
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["request"] = request
        return httpx.Response(202)

    ok = await mailersend(handler).send("dana@example.com", "Hello", "<p>Hi <b>Dana</b></p>")

    assert ok is True
    request = captured["request"]
    assert request.headers["Authorization"] == "Bearer ms-test-key"
    body = json.loads(request.content)
    assert body["to"] == [{"email": "dana@example.com"}]
    assert body["from"]["email"] == settings.EMAIL_FROM
    assert body["subject"] == "Hello"
    assert body["html"] == "<p>Hi <b>Dana</b></p>"
    assert body["text"] == "Hi Dana"


async def test_mailersend_rejection_returns_false():
    ok = await mailersend(lambda request: httpx.Response(422, json={"message": "bad"})).send(
        "dana@example.com", "Hello", "<p>Hi</p>"
    )
    assert ok is False


async def test_mailersend_network_error_returns_false():
    def handler(request):
        raise httpx.ConnectError("unreachable", request=request)

    assert await mailersend(handler).send("dana@example.com", "Hello", "<p>Hi</p>") is False


async def test_mailersend_without_key_returns_false():
    def handler(request):
        pytest.fail("no request expected without an API key")

    assert await mailersend(handler, api_key="").send("dana@example.com", "Hello", "<p>Hi</p>") is False


async def test_logging_notifier_logs_without_retaining(caplog):
    notifier = LoggingNotifier()

    with caplog.at_level(logging.INFO):
        for _ in range(3):
            assert await notifier.send("dana@example.com", "Hello", "<p>Hi</p>") is True

    logged = [r.msg for r in caplog.records if isinstance(r.msg, dict) and r.msg.get("event") == "email_logged"]
    assert len(logged) == 3
    assert logged[0]["recipient"] == "dana@example.com"
    assert logged[0]["body"] == "Hi"
    assert not hasattr(notifier, "sent")


def test_factory_resolution(monkeypatch):
    monkeypatch.setattr(settings, "EMAIL_PROVIDER", "auto")
    monkeypatch.setattr(settings, "MAILERSEND_API_KEY", "")
    assert NotifierFactory.resolve_backend_name() == "log"

    monkeypatch.setattr(settings, "MAILERSEND_API_KEY", "ms-key")
    assert NotifierFactory.resolve_backend_name() == "mailersend"

    monkeypatch.setattr(settings, "EMAIL_PROVIDER", "carrier-pigeon")
    with pytest.raises(ValueError):
        NotifierFactory.resolve_backend_name()

    monkeypatch.setattr(settings, "EMAIL_PROVIDER", "log")
    NotifierFactory.reset()
    try:
        assert isinstance(NotifierFactory.get_notifier(), LoggingNotifier)
        assert NotifierFactory.get_notifier() is NotifierFactory.get_notifier()
    finally:
        NotifierFactory.reset()


def test_html_to_text():
    assert html_to_text("<h2>Title</h2>\n<p>Line <b>one</b></p>\n\n<p>Two</p>") == "Title\nLine one\nTwo"


def test_verification_request_email_escapes_fields():
    entry = SimpleNamespace(date=date(2024, 3, 1), location="<Tank & Farm>", method="UT_THK", hours=2.5)

    subject, body = email_templates.verification_request_email(
        "Sam Ortiz", None, entry, "https://ojt.example.test/verify/abc"
    )

    assert subject == "Verification Request for OJT Hours from Sam Ortiz"
    assert "03/01/2024" in body
    assert "&lt;Tank &amp; Farm&gt;" in body
    assert "UT Thk." in body
    assert "Employee #" not in body
    assert "https://ojt.example.test/verify/abc" in body
