"""Tests for the webhook email sender."""

import json

import httpx
import pytest

from onerfp.services.email import EmailDeliveryError, EmailSender


def _sender(handler) -> EmailSender:
    return EmailSender(
        webhook_url="https://mail.example/send",
        token="hook-token",
        transport=httpx.MockTransport(handler),
    )


def test_send_posts_payload_with_bearer_token() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"ok": True})

    sender = _sender(handler)
    sender.send("ana@example.org", "New Grant Alert from 1RFP!", "<p>Hello!</p>")
    sender.close()

    assert len(seen) == 1
    assert seen[0].headers["Authorization"] == "Bearer hook-token"
    assert json.loads(seen[0].content) == {
        "email": "ana@example.org",
        "subject": "New Grant Alert from 1RFP!",
        "html_content": "<p>Hello!</p>",
    }


def test_error_status_raises() -> None:
    sender = _sender(lambda request: httpx.Response(502, text="bad gateway"))
    with pytest.raises(EmailDeliveryError, match="502"):
        sender.send("ana@example.org", "subject", "<p>x</p>")


def test_transport_error_raises() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(EmailDeliveryError):
        _sender(handler).send("ana@example.org", "subject", "<p>x</p>")


def test_unconfigured_sender_skips(caplog) -> None:
    sender = EmailSender(webhook_url=None)
    assert sender.enabled is False
    with caplog.at_level("INFO", logger="onerfp.services.email"):
        sender.send("ana@example.org", "subject", "<p>x</p>")
    assert "not configured" in caplog.text
