"""Outbound email delivery through an HTTP webhook.

Alert emails are handed to an external provider by POSTing
``{email, subject, html_content}`` to ``EMAIL_WEBHOOK_URL``. Without a
configured URL the sender only logs the message, which keeps local and test
runs side-effect free.
"""

from __future__ import annotations

import logging
import threading

import httpx

from onerfp.core.settings import settings

logger = logging.getLogger(__name__)


class EmailError(RuntimeError):
    """Base exception raised when an email cannot be delivered."""


class EmailDeliveryError(EmailError):
    """Raised when the webhook rejects a message or cannot be reached."""


class EmailSender:
    """Thin synchronous client around the email webhook."""

    def __init__(
        self,
        webhook_url: str | None = None,
        token: str | None = None,
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.webhook_url = webhook_url
        self._token = token
        self._timeout = timeout
        self._transport = transport
        self._client: httpx.Client | None = None
        self._lock = threading.Lock()

    @property
    def enabled(self) -> bool:
        return bool(self.webhook_url)

    def _ensure_client(self) -> httpx.Client:
        with self._lock:
            if self._client is None:
                headers = {"Content-Type": "application/json"}
                if self._token:
                    headers["Authorization"] = f"Bearer {self._token}"
                self._client = httpx.Client(
                    timeout=self._timeout,
                    headers=headers,
                    transport=self._transport,
                )
        return self._client

    def send(self, email: str, subject: str, html_content: str) -> None:
        """Deliver one message, raising ``EmailDeliveryError`` on failure."""
        if not self.enabled:
            logger.info("Email webhook not configured; skipping send to %s (%s)", email, subject)
            return

        client = self._ensure_client()
        payload = {"email": email, "subject": subject, "html_content": html_content}
        try:
            response = client.post(self.webhook_url, json=payload)  # type: ignore[arg-type]
        except httpx.HTTPError as exc:
            raise EmailDeliveryError(f"Email webhook unreachable: {exc}") from exc
        if response.status_code >= 400:
            raise EmailDeliveryError(
                f"Email webhook returned {response.status_code}: {response.text[:200]}"
            )

    def close(self) -> None:
        with self._lock:
            if self._client is not None:
                self._client.close()
                self._client = None


_sender: EmailSender | None = None


def get_email_sender() -> EmailSender:
    """Return the process-wide sender built from settings."""
    global _sender
    if _sender is None:
        _sender = EmailSender(
            webhook_url=settings.email_webhook_url,
            token=settings.email_webhook_token,
            timeout=settings.email_timeout_seconds,
        )
    return _sender
