"""Daily grant alert emails.

Grants posted within the alert window are matched against each subscriber's
keywords; every subscriber with at least one match receives a single email
listing the matching grants.
"""

from __future__ import annotations

import html
import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import datetime, timedelta

from sqlalchemy.orm import Session

from onerfp.core.settings import settings
from onerfp.db.time import utcnow
from onerfp.models import Grant, Profile

from . import procedures
from .email import EmailError, EmailSender

logger = logging.getLogger(__name__)


@dataclass
class AlertRunResult:
    grants_found: int = 0
    subscribers: int = 0
    emails_sent: int = 0
    failures: int = 0


def find_recent_grants(
    db: Session,
    now: datetime | None = None,
    window: timedelta | None = None,
) -> list[Grant]:
    """Grants created strictly after ``now - window``."""
    if now is None:
        now = utcnow()
    if window is None:
        window = timedelta(hours=settings.grant_alert_window_hours)
    return (
        db.query(Grant)
        .filter(Grant.created_at > now - window)
        .order_by(Grant.created_at.asc(), Grant.id.asc())
        .all()
    )


def find_alert_subscribers(db: Session) -> list[Profile]:
    """Profiles with alerts on, at least one keyword and an email address."""
    candidates = db.query(Profile).filter(
        Profile.email_alerts_enabled.is_(True),
        Profile.alert_keywords.isnot(None),
    ).all()
    return [p for p in candidates if p.email and _keywords(p.alert_keywords)]


def _keywords(raw: Iterable[str] | None) -> list[str]:
    return [str(keyword).lower() for keyword in (raw or []) if str(keyword).strip()]


def match_grants(keywords: Iterable[str], grants: Sequence[Grant]) -> list[Grant]:
    """Grants whose name or description contains any keyword, ignoring case."""
    needles = _keywords(keywords)
    if not needles:
        return []
    matched = []
    for grant in grants:
        text = f"{grant.grant_name} {grant.description or ''}".lower()
        if any(needle in text for needle in needles):
            matched.append(grant)
    return matched


def render_alert_email(grants: Sequence[Grant], site_url: str | None = None) -> str:
    base = (site_url or settings.grant_alert_site_url).rstrip("/")
    items = "".join(
        f'<li><a href="{base}/grants/{grant.id}">{html.escape(grant.grant_name)}</a></li>'
        for grant in grants
    )
    return (
        "<p>Hello!</p>"
        f"<p>We found {len(grants)} new grants that match your interests:</p>"
        f"<ul>{items}</ul>"
        f'<p>You can update your alert settings on your <a href="{base}/profile">1RFP profile</a>.</p>'
    )


def run_grant_alerts(
    db: Session,
    sender: EmailSender | None = None,
    now: datetime | None = None,
    window: timedelta | None = None,
) -> AlertRunResult:
    """Send one alert email per subscriber with matching grants.

    A failed send is logged and counted; the remaining subscribers are still
    processed.
    """
    result = AlertRunResult()
    grants = find_recent_grants(db, now=now, window=window)
    result.grants_found = len(grants)
    if not grants:
        logger.info("No new grants in the alert window")
        return result

    subscribers = find_alert_subscribers(db)
    result.subscribers = len(subscribers)
    logger.info("Found %d new grants and %d alert subscribers", len(grants), len(subscribers))

    for profile in subscribers:
        matched = match_grants(profile.alert_keywords or [], grants)
        if not matched:
            continue
        logger.info("Sending alert to %s for %d grants", profile.email, len(matched))
        try:
            procedures.send_custom_email(
                profile.email,
                settings.grant_alert_subject,
                render_alert_email(matched),
                sender=sender,
            )
        except EmailError:
            result.failures += 1
            logger.warning("Failed to send grant alert to %s", profile.email, exc_info=True)
            continue
        result.emails_sent += 1

    return result
