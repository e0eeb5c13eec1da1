"""
Cron job that emails subscribers about newly posted grants.

Run once a day, e.g. ``python -m onerfp.scripts.send_grant_alerts``. Grants
created in the last ``GRANT_ALERT_WINDOW_HOURS`` are matched against each
subscriber's keywords.
"""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import timedelta

from onerfp.core.settings import settings
from onerfp.db.session import SessionLocal
from onerfp.services.alerts import (
    find_alert_subscribers,
    find_recent_grants,
    match_grants,
    run_grant_alerts,
)
from onerfp.services.email import get_email_sender

logger = logging.getLogger("onerfp.scripts.send_grant_alerts")


def preview(window_hours: int) -> int:
    """Print who would be emailed, without sending anything."""
    db = SessionLocal()
    try:
        grants = find_recent_grants(db, window=timedelta(hours=window_hours))
        print(f"{len(grants)} grants in the last {window_hours}h")
        for profile in find_alert_subscribers(db):
            matched = match_grants(profile.alert_keywords or [], grants)
            if matched:
                names = ", ".join(grant.grant_name for grant in matched)
                print(f"  {profile.email}: {names}")
    finally:
        db.close()
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Send daily grant alert emails")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="List matching subscribers without sending email.",
    )
    parser.add_argument(
        "--window-hours",
        type=int,
        default=settings.grant_alert_window_hours,
        help="Look-back window for new grants (default: %(default)s).",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    if args.dry_run:
        return preview(args.window_hours)

    sender = get_email_sender()
    db = SessionLocal()
    try:
        result = run_grant_alerts(
            db, sender=sender, window=timedelta(hours=args.window_hours)
        )
    finally:
        db.close()
        sender.close()

    print(
        f"grants={result.grants_found} subscribers={result.subscribers} "
        f"sent={result.emails_sent} failed={result.failures}"
    )
    return 1 if result.failures else 0


if __name__ == "__main__":
    sys.exit(main())
