"""Tests for the grant alert cron script."""

from datetime import timedelta
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

from onerfp.scripts import send_grant_alerts
from onerfp.services.alerts import AlertRunResult


def test_dry_run_lists_matches_without_sending(capsys) -> None:
    grants = [
        SimpleNamespace(id=1, grant_name="Youth Arts Initiative", description=None),
        SimpleNamespace(id=2, grant_name="Housing First", description=None),
    ]
    subscribers = [
        SimpleNamespace(email="arts@example.org", alert_keywords=["arts"]),
        SimpleNamespace(email="zoo@example.org", alert_keywords=["zoo"]),
    ]
    db = MagicMock()
    with (
        patch.object(send_grant_alerts, "SessionLocal", return_value=db),
        patch.object(send_grant_alerts, "find_recent_grants", return_value=grants) as recent,
        patch.object(send_grant_alerts, "find_alert_subscribers", return_value=subscribers),
        patch.object(send_grant_alerts, "run_grant_alerts") as run,
    ):
        code = send_grant_alerts.main(["--dry-run", "--window-hours", "6"])

    assert code == 0
    run.assert_not_called()
    assert recent.call_args.kwargs["window"] == timedelta(hours=6)
    db.close.assert_called_once()
    out = capsys.readouterr().out
    assert "2 grants in the last 6h" in out
    assert "arts@example.org: Youth Arts Initiative" in out
    assert "zoo@example.org" not in out


def test_failed_sends_exit_nonzero() -> None:
    db = MagicMock()
    sender = MagicMock()
    result = AlertRunResult(grants_found=1, subscribers=2, emails_sent=1, failures=1)
    with (
        patch.object(send_grant_alerts, "SessionLocal", return_value=db),
        patch.object(send_grant_alerts, "get_email_sender", return_value=sender),
        patch.object(send_grant_alerts, "run_grant_alerts", return_value=result) as run,
    ):
        code = send_grant_alerts.main(["--window-hours", "0"])

    assert code == 1
    assert run.call_args.kwargs["window"] == timedelta(0)
    assert run.call_args.kwargs["sender"] is sender
    db.close.assert_called_once()
    sender.close.assert_called_once()


def test_clean_run_exits_zero(capsys) -> None:
    result = AlertRunResult(grants_found=2, subscribers=1, emails_sent=1)
    with (
        patch.object(send_grant_alerts, "SessionLocal", return_value=MagicMock()),
        patch.object(send_grant_alerts, "get_email_sender", return_value=MagicMock()),
        patch.object(send_grant_alerts, "run_grant_alerts", return_value=result),
    ):
        code = send_grant_alerts.main([])

    assert code == 0
    assert "grants=2 subscribers=1 sent=1 failed=0" in capsys.readouterr().out
