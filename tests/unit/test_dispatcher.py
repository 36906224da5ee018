# ABOUTME: Unit tests for the notification dispatcher.
# ABOUTME: Validates fan-out, failure isolation, and channel construction from settings.

import logging

import pytest

from booklend.config import Settings, SmtpSettings
from booklend.notify.dispatcher import NotificationDispatcher, build_dispatcher
from booklend.notify.message import Notification, NotificationKind
from tests.fixtures.fakes import RecordingChannel

NOTE = Notification(kind=NotificationKind.BORROWED, title="Test Book", borrower_name="Alice")


class TestDispatch:
    """Tests for NotificationDispatcher.dispatch."""

    def test_sends_to_accepting_channels_only(self) -> None:
        slack = RecordingChannel("slack", kinds=(NotificationKind.BORROWED,))
        email = RecordingChannel("email", kinds=(NotificationKind.REMINDER,))
        delivered = NotificationDispatcher([slack, email]).dispatch(NOTE)
        assert delivered == ["slack"]
        assert slack.sent == [NOTE]
        assert email.sent == []

    def test_failure_is_logged_not_raised(self, caplog: pytest.LogCaptureFixture) -> None:
        broken = RecordingChannel("broken", fail=True)
        healthy = RecordingChannel("healthy")
        with caplog.at_level(logging.ERROR, logger="booklend.notify.dispatcher"):
            delivered = NotificationDispatcher([broken, healthy]).dispatch(NOTE)
        assert delivered == ["healthy"]
        assert healthy.sent == [NOTE]
        assert "broken" in caplog.text

    def test_no_channels_delivers_nothing(self) -> None:
        assert NotificationDispatcher().dispatch(NOTE) == []

    def test_accepts(self) -> None:
        dispatcher = NotificationDispatcher([RecordingChannel(kinds=(NotificationKind.REMINDER,))])
        assert dispatcher.accepts(NotificationKind.REMINDER)
        assert not dispatcher.accepts(NotificationKind.BORROWED)


class TestBuildDispatcher:
    """Tests for build_dispatcher."""

    def test_nothing_configured(self) -> None:
        assert build_dispatcher(Settings()).channel_names == []

    def test_slack_and_email(self) -> None:
        settings = Settings(
            slack_webhook_url="https://hooks.slack.com/services/T/B/X",
            smtp=SmtpSettings("smtp.example.com", 587, "lib", "secret", "lib@example.com"),
        )
        dispatcher = build_dispatcher(settings)
        assert dispatcher.channel_names == ["slack", "email"]
        assert dispatcher.accepts(NotificationKind.REMINDER)
