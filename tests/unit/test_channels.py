# ABOUTME: Unit tests for the Slack webhook and SMTP email channels.
# ABOUTME: Uses httpx.MockTransport and a fake SMTP factory so nothing leaves the process.

import json
from datetime import date
from email.message import EmailMessage

import httpx
import pytest

from booklend.config import SmtpSettings
from booklend.notify.channels import (
    EmailChannel,
    NotificationChannel,
    SlackWebhookChannel,
    build_email_message,
    build_slack_payload,
)
from booklend.notify.message import Notification, NotificationKind

WEBHOOK = "https://hooks.slack.com/services/T000/B000/XXXX"
SMTP = SmtpSettings(
    host="smtp.example.com",
    port=587,
    username="library@example.com",
    password="secret",
    sender="library@example.com",
)

BORROWED = Notification(
    kind=NotificationKind.BORROWED,
    title="Test Book",
    borrower_name="Alice",
    borrower_email="alice@example.com",
    borrowed_at=date(2024, 2, 20),
    due_at=date(2024, 3, 5),
)
RETURNED = Notification(
    kind=NotificationKind.RETURNED,
    title="Test Book",
    borrower_name="Alice",
    returned_at=date(2024, 2, 25),
)
REMINDER = Notification(
    kind=NotificationKind.REMINDER,
    title="Test Book",
    borrower_name="Alice",
    borrower_email="alice@example.com",
    borrowed_at=date(2024, 2, 20),
    due_at=date(2024, 3, 5),
)


class FakeSMTP:
    """Records the SMTP conversation instead of opening a socket."""

    instances: list["FakeSMTP"] = []

    def __init__(self, host: str, port: int, timeout: float = 0) -> None:
        self.host = host
        self.port = port
        self.timeout = timeout
        self.calls: list[str] = []
        self.messages: list[EmailMessage] = []
        FakeSMTP.instances.append(self)

    def __enter__(self) -> "FakeSMTP":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.calls.append("quit")

    def starttls(self) -> None:
        self.calls.append("starttls")

    def login(self, user: str, password: str) -> None:
        self.calls.append(f"login:{user}")

    def send_message(self, msg: EmailMessage) -> None:
        self.calls.append("send")
        self.messages.append(msg)


@pytest.fixture(autouse=True)
def _reset_smtp() -> None:
    FakeSMTP.instances = []


class TestSlackPayload:
    """Tests for build_slack_payload."""

    def test_borrow_payload(self) -> None:
        payload = build_slack_payload(BORROWED)
        assert payload["text"] == ":books: A book was borrowed"
        header, section, context = payload["blocks"]
        assert header["type"] == "header"
        texts = [f["text"] for f in section["fields"]]
        assert texts == [
            "*Borrower:*\nAlice",
            "*Title:*\nTest Book",
            "*Borrowed:*\n2024-02-20",
            "*Due:*\n2024-03-05",
        ]
        assert context["elements"][0]["text"] == "Please check the due date."

    def test_return_payload(self) -> None:
        payload = build_slack_payload(RETURNED)
        assert len(payload["blocks"]) == 2
        texts = [f["text"] for f in payload["blocks"][1]["fields"]]
        assert "*Returned:*\n2024-02-25" in texts
        assert not any(t.startswith("*Due:*") for t in texts)


class TestSlackWebhookChannel:
    """Tests for SlackWebhookChannel."""

    def test_posts_payload_to_webhook(self) -> None:
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, text="ok")

        channel = SlackWebhookChannel(WEBHOOK, transport=httpx.MockTransport(handler))
        channel.send(BORROWED)

        (request,) = requests
        assert str(request.url) == WEBHOOK
        assert json.loads(request.content)["text"] == ":books: A book was borrowed"

    def test_http_error_raises(self) -> None:
        transport = httpx.MockTransport(lambda request: httpx.Response(404, text="no_service"))
        channel = SlackWebhookChannel(WEBHOOK, transport=transport)
        with pytest.raises(httpx.HTTPStatusError):
            channel.send(BORROWED)

    def test_accepts_lending_events_only(self) -> None:
        channel = SlackWebhookChannel(WEBHOOK)
        assert isinstance(channel, NotificationChannel)
        assert channel.accepts(NotificationKind.BORROWED)
        assert channel.accepts(NotificationKind.RETURNED)
        assert not channel.accepts(NotificationKind.REMINDER)


class TestEmailMessage:
    """Tests for build_email_message."""

    def test_reminder_message(self) -> None:
        msg = build_email_message(REMINDER, "library@example.com")
        assert msg["Subject"] == "Return reminder: Test Book"
        assert msg["To"] == "alice@example.com"
        assert msg["From"] == "Booklend <library@example.com>"
        body = msg.get_content()
        assert "Hello Alice" in body
        assert "due back on 2024-03-05" in body

    def test_non_reminder_subject(self) -> None:
        msg = build_email_message(BORROWED, "library@example.com")
        assert msg["Subject"] == "Book borrowed: Test Book"


class TestEmailChannel:
    """Tests for EmailChannel."""

    def test_sends_over_starttls(self) -> None:
        channel = EmailChannel(SMTP, timeout=5.0, smtp_factory=FakeSMTP)
        channel.send(REMINDER)

        (smtp,) = FakeSMTP.instances
        assert (smtp.host, smtp.port, smtp.timeout) == ("smtp.example.com", 587, 5.0)
        assert smtp.calls == ["starttls", "login:library@example.com", "send", "quit"]
        assert smtp.messages[0]["To"] == "alice@example.com"

    def test_missing_recipient_raises(self) -> None:
        channel = EmailChannel(SMTP, smtp_factory=FakeSMTP)
        with pytest.raises(ValueError, match="recipient"):
            channel.send(RETURNED)
        assert FakeSMTP.instances == []

    def test_accepts_reminders_only(self) -> None:
        channel = EmailChannel(SMTP, smtp_factory=FakeSMTP)
        assert isinstance(channel, NotificationChannel)
        assert channel.accepts(NotificationKind.REMINDER)
        assert not channel.accepts(NotificationKind.BORROWED)
