# ABOUTME: Best-effort delivery channels: a Slack incoming webhook and SMTP email.
# ABOUTME: Channels raise on failure; the dispatcher is what swallows and logs.

import smtplib
from collections.abc import Callable, Iterable
from email.message import EmailMessage
from email.utils import formataddr
from typing import Any, Protocol, runtime_checkable

import httpx

from booklend.config import SmtpSettings
from booklend.dates import format_date
from booklend.notify.message import Notification, NotificationKind

SENDER_NAME = "Booklend"

_HEADERS = {
    NotificationKind.BORROWED: ":books: A book was borrowed",
    NotificationKind.RETURNED: ":leftwards_arrow_with_hook: A book was returned",
    NotificationKind.REMINDER: ":alarm_clock: A loan is due soon",
}


@runtime_checkable
class NotificationChannel(Protocol):
    """A single "send structured message" operation."""

    @property
    def name(self) -> str: ...

    def accepts(self, kind: NotificationKind) -> bool: ...

    def send(self, notification: Notification) -> None: ...


def build_slack_payload(notification: Notification) -> dict[str, Any]:
    """Render a notification as a Block Kit message."""
    header = _HEADERS[notification.kind]
    fields = [
        {"type": "mrkdwn", "text": f"*Borrower:*\n{notification.borrower_name}"},
        {"type": "mrkdwn", "text": f"*Title:*\n{notification.title}"},
    ]
    if notification.borrowed_at:
        fields.append(
            {"type": "mrkdwn", "text": f"*Borrowed:*\n{format_date(notification.borrowed_at)}"}
        )
    if notification.due_at:
        fields.append({"type": "mrkdwn", "text": f"*Due:*\n{format_date(notification.due_at)}"})
    if notification.returned_at:
        fields.append(
            {"type": "mrkdwn", "text": f"*Returned:*\n{format_date(notification.returned_at)}"}
        )

    blocks: list[dict[str, Any]] = [
        {"type": "header", "text": {"type": "plain_text", "text": header, "emoji": True}},
        {"type": "section", "fields": fields},
    ]
    if notification.kind is NotificationKind.BORROWED:
        blocks.append(
            {
                "type": "context",
                "elements": [{"type": "mrkdwn", "text": "Please check the due date."}],
            }
        )
    return {"text": header, "blocks": blocks}


def build_email_message(notification: Notification, sender: str) -> EmailMessage:
    """Render a notification as a plain-text email to the borrower."""
    due = format_date(notification.due_at) if notification.due_at else "soon"
    msg = EmailMessage()
    msg["From"] = formataddr((SENDER_NAME, sender))
    msg["To"] = notification.borrower_email

    if notification.kind is NotificationKind.REMINDER:
        msg["Subject"] = f"Return reminder: {notification.title}"
        body = (
            f"Hello {notification.borrower_name},\n\n"
            f"The following book you borrowed is due back on {due}.\n\n"
            f"  Title: {notification.title}\n"
            f"  Due:   {due}\n\n"
            "Please return it by the due date. If you need more time or cannot\n"
            "return it, contact the library administrator.\n"
        )
    else:
        msg["Subject"] = f"Book {notification.kind.value}: {notification.title}"
        body = (
            f"Hello {notification.borrower_name},\n\n"
            f"{notification.title} was {notification.kind.value}.\n"
        )
    msg.set_content(body)
    return msg


class SlackWebhookChannel:
    """Posts lending events to a Slack incoming webhook."""

    def __init__(
        self,
        webhook_url: str,
        *,
        kinds: Iterable[NotificationKind] = (NotificationKind.BORROWED, NotificationKind.RETURNED),
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._url = webhook_url
        self._kinds = frozenset(kinds)
        client_kwargs: dict[str, Any] = {"timeout": timeout}
        if transport is not None:
            client_kwargs["transport"] = transport
        self._client = httpx.Client(**client_kwargs)

    @property
    def name(self) -> str:
        return "slack"

    def accepts(self, kind: NotificationKind) -> bool:
        return kind in self._kinds

    def send(self, notification: Notification) -> None:
        response = self._client.post(self._url, json=build_slack_payload(notification))
        response.raise_for_status()


class EmailChannel:
    """Sends borrower emails over SMTP with STARTTLS.

    ``smtp_factory`` defaults to ``smtplib.SMTP`` and is injectable for tests.
    """

    def __init__(
        self,
        settings: SmtpSettings,
        *,
        kinds: Iterable[NotificationKind] = (NotificationKind.REMINDER,),
        timeout: float = 10.0,
        smtp_factory: Callable[..., smtplib.SMTP] = smtplib.SMTP,
    ) -> None:
        self._settings = settings
        self._kinds = frozenset(kinds)
        self._timeout = timeout
        self._smtp_factory = smtp_factory

    @property
    def name(self) -> str:
        return "email"

    def accepts(self, kind: NotificationKind) -> bool:
        return kind in self._kinds

    def send(self, notification: Notification) -> None:
        if not notification.borrower_email:
            raise ValueError("Notification has no recipient address")
        msg = build_email_message(notification, self._settings.sender)
        with self._smtp_factory(
            self._settings.host, self._settings.port, timeout=self._timeout
        ) as smtp:
            smtp.starttls()
            smtp.login(self._settings.username, self._settings.password)
            smtp.send_message(msg)
