# ABOUTME: Fire-and-forget fan-out of a notification to every accepting channel.
# ABOUTME: Delivery failures are logged and never propagate to the ledger operation.

import logging
from collections.abc import Sequence

from booklend.config import Settings
from booklend.notify.channels import EmailChannel, NotificationChannel, SlackWebhookChannel
from booklend.notify.message import Notification, NotificationKind

logger = logging.getLogger(__name__)


class NotificationDispatcher:
    """Sends notifications best effort.

    No retry, no delivery confirmation, and no ordering between channels.
    """

    def __init__(self, channels: Sequence[NotificationChannel] = ()) -> None:
        self._channels = list(channels)

    @property
    def channel_names(self) -> list[str]:
        return [c.name for c in self._channels]

    def accepts(self, kind: NotificationKind) -> bool:
        """Whether any configured channel takes this kind of notification."""
        return any(c.accepts(kind) for c in self._channels)

    def dispatch(self, notification: Notification) -> list[str]:
        """Try every channel that accepts this kind of notification.

        Returns:
            Names of the channels that reported success, for logging and for
            callers that want to record a delivery marker.
        """
        delivered = []
        for channel in self._channels:
            if not channel.accepts(notification.kind):
                continue
            try:
                channel.send(notification)
            except Exception:
                logger.exception(
                    "Notification via %s failed (%s, %s)",
                    channel.name,
                    notification.kind.value,
                    notification.title,
                )
                continue
            delivered.append(channel.name)
        if not delivered:
            logger.debug(
                "No channel delivered %s for %s", notification.kind.value, notification.title
            )
        return delivered


def build_dispatcher(settings: Settings) -> NotificationDispatcher:
    """Construct channels for whatever is configured; unconfigured ones are left out."""
    channels: list[NotificationChannel] = []
    if settings.slack_webhook_url:
        channels.append(
            SlackWebhookChannel(settings.slack_webhook_url, timeout=settings.notify_timeout)
        )
    if settings.smtp is not None:
        channels.append(EmailChannel(settings.smtp, timeout=settings.notify_timeout))
    return NotificationDispatcher(channels)
