# ABOUTME: Notification package: message type, delivery channels, and the dispatcher.
# ABOUTME: Channels are built from Settings; unconfigured ones are left out.

from booklend.notify.dispatcher import NotificationDispatcher, build_dispatcher
from booklend.notify.message import Notification, NotificationKind

__all__ = [
    "Notification",
    "NotificationDispatcher",
    "NotificationKind",
    "build_dispatcher",
]
