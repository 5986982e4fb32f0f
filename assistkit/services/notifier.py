"""In-memory notification feed (the sidecar's equivalent of toasts)."""

from __future__ import annotations

import logging
from collections import deque

from assistkit.models.notification import Notification, NotificationStyle

logger = logging.getLogger(__name__)

MAX_NOTIFICATIONS = 50

_notifier: Notifier | None = None


class Notifier:
    """Keeps the most recent notifications and mirrors them to the log."""

    def __init__(self, maxlen: int = MAX_NOTIFICATIONS):
        self._items: deque[Notification] = deque(maxlen=maxlen)

    def show(
        self,
        title: str,
        message: str = "",
        style: NotificationStyle = NotificationStyle.SUCCESS,
    ) -> Notification:
        notification = Notification(style=style, title=title, message=message)
        self._items.append(notification)
        if style == NotificationStyle.FAILURE:
            logger.warning(f"{title}: {message}")
        else:
            logger.info(f"{title}: {message}")
        return notification

    def success(self, title: str, message: str = "") -> Notification:
        return self.show(title, message, NotificationStyle.SUCCESS)

    def failure(self, title: str, message: str = "") -> Notification:
        return self.show(title, message, NotificationStyle.FAILURE)

    def progress(self, title: str, message: str = "") -> Notification:
        return self.show(title, message, NotificationStyle.ANIMATED)

    def recent(self) -> list[Notification]:
        """Return stored notifications, oldest first."""
        return list(self._items)

    def clear(self) -> None:
        self._items.clear()


def get_notifier() -> Notifier:
    global _notifier
    if _notifier is None:
        _notifier = Notifier()
    return _notifier
