"""
Transient notifications ("toasts") shown to the dashboard user.

The notifier keeps the notifications in order and mirrors each one to
the log so that headless runs still report what the user would see.
"""

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, List
import time


logger = logging.getLogger(__name__)

MAX_NOTIFICATIONS = 50

LEVELS = ("success", "error", "warning", "info")

_LOG_LEVELS = {
    "success": logging.INFO,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


@dataclass
class Notification:
    message: str
    level: str = "info"
    created_at: float = field(default_factory=time.time)


class Notifier:
    """Keeps the most recent ``max_items`` notifications; older ones drop off."""

    def __init__(self, max_items: int = MAX_NOTIFICATIONS) -> None:
        self.notifications: Deque[Notification] = deque(maxlen=max_items)

    def notify(self, message: str, level: str = "info") -> Notification:
        if level not in LEVELS:
            level = "info"
        notification = Notification(message=message, level=level)
        self.notifications.append(notification)
        logger.log(_LOG_LEVELS[level], "[%s] %s", level, message)
        return notification

    @property
    def last(self):
        return self.notifications[-1] if self.notifications else None

    def messages(self, level: str = "") -> List[str]:
        return [n.message for n in self.notifications if not level or n.level == level]

    def clear(self) -> None:
        self.notifications.clear()
