from typing import List, Literal

from pydantic import BaseModel

from app.core.logger import logger

NotificationLevel = Literal["success", "error", "warning", "info"]

ICONS = {
    "success": "✅",
    "error": "❌",
    "warning": "⚠️",
    "info": "ℹ️",
}

class Notification(BaseModel):
    level: NotificationLevel
    message: str

    @property
    def icon(self) -> str:
        return ICONS[self.level]

class NotificationQueue:
    """
    Transient, non-blocking notices for the operator.
    The page drains the queue on every run and shows each item as a toast.
    """

    def __init__(self):
        self._items: List[Notification] = []

    def push(self, level: NotificationLevel, message: str) -> Notification:
        notification = Notification(level=level, message=message)
        self._items.append(notification)
        logger.info(f"{notification.icon} Notify [{level}]: {message}")
        return notification

    def success(self, message: str) -> Notification:
        return self.push("success", message)

    def error(self, message: str) -> Notification:
        return self.push("error", message)

    def warning(self, message: str) -> Notification:
        return self.push("warning", message)

    def drain(self) -> List[Notification]:
        items, self._items = self._items, []
        return items
