# docflow/services/notification_service.py

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, Optional

from loguru import logger


@dataclass(frozen=True)
class Notification:
    title: str
    description: str = ""
    variant: str = "default"  # "default" or "destructive"
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def is_error(self) -> bool:
        return self.variant == "destructive"


class Notifier:
    """
    Collects user-facing toasts. Every mutating action ends in exactly one
    success() or error() call; an optional listener mirrors them to a UI.
    """

    def __init__(self, listener: Optional[Callable[[Notification], None]] = None):
        self.history: list[Notification] = []
        self._listener = listener

    def _emit(self, notification: Notification) -> Notification:
        self.history.append(notification)
        if self._listener is not None:
            self._listener(notification)
        return notification

    def success(self, title: str, description: str = "") -> Notification:
        logger.info(f"{title}: {description}" if description else title)
        return self._emit(Notification(title=title, description=description))

    def error(self, title: str, description: str = "") -> Notification:
        logger.warning(f"{title}: {description}" if description else title)
        return self._emit(Notification(title=title, description=description, variant="destructive"))

    @property
    def last(self) -> Optional[Notification]:
        return self.history[-1] if self.history else None

    @property
    def errors(self) -> list[Notification]:
        return [n for n in self.history if n.is_error]

    def clear(self) -> None:
        self.history.clear()
