from abc import ABC, abstractmethod

from ....domain.entities import NotificationChannel, ReminderPayload


class NotificationDispatcher(ABC):
    """Formats and delivers a reminder over one channel."""

    @property
    @abstractmethod
    def channel(self) -> NotificationChannel: ...

    @abstractmethod
    async def send(self, payload: ReminderPayload) -> bool:
        """Return True when the message was accepted for delivery."""
        ...
