from abc import ABC, abstractmethod
from datetime import datetime
from uuid import UUID

from ....domain.entities import ReminderRecord
from ....domain.value_objects import UrgencyTier


class ReminderLedger(ABC):
    """Append-only notification log, also used for de-duplication."""

    @abstractmethod
    async def append(self, record: ReminderRecord) -> None:
        pass

    @abstractmethod
    async def last_delivered_at(self, instance_id: UUID, tier: UrgencyTier) -> datetime | None:
        """Timestamp of the latest delivered reminder of this tier for the instance."""
        pass

    @abstractmethod
    async def list_for_instance(self, instance_id: UUID) -> list[ReminderRecord]:
        pass

    @abstractmethod
    async def list_for_user(self, user_id: str, limit: int = 50) -> list[ReminderRecord]:
        pass

    @abstractmethod
    async def list_since(self, since: datetime) -> list[ReminderRecord]:
        pass
