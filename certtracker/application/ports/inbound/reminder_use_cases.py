from abc import ABC, abstractmethod
from uuid import UUID

from ...dtos import (
    ReminderRecordDTO,
    ReminderRunResultDTO,
    ReminderStatsDTO,
    StatusSweepResultDTO,
)


class ProcessDailyRemindersUseCase(ABC):
    """Inbound port for one reminder pass over all live certifications."""

    @abstractmethod
    async def execute(self) -> ReminderRunResultDTO:
        pass


class SweepStatusesUseCase(ABC):
    """Inbound port for the date-driven status sweep."""

    @abstractmethod
    async def execute(self) -> StatusSweepResultDTO:
        pass


class ReminderReportUseCase(ABC):
    @abstractmethod
    async def stats(self, days: int = 30) -> ReminderStatsDTO:
        pass

    @abstractmethod
    async def log_for_instance(self, instance_id: UUID) -> list[ReminderRecordDTO]:
        pass

    @abstractmethod
    async def log_for_user(self, user_id: str, limit: int = 50) -> list[ReminderRecordDTO]:
        pass
