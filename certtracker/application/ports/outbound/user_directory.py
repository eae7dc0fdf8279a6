from abc import ABC, abstractmethod

from ....domain.entities import Recipient


class UserDirectory(ABC):
    @abstractmethod
    async def get_recipient(self, user_id: str) -> Recipient | None:
        """Contact details and alert preferences, None for unknown users."""
        pass
