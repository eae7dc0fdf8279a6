from abc import ABC, abstractmethod
from collections.abc import Iterable
from uuid import UUID

from ....domain.entities import UserCertificationInstance
from ....domain.value_objects import CertificationStatus


class CertificationRepository(ABC):
    @abstractmethod
    async def get(self, instance_id: UUID) -> UserCertificationInstance | None:
        pass

    @abstractmethod
    async def save(self, instance: UserCertificationInstance) -> None:
        """Insert or update an instance."""
        pass

    @abstractmethod
    async def delete(self, instance_id: UUID) -> bool:
        pass

    @abstractmethod
    async def list_for_user(self, user_id: str) -> list[UserCertificationInstance]:
        pass

    @abstractmethod
    async def list_by_statuses(
        self, statuses: Iterable[CertificationStatus]
    ) -> list[UserCertificationInstance]:
        pass
