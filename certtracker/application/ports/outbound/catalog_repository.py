from abc import ABC, abstractmethod

from ....domain.entities import MasterCertificationDefinition


class CatalogRepository(ABC):
    @abstractmethod
    async def get(self, definition_id: str) -> MasterCertificationDefinition | None:
        pass

    @abstractmethod
    async def list_all(self, active_only: bool = False) -> list[MasterCertificationDefinition]:
        pass

    @abstractmethod
    async def save(self, definition: MasterCertificationDefinition) -> None:
        pass
