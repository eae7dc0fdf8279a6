from abc import ABC, abstractmethod

from ...dtos import MasterCertificationDTO


class CatalogQueryUseCase(ABC):
    """Inbound port for reading the master certification catalog."""

    @abstractmethod
    async def list_catalog(self, active_only: bool = True) -> list[MasterCertificationDTO]:
        pass

    @abstractmethod
    async def get(self, definition_id: str) -> MasterCertificationDTO | None:
        pass

    @abstractmethod
    async def find(self, name: str, vendor: str) -> MasterCertificationDTO | None:
        pass
