from abc import ABC, abstractmethod
from uuid import UUID

from ...dtos import (
    AssignCertificationDTO,
    CertificationResponseDTO,
    CompetencyDTO,
    RenewCertificationDTO,
    SubmitCertificationDTO,
)


class AssignCertificationUseCase(ABC):
    """Inbound port for an admin assigning a catalog certification to a user."""

    @abstractmethod
    async def execute(self, dto: AssignCertificationDTO) -> CertificationResponseDTO:
        pass


class SubmitCertificationUseCase(ABC):
    """Inbound port for a user submitting an earned certification for approval."""

    @abstractmethod
    async def execute(self, dto: SubmitCertificationDTO) -> CertificationResponseDTO:
        pass


class ManageCertificationUseCase(ABC):
    """Inbound port for manual changes to an existing certification."""

    @abstractmethod
    async def renew(
        self, instance_id: UUID, dto: RenewCertificationDTO, user_id: str | None = None
    ) -> CertificationResponseDTO:
        pass

    @abstractmethod
    async def deactivate(self, instance_id: UUID) -> CertificationResponseDTO:
        pass

    @abstractmethod
    async def delete(self, instance_id: UUID) -> None:
        pass

    @abstractmethod
    async def claim_bonus(self, instance_id: UUID, user_id: str) -> CertificationResponseDTO:
        pass


class CertificationQueryUseCase(ABC):
    @abstractmethod
    async def get(self, instance_id: UUID) -> CertificationResponseDTO | None:
        pass

    @abstractmethod
    async def list_for_user(self, user_id: str) -> list[CertificationResponseDTO]:
        pass

    @abstractmethod
    async def list_expiring(
        self, user_id: str, within_days: int = 90
    ) -> list[CertificationResponseDTO]:
        pass

    @abstractmethod
    async def competency(self, user_id: str) -> CompetencyDTO:
        pass
