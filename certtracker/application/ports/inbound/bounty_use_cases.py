from abc import ABC, abstractmethod

from ...dtos import BountyClaimDTO, BountyDTO, CreateBountyDTO


class ClaimBountyUseCase(ABC):
    """Inbound port for a user claiming a bounty."""

    @abstractmethod
    async def execute(self, bounty_id: str, user_id: str) -> BountyClaimDTO:
        pass


class ManageBountiesUseCase(ABC):
    @abstractmethod
    async def create(self, dto: CreateBountyDTO) -> BountyDTO:
        pass

    @abstractmethod
    async def list_active(self) -> list[BountyDTO]:
        pass

    @abstractmethod
    async def list_claims_for_user(self, user_id: str) -> list[BountyClaimDTO]:
        pass
