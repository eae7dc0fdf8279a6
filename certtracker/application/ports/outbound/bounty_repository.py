from abc import ABC, abstractmethod

from ....domain.entities import Bounty, BountyClaim, BountyStatus


class BountyRepository(ABC):
    @abstractmethod
    async def get(self, bounty_id: str) -> Bounty | None:
        pass

    @abstractmethod
    async def save(self, bounty: Bounty) -> None:
        pass

    @abstractmethod
    async def list_all(self, status: BountyStatus | None = None) -> list[Bounty]:
        pass

    @abstractmethod
    async def add_claim(self, claim: BountyClaim) -> None:
        pass

    @abstractmethod
    async def list_claims_for_user(self, user_id: str) -> list[BountyClaim]:
        pass
