from typing import Annotated

from fastapi import APIRouter, Depends, status

from ....application.dtos import BountyClaimDTO, BountyDTO, CreateBountyDTO
from ....application.ports.inbound import ClaimBountyUseCase, ManageBountiesUseCase
from ...middleware.auth import AuthenticatedUser, require_admin, require_auth
from ..dependencies import get_bounty_service, get_claim_bounty_service

router = APIRouter(prefix="/bounties", tags=["bounties"])


@router.get("", response_model=list[BountyDTO])
async def list_bounties(
    use_case: ManageBountiesUseCase = Depends(get_bounty_service),
) -> list[BountyDTO]:
    return await use_case.list_active()


@router.get("/claims/mine", response_model=list[BountyClaimDTO])
async def my_claims(
    user: Annotated[AuthenticatedUser, Depends(require_auth)],
    use_case: ManageBountiesUseCase = Depends(get_bounty_service),
) -> list[BountyClaimDTO]:
    return await use_case.list_claims_for_user(user.user_id)


@router.post("", response_model=BountyDTO, status_code=status.HTTP_201_CREATED)
async def create_bounty(
    dto: CreateBountyDTO,
    admin: Annotated[AuthenticatedUser, Depends(require_admin)],
    use_case: ManageBountiesUseCase = Depends(get_bounty_service),
) -> BountyDTO:
    return await use_case.create(dto.model_copy(update={"created_by": admin.user_id}))


@router.post(
    "/{bounty_id}/claims", response_model=BountyClaimDTO, status_code=status.HTTP_201_CREATED
)
async def claim_bounty(
    bounty_id: str,
    user: Annotated[AuthenticatedUser, Depends(require_auth)],
    use_case: ClaimBountyUseCase = Depends(get_claim_bounty_service),
) -> BountyClaimDTO:
    return await use_case.execute(bounty_id, user.user_id)
