"""Certification endpoints scoped to the authenticated user."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from ....application.dtos import (
    CertificationResponseDTO,
    CompetencyDTO,
    RenewCertificationDTO,
    SubmitCertificationDTO,
)
from ....application.ports.inbound import (
    CertificationQueryUseCase,
    ManageCertificationUseCase,
    SubmitCertificationUseCase,
)
from ...middleware.auth import AuthenticatedUser, require_auth
from ..dependencies import get_manage_service, get_query_service, get_submit_service

router = APIRouter(prefix="/certifications", tags=["certifications"])


@router.post("", response_model=CertificationResponseDTO, status_code=status.HTTP_201_CREATED)
async def submit_certification(
    dto: SubmitCertificationDTO,
    user: Annotated[AuthenticatedUser, Depends(require_auth)],
    use_case: SubmitCertificationUseCase = Depends(get_submit_service),
) -> CertificationResponseDTO:
    """Submit an obtained certification for admin approval.

    Security: the user id always comes from the token.
    """
    return await use_case.execute(dto.model_copy(update={"user_id": user.user_id}))


@router.get("/mine", response_model=list[CertificationResponseDTO])
async def list_my_certifications(
    user: Annotated[AuthenticatedUser, Depends(require_auth)],
    use_case: CertificationQueryUseCase = Depends(get_query_service),
) -> list[CertificationResponseDTO]:
    return await use_case.list_for_user(user.user_id)


@router.get("/expiring", response_model=list[CertificationResponseDTO])
async def list_expiring(
    user: Annotated[AuthenticatedUser, Depends(require_auth)],
    within_days: int = Query(90, ge=0, le=3650),
    use_case: CertificationQueryUseCase = Depends(get_query_service),
) -> list[CertificationResponseDTO]:
    return await use_case.list_expiring(user.user_id, within_days)


@router.get("/competency", response_model=CompetencyDTO)
async def my_competency(
    user: Annotated[AuthenticatedUser, Depends(require_auth)],
    use_case: CertificationQueryUseCase = Depends(get_query_service),
) -> CompetencyDTO:
    return await use_case.competency(user.user_id)


@router.post("/{instance_id}/renew", response_model=CertificationResponseDTO)
async def renew_certification(
    instance_id: UUID,
    dto: RenewCertificationDTO,
    user: Annotated[AuthenticatedUser, Depends(require_auth)],
    use_case: ManageCertificationUseCase = Depends(get_manage_service),
) -> CertificationResponseDTO:
    return await use_case.renew(instance_id, dto, user_id=user.user_id)


@router.post("/{instance_id}/bonus", response_model=CertificationResponseDTO)
async def claim_bonus(
    instance_id: UUID,
    user: Annotated[AuthenticatedUser, Depends(require_auth)],
    use_case: ManageCertificationUseCase = Depends(get_manage_service),
) -> CertificationResponseDTO:
    return await use_case.claim_bonus(instance_id, user.user_id)
