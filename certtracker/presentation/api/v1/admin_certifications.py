from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status

from ....application.dtos import AssignCertificationDTO, CertificationResponseDTO
from ....application.ports.inbound import AssignCertificationUseCase, ManageCertificationUseCase
from ...middleware.auth import AuthenticatedUser, require_admin
from ..dependencies import get_assign_service, get_manage_service

router = APIRouter(prefix="/admin/certifications", tags=["admin"])


@router.post("", response_model=CertificationResponseDTO, status_code=status.HTTP_201_CREATED)
async def assign_certification(
    dto: AssignCertificationDTO,
    admin: Annotated[AuthenticatedUser, Depends(require_admin)],
    use_case: AssignCertificationUseCase = Depends(get_assign_service),
) -> CertificationResponseDTO:
    return await use_case.execute(dto.model_copy(update={"assigned_by": admin.user_id}))


@router.post("/{instance_id}/deactivate", response_model=CertificationResponseDTO)
async def deactivate_certification(
    instance_id: UUID,
    admin: Annotated[AuthenticatedUser, Depends(require_admin)],
    use_case: ManageCertificationUseCase = Depends(get_manage_service),
) -> CertificationResponseDTO:
    return await use_case.deactivate(instance_id)


@router.delete("/{instance_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_certification(
    instance_id: UUID,
    admin: Annotated[AuthenticatedUser, Depends(require_admin)],
    use_case: ManageCertificationUseCase = Depends(get_manage_service),
) -> Response:
    await use_case.delete(instance_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
