"""Admin review of pending submissions."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from ....application.dtos import (
    ApprovalDecisionDTO,
    ApprovalHistoryDTO,
    ApprovalResultDTO,
    PendingSubmissionDTO,
)
from ....application.ports.inbound import ApprovalQueryUseCase, DecideApprovalUseCase
from ...middleware.auth import AuthenticatedUser, require_admin
from ..dependencies import get_approval_query_service, get_decide_service

router = APIRouter(prefix="/admin/approvals", tags=["admin"])


@router.get("/pending", response_model=list[PendingSubmissionDTO])
async def list_pending(
    admin: Annotated[AuthenticatedUser, Depends(require_admin)],
    use_case: ApprovalQueryUseCase = Depends(get_approval_query_service),
) -> list[PendingSubmissionDTO]:
    return await use_case.list_pending()


@router.get("/history", response_model=list[ApprovalHistoryDTO])
async def list_history(
    admin: Annotated[AuthenticatedUser, Depends(require_admin)],
    limit: int = Query(100, ge=1, le=1000),
    use_case: ApprovalQueryUseCase = Depends(get_approval_query_service),
) -> list[ApprovalHistoryDTO]:
    return await use_case.list_history(limit)


@router.post("/{submission_id}", response_model=ApprovalResultDTO)
async def decide(
    submission_id: UUID,
    dto: ApprovalDecisionDTO,
    admin: Annotated[AuthenticatedUser, Depends(require_admin)],
    use_case: DecideApprovalUseCase = Depends(get_decide_service),
) -> ApprovalResultDTO:
    return await use_case.execute(
        submission_id, dto.model_copy(update={"admin_id": admin.user_id})
    )
