"""Admin operations on the reminder scheduler."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ....application.dtos import (
    JobStatusDTO,
    ReminderRecordDTO,
    ReminderRunResultDTO,
    ReminderStatsDTO,
    StatusSweepResultDTO,
)
from ....application.ports.inbound import ReminderReportUseCase
from ....scheduler import ReminderJobRunner
from ...middleware.auth import AuthenticatedUser, require_admin
from ..dependencies import get_report_service, get_runner

router = APIRouter(prefix="/admin/reminders", tags=["admin"])


@router.post("/trigger", response_model=ReminderRunResultDTO)
async def trigger_reminders(
    admin: Annotated[AuthenticatedUser, Depends(require_admin)],
    runner: ReminderJobRunner = Depends(get_runner),
) -> ReminderRunResultDTO:
    """Run the daily reminder pass now."""
    result = await runner.run_daily_reminders()
    if result is None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="A reminder pass is already running",
        )
    return result


@router.post("/sweep", response_model=StatusSweepResultDTO)
async def trigger_sweep(
    admin: Annotated[AuthenticatedUser, Depends(require_admin)],
    runner: ReminderJobRunner = Depends(get_runner),
) -> StatusSweepResultDTO:
    result = await runner.run_status_sweep()
    if result is None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="A status sweep is already running",
        )
    return result


@router.get("/status", response_model=JobStatusDTO)
async def job_status(
    admin: Annotated[AuthenticatedUser, Depends(require_admin)],
    runner: ReminderJobRunner = Depends(get_runner),
) -> JobStatusDTO:
    return runner.status()


@router.get("/stats", response_model=ReminderStatsDTO)
async def reminder_stats(
    admin: Annotated[AuthenticatedUser, Depends(require_admin)],
    days: int = Query(30, ge=1, le=365),
    use_case: ReminderReportUseCase = Depends(get_report_service),
) -> ReminderStatsDTO:
    return await use_case.stats(days)


@router.get("/log/certifications/{instance_id}", response_model=list[ReminderRecordDTO])
async def log_for_certification(
    instance_id: UUID,
    admin: Annotated[AuthenticatedUser, Depends(require_admin)],
    use_case: ReminderReportUseCase = Depends(get_report_service),
) -> list[ReminderRecordDTO]:
    return await use_case.log_for_instance(instance_id)


@router.get("/log/users/{user_id}", response_model=list[ReminderRecordDTO])
async def log_for_user(
    user_id: str,
    admin: Annotated[AuthenticatedUser, Depends(require_admin)],
    limit: int = Query(50, ge=1, le=500),
    use_case: ReminderReportUseCase = Depends(get_report_service),
) -> list[ReminderRecordDTO]:
    return await use_case.log_for_user(user_id, limit)
