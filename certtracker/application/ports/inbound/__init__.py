from .approval_use_cases import ApprovalQueryUseCase, DecideApprovalUseCase
from .bounty_use_cases import ClaimBountyUseCase, ManageBountiesUseCase
from .catalog_use_cases import CatalogQueryUseCase
from .certification_use_cases import (
    AssignCertificationUseCase,
    CertificationQueryUseCase,
    ManageCertificationUseCase,
    SubmitCertificationUseCase,
)
from .reminder_use_cases import (
    ProcessDailyRemindersUseCase,
    ReminderReportUseCase,
    SweepStatusesUseCase,
)

__all__ = [
    "ApprovalQueryUseCase",
    "AssignCertificationUseCase",
    "CatalogQueryUseCase",
    "CertificationQueryUseCase",
    "ClaimBountyUseCase",
    "DecideApprovalUseCase",
    "ManageBountiesUseCase",
    "ManageCertificationUseCase",
    "ProcessDailyRemindersUseCase",
    "ReminderReportUseCase",
    "SubmitCertificationUseCase",
    "SweepStatusesUseCase",
]
