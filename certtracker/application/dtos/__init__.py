from .approval_dto import (
    ApprovalDecisionDTO,
    ApprovalHistoryDTO,
    ApprovalResultDTO,
    PendingSubmissionDTO,
)
from .bounty_dto import BountyClaimDTO, BountyDTO, CreateBountyDTO
from .certification_dto import (
    AssignCertificationDTO,
    AssignmentDTO,
    CertificationResponseDTO,
    CompetencyDTO,
    MasterCertificationDTO,
    RenewCertificationDTO,
    SubmitCertificationDTO,
)
from .reminder_dto import (
    JobInfoDTO,
    JobStatusDTO,
    ReminderRecordDTO,
    ReminderRunResultDTO,
    ReminderStatsDTO,
    StatusSweepResultDTO,
)

__all__ = [
    "ApprovalDecisionDTO",
    "ApprovalHistoryDTO",
    "ApprovalResultDTO",
    "AssignCertificationDTO",
    "AssignmentDTO",
    "BountyClaimDTO",
    "BountyDTO",
    "CertificationResponseDTO",
    "CompetencyDTO",
    "CreateBountyDTO",
    "JobInfoDTO",
    "JobStatusDTO",
    "MasterCertificationDTO",
    "PendingSubmissionDTO",
    "ReminderRecordDTO",
    "ReminderRunResultDTO",
    "ReminderStatsDTO",
    "RenewCertificationDTO",
    "StatusSweepResultDTO",
    "SubmitCertificationDTO",
]
