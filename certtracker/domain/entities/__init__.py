from .approval import (
    ApprovalAction,
    ApprovalDecision,
    ApprovalHistoryEntry,
    PendingSubmission,
)
from .bounty import Bounty, BountyClaim, BountyClaimStatus, BountyPriority, BountyStatus
from .master_certification import MasterCertificationDefinition
from .reminder import (
    NotificationChannel,
    Recipient,
    ReminderPayload,
    ReminderRecord,
    ReminderStats,
)
from .user_certification import (
    AssignmentMetadata,
    UserCertificationInstance,
    generate_assignment_id,
)

__all__ = [
    "ApprovalAction",
    "ApprovalDecision",
    "ApprovalHistoryEntry",
    "AssignmentMetadata",
    "Bounty",
    "BountyClaim",
    "BountyClaimStatus",
    "BountyPriority",
    "BountyStatus",
    "MasterCertificationDefinition",
    "NotificationChannel",
    "PendingSubmission",
    "Recipient",
    "ReminderPayload",
    "ReminderRecord",
    "ReminderStats",
    "UserCertificationInstance",
    "generate_assignment_id",
]
