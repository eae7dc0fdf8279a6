from .approval_services import ApprovalQueryService, DecideApprovalService
from .assign_certification_service import AssignCertificationService
from .bounty_services import BountyService, ClaimBountyService
from .catalog_service import CatalogService
from .certification_services import CertificationQueryService, ManageCertificationService
from .reminder_report_service import ReminderReportService
from .reminder_service import ReminderService
from .status_sweep_service import StatusSweepService
from .submit_certification_service import SubmitCertificationService

__all__ = [
    "ApprovalQueryService",
    "AssignCertificationService",
    "BountyService",
    "CatalogService",
    "CertificationQueryService",
    "ClaimBountyService",
    "DecideApprovalService",
    "ManageCertificationService",
    "ReminderReportService",
    "ReminderService",
    "StatusSweepService",
    "SubmitCertificationService",
]
