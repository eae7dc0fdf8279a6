from .competency import (
    CompetencySummary,
    compute_competency_scores,
    compute_competency_tier,
    compute_total_points,
    summarize_competency,
)
from .dates import add_months, compute_expiration
from .lifecycle import (
    EXPIRING_SOON_WINDOW_DAYS,
    ApprovalOutcome,
    StatusTransition,
    SubmissionData,
    build_pending_submission,
    create_from_assignment,
    find_held_assignment,
    decide_approval,
    determine_bonus_eligibility,
    list_expiring,
    submit_for_approval,
    sweep_statuses,
    validate_assignment,
)
from .reminder_policy import (
    DEFAULT_COOLDOWN_DAYS,
    RENEWAL_URLS,
    build_payload,
    days_until,
    derive_schedule,
    find_applicable_tier,
    renewal_url_for,
    should_fire,
)

__all__ = [
    "DEFAULT_COOLDOWN_DAYS",
    "EXPIRING_SOON_WINDOW_DAYS",
    "RENEWAL_URLS",
    "ApprovalOutcome",
    "CompetencySummary",
    "StatusTransition",
    "SubmissionData",
    "add_months",
    "build_payload",
    "build_pending_submission",
    "compute_competency_scores",
    "compute_competency_tier",
    "compute_expiration",
    "compute_total_points",
    "create_from_assignment",
    "find_held_assignment",
    "days_until",
    "decide_approval",
    "derive_schedule",
    "determine_bonus_eligibility",
    "find_applicable_tier",
    "list_expiring",
    "renewal_url_for",
    "should_fire",
    "submit_for_approval",
    "summarize_competency",
    "sweep_statuses",
    "validate_assignment",
]
