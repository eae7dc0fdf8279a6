"""Domain error taxonomy.

Lifecycle errors (NotFound, DuplicateClaim, InvalidTransition) gate user actions and
carry a specific message. DispatchFailure and PersistenceFailure are operational.
"""


class CertTrackerError(Exception):
    """Base class for all certification tracking errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFound(CertTrackerError):
    """A referenced definition, instance, submission or bounty does not exist."""

    def __init__(self, kind: str, identifier: object) -> None:
        super().__init__(f"{kind} not found: {identifier}")
        self.kind = kind
        self.identifier = identifier


class DuplicateClaim(CertTrackerError):
    """The user already holds a live claim on the certification."""

    def __init__(self, user_id: str, master_definition_id: str) -> None:
        super().__init__(
            f"User {user_id} already has certification {master_definition_id} "
            "(active, expiring soon or pending approval)"
        )
        self.user_id = user_id
        self.master_definition_id = master_definition_id


class InvalidTransition(CertTrackerError):
    """A state change not permitted from the current status was requested."""

    def __init__(self, current: object, target: object, reason: str | None = None) -> None:
        message = f"Cannot transition certification from {current} to {target}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.current = current
        self.target = target


class DispatchFailure(CertTrackerError):
    """The notification dispatcher could not deliver a reminder."""


class PersistenceFailure(CertTrackerError):
    """A storage read or write failed."""


class BonusNotClaimable(CertTrackerError):
    """The bonus of an instance is not eligible, already claimed or past its window."""


class BountyClaimRejected(CertTrackerError):
    """A bounty cannot be claimed (inactive, past deadline, already or fully claimed)."""

    def __init__(self, bounty_id: str, reason: str) -> None:
        super().__init__(f"Bounty {bounty_id} cannot be claimed: {reason}")
        self.bounty_id = bounty_id
        self.reason = reason
