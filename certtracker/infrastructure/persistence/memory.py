"""
In-memory persistence adapters.

Used for development (``USE_IN_MEMORY_STORE=true``) and tests. All adapters
share one ``InMemoryStore``; entities are copied on the way in and out so
that a rollback restores exactly what was committed.
"""

import copy
from collections.abc import Iterable
from datetime import UTC, date, datetime
from types import TracebackType
from uuid import UUID

from ...application.ports.outbound import (
    ApprovalHistoryLog,
    BountyRepository,
    CatalogRepository,
    CertificationRepository,
    PendingSubmissionQueue,
    ReminderLedger,
    UnitOfWork,
    UserDirectory,
)
from ...domain.entities import (
    ApprovalHistoryEntry,
    Bounty,
    BountyClaim,
    BountyStatus,
    MasterCertificationDefinition,
    PendingSubmission,
    Recipient,
    ReminderRecord,
    UserCertificationInstance,
)
from ...domain.value_objects import CertificationLevel, CertificationStatus, UrgencyTier


class InMemoryStore:
    def __init__(self) -> None:
        self.definitions: dict[str, MasterCertificationDefinition] = {}
        self.instances: dict[UUID, UserCertificationInstance] = {}
        self.pending: dict[UUID, PendingSubmission] = {}
        self.history: list[ApprovalHistoryEntry] = []
        self.reminders: list[ReminderRecord] = []
        self.recipients: dict[str, Recipient] = {}
        self.bounties: dict[str, Bounty] = {}
        self.bounty_claims: list[BountyClaim] = []

    def snapshot(self) -> dict:
        return copy.deepcopy(self.__dict__)

    def restore(self, snapshot: dict) -> None:
        self.__dict__.update(copy.deepcopy(snapshot))


class InMemoryUnitOfWork(UnitOfWork):
    """Snapshots the store on entry and restores it on rollback."""

    def __init__(self, store: InMemoryStore) -> None:
        self._store = store
        self._snapshot: dict | None = None

    async def __aenter__(self) -> "InMemoryUnitOfWork":
        self._snapshot = self._store.snapshot()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if exc_type:
            await self.rollback()
        self._snapshot = None

    async def commit(self) -> None:
        self._snapshot = self._store.snapshot()

    async def rollback(self) -> None:
        if self._snapshot is not None:
            self._store.restore(self._snapshot)


class InMemoryCertificationRepository(CertificationRepository):
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    async def get(self, instance_id: UUID) -> UserCertificationInstance | None:
        return copy.deepcopy(self._store.instances.get(instance_id))

    async def save(self, instance: UserCertificationInstance) -> None:
        self._store.instances[instance.id] = copy.deepcopy(instance)

    async def delete(self, instance_id: UUID) -> bool:
        return self._store.instances.pop(instance_id, None) is not None

    async def list_for_user(self, user_id: str) -> list[UserCertificationInstance]:
        return [
            copy.deepcopy(i) for i in self._store.instances.values() if i.user_id == user_id
        ]

    async def list_by_statuses(
        self, statuses: Iterable[CertificationStatus]
    ) -> list[UserCertificationInstance]:
        wanted = set(statuses)
        return [copy.deepcopy(i) for i in self._store.instances.values() if i.status in wanted]


class InMemoryCatalogRepository(CatalogRepository):
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    async def get(self, definition_id: str) -> MasterCertificationDefinition | None:
        return copy.deepcopy(self._store.definitions.get(definition_id))

    async def list_all(self, active_only: bool = False) -> list[MasterCertificationDefinition]:
        definitions = sorted(
            self._store.definitions.values(), key=lambda d: (d.vendor, d.full_name)
        )
        return [copy.deepcopy(d) for d in definitions if d.is_active or not active_only]

    async def save(self, definition: MasterCertificationDefinition) -> None:
        self._store.definitions[definition.id] = copy.deepcopy(definition)


class InMemoryPendingSubmissionQueue(PendingSubmissionQueue):
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    async def add(self, submission: PendingSubmission) -> None:
        self._store.pending[submission.id] = copy.deepcopy(submission)

    async def get(self, submission_id: UUID) -> PendingSubmission | None:
        return copy.deepcopy(self._store.pending.get(submission_id))

    async def remove(self, submission_id: UUID) -> bool:
        return self._store.pending.pop(submission_id, None) is not None

    async def list_all(self) -> list[PendingSubmission]:
        submissions = sorted(self._store.pending.values(), key=lambda s: s.submitted_at)
        return [copy.deepcopy(s) for s in submissions]


class InMemoryApprovalHistoryLog(ApprovalHistoryLog):
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    async def append(self, entry: ApprovalHistoryEntry) -> None:
        self._store.history.append(copy.deepcopy(entry))

    async def list_recent(self, limit: int = 100) -> list[ApprovalHistoryEntry]:
        entries = sorted(self._store.history, key=lambda e: e.processed_at, reverse=True)
        return [copy.deepcopy(e) for e in entries[:limit]]


class InMemoryReminderLedger(ReminderLedger):
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    async def append(self, record: ReminderRecord) -> None:
        self._store.reminders.append(copy.deepcopy(record))

    async def last_delivered_at(self, instance_id: UUID, tier: UrgencyTier) -> datetime | None:
        sent = [
            r.sent_at
            for r in self._store.reminders
            if r.instance_id == instance_id and r.tier == tier and r.delivered
        ]
        return max(sent, default=None)

    async def list_for_instance(self, instance_id: UUID) -> list[ReminderRecord]:
        records = [r for r in self._store.reminders if r.instance_id == instance_id]
        return [copy.deepcopy(r) for r in sorted(records, key=lambda r: r.sent_at, reverse=True)]

    async def list_for_user(self, user_id: str, limit: int = 50) -> list[ReminderRecord]:
        records = [r for r in self._store.reminders if r.user_id == user_id]
        records.sort(key=lambda r: r.sent_at, reverse=True)
        return [copy.deepcopy(r) for r in records[:limit]]

    async def list_since(self, since: datetime) -> list[ReminderRecord]:
        return [copy.deepcopy(r) for r in self._store.reminders if r.sent_at >= since]


class InMemoryUserDirectory(UserDirectory):
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    async def get_recipient(self, user_id: str) -> Recipient | None:
        return self._store.recipients.get(user_id)

    def register(self, recipient: Recipient) -> None:
        self._store.recipients[recipient.user_id] = recipient


class InMemoryBountyRepository(BountyRepository):
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    async def get(self, bounty_id: str) -> Bounty | None:
        return copy.deepcopy(self._store.bounties.get(bounty_id))

    async def save(self, bounty: Bounty) -> None:
        self._store.bounties[bounty.id] = copy.deepcopy(bounty)

    async def list_all(self, status: BountyStatus | None = None) -> list[Bounty]:
        bounties = sorted(self._store.bounties.values(), key=lambda b: b.deadline)
        return [copy.deepcopy(b) for b in bounties if status is None or b.status == status]

    async def add_claim(self, claim: BountyClaim) -> None:
        self._store.bounty_claims.append(copy.deepcopy(claim))

    async def list_claims_for_user(self, user_id: str) -> list[BountyClaim]:
        claims = [c for c in self._store.bounty_claims if c.user_id == user_id]
        claims.sort(key=lambda c: c.claimed_at, reverse=True)
        return [copy.deepcopy(c) for c in claims]


def _definition(
    id: str,
    full_name: str,
    short_name: str,
    version: str,
    vendor: str,
    level: CertificationLevel,
    points_value: int,
    validity_months: int,
    description: str,
    date_introduced: date,
) -> MasterCertificationDefinition:
    created = datetime(2024, 1, 1, tzinfo=UTC)
    return MasterCertificationDefinition(
        id=id,
        full_name=full_name,
        short_name=short_name,
        version=version,
        vendor=vendor,
        level=level,
        points_value=points_value,
        validity_months=validity_months,
        description=description,
        date_introduced=date_introduced,
        created_at=created,
        updated_at=created,
    )


def seed_catalog() -> list[MasterCertificationDefinition]:
    """Default catalog for development environments."""
    return [
        _definition(
            "aws-sap", "AWS Solutions Architect Professional", "SA Pro", "SAP-C02", "AWS",
            CertificationLevel.PROFESSIONAL, 30, 36,
            "Advanced AWS architecture and complex solutions", date(2022, 11, 15),
        ),
        _definition(
            "aws-dva", "AWS Developer Associate", "Developer", "DVA-C02", "AWS",
            CertificationLevel.ASSOCIATE, 20, 36,
            "Develop and maintain AWS applications", date(2023, 2, 28),
        ),
        _definition(
            "az-500", "Azure Security Engineer Associate", "AZ-500", "AZ-500", "Microsoft",
            CertificationLevel.ASSOCIATE, 20, 12,
            "Implement security controls and threat protection on Azure", date(2019, 3, 1),
        ),
        _definition(
            "az-104", "Azure Administrator Associate", "AZ-104", "AZ-104", "Microsoft",
            CertificationLevel.ASSOCIATE, 15, 12,
            "Implement, manage, and monitor Azure environments", date(2021, 3, 31),
        ),
        _definition(
            "gcp-pca", "Google Cloud Professional Cloud Architect", "PCA", "2023", "Google",
            CertificationLevel.PROFESSIONAL, 30, 24,
            "Design and build cloud solutions on Google Cloud", date(2017, 1, 1),
        ),
        _definition(
            "comptia-secplus", "CompTIA Security+", "Security+", "SY0-701", "CompTIA",
            CertificationLevel.ENTRY, 12, 36,
            "Entry-level cybersecurity certification covering network security, "
            "compliance, threats and vulnerabilities.", date(2002, 1, 15),
        ),
        _definition(
            "isc2-cissp", "Certified Information Systems Security Professional", "CISSP",
            "2024", "ISC2", CertificationLevel.PROFESSIONAL, 35, 36,
            "Professional-level certification for experienced security practitioners, "
            "managers and executives.", date(1989, 4, 12),
        ),
        _definition(
            "ec-ceh", "Certified Ethical Hacker", "CEH", "v12", "EC-Council",
            CertificationLevel.PROFESSIONAL, 25, 36,
            "Ethical hacking methodology and tooling", date(2003, 1, 1),
        ),
    ]


def create_seeded_store() -> InMemoryStore:
    store = InMemoryStore()
    for definition in seed_catalog():
        store.definitions[definition.id] = definition
    return store
