from datetime import date, timedelta
from decimal import Decimal

import pytest
import pytest_asyncio
from sqlalchemy.pool import StaticPool

from certtracker.application.dtos import ApprovalDecisionDTO, SubmitCertificationDTO
from certtracker.application.services import DecideApprovalService, SubmitCertificationService
from certtracker.domain.entities import (
    ApprovalDecision,
    AssignmentMetadata,
    Bounty,
    BountyStatus,
    NotificationChannel,
    ReminderRecord,
)
from certtracker.domain.errors import PersistenceFailure
from certtracker.domain.value_objects import CertificationStatus, UrgencyTier
from certtracker.infrastructure.adapters import AdapterProvider
from certtracker.infrastructure.persistence import Database, seed_catalog
from certtracker.infrastructure.persistence.models import UserModel

from ...factories import ALICE, NOW, TODAY, make_instance

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def database():
    db = Database(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await db.create_tables()
    yield db
    await db.close()


@pytest_asyncio.fixture
async def provider(database):
    provider = AdapterProvider(database=database)
    async with provider.open() as adapters:
        for definition in seed_catalog():
            await adapters.catalog.save(definition)
        await adapters.unit_of_work.commit()
    return provider


class TestCertificationRepository:
    @pytest.mark.asyncio
    async def test_round_trip_keeps_assignment_and_timestamps(self, provider):
        instance = make_instance(
            CertificationStatus.ADMIN_ASSIGNED,
            bonus_eligible=True,
            bonus_amount=Decimal("250.00"),
        )
        instance.assignment = AssignmentMetadata("assignment-abc", "admin-1", TODAY)

        async with provider.open() as adapters:
            await adapters.certifications.save(instance)
            await adapters.unit_of_work.commit()

        async with provider.open() as adapters:
            loaded = await adapters.certifications.get(instance.id)

        assert loaded.assignment_id == "assignment-abc"
        assert loaded.bonus_amount == Decimal("250.00")
        assert loaded.created_at == NOW
        assert loaded.created_at.tzinfo is not None

    @pytest.mark.asyncio
    async def test_list_by_statuses_and_delete(self, provider):
        active = make_instance(expiration_date=TODAY + timedelta(days=10))
        rejected = make_instance(CertificationStatus.REJECTED)

        async with provider.open() as adapters:
            for i in (active, rejected):
                await adapters.certifications.save(i)
            await adapters.unit_of_work.commit()

            live = await adapters.certifications.list_by_statuses(
                [CertificationStatus.ACTIVE, CertificationStatus.EXPIRING_SOON]
            )
            assert [i.id for i in live] == [active.id]

            assert await adapters.certifications.delete(rejected.id)
            assert not await adapters.certifications.delete(rejected.id)
            await adapters.unit_of_work.commit()

            assert len(await adapters.certifications.list_for_user(ALICE)) == 1


class TestCatalogRepository:
    @pytest.mark.asyncio
    async def test_active_only(self, provider):
        async with provider.open() as adapters:
            definition = await adapters.catalog.get("ec-ceh")
            definition.deactivate(NOW)
            await adapters.catalog.save(definition)
            await adapters.unit_of_work.commit()

            everything = await adapters.catalog.list_all()
            active = await adapters.catalog.list_all(active_only=True)

        assert len(everything) == 8
        assert "ec-ceh" not in {d.id for d in active}


class TestReminderLedger:
    @pytest.mark.asyncio
    async def test_last_delivered_ignores_failures_and_other_tiers(self, provider):
        instance = make_instance(expiration_date=TODAY + timedelta(days=5))
        records = [
            ReminderRecord.create(
                instance.id, ALICE, UrgencyTier.CRITICAL, NotificationChannel.LOG, True,
                sent_at=NOW - timedelta(days=2),
            ),
            ReminderRecord.create(
                instance.id, ALICE, UrgencyTier.CRITICAL, NotificationChannel.LOG, False,
                sent_at=NOW - timedelta(days=1),
            ),
            ReminderRecord.create(
                instance.id, ALICE, UrgencyTier.URGENT, NotificationChannel.LOG, True,
                sent_at=NOW,
            ),
        ]

        async with provider.open() as adapters:
            for record in records:
                await adapters.ledger.append(record)
            await adapters.unit_of_work.commit()

            last = await adapters.ledger.last_delivered_at(instance.id, UrgencyTier.CRITICAL)
            never = await adapters.ledger.last_delivered_at(instance.id, UrgencyTier.EXPIRED)
            since = await adapters.ledger.list_since(NOW - timedelta(days=1, hours=1))

        assert last == NOW - timedelta(days=2)
        assert never is None
        assert len(since) == 2


class TestUserDirectoryAndBounties:
    @pytest.mark.asyncio
    async def test_recipient_lookup(self, database, provider):
        async with database.session() as session:
            session.add(UserModel(user_id=ALICE, email="alice@example.com",
                                  first_name="Alice", last_name="Smith", email_enabled=True))
            await session.commit()

        async with provider.open() as adapters:
            recipient = await adapters.users.get_recipient(ALICE)
            missing = await adapters.users.get_recipient("nobody")

        assert recipient.full_name == "Alice Smith"
        assert missing is None

    @pytest.mark.asyncio
    async def test_bounty_claims(self, provider):
        bounty = Bounty.create(
            title="Drive", description="", certification_ids=["az-500"],
            bounty_amount=Decimal("100"), base_bonus_amount=Decimal("0"),
            deadline=TODAY + timedelta(days=5), max_claims=2, created_by="admin-1",
            today=TODAY,
        )
        claim = bounty.claim(ALICE, NOW)

        async with provider.open() as adapters:
            await adapters.bounties.save(bounty)
            await adapters.bounties.add_claim(claim)
            await adapters.unit_of_work.commit()

        async with provider.open() as adapters:
            loaded = await adapters.bounties.get(bounty.id)
            active = await adapters.bounties.list_all(BountyStatus.ACTIVE)
            claims = await adapters.bounties.list_claims_for_user(ALICE)

        assert loaded.claimed_by == [ALICE]
        assert loaded.certification_ids == ["az-500"]
        assert [b.id for b in active] == [bounty.id]
        assert [c.id for c in claims] == [claim.id]


class TestApprovalOverSql:
    @pytest.mark.asyncio
    async def test_submit_and_approve(self, provider, clock):
        async with provider.open() as adapters:
            submitted = await SubmitCertificationService(
                adapters.certifications, adapters.catalog, adapters.pending,
                adapters.unit_of_work, clock,
            ).execute(
                SubmitCertificationDTO(
                    master_definition_id="gcp-pca",
                    obtained_date=date(2024, 3, 31),
                    user_id=ALICE,
                )
            )

        async with provider.open() as adapters:
            [pending] = await adapters.pending.list_all()
            result = await DecideApprovalService(
                adapters.certifications, adapters.catalog, adapters.pending,
                adapters.history, adapters.unit_of_work, clock,
            ).execute(
                pending.id,
                ApprovalDecisionDTO(decision=ApprovalDecision.APPROVE, admin_id="admin-1"),
            )

        async with provider.open() as adapters:
            assert await adapters.pending.list_all() == []
            [entry] = await adapters.history.list_recent()
            stored = await adapters.certifications.get(submitted.id)

        assert result.certification.id == submitted.id
        assert stored.status == CertificationStatus.ACTIVE
        assert stored.expiration_date == date(2026, 3, 31)
        assert entry.instance_id == submitted.id


class TestErrorTranslation:
    @pytest.mark.asyncio
    async def test_sqlalchemy_errors_become_persistence_failures(self):
        broken = Database("sqlite+aiosqlite:////nonexistent-dir/certtracker.db")

        async with AdapterProvider(database=broken).open() as adapters:
            with pytest.raises(PersistenceFailure):
                await adapters.certifications.list_for_user(ALICE)

        await broken.close()
