from datetime import timedelta
from unittest.mock import AsyncMock, patch

import pytest

from certtracker.application.services import ReminderService
from certtracker.domain.entities import Recipient
from certtracker.domain.errors import PersistenceFailure
from certtracker.domain.value_objects import CertificationStatus, UrgencyTier

from ...factories import ALICE, BOB, TODAY, RecordingDispatcher, make_instance

CAROL = "user-carol"


def build_service(adapters, clock, dispatcher, **kwargs) -> ReminderService:
    return ReminderService(
        repository=adapters.certifications,
        catalog=adapters.catalog,
        users=adapters.users,
        ledger=adapters.ledger,
        dispatcher=dispatcher,
        unit_of_work=adapters.unit_of_work,
        clock=clock,
        **kwargs,
    )


def add(store, instance):
    store.instances[instance.id] = instance
    return instance


class TestReminderPass:
    @pytest.mark.asyncio
    async def test_critical_reminder_sent_and_status_updated(self, adapters, store, clock):
        instance = add(store, make_instance(expiration_date=TODAY + timedelta(days=5)))
        dispatcher = RecordingDispatcher()

        result = await build_service(adapters, clock, dispatcher).execute()

        assert (result.sent, result.skipped, result.failed) == (1, 0, 0)
        payload = dispatcher.sent[0]
        assert payload.urgency_tier == UrgencyTier.CRITICAL
        assert payload.days_until_expiration == 5
        assert payload.recipient_email == "alice@example.com"
        assert store.instances[instance.id].status == CertificationStatus.EXPIRING_SOON
        [record] = store.reminders
        assert record.delivered
        assert record.tier == UrgencyTier.CRITICAL
        assert record.message_summary.startswith("critical reminder for")

    @pytest.mark.asyncio
    async def test_cooldown_then_next_tier(self, adapters, store, clock):
        add(store, make_instance(expiration_date=TODAY + timedelta(days=5)))
        dispatcher = RecordingDispatcher()
        service = build_service(adapters, clock, dispatcher)
        await service.execute()

        clock.advance(days=3)
        again = await service.execute()
        assert (again.sent, again.skipped) == (0, 1)

        clock.advance(days=5)
        expired = await service.execute()
        assert expired.sent == 1
        assert dispatcher.sent[-1].urgency_tier == UrgencyTier.EXPIRED

    @pytest.mark.asyncio
    async def test_skips(self, adapters, store, clock):
        add(store, make_instance(expiration_date=TODAY + timedelta(days=400)))
        add(store, make_instance(expiration_date=TODAY + timedelta(days=5), user_id=BOB))
        add(store, make_instance(expiration_date=TODAY + timedelta(days=5), user_id="ghost"))
        add(store, make_instance())
        add(store, make_instance(
            expiration_date=TODAY + timedelta(days=5), master_definition_id="retired"
        ))
        add(store, make_instance(
            CertificationStatus.PENDING_APPROVAL, expiration_date=TODAY + timedelta(days=5)
        ))
        dispatcher = RecordingDispatcher()

        result = await build_service(adapters, clock, dispatcher).execute()

        assert (result.sent, result.skipped, result.failed) == (0, 5, 0)
        assert dispatcher.sent == []
        assert store.reminders == []

    @pytest.mark.asyncio
    async def test_failed_dispatch_is_recorded_without_status_change(
        self, adapters, store, clock
    ):
        instance = add(store, make_instance(expiration_date=TODAY + timedelta(days=5)))

        result = await build_service(
            adapters, clock, RecordingDispatcher(delivered=False)
        ).execute()

        assert result.failed == 1
        [record] = store.reminders
        assert not record.delivered
        assert record.message_summary.startswith("Failed to send: ")
        assert store.instances[instance.id].status == CertificationStatus.ACTIVE

    @pytest.mark.asyncio
    async def test_failed_dispatch_does_not_start_cooldown(self, adapters, store, clock):
        add(store, make_instance(expiration_date=TODAY + timedelta(days=5)))
        await build_service(adapters, clock, RecordingDispatcher(delivered=False)).execute()

        retry = await build_service(adapters, clock, RecordingDispatcher()).execute()

        assert retry.sent == 1

    @pytest.mark.asyncio
    async def test_timeout_and_errors_do_not_block_others(self, adapters, store, clock):
        add(store, make_instance(expiration_date=TODAY + timedelta(days=5)))
        add(store, make_instance(
            expiration_date=TODAY + timedelta(days=20), master_definition_id="az-500"
        ))

        slow = await build_service(
            adapters, clock, RecordingDispatcher(delay=1.0), dispatch_timeout_seconds=0.01
        ).execute()
        broken = await build_service(
            adapters, clock, RecordingDispatcher(error=RuntimeError("smtp down"))
        ).execute()

        assert (slow.sent, slow.failed) == (0, 2)
        assert (broken.sent, broken.failed) == (0, 2)
        assert len(store.reminders) == 4

    @pytest.mark.asyncio
    async def test_initial_fetch_failure_aborts(self, adapters, clock):
        service = build_service(adapters, clock, RecordingDispatcher())

        with patch.object(
            adapters.certifications,
            "list_by_statuses",
            AsyncMock(side_effect=PersistenceFailure("db down")),
        ):
            with pytest.raises(PersistenceFailure):
                await service.execute()

    @pytest.mark.asyncio
    async def test_consecutive_persistence_failures_abort(self, adapters, store, clock):
        for days in (5, 6, 20):
            add(store, make_instance(expiration_date=TODAY + timedelta(days=days),
                                     master_definition_id=f"cert-{days}"))
            store.definitions[f"cert-{days}"] = store.definitions["aws-sap"]
        service = build_service(
            adapters, clock, RecordingDispatcher(), max_consecutive_persistence_failures=2
        )

        with patch.object(
            adapters.ledger, "append", AsyncMock(side_effect=PersistenceFailure("disk full"))
        ):
            with pytest.raises(PersistenceFailure, match="2 consecutive"):
                await service.execute()

    @pytest.mark.asyncio
    async def test_single_persistence_failure_is_skipped(self, adapters, store, clock):
        add(store, make_instance(expiration_date=TODAY + timedelta(days=5)))
        add(store, make_instance(
            expiration_date=TODAY + timedelta(days=20), master_definition_id="az-500"
        ))
        real_append = adapters.ledger.append
        calls = {"n": 0}

        async def flaky_append(record):
            calls["n"] += 1
            if calls["n"] == 1:
                raise PersistenceFailure("transient")
            await real_append(record)

        with patch.object(adapters.ledger, "append", flaky_append):
            result = await build_service(adapters, clock, RecordingDispatcher()).execute()

        assert (result.sent, result.failed) == (1, 1)
        assert len(store.reminders) == 1

    @pytest.mark.asyncio
    async def test_unexpected_error_for_one_user_does_not_stop_pass(self, adapters, store, clock):
        store.recipients[CAROL] = Recipient(CAROL, "carol@example.com", "Carol", "White")
        add(store, make_instance(expiration_date=TODAY + timedelta(days=5)))
        healthy = add(
            store, make_instance(expiration_date=TODAY + timedelta(days=5), user_id=CAROL)
        )
        real_get_recipient = adapters.users.get_recipient

        async def corrupt_row_for_alice(user_id):
            if user_id == ALICE:
                raise RuntimeError("corrupt user row")
            return await real_get_recipient(user_id)

        dispatcher = RecordingDispatcher()
        with patch.object(adapters.users, "get_recipient", corrupt_row_for_alice):
            result = await build_service(adapters, clock, dispatcher).execute()

        assert (result.sent, result.failed) == (1, 1)
        assert [p.instance_id for p in dispatcher.sent] == [healthy.id]

    @pytest.mark.asyncio
    async def test_unexpected_ledger_error_is_skipped(self, adapters, store, clock):
        add(store, make_instance(expiration_date=TODAY + timedelta(days=5)))
        add(store, make_instance(
            expiration_date=TODAY + timedelta(days=20), master_definition_id="az-500"
        ))
        real_append = adapters.ledger.append
        calls = {"n": 0}

        async def bad_row_once(record):
            calls["n"] += 1
            if calls["n"] == 1:
                raise ValueError("bad ledger row")
            await real_append(record)

        with patch.object(adapters.ledger, "append", bad_row_once):
            result = await build_service(adapters, clock, RecordingDispatcher()).execute()

        assert (result.sent, result.failed) == (1, 1)

    @pytest.mark.asyncio
    async def test_failed_lookup_rolls_back_before_next_instance(self, adapters, store, clock):
        add(store, make_instance(expiration_date=TODAY + timedelta(days=5)))
        add(store, make_instance(
            expiration_date=TODAY + timedelta(days=20), master_definition_id="az-500"
        ))
        real_lookup = adapters.ledger.last_delivered_at
        calls = {"n": 0}

        async def flaky_lookup(instance_id, tier):
            calls["n"] += 1
            if calls["n"] == 1:
                raise PersistenceFailure("connection reset")
            return await real_lookup(instance_id, tier)

        rollback = AsyncMock()
        with (
            patch.object(adapters.ledger, "last_delivered_at", flaky_lookup),
            patch.object(adapters.unit_of_work, "rollback", rollback),
        ):
            result = await build_service(adapters, clock, RecordingDispatcher()).execute()

        assert rollback.await_count == 1
        assert (result.sent, result.failed) == (1, 1)


class TestReminderPassCounts:
    @pytest.mark.asyncio
    async def test_each_candidate_counted_once(self, adapters, store, clock):
        add(store, make_instance(expiration_date=TODAY + timedelta(days=5)))
        add(store, make_instance(expiration_date=TODAY + timedelta(days=300)))
        add(store, make_instance(expiration_date=TODAY + timedelta(days=5), user_id=BOB))

        result = await build_service(adapters, clock, RecordingDispatcher()).execute()

        assert result.sent + result.skipped + result.failed == 3
        assert result.sent == 1
        assert ALICE in {r.user_id for r in store.reminders}
