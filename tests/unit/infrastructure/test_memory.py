from datetime import timedelta

import pytest

from certtracker.domain.value_objects import CertificationStatus
from certtracker.infrastructure.adapters import AdapterProvider
from certtracker.infrastructure.clock import FrozenClock
from certtracker.infrastructure.persistence import create_seeded_store

from ...factories import NOW, make_instance


class TestInMemoryUnitOfWork:
    @pytest.mark.asyncio
    async def test_rollback_on_error_restores_store(self, adapters, store):
        instance = make_instance()

        with pytest.raises(RuntimeError):
            async with adapters.unit_of_work:
                await adapters.certifications.save(instance)
                raise RuntimeError("boom")

        assert instance.id not in store.instances

    @pytest.mark.asyncio
    async def test_commit_keeps_changes(self, adapters, store):
        instance = make_instance()

        async with adapters.unit_of_work:
            await adapters.certifications.save(instance)
            await adapters.unit_of_work.commit()

        assert instance.id in store.instances

    @pytest.mark.asyncio
    async def test_entities_are_copied(self, adapters):
        instance = make_instance()
        await adapters.certifications.save(instance)

        instance.status = CertificationStatus.INACTIVE
        loaded = await adapters.certifications.get(instance.id)

        assert loaded.status == CertificationStatus.ACTIVE


class TestAdapterProvider:
    def test_requires_exactly_one_backend(self):
        with pytest.raises(ValueError):
            AdapterProvider()

    @pytest.mark.asyncio
    async def test_in_memory_bundle_shares_store(self):
        store = create_seeded_store()
        provider = AdapterProvider(store=store)

        async with provider.open() as first, provider.open() as second:
            instance = make_instance()
            await first.certifications.save(instance)
            assert await second.certifications.get(instance.id) is not None

        assert provider.database is None
        assert len(await second.catalog.list_all()) == 8


class TestFrozenClock:
    def test_advance_and_today(self):
        clock = FrozenClock(NOW.replace(tzinfo=None))

        clock.advance(days=2, hours=20)

        assert clock.now() == NOW + timedelta(days=2, hours=20)
        assert clock.today() == (NOW + timedelta(days=3)).date()
