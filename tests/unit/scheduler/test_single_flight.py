import asyncio

import pytest

from certtracker.scheduler import SingleFlight


class TestSingleFlight:
    @pytest.mark.asyncio
    async def test_overlapping_call_is_skipped(self):
        flight = SingleFlight("job")
        release = asyncio.Event()

        async def work():
            await release.wait()
            return "done"

        first = asyncio.create_task(flight.run(work))
        await asyncio.sleep(0)
        assert flight.running

        assert await flight.run(work) is None

        release.set()
        assert await first == "done"
        assert not flight.running

    @pytest.mark.asyncio
    async def test_lock_released_after_error(self):
        flight = SingleFlight("job")

        async def fail():
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError):
            await flight.run(fail)

        assert not flight.running
