import asyncio
import signal

import structlog

from ..config import settings
from ..infrastructure.adapters import AdapterProvider
from ..infrastructure.clock import SystemClock
from ..infrastructure.logging import configure_logging
from ..infrastructure.notifications import create_dispatcher
from ..infrastructure.persistence import Database, create_seeded_store
from .runner import ReminderJobRunner

configure_logging(f"{settings.service_name}-scheduler", debug=settings.debug)

logger = structlog.get_logger()


def build_provider() -> AdapterProvider:
    if settings.use_in_memory_store:
        return AdapterProvider(store=create_seeded_store())
    return AdapterProvider(database=Database(settings.database_url))


async def main() -> None:
    """Main entry point for the reminder scheduler service."""
    logger.info("Starting scheduler", service=settings.service_name)

    provider = build_provider()
    runner = ReminderJobRunner(
        provider=provider,
        dispatcher=create_dispatcher(settings),
        clock=SystemClock(),
        settings=settings,
    )

    stop_event = asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGTERM, signal.SIGINT):
        loop.add_signal_handler(sig, stop_event.set)

    runner.start()
    try:
        await stop_event.wait()
    except asyncio.CancelledError:
        pass
    finally:
        runner.stop()
        await provider.close()
        logger.info("Scheduler shutdown complete")


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
