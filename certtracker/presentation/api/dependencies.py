from collections.abc import AsyncGenerator

from fastapi import Depends

from ...application.ports.outbound import Clock, NotificationDispatcher
from ...application.services import (
    ApprovalQueryService,
    AssignCertificationService,
    BountyService,
    CatalogService,
    CertificationQueryService,
    ClaimBountyService,
    DecideApprovalService,
    ManageCertificationService,
    ReminderReportService,
    SubmitCertificationService,
)
from ...config import settings
from ...infrastructure.adapters import AdapterProvider, Adapters
from ...infrastructure.clock import SystemClock
from ...infrastructure.notifications import create_dispatcher
from ...infrastructure.persistence import Database, create_seeded_store
from ...scheduler import ReminderJobRunner

# Process-wide singletons
_provider: AdapterProvider | None = None
_clock: Clock | None = None
_dispatcher: NotificationDispatcher | None = None
_runner: ReminderJobRunner | None = None


def get_provider() -> AdapterProvider:
    global _provider
    if _provider is None:
        if settings.use_in_memory_store:
            _provider = AdapterProvider(store=create_seeded_store())
        else:
            _provider = AdapterProvider(database=Database(settings.database_url))
    return _provider


def get_clock() -> Clock:
    global _clock
    if _clock is None:
        _clock = SystemClock()
    return _clock


def get_dispatcher() -> NotificationDispatcher:
    global _dispatcher
    if _dispatcher is None:
        _dispatcher = create_dispatcher(settings)
    return _dispatcher


def get_runner() -> ReminderJobRunner:
    global _runner
    if _runner is None:
        _runner = ReminderJobRunner(
            provider=get_provider(),
            dispatcher=get_dispatcher(),
            clock=get_clock(),
            settings=settings,
        )
    return _runner


async def get_adapters(
    provider: AdapterProvider = Depends(get_provider),
) -> AsyncGenerator[Adapters, None]:
    async with provider.open() as adapters:
        yield adapters


def get_catalog_service(adapters: Adapters = Depends(get_adapters)) -> CatalogService:
    return CatalogService(adapters.catalog)


def get_submit_service(
    adapters: Adapters = Depends(get_adapters), clock: Clock = Depends(get_clock)
) -> SubmitCertificationService:
    return SubmitCertificationService(
        adapters.certifications, adapters.catalog, adapters.pending, adapters.unit_of_work, clock
    )


def get_assign_service(
    adapters: Adapters = Depends(get_adapters), clock: Clock = Depends(get_clock)
) -> AssignCertificationService:
    return AssignCertificationService(
        adapters.certifications, adapters.catalog, adapters.unit_of_work, clock
    )


def get_manage_service(
    adapters: Adapters = Depends(get_adapters), clock: Clock = Depends(get_clock)
) -> ManageCertificationService:
    return ManageCertificationService(adapters.certifications, adapters.unit_of_work, clock)


def get_query_service(
    adapters: Adapters = Depends(get_adapters), clock: Clock = Depends(get_clock)
) -> CertificationQueryService:
    return CertificationQueryService(adapters.certifications, adapters.catalog, clock)


def get_decide_service(
    adapters: Adapters = Depends(get_adapters), clock: Clock = Depends(get_clock)
) -> DecideApprovalService:
    return DecideApprovalService(
        adapters.certifications,
        adapters.catalog,
        adapters.pending,
        adapters.history,
        adapters.unit_of_work,
        clock,
    )


def get_approval_query_service(
    adapters: Adapters = Depends(get_adapters),
) -> ApprovalQueryService:
    return ApprovalQueryService(adapters.pending, adapters.history)


def get_report_service(
    adapters: Adapters = Depends(get_adapters), clock: Clock = Depends(get_clock)
) -> ReminderReportService:
    return ReminderReportService(adapters.ledger, clock)


def get_bounty_service(
    adapters: Adapters = Depends(get_adapters), clock: Clock = Depends(get_clock)
) -> BountyService:
    return BountyService(adapters.bounties, adapters.unit_of_work, clock)


def get_claim_bounty_service(
    adapters: Adapters = Depends(get_adapters), clock: Clock = Depends(get_clock)
) -> ClaimBountyService:
    return ClaimBountyService(adapters.bounties, adapters.unit_of_work, clock)
