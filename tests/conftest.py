import pytest

from certtracker.domain.entities import MasterCertificationDefinition, Recipient
from certtracker.domain.value_objects import CertificationLevel
from certtracker.infrastructure.adapters import in_memory_adapters
from certtracker.infrastructure.clock import FrozenClock
from certtracker.infrastructure.persistence import create_seeded_store

from .factories import ALICE, BOB, NOW


@pytest.fixture
def clock():
    return FrozenClock(NOW)


@pytest.fixture
def store():
    """Seeded catalog plus two recipients; Bob has e-mail alerts switched off."""
    s = create_seeded_store()
    s.recipients[ALICE] = Recipient(ALICE, "alice@example.com", "Alice", "Smith")
    s.recipients[BOB] = Recipient(BOB, "bob@example.com", "Bob", "Jones", email_enabled=False)
    return s


@pytest.fixture
def adapters(store):
    return in_memory_adapters(store)


@pytest.fixture
def aws_sap():
    return MasterCertificationDefinition(
        id="aws-sap",
        full_name="AWS Solutions Architect Professional",
        short_name="SA Pro",
        version="SAP-C02",
        vendor="AWS",
        level=CertificationLevel.PROFESSIONAL,
        points_value=30,
        validity_months=36,
    )


@pytest.fixture
def az_104():
    return MasterCertificationDefinition(
        id="az-104",
        full_name="Azure Administrator Associate",
        short_name="AZ-104",
        version="AZ-104",
        vendor="Microsoft",
        level=CertificationLevel.ASSOCIATE,
        points_value=15,
        validity_months=12,
    )
