from dataclasses import dataclass, field
from datetime import UTC, date, datetime

from ..value_objects import CertificationLevel


@dataclass
class MasterCertificationDefinition:
    """Catalog entry describing a certification type.

    Never deleted, only deactivated. An inactive definition cannot back new
    instances but existing instances referencing it stay valid.
    """

    id: str
    full_name: str
    short_name: str
    version: str
    vendor: str
    level: CertificationLevel
    points_value: int
    validity_months: int
    description: str = ""
    is_active: bool = True
    date_introduced: date | None = None
    date_expired: date | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def __post_init__(self) -> None:
        if self.points_value <= 0:
            raise ValueError("Points value must be a positive integer")
        if self.validity_months <= 0:
            raise ValueError("Validity period must be a positive number of months")

    @property
    def display_name(self) -> str:
        if self.version and self.version != self.short_name:
            return f"{self.full_name} ({self.version})"
        return self.full_name

    def deactivate(self, now: datetime | None = None) -> None:
        now = now or datetime.now(UTC)
        self.is_active = False
        if self.date_expired is None:
            self.date_expired = now.date()
        self.updated_at = now

    def matches(self, name: str, vendor: str) -> bool:
        """Case-insensitive match on a name fragment and exact vendor."""
        return (
            name.lower() in self.full_name.lower()
            and vendor.lower() == self.vendor.lower()
        )
