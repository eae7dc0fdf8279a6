from enum import Enum


class CertificationLevel(str, Enum):
    """Seniority level of a catalog certification."""

    ENTRY = "ENTRY"
    ASSOCIATE = "ASSOCIATE"
    PROFESSIONAL = "PROFESSIONAL"
    EXPERT = "EXPERT"
