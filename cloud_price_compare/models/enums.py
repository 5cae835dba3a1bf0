"""
Enum definitions for the cloud price comparison service.
"""
from enum import Enum


class StrEnum(str, Enum):
    """String Enum base class to allow for string comparison."""

    def __str__(self) -> str:
        return self.value


class Provider(StrEnum):
    """Supported cloud providers."""
    AWS = "aws"
    AZURE = "azure"


class PriceCategory(StrEnum):
    """Categories of the unified price catalog."""
    COMPUTE = "compute"
    STORAGE = "storage"
    TRANSFER = "transfer"


class MatchMode(StrEnum):
    """How an attribute filter compares against a raw document field."""
    EXACT = "exact"
    CONTAINS = "contains"  # case-insensitive substring


class ErrorSource(StrEnum):
    """Sources of errors in the application."""
    GENERAL = "general"
