"""
Value types passed between the price extractors and the raw pricing store.
"""
import math
from dataclasses import dataclass, field
from typing import Any, Optional, Tuple

from cloud_price_compare.models.enums import MatchMode, PriceCategory


@dataclass(frozen=True)
class SkuQuery:
    """A single price lookup: one identifier in one region."""
    category: PriceCategory
    identifier: str
    region: str


@dataclass(frozen=True)
class ExtractedPrice:
    """
    Result of one price lookup.

    Zero, negative, infinite and non-numeric values are never reported as found;
    raw feeds use them as placeholders.
    """
    value: float = 0.0
    found: bool = False

    @classmethod
    def missing(cls) -> "ExtractedPrice":
        return cls()

    @classmethod
    def from_raw(cls, raw: Any) -> "ExtractedPrice":
        """
        Build a price from a raw leaf value.

        Args:
            raw: Number or numeric string read from a raw document

        Returns:
            A found price when raw converts to a positive float, otherwise missing
        """
        if raw is None or isinstance(raw, bool):
            return cls.missing()
        try:
            value = float(raw)
        except (TypeError, ValueError):
            return cls.missing()
        if not math.isfinite(value) or value <= 0:
            return cls.missing()
        return cls(value=value, found=True)


@dataclass(frozen=True)
class AttributeFilter:
    """Predicate on one named field of a raw document."""
    name: str
    value: str
    match: MatchMode = MatchMode.EXACT

    def matches(self, candidate: Any) -> bool:
        if not isinstance(candidate, str):
            return False
        if self.match == MatchMode.CONTAINS:
            return self.value.lower() in candidate.lower()
        return candidate == self.value


@dataclass(frozen=True)
class DocumentQuery:
    """Filters for a nested (AWS offer-file) document lookup."""
    service_code: str
    product_family: str
    location: str
    attribute_filters: Tuple[AttributeFilter, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class RecordQuery:
    """Filters for a flat (Azure retail feed) record lookup. region=None drops the region filter."""
    service_name: str
    region: Optional[str]
    sku_filter: AttributeFilter
    price_type: str = "Consumption"
