"""
Static default prices used when a whole category could not be extracted.
"""
import logging
from typing import Dict, Mapping, Optional

from cloud_price_compare.models.enums import PriceCategory, Provider

logger = logging.getLogger(__name__)

PriceTable = Dict[str, float]

DEFAULT_PRICES: Dict[Provider, Dict[PriceCategory, PriceTable]] = {
    Provider.AWS: {
        PriceCategory.COMPUTE: {
            "ec2_t3_micro": 0.0104,
            "ec2_t3_small": 0.0208,
            "ec2_t3_medium": 0.0416,
            "ec2_m5_large": 0.096,
            "ec2_m5_xlarge": 0.192,
        },
        PriceCategory.STORAGE: {
            "s3_standard": 0.023,
            "s3_standard_ia": 0.0125,
            "s3_glacier_flexible": 0.004,
            "s3_glacier_deep": 0.00099,
        },
        PriceCategory.TRANSFER: {"in": 0.0, "out": 0.09},
    },
    Provider.AZURE: {
        PriceCategory.COMPUTE: {
            "vm_b1s": 0.0104,
            "vm_b2s": 0.0416,
            "vm_d2s_v3": 0.096,
            "vm_d4s_v3": 0.192,
            "vm_f2s_v2": 0.085,
            "vm_f4s_v2": 0.17,
            "vm_nc8as_t4_v3": 1.204,
            "vm_nc16as_t4_v3": 2.408,
        },
        PriceCategory.STORAGE: {
            "hot_lrs": 0.0184,
            "cool_lrs": 0.01,
            "archive_lrs": 0.00099,
        },
        PriceCategory.TRANSFER: {"in": 0.0, "out": 0.0877},
    },
}


class FallbackPolicy:
    """
    All-or-nothing substitution of default prices.

    The policy runs once per category after every lookup in it has finished.
    An empty result is replaced by the full default table; a partial result is
    kept as it is, with no defaults mixed in for the keys that were missed.
    """

    def __init__(self, defaults: Optional[Mapping[Provider, Mapping[PriceCategory, PriceTable]]] = None):
        self.defaults = defaults if defaults is not None else DEFAULT_PRICES

    def defaults_for(self, provider: Provider, category: PriceCategory) -> PriceTable:
        """Return a copy of the default table for provider and category."""
        return dict(self.defaults[provider][category])

    def apply(self, provider: Provider, category: PriceCategory, prices: PriceTable) -> PriceTable:
        """
        Apply the policy to one finished category.

        Args:
            provider: Provider the prices belong to
            category: Category of the price map
            prices: Successfully extracted prices

        Returns:
            prices unchanged when non-empty, otherwise the default table
        """
        if prices:
            return prices
        logger.info(f"No {category} prices extracted for {provider}, using defaults")
        return self.defaults_for(provider, category)
