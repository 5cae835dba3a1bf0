"""
Interface for cloud provider price extractors.
"""
import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Dict

from cloud_price_compare.api.fallback_policy import FallbackPolicy
from cloud_price_compare.clients.raw_store import RawPricingStore
from cloud_price_compare.models.candidates import CandidateTables
from cloud_price_compare.models.enums import PriceCategory, Provider
from cloud_price_compare.models.queries import ExtractedPrice, SkuQuery

logger = logging.getLogger(__name__)

# inbound transfer is free on every supported provider
INBOUND_TRANSFER_PRICE = 0.0


class CloudProviderInterface(ABC):
    """Interface that all cloud provider extractors must follow."""

    provider: Provider

    def __init__(self, store: RawPricingStore, candidates: CandidateTables, fallback: FallbackPolicy):
        """
        Initialize the provider extractor.

        Args:
            store: Raw pricing store to read documents from
            candidates: Compute and storage candidates to look up
            fallback: Policy supplying defaults for empty categories
        """
        self.store = store
        self.candidates = candidates
        self.fallback = fallback

    @property
    def provider_name(self) -> str:
        return self.provider.value

    @abstractmethod
    async def price_sku(self, query: SkuQuery) -> ExtractedPrice:
        """
        Look up the price of one compute or storage candidate.

        Args:
            query: Category, native identifier and canonical region

        Returns:
            The extracted price; never raises for missing or bad data
        """

    @abstractmethod
    async def get_transfer_prices(self, region: str) -> Dict[str, float]:
        """
        Get the data transfer prices for a region, fallback included.

        Args:
            region: Canonical region code

        Returns:
            Mapping with "in" and "out" per-GB prices
        """

    async def _category_prices(self, category: PriceCategory, table: Dict[str, str], region: str) -> Dict[str, float]:
        keys = list(table)
        lookups = [
            self.price_sku(SkuQuery(category=category, identifier=table[key], region=region))
            for key in keys
        ]
        results = await asyncio.gather(*lookups)

        prices = {key: result.value for key, result in zip(keys, results) if result.found}
        logger.info(f"{self.provider_name}: {len(prices)}/{len(keys)} {category} prices extracted in {region}")
        return self.fallback.apply(self.provider, category, prices)

    async def get_compute_prices(self, region: str) -> Dict[str, float]:
        """Extract every compute candidate for region, fallback included."""
        return await self._category_prices(PriceCategory.COMPUTE, self.candidates.compute, region)

    async def get_storage_prices(self, region: str) -> Dict[str, float]:
        """Extract every storage candidate for region, fallback included."""
        return await self._category_prices(PriceCategory.STORAGE, self.candidates.storage, region)
