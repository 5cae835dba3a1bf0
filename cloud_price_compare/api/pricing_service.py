"""
Cloud pricing service for building normalized price catalogs.
"""
import asyncio
import logging

from cloud_price_compare.clients.provider_factory import ProviderFactory
from cloud_price_compare.models.enums import Provider
from cloud_price_compare.models.pricing_schemas import PricingResponse, UnifiedPricingResponse

logger = logging.getLogger(__name__)


class PricingService:
    """Service assembling per-provider catalogs from the raw pricing store."""

    def __init__(self, provider_factory: ProviderFactory):
        """
        Initialize the pricing service.

        Args:
            provider_factory: Factory holding the extractors for every provider
        """
        self.provider_factory = provider_factory

    async def build_catalog(self, provider: Provider, region: str) -> PricingResponse:
        """
        Build the compute, storage and transfer catalog of one provider.

        Categories are extracted one after the other; each one gets its
        fallback applied before the next starts.

        Args:
            provider: Provider to build the catalog for
            region: Canonical region code

        Returns:
            Pricing response tagged with provider and region

        Raises:
            ValueError: If the provider is not supported
        """
        extractor = self.provider_factory.get_provider(provider)
        logger.info(f"Building {extractor.provider_name} catalog for region={region}")

        compute = await extractor.get_compute_prices(region)
        storage = await extractor.get_storage_prices(region)
        transfer = await extractor.get_transfer_prices(region)

        return PricingResponse(
            provider=extractor.provider,
            region=region,
            compute=compute,
            storage=storage,
            transfer=transfer,
        )

    async def build_unified(self, aws_region: str, azure_region: str) -> UnifiedPricingResponse:
        """
        Build both provider catalogs independently and pair them.

        Args:
            aws_region: Canonical region for the AWS catalog
            azure_region: Canonical region for the Azure catalog

        Returns:
            Unified response with one catalog per provider
        """
        aws, azure = await asyncio.gather(
            self.build_catalog(Provider.AWS, aws_region),
            self.build_catalog(Provider.AZURE, azure_region),
        )
        return UnifiedPricingResponse(aws=aws, azure=azure)
