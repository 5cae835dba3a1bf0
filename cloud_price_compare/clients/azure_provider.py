import logging
from typing import Dict, Optional

from cloud_price_compare.api.fallback_policy import FallbackPolicy
from cloud_price_compare.clients.provider_interface import INBOUND_TRANSFER_PRICE, CloudProviderInterface
from cloud_price_compare.clients.raw_store import RawPricingStore, StoreError
from cloud_price_compare.models.candidates import AZURE_CANDIDATES, CandidateTables
from cloud_price_compare.models.enums import MatchMode, PriceCategory, Provider
from cloud_price_compare.models.queries import AttributeFilter, ExtractedPrice, RecordQuery, SkuQuery
from cloud_price_compare.utils.region_mapping import to_provider_location

logger = logging.getLogger(__name__)

VM_SERVICE_NAME = "Virtual Machines"
STORAGE_SERVICE_NAME = "Storage"
BANDWIDTH_SERVICE_NAME = "Bandwidth"
EGRESS_METER_NAME = "Standard Data Transfer Out"


class AzureProvider(CloudProviderInterface):
    """Extracts prices from stored Azure Retail Prices records."""

    provider = Provider.AZURE

    def __init__(
        self,
        store: RawPricingStore,
        candidates: CandidateTables = AZURE_CANDIDATES,
        fallback: Optional[FallbackPolicy] = None,
    ):
        super().__init__(store, candidates, fallback or FallbackPolicy())

    async def extract_price(
        self,
        service: str,
        region: Optional[str],
        sku_filter: AttributeFilter,
        price_type: str = "Consumption",
    ) -> ExtractedPrice:
        """
        Find the first record matching the filters and read its retailPrice.

        Args:
            service: serviceName, e.g. Virtual Machines
            region: armRegionName, or None to search every region
            sku_filter: Predicate on armSkuName or meterName
            price_type: Record type, Consumption for pay-as-you-go

        Returns:
            The extracted price, missing if nothing usable was found
        """
        query = RecordQuery(service_name=service, region=region, sku_filter=sku_filter, price_type=price_type)
        try:
            record = await self.store.find_azure_record(query)
        except StoreError as e:
            logger.warning(f"Azure lookup failed for {query}: {str(e)}")
            return ExtractedPrice.missing()

        if record is None:
            logger.debug(f"No Azure record for {query}")
            return ExtractedPrice.missing()
        return ExtractedPrice.from_raw(record.get("retailPrice"))

    async def price_sku(self, query: SkuQuery) -> ExtractedPrice:
        region = to_provider_location(self.provider, query.region)
        if query.category == PriceCategory.COMPUTE:
            return await self.extract_price(VM_SERVICE_NAME, region, AttributeFilter("armSkuName", query.identifier))
        if query.category == PriceCategory.STORAGE:
            return await self.extract_price(
                STORAGE_SERVICE_NAME,
                region,
                AttributeFilter("meterName", query.identifier, MatchMode.CONTAINS),
            )
        raise ValueError(f"Unsupported SKU category for Azure: {query.category}")

    async def get_egress_price(self, region: str) -> ExtractedPrice:
        """
        Look up outbound transfer pricing, first in the region, then anywhere.

        The region-unscoped tier is only consulted when the region-scoped one
        finds nothing usable.
        """
        meter = AttributeFilter("meterName", EGRESS_METER_NAME)
        for scope in (to_provider_location(self.provider, region), None):
            price = await self.extract_price(BANDWIDTH_SERVICE_NAME, scope, meter)
            if price.found:
                logger.debug(f"Azure egress for {region} found with scope={scope}")
                return price
        return ExtractedPrice.missing()

    async def get_transfer_prices(self, region: str) -> Dict[str, float]:
        egress = await self.get_egress_price(region)
        prices = {"in": INBOUND_TRANSFER_PRICE, "out": egress.value} if egress.found else {}
        return self.fallback.apply(self.provider, PriceCategory.TRANSFER, prices)
