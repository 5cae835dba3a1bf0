import logging
from typing import Dict, Optional, Sequence

from cloud_price_compare.api.fallback_policy import FallbackPolicy
from cloud_price_compare.clients.provider_interface import INBOUND_TRANSFER_PRICE, CloudProviderInterface
from cloud_price_compare.clients.raw_store import RawPricingStore, StoreError
from cloud_price_compare.models.candidates import AWS_CANDIDATES, CandidateTables
from cloud_price_compare.models.enums import MatchMode, PriceCategory, Provider
from cloud_price_compare.models.queries import AttributeFilter, DocumentQuery, ExtractedPrice, SkuQuery
from cloud_price_compare.utils.document_walker import ANY_KEY, NestedDocumentWalker, numeric_leaf
from cloud_price_compare.utils.region_mapping import to_provider_location

logger = logging.getLogger(__name__)

# terms.OnDemand.<sku>.<offerTermCode>.priceDimensions.<rateCode>.pricePerUnit.USD
ON_DEMAND_USD_PRICE = NestedDocumentWalker(
    path=("terms", "OnDemand", ANY_KEY, ANY_KEY, "priceDimensions", ANY_KEY),
    leaf=numeric_leaf("pricePerUnit", "USD"),
)

EC2_SERVICE_CODE = "AmazonEC2"
S3_SERVICE_CODE = "AmazonS3"


class AwsProvider(CloudProviderInterface):
    """Extracts prices from stored AWS offer-file documents."""

    provider = Provider.AWS

    def __init__(
        self,
        store: RawPricingStore,
        candidates: CandidateTables = AWS_CANDIDATES,
        fallback: Optional[FallbackPolicy] = None,
        live_egress: bool = False,
    ):
        super().__init__(store, candidates, fallback or FallbackPolicy())
        self.live_egress = live_egress

    async def extract_price(
        self,
        service: str,
        product_family: str,
        attribute_filters: Sequence[AttributeFilter],
        location: str,
    ) -> ExtractedPrice:
        """
        Find the first on-demand document matching the filters and read its USD price.

        Args:
            service: AWS service code, e.g. AmazonEC2
            product_family: Product family, e.g. Compute Instance
            attribute_filters: Predicates on the document attributes
            location: Offer-file location name, e.g. US East (N. Virginia)

        Returns:
            The extracted price, missing if nothing usable was found
        """
        query = DocumentQuery(
            service_code=service,
            product_family=product_family,
            location=location,
            attribute_filters=tuple(attribute_filters),
        )
        try:
            document = await self.store.find_aws_document(query)
        except StoreError as e:
            logger.warning(f"AWS lookup failed for {query}: {str(e)}")
            return ExtractedPrice.missing()

        if document is None:
            logger.debug(f"No AWS document for {query}")
            return ExtractedPrice.missing()
        return ExtractedPrice.from_raw(ON_DEMAND_USD_PRICE.walk(document))

    async def price_sku(self, query: SkuQuery) -> ExtractedPrice:
        location = to_provider_location(self.provider, query.region)
        if query.category == PriceCategory.COMPUTE:
            return await self.extract_price(
                EC2_SERVICE_CODE,
                "Compute Instance",
                [AttributeFilter("instanceType", query.identifier)],
                location,
            )
        if query.category == PriceCategory.STORAGE:
            return await self.extract_price(
                S3_SERVICE_CODE,
                "Storage",
                [AttributeFilter("storageClass", query.identifier, MatchMode.CONTAINS)],
                location,
            )
        raise ValueError(f"Unsupported SKU category for AWS: {query.category}")

    async def get_egress_price(self, region: str) -> ExtractedPrice:
        """Look up the per-GB price of data transferred out to the internet."""
        return await self.extract_price(
            EC2_SERVICE_CODE,
            "Data Transfer",
            [AttributeFilter("transferType", "AWS Outbound")],
            to_provider_location(self.provider, region),
        )

    async def get_transfer_prices(self, region: str) -> Dict[str, float]:
        prices: Dict[str, float] = {}
        if self.live_egress:
            egress = await self.get_egress_price(region)
            if egress.found:
                prices = {"in": INBOUND_TRANSFER_PRICE, "out": egress.value}
        return self.fallback.apply(self.provider, PriceCategory.TRANSFER, prices)
