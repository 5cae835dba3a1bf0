"""
Factory for creating cloud provider extractors.
"""
import logging
from typing import Dict, Mapping, Optional

from cloud_price_compare.api.fallback_policy import FallbackPolicy
from cloud_price_compare.clients.aws_provider import AwsProvider
from cloud_price_compare.clients.azure_provider import AzureProvider
from cloud_price_compare.clients.provider_interface import CloudProviderInterface
from cloud_price_compare.clients.raw_store import RawPricingStore
from cloud_price_compare.models.candidates import AWS_CANDIDATES, AZURE_CANDIDATES, CandidateTables
from cloud_price_compare.models.enums import Provider

logger = logging.getLogger(__name__)


class ProviderFactory:
    """Factory for creating and looking up provider extractors over one store."""

    def __init__(
        self,
        store: RawPricingStore,
        candidates: Optional[Mapping[Provider, CandidateTables]] = None,
        fallback: Optional[FallbackPolicy] = None,
        aws_live_egress: bool = False,
    ):
        """
        Initialize the provider factory.

        Args:
            store: Raw pricing store shared by every extractor
            candidates: Optional per-provider candidate tables, defaults to the production lists
            fallback: Optional fallback policy, defaults to the built-in default prices
            aws_live_egress: Look up AWS egress in the store instead of using the fixed price
        """
        self.store = store
        self.candidates = dict(candidates) if candidates else {
            Provider.AWS: AWS_CANDIDATES,
            Provider.AZURE: AZURE_CANDIDATES,
        }
        self.fallback = fallback or FallbackPolicy()
        self.aws_live_egress = aws_live_egress
        self._providers: Dict[Provider, CloudProviderInterface] = {}
        self._initialize_providers()

    def _initialize_providers(self):
        """Initialize all supported cloud providers."""
        self._providers[Provider.AWS] = AwsProvider(
            self.store,
            candidates=self.candidates.get(Provider.AWS, AWS_CANDIDATES),
            fallback=self.fallback,
            live_egress=self.aws_live_egress,
        )
        self._providers[Provider.AZURE] = AzureProvider(
            self.store,
            candidates=self.candidates.get(Provider.AZURE, AZURE_CANDIDATES),
            fallback=self.fallback,
        )
        logger.debug(f"Initialized providers: {', '.join(p.value for p in self._providers)}")

    def get_provider(self, provider: Provider) -> CloudProviderInterface:
        """
        Get the extractor for one provider.

        Raises:
            ValueError: If the provider is not supported
        """
        try:
            return self._providers[Provider(provider)]
        except (KeyError, ValueError):
            raise ValueError(f"Unsupported provider: {provider}") from None
