"""
Schemas for the unified pricing catalog.
"""
from typing import Dict

from pydantic import BaseModel, Field

from cloud_price_compare.models.enums import Provider


class PricingResponse(BaseModel):
    """Normalized prices of one provider in one region."""
    provider: Provider = Field(..., description="Provider of the prices")
    region: str = Field(..., description="Canonical region the catalog was built for")
    compute: Dict[str, float] = Field(..., description="Hourly on-demand price per instance, in USD")
    storage: Dict[str, float] = Field(..., description="Price per GB-month per storage class, in USD")
    transfer: Dict[str, float] = Field(..., description="Price per GB transferred in and out, in USD")


class UnifiedPricingResponse(BaseModel):
    """Side-by-side catalogs of both providers."""
    aws: PricingResponse
    azure: PricingResponse
