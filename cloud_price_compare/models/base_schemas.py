"""
Base schemas for the pricing API.
"""
from typing import Dict, Optional

from pydantic import BaseModel

from cloud_price_compare.models.enums import ErrorSource


class ErrorResponse(BaseModel):
    """API error response."""
    error: str
    source: ErrorSource
    details: Optional[Dict] = None


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    error: Optional[str] = None
