"""
Main FastAPI application.
"""
import logging
import uuid
from typing import Any, Dict, Optional

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from cloud_price_compare.api.pricing_service import PricingService
from cloud_price_compare.clients.provider_factory import ProviderFactory
from cloud_price_compare.clients.raw_store import PrismaRawStore, RawPricingStore, StoreError
from cloud_price_compare.models.base_schemas import ErrorResponse, HealthResponse
from cloud_price_compare.models.enums import ErrorSource, Provider
from cloud_price_compare.models.pricing_schemas import PricingResponse, UnifiedPricingResponse
from cloud_price_compare.utils.database import DatabaseConnection
from cloud_price_compare.utils.db_config import (
    get_default_aws_region,
    get_default_azure_region,
    get_log_level,
    is_aws_live_egress_enabled,
)

# Configure logging
logging.basicConfig(
    level=get_log_level(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="Cloud Price Compare API",
    description=(
        "Normalized AWS and Azure retail prices built from stored raw pricing documents. "
        "\n---\n"
        "### Example Usage\n"
        "- `GET /pricing/aws?region=us-east-1`\n"
        "- `GET /pricing/azure?region=eastus`\n"
        "- `GET /pricing/unified?aws_region=us-east-1&azure_region=eastus`\n"
        "\nCategories with no extractable price are filled with static default prices.\n"
    ),
    version="1.0.0",
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Bad request or validation error"},
    500: {"model": ErrorResponse, "description": "Server error"},
}


@app.on_event("startup")
async def startup_event():
    """Connect to the raw pricing database; the process must not start without it."""
    database = DatabaseConnection()
    await database.connect()
    app.state.database = database
    app.state.store = PrismaRawStore(database.prisma)


@app.on_event("shutdown")
async def shutdown_event():
    """Clean up resources on shutdown."""
    database = getattr(app.state, "database", None)
    if database:
        await database.disconnect()


def get_store(request: Request) -> RawPricingStore:
    """Raw pricing store opened at startup."""
    store = getattr(request.app.state, "store", None)
    if store is None:
        raise HTTPException(status_code=503, detail="Raw pricing store is not initialized")
    return store


def get_pricing_service(store: RawPricingStore = Depends(get_store)) -> PricingService:
    """
    Build a pricing service for the current request.

    Returns:
        Pricing service over the shared store
    """
    factory = ProviderFactory(store, aws_live_egress=is_aws_live_egress_enabled())
    return PricingService(factory)


def _error_response(status_code: int, error: str, source: ErrorSource, details: Optional[Dict] = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=error, source=source, details=details).model_dump(mode="json"),
    )


async def _run(request_id: str, description: str, build) -> Any:
    try:
        response = await build()
        logger.info(f"[{request_id}] {description} completed")
        return response

    except ValueError as e:
        logger.error(f"[{request_id}] Value error: {str(e)}")
        return _error_response(400, str(e), ErrorSource.GENERAL, {"type": "ValueError"})

    except Exception as e:
        logger.exception(f"[{request_id}] Error building {description}: {str(e)}")
        return _error_response(
            500,
            f"Error building {description}: {str(e)}",
            ErrorSource.GENERAL,
            {"type": type(e).__name__},
        )


@app.get("/", tags=["Health"])
async def home() -> Dict[str, Any]:
    """Service descriptor listing the available endpoints."""
    return {
        "service": "Cloud Price Compare API",
        "version": app.version,
        "endpoints": {
            "aws_pricing": "/pricing/aws?region=us-east-1",
            "azure_pricing": "/pricing/azure?region=eastus",
            "unified_pricing": "/pricing/unified?aws_region=us-east-1&azure_region=eastus",
            "health": "/health",
        },
    }


@app.get("/health", tags=["Health"], response_model=HealthResponse, response_model_exclude_none=True)
async def health_check(store: RawPricingStore = Depends(get_store)):
    """Health check endpoint pinging the raw pricing store."""
    try:
        await store.ping()
    except StoreError as e:
        logger.warning(f"Health check failed: {str(e)}")
        return JSONResponse(
            status_code=503,
            content=HealthResponse(status="unhealthy", error=str(e)).model_dump(),
        )
    return HealthResponse(status="healthy")


@app.get("/pricing/aws", response_model=PricingResponse, responses=_ERROR_RESPONSES, tags=["Pricing"])
async def aws_pricing(
    region: Optional[str] = Query(None, description="Canonical region code, e.g. us-east-1"),
    pricing_service: PricingService = Depends(get_pricing_service),
):
    """Normalized AWS compute, storage and transfer prices for one region."""
    request_id = str(uuid.uuid4())
    region = region or get_default_aws_region()
    logger.info(f"[{request_id}] Processing AWS pricing request for region={region}")
    return await _run(request_id, "AWS catalog", lambda: pricing_service.build_catalog(Provider.AWS, region))


@app.get("/pricing/azure", response_model=PricingResponse, responses=_ERROR_RESPONSES, tags=["Pricing"])
async def azure_pricing(
    region: Optional[str] = Query(None, description="Canonical or Azure region code, e.g. eastus"),
    pricing_service: PricingService = Depends(get_pricing_service),
):
    """Normalized Azure compute, storage and transfer prices for one region."""
    request_id = str(uuid.uuid4())
    region = region or get_default_azure_region()
    logger.info(f"[{request_id}] Processing Azure pricing request for region={region}")
    return await _run(request_id, "Azure catalog", lambda: pricing_service.build_catalog(Provider.AZURE, region))


@app.get("/pricing/unified", response_model=UnifiedPricingResponse, responses=_ERROR_RESPONSES, tags=["Pricing"])
async def unified_pricing(
    aws_region: Optional[str] = Query(None, description="Region for the AWS catalog"),
    azure_region: Optional[str] = Query(None, description="Region for the Azure catalog"),
    pricing_service: PricingService = Depends(get_pricing_service),
):
    """AWS and Azure catalogs side by side, each built for its own region."""
    request_id = str(uuid.uuid4())
    aws_region = aws_region or get_default_aws_region()
    azure_region = azure_region or get_default_azure_region()
    logger.info(f"[{request_id}] Processing unified pricing request aws={aws_region} azure={azure_region}")
    return await _run(
        request_id,
        "unified catalog",
        lambda: pricing_service.build_unified(aws_region, azure_region),
    )
