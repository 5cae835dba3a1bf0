"""
Read-only access to the raw pricing documents stored by the ingestion jobs.

Two collections exist, one per provider:

    aws_pricing_raw(service_code, product_family, data jsonb)
    azure_pricing_raw(service_name, arm_region_name, data jsonb)

Lookups return the first matching document or None. When several documents
qualify, which one comes back is left to the backend (``LIMIT 1`` in Postgres,
list order in memory).
"""
import asyncio
import json
import logging
import re
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence, Tuple

import httpx
from prisma.errors import PrismaError

from cloud_price_compare.models.enums import MatchMode
from cloud_price_compare.models.queries import AttributeFilter, DocumentQuery, RecordQuery

logger = logging.getLogger(__name__)

RawDocument = Dict[str, Any]

# prisma talks to its query engine over httpx; transport failures surface unwrapped
_STORE_FAILURES = (PrismaError, httpx.HTTPError, asyncio.TimeoutError, OSError)

_FIELD_NAME = re.compile(r"^[A-Za-z][A-Za-z0-9_]*$")


class StoreError(Exception):
    """Raised when the raw pricing store cannot be queried."""


class RawPricingStore(ABC):
    """Interface every raw pricing backend implements."""

    @abstractmethod
    async def find_aws_document(self, query: DocumentQuery) -> Optional[RawDocument]:
        """
        Find one AWS offer document.

        Raises:
            StoreError: If the backend is unavailable
        """

    @abstractmethod
    async def find_azure_record(self, query: RecordQuery) -> Optional[RawDocument]:
        """
        Find one Azure retail price record.

        Raises:
            StoreError: If the backend is unavailable
        """

    @abstractmethod
    async def ping(self) -> None:
        """Check the backend is reachable, raising StoreError if not."""


def _like_pattern(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def _field_name(name: str) -> str:
    # field names are interpolated into SQL, values never are
    if not _FIELD_NAME.match(name):
        raise ValueError(f"Invalid document field name: {name!r}")
    return name


def _condition(column: str, attr: AttributeFilter, index: int) -> Tuple[str, str]:
    if attr.match == MatchMode.CONTAINS:
        return f"{column} ILIKE ${index}", _like_pattern(attr.value)
    return f"{column} = ${index}", attr.value


def build_aws_query(query: DocumentQuery) -> Tuple[str, List[str]]:
    """
    Render a DocumentQuery as parameterised Postgres SQL.

    Returns:
        Tuple of (sql, params)
    """
    conditions = [
        "service_code = $1",
        "data->>'productFamily' = $2",
        "data->'attributes'->>'location' = $3",
        "data->'terms'->'OnDemand' IS NOT NULL",
    ]
    params = [query.service_code, query.product_family, query.location]
    for attr in query.attribute_filters:
        column = f"data->'attributes'->>'{_field_name(attr.name)}'"
        condition, param = _condition(column, attr, len(params) + 1)
        conditions.append(condition)
        params.append(param)
    sql = "SELECT data FROM aws_pricing_raw WHERE " + " AND ".join(conditions) + " LIMIT 1"
    return sql, params


def build_azure_query(query: RecordQuery) -> Tuple[str, List[str]]:
    """
    Render a RecordQuery as parameterised Postgres SQL.

    Returns:
        Tuple of (sql, params)
    """
    conditions = ["data->>'serviceName' = $1", "data->>'type' = $2"]
    params = [query.service_name, query.price_type]
    if query.region is not None:
        params.append(query.region)
        conditions.append(f"data->>'armRegionName' = ${len(params)}")
    column = f"data->>'{_field_name(query.sku_filter.name)}'"
    condition, param = _condition(column, query.sku_filter, len(params) + 1)
    conditions.append(condition)
    params.append(param)
    sql = "SELECT data FROM azure_pricing_raw WHERE " + " AND ".join(conditions) + " LIMIT 1"
    return sql, params


class PrismaRawStore(RawPricingStore):
    """Raw pricing store backed by Postgres through a connected Prisma client."""

    def __init__(self, prisma_client):
        """
        Initialize the store.

        Args:
            prisma_client: An initialized and connected Prisma client
        """
        self.prisma = prisma_client

    async def _first(self, sql: str, params: Sequence[str]) -> Optional[RawDocument]:
        try:
            rows = await self.prisma.query_raw(sql, *params)
        except _STORE_FAILURES as e:
            raise StoreError(f"Raw pricing query failed: {str(e)}") from e
        if not rows:
            return None
        data = rows[0].get("data")
        if isinstance(data, str):
            try:
                data = json.loads(data)
            except ValueError:
                logger.debug("Skipping raw document with undecodable JSON")
                return None
        return data if isinstance(data, dict) else None

    async def find_aws_document(self, query: DocumentQuery) -> Optional[RawDocument]:
        sql, params = build_aws_query(query)
        return await self._first(sql, params)

    async def find_azure_record(self, query: RecordQuery) -> Optional[RawDocument]:
        sql, params = build_azure_query(query)
        return await self._first(sql, params)

    async def ping(self) -> None:
        try:
            await self.prisma.query_raw("SELECT 1")
        except _STORE_FAILURES as e:
            raise StoreError(f"Database is unreachable: {str(e)}") from e


class InMemoryRawStore(RawPricingStore):
    """
    Raw pricing store over Python lists.

    AWS documents carry their service code in a ``serviceCode`` field, which
    stands in for the ``service_code`` column of the database table.
    """

    def __init__(
        self,
        aws_documents: Optional[List[RawDocument]] = None,
        azure_records: Optional[List[RawDocument]] = None,
    ):
        self.aws_documents = list(aws_documents or [])
        self.azure_records = list(azure_records or [])

    @staticmethod
    def _aws_matches(document: Any, query: DocumentQuery) -> bool:
        if not isinstance(document, dict):
            return False
        attributes = document.get("attributes")
        terms = document.get("terms")
        if not isinstance(attributes, dict) or not isinstance(terms, dict):
            return False
        if terms.get("OnDemand") is None:
            return False
        return (
            document.get("serviceCode") == query.service_code
            and document.get("productFamily") == query.product_family
            and attributes.get("location") == query.location
            and all(attr.matches(attributes.get(attr.name)) for attr in query.attribute_filters)
        )

    @staticmethod
    def _azure_matches(record: Any, query: RecordQuery) -> bool:
        if not isinstance(record, dict):
            return False
        if query.region is not None and record.get("armRegionName") != query.region:
            return False
        return (
            record.get("serviceName") == query.service_name
            and record.get("type") == query.price_type
            and query.sku_filter.matches(record.get(query.sku_filter.name))
        )

    async def find_aws_document(self, query: DocumentQuery) -> Optional[RawDocument]:
        return next((d for d in self.aws_documents if self._aws_matches(d, query)), None)

    async def find_azure_record(self, query: RecordQuery) -> Optional[RawDocument]:
        return next((r for r in self.azure_records if self._azure_matches(r, query)), None)

    async def ping(self) -> None:
        return None
