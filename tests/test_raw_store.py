"""
Tests for the raw pricing stores.
"""
import asyncio
import json
from unittest.mock import AsyncMock

import httpx
import pytest
from prisma.errors import PrismaError

from cloud_price_compare.clients.raw_store import (
    InMemoryRawStore,
    PrismaRawStore,
    StoreError,
    build_aws_query,
    build_azure_query,
)
from cloud_price_compare.models.enums import MatchMode
from cloud_price_compare.models.queries import AttributeFilter, DocumentQuery, RecordQuery


def _ec2_query(instance_type="t3.micro", location="US East (N. Virginia)"):
    return DocumentQuery(
        service_code="AmazonEC2",
        product_family="Compute Instance",
        location=location,
        attribute_filters=(AttributeFilter("instanceType", instance_type),),
    )


class TestQueryBuilders:
    """SQL rendering for Postgres"""

    def test_aws_query(self):
        sql, params = build_aws_query(_ec2_query())
        assert sql == (
            "SELECT data FROM aws_pricing_raw WHERE service_code = $1"
            " AND data->>'productFamily' = $2"
            " AND data->'attributes'->>'location' = $3"
            " AND data->'terms'->'OnDemand' IS NOT NULL"
            " AND data->'attributes'->>'instanceType' = $4"
            " LIMIT 1"
        )
        assert params == ["AmazonEC2", "Compute Instance", "US East (N. Virginia)", "t3.micro"]

    def test_contains_filter_uses_escaped_ilike(self):
        query = DocumentQuery(
            service_code="AmazonS3",
            product_family="Storage",
            location="EU (Ireland)",
            attribute_filters=(AttributeFilter("storageClass", "100%_Tier", MatchMode.CONTAINS),),
        )
        sql, params = build_aws_query(query)
        assert "data->'attributes'->>'storageClass' ILIKE $4" in sql
        assert params[3] == "%100\\%\\_Tier%"

    def test_field_names_are_validated(self):
        query = _ec2_query()
        bad = DocumentQuery(
            service_code=query.service_code,
            product_family=query.product_family,
            location=query.location,
            attribute_filters=(AttributeFilter("x' OR '1'='1", "y"),),
        )
        with pytest.raises(ValueError):
            build_aws_query(bad)

    def test_azure_query_with_region(self):
        query = RecordQuery("Virtual Machines", "eastus", AttributeFilter("armSkuName", "Standard_B1s"))
        sql, params = build_azure_query(query)
        assert sql == (
            "SELECT data FROM azure_pricing_raw WHERE data->>'serviceName' = $1"
            " AND data->>'type' = $2"
            " AND data->>'armRegionName' = $3"
            " AND data->>'armSkuName' = $4"
            " LIMIT 1"
        )
        assert params == ["Virtual Machines", "Consumption", "eastus", "Standard_B1s"]

    def test_azure_query_without_region(self):
        query = RecordQuery("Bandwidth", None, AttributeFilter("meterName", "Standard Data Transfer Out"))
        sql, params = build_azure_query(query)
        assert "armRegionName" not in sql
        assert "data->>'meterName' = $3" in sql
        assert params == ["Bandwidth", "Consumption", "Standard Data Transfer Out"]


@pytest.mark.asyncio
class TestPrismaRawStore:
    """Prisma-backed store with a mocked client"""

    async def test_returns_first_row_document(self, ec2_document):
        document = ec2_document("t3.micro")
        client = AsyncMock()
        client.query_raw.return_value = [{"data": document}]
        store = PrismaRawStore(client)

        assert await store.find_aws_document(_ec2_query()) == document
        sql, *params = client.query_raw.await_args.args
        assert sql.startswith("SELECT data FROM aws_pricing_raw")
        assert params == ["AmazonEC2", "Compute Instance", "US East (N. Virginia)", "t3.micro"]

    async def test_decodes_json_strings(self, azure_record):
        record = azure_record("Virtual Machines", "eastus", 0.0104, sku_name="Standard_B1s")
        client = AsyncMock()
        client.query_raw.return_value = [{"data": json.dumps(record)}]
        store = PrismaRawStore(client)

        query = RecordQuery("Virtual Machines", "eastus", AttributeFilter("armSkuName", "Standard_B1s"))
        assert await store.find_azure_record(query) == record

    async def test_no_rows(self):
        client = AsyncMock()
        client.query_raw.return_value = []
        assert await PrismaRawStore(client).find_aws_document(_ec2_query()) is None

    async def test_undecodable_document_is_skipped(self):
        client = AsyncMock()
        client.query_raw.return_value = [{"data": "{not json"}]
        assert await PrismaRawStore(client).find_aws_document(_ec2_query()) is None

    async def test_prisma_errors_become_store_errors(self):
        client = AsyncMock()
        client.query_raw.side_effect = PrismaError("connection reset")
        store = PrismaRawStore(client)

        with pytest.raises(StoreError):
            await store.find_aws_document(_ec2_query())
        with pytest.raises(StoreError):
            await store.ping()

    @pytest.mark.parametrize("error", [
        httpx.ConnectError("engine gone"),
        httpx.ReadTimeout("engine did not answer"),
        asyncio.TimeoutError(),
    ])
    async def test_engine_transport_errors_become_store_errors(self, error):
        client = AsyncMock()
        client.query_raw.side_effect = error
        store = PrismaRawStore(client)

        with pytest.raises(StoreError):
            await store.find_azure_record(RecordQuery("Bandwidth", None, AttributeFilter("meterName", "x")))
        with pytest.raises(StoreError):
            await store.ping()

    async def test_ping(self):
        client = AsyncMock()
        client.query_raw.return_value = [{"?column?": 1}]
        await PrismaRawStore(client).ping()
        client.query_raw.assert_awaited_once_with("SELECT 1")


@pytest.mark.asyncio
class TestInMemoryRawStore:
    """Filter semantics of the in-memory store"""

    async def test_aws_exact_match(self, ec2_document):
        store = InMemoryRawStore(aws_documents=[ec2_document("t3.small"), ec2_document("t3.micro")])
        document = await store.find_aws_document(_ec2_query("t3.micro"))
        assert document["attributes"]["instanceType"] == "t3.micro"

    async def test_aws_location_must_match(self, ec2_document):
        store = InMemoryRawStore(aws_documents=[ec2_document("t3.micro", location="EU (Ireland)")])
        assert await store.find_aws_document(_ec2_query("t3.micro")) is None

    async def test_aws_requires_on_demand_terms(self, ec2_document):
        document = ec2_document("t3.micro")
        document["terms"] = {"Reserved": {}}
        store = InMemoryRawStore(aws_documents=[document])
        assert await store.find_aws_document(_ec2_query("t3.micro")) is None

    async def test_aws_malformed_documents_are_skipped(self, ec2_document):
        store = InMemoryRawStore(aws_documents=["junk", {"attributes": None}, ec2_document("t3.micro")])
        assert await store.find_aws_document(_ec2_query("t3.micro")) is not None

    async def test_first_match_wins(self, ec2_document):
        first = ec2_document("t3.micro", price="0.0104")
        second = ec2_document("t3.micro", price="0.0200")
        store = InMemoryRawStore(aws_documents=[first, second])
        assert await store.find_aws_document(_ec2_query("t3.micro")) is first

    async def test_azure_region_scoping(self, azure_record):
        record = azure_record("Bandwidth", "westeurope", 0.087, meter_name="Standard Data Transfer Out")
        store = InMemoryRawStore(azure_records=[record])
        meter = AttributeFilter("meterName", "Standard Data Transfer Out")

        assert await store.find_azure_record(RecordQuery("Bandwidth", "eastus", meter)) is None
        assert await store.find_azure_record(RecordQuery("Bandwidth", None, meter)) is record

    async def test_azure_type_must_match(self, azure_record):
        record = azure_record("Virtual Machines", "eastus", 0.006, sku_name="Standard_B1s", price_type="Reservation")
        store = InMemoryRawStore(azure_records=[record])
        query = RecordQuery("Virtual Machines", "eastus", AttributeFilter("armSkuName", "Standard_B1s"))
        assert await store.find_azure_record(query) is None
