"""
Shared fixtures: builders for raw pricing documents and small candidate tables.
"""
import pytest

from cloud_price_compare.api.fallback_policy import FallbackPolicy
from cloud_price_compare.models.candidates import CandidateTables
from cloud_price_compare.models.enums import PriceCategory, Provider


def _aws_document(
    attributes,
    price="0.0104000000",
    service_code="AmazonEC2",
    product_family="Compute Instance",
    sku="DQ578CGN99KG6ECF",
    unit="Hrs",
):
    term_code = f"{sku}.JRTCKXETXF"
    return {
        "sku": sku,
        "serviceCode": service_code,
        "productFamily": product_family,
        "attributes": dict(attributes),
        "terms": {
            "OnDemand": {
                sku: {
                    term_code: {
                        "offerTermCode": "JRTCKXETXF",
                        "sku": sku,
                        "priceDimensions": {
                            f"{term_code}.6YS6EN2CT7": {
                                "unit": unit,
                                "description": "On Demand",
                                "pricePerUnit": {"USD": price},
                            }
                        },
                    }
                }
            }
        },
    }


@pytest.fixture
def ec2_document():
    """Builder for an EC2 compute instance offer document."""
    def build(instance_type, location="US East (N. Virginia)", price="0.0104000000", **kwargs):
        return _aws_document({"instanceType": instance_type, "location": location}, price=price, **kwargs)
    return build


@pytest.fixture
def s3_document():
    """Builder for an S3 storage offer document."""
    def build(storage_class, location="US East (N. Virginia)", price="0.0230000000"):
        return _aws_document(
            {"storageClass": storage_class, "location": location},
            price=price,
            service_code="AmazonS3",
            product_family="Storage",
            sku="WP9ANXZGBYYSGJEA",
            unit="GB-Mo",
        )
    return build


@pytest.fixture
def egress_document():
    """Builder for an EC2 outbound data transfer offer document."""
    def build(location="US East (N. Virginia)", price="0.0900000000"):
        return _aws_document(
            {"transferType": "AWS Outbound", "location": location},
            price=price,
            product_family="Data Transfer",
            sku="AA6ZFSZ9HTBJVQ4Q",
            unit="GB",
        )
    return build


@pytest.fixture
def azure_record():
    """Builder for an Azure retail price item."""
    def build(service_name, region, price, sku_name="", meter_name="", price_type="Consumption"):
        return {
            "currencyCode": "USD",
            "retailPrice": price,
            "unitPrice": price,
            "armRegionName": region,
            "location": region,
            "serviceName": service_name,
            "armSkuName": sku_name,
            "skuName": sku_name.replace("Standard_", "").replace("_", " "),
            "meterName": meter_name,
            "type": price_type,
            "unitOfMeasure": "1 Hour",
        }
    return build


@pytest.fixture
def small_candidates():
    """Candidate tables whose keys equal the looked-up identifiers."""
    return CandidateTables(
        compute={"tiny": "tiny", "small": "small", "large": "large"},
        storage={"hot": "Hot", "cold": "Cold"},
    )


@pytest.fixture
def small_defaults():
    """Default tables matching small_candidates."""
    tables = {
        PriceCategory.COMPUTE: {"tiny": 0.0104, "small": 0.0208, "large": 0.0832},
        PriceCategory.STORAGE: {"hot": 0.023, "cold": 0.004},
        PriceCategory.TRANSFER: {"in": 0.0, "out": 0.09},
    }
    return FallbackPolicy({Provider.AWS: tables, Provider.AZURE: tables})
