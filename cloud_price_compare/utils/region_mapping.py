"""
Region translation from canonical region codes to provider-native locations.

Canonical codes follow the AWS style (``us-east-1``). AWS offer documents
carry a display name in ``attributes.location``; Azure retail records carry an
``armRegionName``. Unknown codes are passed through unchanged so callers can
hand in native names directly (``eastus`` for Azure).
"""
from typing import Dict

from cloud_price_compare.models.enums import Provider

# AWS region code -> location name used in the offer files
AWS_LOCATION_NAMES: Dict[str, str] = {
    # North America
    "us-east-1":      "US East (N. Virginia)",
    "us-east-2":      "US East (Ohio)",
    "us-west-1":      "US West (N. California)",
    "us-west-2":      "US West (Oregon)",
    "ca-central-1":   "Canada (Central)",
    "ca-west-1":      "Canada West (Calgary)",
    "mx-central-1":   "Mexico (Central)",
    "us-gov-west-1":  "AWS GovCloud (US-West)",
    "us-gov-east-1":  "AWS GovCloud (US-East)",
    # South America
    "sa-east-1":      "South America (Sao Paulo)",
    # Europe
    "eu-central-1":   "EU (Frankfurt)",
    "eu-central-2":   "Europe (Zurich)",
    "eu-west-1":      "EU (Ireland)",
    "eu-west-2":      "EU (London)",
    "eu-west-3":      "EU (Paris)",
    "eu-south-1":     "EU (Milan)",
    "eu-south-2":     "Europe (Spain)",
    "eu-north-1":     "EU (Stockholm)",
    # Asia & Middle East
    "ap-east-1":      "Asia Pacific (Hong Kong)",
    "ap-south-1":     "Asia Pacific (Mumbai)",
    "ap-south-2":     "Asia Pacific (Hyderabad)",
    "ap-northeast-1": "Asia Pacific (Tokyo)",
    "ap-northeast-2": "Asia Pacific (Seoul)",
    "ap-northeast-3": "Asia Pacific (Osaka)",
    "ap-southeast-1": "Asia Pacific (Singapore)",
    "ap-southeast-3": "Asia Pacific (Jakarta)",
    "ap-southeast-5": "Asia Pacific (Malaysia)",
    "ap-southeast-7": "Asia Pacific (Thailand)",
    "il-central-1":   "Israel (Tel Aviv)",
    "me-south-1":     "Middle East (Bahrain)",
    "me-central-1":   "Middle East (UAE)",
    # Oceania
    "ap-southeast-2": "Asia Pacific (Sydney)",
    "ap-southeast-4": "Asia Pacific (Melbourne)",
    # Africa
    "af-south-1":     "Africa (Cape Town)",
}

# Canonical region code -> closest Azure armRegionName
AZURE_REGION_NAMES: Dict[str, str] = {
    "us-east-1":      "eastus",
    "us-east-2":      "eastus2",
    "us-west-1":      "westus",
    "us-west-2":      "westus2",
    "ca-central-1":   "canadacentral",
    "mx-central-1":   "mexicocentral",
    "sa-east-1":      "brazilsouth",
    "eu-central-1":   "germanywestcentral",
    "eu-central-2":   "switzerlandnorth",
    "eu-west-1":      "northeurope",
    "eu-west-2":      "uksouth",
    "eu-west-3":      "francecentral",
    "eu-south-1":     "italynorth",
    "eu-south-2":     "spaincentral",
    "eu-north-1":     "swedencentral",
    "ap-east-1":      "eastasia",
    "ap-south-1":     "centralindia",
    "ap-northeast-1": "japaneast",
    "ap-northeast-2": "koreacentral",
    "ap-northeast-3": "japanwest",
    "ap-southeast-1": "southeastasia",
    "ap-southeast-3": "indonesiacentral",
    "ap-southeast-5": "malaysiawest",
    "il-central-1":   "israelcentral",
    "me-central-1":   "uaenorth",
    "ap-southeast-2": "australiaeast",
    "ap-southeast-4": "australiasoutheast",
    "af-south-1":     "southafricanorth",
}

_TABLES: Dict[Provider, Dict[str, str]] = {
    Provider.AWS: AWS_LOCATION_NAMES,
    Provider.AZURE: AZURE_REGION_NAMES,
}


def to_provider_location(provider: Provider, region: str) -> str:
    """
    Translate a canonical region code into the provider's native location.

    Args:
        provider: Target provider
        region: Canonical region code

    Returns:
        The native location string, or region itself when it is not mapped
    """
    return _TABLES.get(provider, {}).get(region, region)
