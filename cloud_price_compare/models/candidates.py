"""
Candidate SKU tables queried for each provider.

Each table maps the canonical catalog key to the provider-native identifier
looked up in the raw store. Tables are plain configuration and can be replaced
wholesale, e.g. by small fixtures in tests.
"""
from dataclasses import dataclass, field
from typing import Dict, Iterable


def aws_compute_key(instance_type: str) -> str:
    """t3.micro -> ec2_t3_micro"""
    return "ec2_" + instance_type.replace(".", "_")


def azure_compute_key(sku_name: str) -> str:
    """Standard_D2s_v3 -> vm_d2s_v3"""
    return sku_name.replace("Standard_", "vm_", 1).lower()


def _keyed(identifiers: Iterable[str], key_func) -> Dict[str, str]:
    return {key_func(identifier): identifier for identifier in identifiers}


@dataclass(frozen=True)
class CandidateTables:
    """Compute and storage candidates for one provider."""
    compute: Dict[str, str] = field(default_factory=dict)
    storage: Dict[str, str] = field(default_factory=dict)


AWS_INSTANCE_TYPES = [
    "t3.micro", "t3.small", "t3.medium",
    "m5.large", "m5.xlarge",
    "c5.large", "c5.xlarge",
    "r5.large", "r5.xlarge",
]

AZURE_VM_SIZES = [
    "Standard_B1s", "Standard_B2s",
    "Standard_D2s_v3", "Standard_D4s_v3",
    "Standard_F2s_v2", "Standard_F4s_v2",
    "Standard_NC8as_T4_v3", "Standard_NC16as_T4_v3",
]

AWS_CANDIDATES = CandidateTables(
    compute=_keyed(AWS_INSTANCE_TYPES, aws_compute_key),
    # matched as case-insensitive substrings of attributes.storageClass
    storage={
        "s3_standard":         "General Purpose",
        "s3_standard_ia":      "Standard - Infrequent Access",
        "s3_one_zone_ia":      "One Zone - Infrequent Access",
        "s3_glacier_instant":  "Amazon Glacier Instant Retrieval",
        "s3_glacier_flexible": "Amazon Glacier Flexible Retrieval",
        "s3_glacier_deep":     "Amazon Glacier Deep Archive",
    },
)

AZURE_CANDIDATES = CandidateTables(
    compute=_keyed(AZURE_VM_SIZES, azure_compute_key),
    # matched as case-insensitive substrings of meterName
    storage={
        "hot_lrs":     "Hot LRS Data Stored",
        "cool_lrs":    "Cool LRS Data Stored",
        "archive_lrs": "Archive LRS Data Stored",
        "hot_grs":     "Hot GRS Data Stored",
        "cool_grs":    "Cool GRS Data Stored",
        "archive_grs": "Archive GRS Data Stored",
    },
)
