"""
Tests for lookup value types.
"""
import pytest

from cloud_price_compare.models.enums import MatchMode
from cloud_price_compare.models.queries import AttributeFilter, ExtractedPrice


class TestExtractedPrice:
    """Raw leaf conversion"""

    @pytest.mark.parametrize("raw, value", [("0.02", 0.02), (0.0877, 0.0877), (3, 3.0)])
    def test_positive_values_are_found(self, raw, value):
        price = ExtractedPrice.from_raw(raw)
        assert price.found
        assert price.value == value

    @pytest.mark.parametrize(
        "raw", [0, "0.0000000000", -1.5, "-0.01", float("nan"), float("inf"), "Infinity", "1e999", "-inf"]
    )
    def test_non_positive_and_non_finite_values_are_missing(self, raw):
        assert ExtractedPrice.from_raw(raw) == ExtractedPrice.missing()

    @pytest.mark.parametrize("raw", [None, "", "free", {"USD": 1}, True])
    def test_malformed_values_are_missing(self, raw):
        assert not ExtractedPrice.from_raw(raw).found


class TestAttributeFilter:
    """Field predicates"""

    def test_exact(self):
        attr = AttributeFilter("instanceType", "t3.micro")
        assert attr.matches("t3.micro")
        assert not attr.matches("t3.micro2")
        assert not attr.matches("T3.MICRO")

    def test_contains_is_case_insensitive(self):
        attr = AttributeFilter("meterName", "Hot LRS Data Stored", MatchMode.CONTAINS)
        assert attr.matches("hot lrs data stored")
        assert attr.matches("Hot LRS Data Stored - Tiered")
        assert not attr.matches("Cool LRS Data Stored")

    def test_non_string_never_matches(self):
        assert not AttributeFilter("instanceType", "t3.micro").matches(None)
        assert not AttributeFilter("size", "1", MatchMode.CONTAINS).matches(1)
