"""
Soft-failing traversal of nested pricing documents.

Pricing trees such as the AWS offer files key their inner levels by opaque
generated codes (SKU, offer term code, rate code) instead of fixed names:

    terms.OnDemand.<sku>.<offerTermCode>.priceDimensions.<rateCode>.pricePerUnit.USD

A walker is described by a path of level descriptors. A literal string selects
that key; ``ANY_KEY`` selects the sole key of the current mapping, or the first
one in iteration order when there are several. A missing key, a node that is
not a mapping, or an empty mapping ends the walk with ``None``.
"""
import logging
from typing import Any, Callable, Mapping, Optional, Sequence, Union

logger = logging.getLogger(__name__)


class _AnyKey:
    """Level descriptor matching whatever key comes first."""

    def __repr__(self) -> str:
        return "ANY_KEY"


ANY_KEY = _AnyKey()

Level = Union[str, _AnyKey]
LeafReader = Callable[[Any], Optional[float]]


def _step(node: Any, level: Level) -> Optional[Any]:
    if not isinstance(node, Mapping) or not node:
        return None
    if level is ANY_KEY:
        return next(iter(node.values()))
    return node.get(level)


def descend(document: Any, path: Sequence[Level]) -> Optional[Any]:
    """
    Follow path through document one level at a time.

    Args:
        document: Root of the nested structure
        path: Level descriptors, literal keys or ANY_KEY

    Returns:
        The node at the end of the path, or None if the walk ended early
    """
    node = document
    for depth, level in enumerate(path):
        node = _step(node, level)
        if node is None:
            logger.debug(f"Walk stopped at depth {depth} ({level!r})")
            return None
    return node


def numeric_leaf(*names: str) -> LeafReader:
    """
    Build a leaf reader for a fixed-name path ending in a number.

    Numeric strings are converted ("0.0104000000" -> 0.0104). Booleans and
    anything that does not convert read as None.
    """
    def read(node: Any) -> Optional[float]:
        value = descend(node, names)
        if value is None or isinstance(value, bool):
            return None
        try:
            return float(value)
        except (TypeError, ValueError):
            logger.debug(f"Non-numeric leaf {'.'.join(names)}: {value!r}")
            return None

    return read


class NestedDocumentWalker:
    """Descends a fixed sequence of levels, then reads a leaf."""

    def __init__(self, path: Sequence[Level], leaf: LeafReader):
        self.path = tuple(path)
        self.leaf = leaf

    def walk(self, document: Any) -> Optional[float]:
        node = descend(document, self.path)
        if node is None:
            return None
        return self.leaf(node)

    def __repr__(self) -> str:
        return f"NestedDocumentWalker(path={list(self.path)!r})"
