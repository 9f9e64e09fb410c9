"""Traced update and deep copy helpers for reducerless."""

import json
import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from .exceptions import CloneError
from .exceptions import PatchError
from .models import ABSENT
from .models import NodeKind

logger = logging.getLogger(__name__)


def node_kind(value: Any) -> NodeKind:
    """Classify a state tree node.

    Args:
        value: Any value found in a state tree or a patch

    Returns:
        NodeKind.MAPPING for mappings (frozen views included),
        NodeKind.ARRAY for lists and tuples, NodeKind.SCALAR otherwise
    """
    if isinstance(value, Mapping):
        return NodeKind.MAPPING
    if isinstance(value, (list, tuple)):
        return NodeKind.ARRAY
    return NodeKind.SCALAR


def traced_update(source: Any, patch: Mapping[str, Any] | None = None) -> dict[str, Any]:
    """Apply a patch to a state tree while sharing every untouched subtree.

    Works like deep_merge, but traces the change down from the root:
    only the mappings on the path to a changed key are copied, everything
    else keeps its reference. Keys set to ABSENT in the patch are removed.
    Arrays and scalars are never merged, they replace the current value.

    Args:
        source: Mapping to update. ABSENT, None, arrays and scalars are
            treated as an empty mapping.
        patch: Mapping of changes, can be nested (default: no changes)

    Returns:
        New dictionary (source and patch are not modified)

    Raises:
        PatchError: If patch is not a mapping

    Examples:
        >>> source = {"a": 1, "b": {"c": 2, "d": [3]}}
        >>> result = traced_update(source, {"a": ABSENT, "b": {"c": 20}})
        >>> result
        {'b': {'c': 20, 'd': [3]}}
        >>> result["b"]["d"] is source["b"]["d"]
        True
    """
    if patch is None:
        patch = {}
    elif node_kind(patch) is not NodeKind.MAPPING:
        raise PatchError(f"Patch must be a mapping, got {type(patch).__name__}")

    source_kind = node_kind(source)
    if source_kind is NodeKind.MAPPING:
        result = dict(source)
    else:
        if source is not ABSENT and source is not None:
            logger.debug(f"Traced update over {source_kind.value} node, starting from an empty mapping")
        result = {}

    for key, change in patch.items():
        if change is ABSENT:
            result.pop(key, None)
            continue

        current = result.get(key, ABSENT)
        if node_kind(current) is NodeKind.MAPPING and node_kind(change) is NodeKind.MAPPING:
            # Both sides can hold children - trace the change further down
            result[key] = traced_update(current, change)
        else:
            result[key] = change

    return result


def deep_freeze(obj: Any) -> Any:
    """Make a read-only image of an object graph.

    Mappings become MappingProxyType views and lists become tuples, all
    the way down. Scalars are returned as they are.

    Args:
        obj: Object graph to freeze

    Returns:
        Frozen image of obj (obj itself is not modified)
    """
    kind = node_kind(obj)
    if kind is NodeKind.MAPPING:
        return MappingProxyType({key: deep_freeze(value) for key, value in obj.items()})
    if kind is NodeKind.ARRAY:
        return tuple(deep_freeze(item) for item in obj)
    return obj


def _to_json(obj: Any) -> Any:
    if isinstance(obj, Mapping):
        return dict(obj)
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def deep_clone(obj: Any) -> Any:
    """Clone a JSON compatible object graph through its JSON text.

    Args:
        obj: Object graph made of mappings, lists, tuples, strings,
            finite numbers, booleans and None

    Returns:
        Independent copy of obj built from dicts and lists

    Raises:
        CloneError: If obj holds anything JSON cannot represent
            (callables, ABSENT, NaN or infinity, cyclic references)
    """
    try:
        text = json.dumps(obj, allow_nan=False, default=_to_json)
    except (TypeError, ValueError) as e:
        raise CloneError(f"Cannot clone object graph: {e}") from e
    return json.loads(text)
