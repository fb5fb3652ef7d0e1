"""Deterministic store keys for unique-callback.

Provides canonical JSON serialization and the composite
(arguments, result) key used to record accepted results. All encoding is
structural: equal values always produce the same key, regardless of dict
key ordering or object identity.
"""

from __future__ import annotations

import dataclasses
import datetime
import json
from typing import Any, Mapping, Sequence

from pydantic import BaseModel

# Wrapper key for dicts whose keys are not all strings. Their items are
# encoded as sorted [encoded key, value] pairs so 1 and "1" stay distinct.
_DICT_ITEMS_TAG = "__dict_items__"


def _prepare(value: Any) -> Any:
    """Rewrite containers so json.dumps never coerces or compares dict keys."""
    if isinstance(value, dict):
        if all(isinstance(k, str) for k in value):
            return {k: _prepare(v) for k, v in value.items()}
        pairs = [[canonical_json(k), _prepare(v)] for k, v in value.items()]
        return {_DICT_ITEMS_TAG: sorted(pairs, key=canonical_json)}
    if isinstance(value, (list, tuple)):
        return [_prepare(v) for v in value]
    return value


def _encode_default(value: Any) -> Any:
    """Encode values the json module does not handle natively."""
    if isinstance(value, BaseModel):
        return _prepare(value.model_dump(mode="json"))
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return _prepare(dataclasses.asdict(value))
    if isinstance(value, (set, frozenset)):
        # Order members by their own encoding so iteration order never leaks in.
        return [_prepare(v) for v in sorted(value, key=canonical_json)]
    if isinstance(value, (datetime.datetime, datetime.date, datetime.time)):
        return value.isoformat()
    raise TypeError(
        f"Object of type {type(value).__name__} cannot be used in a store key"
    )


def canonical_json(data: Any) -> str:
    """Serialize data to a canonical JSON string.

    Uses sorted keys and compact separators, and keeps non-ASCII
    characters as-is, to ensure deterministic output. Dicts with any
    non-string key are encoded as a tagged list of [key, value] pairs, so
    their keys keep their types.

    Args:
        data: Any JSON-serializable value, or a pydantic model, dataclass
            instance, set, or date/time nested anywhere inside one.

    Returns:
        The canonical JSON text.

    Raises:
        TypeError: If data contains a value with no structural encoding.
    """
    return json.dumps(
        _prepare(data),
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        default=_encode_default,
    )


def store_key(
    args: Sequence[Any],
    kwargs: Mapping[str, Any] | None,
    result: Any,
) -> str:
    """Compute the store key for a call's arguments and its result.

    The key concatenates the encoded positional arguments (always a JSON
    array), the encoded keyword arguments (only when any were passed) and
    the encoded result. JSON values are self-delimiting, so distinct
    triples never share a key.

    Args:
        args: Positional arguments of the call.
        kwargs: Keyword arguments of the call, or None.
        result: The candidate result.

    Returns:
        The composite key, e.g. ``'[1,"a"]{"k":2}3'``.
    """
    key = canonical_json(list(args))
    if kwargs:
        key += canonical_json(dict(kwargs))
    return key + canonical_json(result)
