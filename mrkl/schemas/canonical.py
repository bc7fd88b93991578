"""
Schemas & Canonicalization
File: canonical.py

Purpose: Stable text form for tree items that are not already text or bytes.
Ints, tuples, datetimes, enums, dicts and Pydantic models are reduced to plain
JSON data and dumped with sorted keys, so an item hashes to one digest no
matter how it was constructed.

Anything without a single stable text form (sets, NaN, arbitrary objects) is
rejected with CanonicalizationException rather than hashed.
"""

import json
import math
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel

from .errors import CanonicalizationException

CANONICAL_JSON_SEPARATORS: tuple[str, str] = (",", ":")

_SCALARS = (str, int)


def format_datetime_canonical(dt: datetime) -> str:
    """
    Render ``dt`` as UTC ISO-8601 with a Z suffix.

    Naive datetimes are taken to be UTC already. Microseconds are written
    only when nonzero.

    Example:
        >>> format_datetime_canonical(datetime(2026, 1, 27, 21, 35))
        '2026-01-27T21:35:00Z'
    """
    utc_dt = dt.replace(tzinfo=timezone.utc) if dt.tzinfo is None else dt.astimezone(timezone.utc)
    pattern = "%Y-%m-%dT%H:%M:%S.%fZ" if utc_dt.microsecond else "%Y-%m-%dT%H:%M:%SZ"
    return utc_dt.strftime(pattern)


def _reject(message: str, path: str, **details: Any) -> CanonicalizationException:
    return CanonicalizationException(message=message, details={"path": path, **details})


def canonicalize_value(value: Any, path: str = "") -> Any:
    """
    Reduce ``value`` to JSON-ready data with one representation per value.

    Rules:
    - None, bool, int, str pass through
    - float must be finite
    - datetime becomes a UTC string (format_datetime_canonical)
    - Enum becomes its value
    - Pydantic models are dumped in JSON mode, without None fields
    - dict keys become strings; None values are dropped
    - list and tuple become lists, order kept
    - bytes become lowercase hex

    Args:
        value: The value to reduce
        path: Location inside the enclosing item, for error details

    Raises:
        CanonicalizationException: On non-finite floats or unsupported types
    """
    if value is None or isinstance(value, (bool, *_SCALARS)):
        # bool is an int subclass; both pass through unchanged
        return value

    if isinstance(value, float):
        if not math.isfinite(value):
            raise _reject(f"Non-finite float value encountered: {value}", path, value=str(value))
        return value

    if isinstance(value, datetime):
        return format_datetime_canonical(value)

    if isinstance(value, Enum):
        return canonicalize_value(value.value, path)

    if isinstance(value, BaseModel):
        return canonicalize_value(value.model_dump(mode="json", exclude_none=True), path)

    if isinstance(value, dict):
        out: dict[str, Any] = {}
        for key, item in value.items():
            if item is None:
                continue
            child = f"{path}.{key}" if path else str(key)
            out[str(key)] = canonicalize_value(item, child)
        return out

    if isinstance(value, (list, tuple)):
        return [canonicalize_value(item, f"{path}[{i}]") for i, item in enumerate(value)]

    if isinstance(value, bytes):
        return value.hex()

    raise _reject(
        f"Cannot canonicalize value of type {type(value).__name__}",
        path,
        type=type(value).__name__,
    )


def dumps_canonical(obj: Any) -> str:
    """
    Canonical JSON text of ``obj``: sorted keys, no whitespace, UTF-8 kept.

    Example:
        >>> dumps_canonical({"b": 2, "a": (1, 2)})
        '{"a":[1,2],"b":2}'

    Raises:
        CanonicalizationException: If ``obj`` cannot be canonicalized
    """
    data = canonicalize_value(obj)
    try:
        return json.dumps(
            data,
            sort_keys=True,
            separators=CANONICAL_JSON_SEPARATORS,
            ensure_ascii=False,
        )
    except (TypeError, ValueError) as e:
        raise CanonicalizationException(
            message=f"Failed to serialize to canonical JSON: {e}",
            details={"type": type(obj).__name__, "error": str(e)},
        ) from e
