"""
Terminal value classification and the JSON wire format.

Every terminal of a translation tree is stored as one JSON document so that
strings, numbers, booleans and nulls stay distinguishable after a round trip
through a text-only key-value store.
"""

from __future__ import annotations

import json
import logging
import math
from enum import Enum
from typing import Any

from .exceptions import UnsupportedValueKindError

_LOGGER = logging.getLogger(__name__)


class ValueKind(str, Enum):
    """
    Closed set of terminal kinds accepted by the store.

    STRING, NUMBER, BOOLEAN, NULL
        Scalar JSON values.
    ARRAY
        Ordered sequence of accepted terminals (for example day names).
    """

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    NULL = "null"
    ARRAY = "array"


class _Missing:
    """Sentinel type for "no translation stored under this key"."""

    _instance: "_Missing | None" = None

    def __new__(cls) -> "_Missing":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISSING"


MISSING = _Missing()
"""Returned by lookups when nothing is stored; distinct from a stored ``None``."""


def classify(value: Any, *, key: str = "") -> ValueKind:
    """
    Return the :class:`ValueKind` of ``value``.

    Raises
    ------
    UnsupportedValueKindError
        If ``value`` is callable or has no JSON representation.
    """
    # bool first: it is a subclass of int.
    if isinstance(value, bool):
        return ValueKind.BOOLEAN
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, int):
        return ValueKind.NUMBER
    if isinstance(value, float):
        # NaN and Infinity have no JSON spelling.
        if not math.isfinite(value):
            raise UnsupportedValueKindError(key, value)
        return ValueKind.NUMBER
    if value is None:
        return ValueKind.NULL
    if isinstance(value, (list, tuple)):
        for item in value:
            classify(item, key=key)
        return ValueKind.ARRAY
    raise UnsupportedValueKindError(key, value)


def encode_value(value: Any, *, key: str = "") -> str:
    """Validate ``value`` and encode it as compact JSON text."""
    classify(value, key=key)
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False, allow_nan=False)


def decode_value(raw: bytes | str) -> Any:
    """
    Decode one stored value.

    Data that is not valid UTF-8 JSON is returned as the raw string instead
    of raising, so values written by other tools remain readable. Invalid
    UTF-8 bytes are replaced with U+FFFD in that string.
    """
    try:
        text = raw.decode("utf-8") if isinstance(raw, bytes) else str(raw)
        return json.loads(text)
    except ValueError:
        text = raw.decode("utf-8", errors="replace") if isinstance(raw, bytes) else str(raw)
        _LOGGER.warning("Stored value is not valid JSON, returning raw string value=%r", text[:80])
        return text
