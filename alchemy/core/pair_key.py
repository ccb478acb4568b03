# alchemy/core/pair_key.py
from __future__ import annotations
from typing import Any, NamedTuple

from ..errors import InvalidInput

# largest id a signed 64-bit INTEGER column can hold
MAX_ID = 2 ** 63 - 1


class PairKey(NamedTuple):
    low: int
    high: int
    key: str


def is_valid_id(value: Any) -> bool:
    # bool is an int subclass; True must not sneak through as id 1
    return isinstance(value, int) and not isinstance(value, bool) and 0 < value <= MAX_ID


def _check_id(value: Any, label: str) -> int:
    if not is_valid_id(value):
        detail = value if isinstance(value, int) and not isinstance(value, bool) else repr(value)
        raise InvalidInput(f"{label} must be a positive integer id", value=detail)
    return value


def normalize(a: Any, b: Any) -> PairKey:
    """Canonical, order-independent key for an unordered pair of element ids.

    Every cache lookup, recipe lookup and recipe insert goes through here,
    so (a, b) and (b, a) always land on the same slot.
    """
    a = _check_id(a, "elementAId")
    b = _check_id(b, "elementBId")
    low, high = (a, b) if a <= b else (b, a)
    return PairKey(low, high, f"{low}_{high}")
