# alchemy/core/coerce_utils.py
from typing import Any, List, Optional

from .pair_key import is_valid_id


def coerce_id(val: Any) -> Any:
    """Ints pass through, ASCII digit strings become ints, anything else is
    returned untouched so normalize() can reject it with a proper message."""
    if isinstance(val, bool):
        return val
    if isinstance(val, int):
        return val
    if isinstance(val, str):
        s = val.strip()
        # "²".isdigit() is True but int("²") fails
        if s.isascii() and s.isdigit():
            return int(s)
    return val


def coerce_id_list(val: Any) -> List[int]:
    """Coerce a JSON list (or "1,2,3" string) of ids; unusable entries are dropped."""
    if val is None:
        return []
    if isinstance(val, str):
        val = [p.strip() for p in val.replace("[", "").replace("]", "").split(",")]
    if not isinstance(val, (list, tuple)):
        return []
    out: List[int] = []
    for x in val:
        x = coerce_id(x)
        if is_valid_id(x):
            out.append(x)
    return out


def coerce_flag(val: Any, default: bool = False) -> bool:
    if val is None:
        return default
    if isinstance(val, str):
        return val.strip().lower() in ("1", "true", "yes", "on")
    return bool(val)


def optional_id(val: Any) -> Optional[int]:
    val = coerce_id(val)
    return val if is_valid_id(val) else None
