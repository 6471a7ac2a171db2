"""Lenient numeric parsing for scraped stat values.

Scraped numbers arrive as strings like ``"12"``, ``" 3.5 "`` or ``"-"``. A value
is read from its leading numeric prefix; anything unreadable becomes zero.
"""

from __future__ import annotations

import json
import math
import re
from typing import Any, Optional

_INT_PREFIX = re.compile(r"^\s*([+-]?\d+)")
_FLOAT_PREFIX = re.compile(r"^\s*([+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)")


def coerce_int(value: Any) -> int:
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else 0
    if isinstance(value, str):
        match = _INT_PREFIX.match(value)
        if not match:
            return 0
        try:
            return int(match.group(1))
        except ValueError:
            # digit run longer than the interpreter's int conversion limit
            return 0
    return 0


def coerce_float(value: Any) -> float:
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        try:
            result = float(value)
        except OverflowError:
            return 0.0
    elif isinstance(value, str):
        match = _FLOAT_PREFIX.match(value)
        if not match:
            return 0.0
        result = float(match.group(1))
    else:
        return 0.0
    if not math.isfinite(result):
        return 0.0
    # -0.0 is falsy
    return result or 0.0


def pass_through_text(value: Any) -> Optional[str]:
    if value is None or isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False)
