from __future__ import annotations

import sys
from enum import IntFlag
from typing import Any, Callable

# Remaining-size estimate meaning "not known"
UNKNOWN_SIZE: int = sys.maxsize

Comparator = Callable[[Any, Any], int]


class Characteristic(IntFlag):
    """Structural characteristics reported by a splitter"""

    NONE = 0
    ORDERED = 0x00000010
    DISTINCT = 0x00000001
    SORTED = 0x00000004
    SIZED = 0x00000040
    NONNULL = 0x00000100
    IMMUTABLE = 0x00000400
    CONCURRENT = 0x00001000
    SUBSIZED = 0x00004000


def natural_order(a: Any, b: Any) -> int:
    return (a > b) - (a < b)
