from __future__ import annotations

from sharemyad.constants.set_patterns import SET_PATTERNS, SetPattern

__all__ = [
    "SET_PATTERNS",
    "SetPattern",
]
