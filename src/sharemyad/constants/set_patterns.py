"""Ordered matcher table for creative-set folder names.

Rules are tried in order against a single path segment; the first rule whose
pattern matches the whole segment (case-insensitively) names the set.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass


def _token(value: str) -> str:
    """Single letters are uppercased so ``test-a`` and ``Test-A`` agree."""
    return value.upper() if len(value) == 1 else value


@dataclass(slots=True, frozen=True)
class SetPattern:
    """A named folder-naming convention and its canonical set name."""

    name: str
    regex: re.Pattern[str]
    canonicalize: Callable[[re.Match[str]], str]

    def match(self, segment: str) -> str | None:
        found = self.regex.fullmatch(segment)
        if found is None:
            return None
        return self.canonicalize(found)


def _compile(pattern: str) -> re.Pattern[str]:
    return re.compile(pattern, re.IGNORECASE)


SET_PATTERNS: tuple[SetPattern, ...] = (
    SetPattern(
        name="set-prefix",
        regex=_compile(r"Set[-_]?([A-Za-z])"),
        canonicalize=lambda m: f"Set-{m.group(1).upper()}",
    ),
    SetPattern(
        name="single-letter",
        regex=_compile(r"([A-Za-z])"),
        canonicalize=lambda m: f"Set-{m.group(1).upper()}",
    ),
    SetPattern(
        name="version-number",
        regex=_compile(r"Version[-_]?(\d+)"),
        canonicalize=lambda m: f"Version-{m.group(1)}",
    ),
    SetPattern(
        name="v-short",
        regex=_compile(r"[Vv](\d+)"),
        canonicalize=lambda m: f"v{m.group(1)}",
    ),
    SetPattern(
        name="test-prefix",
        regex=_compile(r"Test[-_]?([A-Za-z0-9]+)"),
        canonicalize=lambda m: f"Test-{_token(m.group(1))}",
    ),
    SetPattern(
        name="variant-prefix",
        regex=_compile(r"Variant[-_]?([A-Za-z0-9]+)"),
        canonicalize=lambda m: f"Variant-{_token(m.group(1))}",
    ),
    SetPattern(
        name="literal",
        regex=_compile(r"(Control|Treatment|Draft|Final)"),
        canonicalize=lambda m: m.group(1).capitalize(),
    ),
)
