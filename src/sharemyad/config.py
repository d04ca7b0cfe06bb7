"""Processing limits for archive intake.

Defaults match the upload session constraints (500 files, 500 MiB). Each
limit can be overridden through an environment variable (a local
``.env`` file is loaded first):

- ``SHAREMYAD_MAX_ENTRIES``
- ``SHAREMYAD_MAX_TOTAL_BYTES``
- ``SHAREMYAD_MAX_FOLDER_DEPTH``
- ``SHAREMYAD_MAX_COMPRESSION_RATIO``
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

# Load limit overrides from a local .env file (SHAREMYAD_MAX_ENTRIES, ...)
load_dotenv()

MAX_ENTRIES = 500
MAX_TOTAL_BYTES = 500 * 1024 * 1024
MAX_FOLDER_DEPTH = 10
MAX_COMPRESSION_RATIO = 100.0
RATIO_FLOOR_BYTES = 1024 * 1024


@dataclass(slots=True, frozen=True)
class IntakeLimits:
    """Ceilings enforced while reading an archive.

    Attributes:
        max_entries: Maximum number of file entries.
        max_total_bytes: Maximum cumulative uncompressed size.
        max_folder_depth: Deepest folder level kept (root folders are 0).
        max_compression_ratio: Largest accepted uncompressed/compressed ratio.
        ratio_floor_bytes: Entries smaller than this skip the ratio check.
    """

    max_entries: int = MAX_ENTRIES
    max_total_bytes: int = MAX_TOTAL_BYTES
    max_folder_depth: int = MAX_FOLDER_DEPTH
    max_compression_ratio: float = MAX_COMPRESSION_RATIO
    ratio_floor_bytes: int = RATIO_FLOOR_BYTES

    def __post_init__(self) -> None:
        if self.max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        if self.max_total_bytes < 1:
            raise ValueError("max_total_bytes must be at least 1")
        if not 0 <= self.max_folder_depth <= MAX_FOLDER_DEPTH:
            raise ValueError(f"max_folder_depth must be between 0 and {MAX_FOLDER_DEPTH}")
        if self.max_compression_ratio <= 1:
            raise ValueError("max_compression_ratio must be greater than 1")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {raw!r}") from exc


def load_limits() -> IntakeLimits:
    """Return intake limits, applying environment overrides."""
    return IntakeLimits(
        max_entries=_env_int("SHAREMYAD_MAX_ENTRIES", MAX_ENTRIES),
        max_total_bytes=_env_int("SHAREMYAD_MAX_TOTAL_BYTES", MAX_TOTAL_BYTES),
        max_folder_depth=_env_int("SHAREMYAD_MAX_FOLDER_DEPTH", MAX_FOLDER_DEPTH),
        max_compression_ratio=_env_float(
            "SHAREMYAD_MAX_COMPRESSION_RATIO", MAX_COMPRESSION_RATIO
        ),
    )
