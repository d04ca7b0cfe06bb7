from __future__ import annotations

import pytest

from sharemyad.config import (
    MAX_ENTRIES,
    MAX_FOLDER_DEPTH,
    MAX_TOTAL_BYTES,
    IntakeLimits,
    load_limits,
)


@pytest.fixture(autouse=True)
def _clear_limit_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "SHAREMYAD_MAX_ENTRIES",
        "SHAREMYAD_MAX_TOTAL_BYTES",
        "SHAREMYAD_MAX_FOLDER_DEPTH",
        "SHAREMYAD_MAX_COMPRESSION_RATIO",
    ):
        monkeypatch.delenv(name, raising=False)


def test_default_limits() -> None:
    limits = load_limits()

    assert limits.max_entries == MAX_ENTRIES == 500
    assert limits.max_total_bytes == MAX_TOTAL_BYTES == 524288000
    assert limits.max_folder_depth == MAX_FOLDER_DEPTH == 10
    assert limits.max_compression_ratio == 100.0


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SHAREMYAD_MAX_ENTRIES", "50")
    monkeypatch.setenv("SHAREMYAD_MAX_TOTAL_BYTES", "1048576")
    monkeypatch.setenv("SHAREMYAD_MAX_FOLDER_DEPTH", "4")
    monkeypatch.setenv("SHAREMYAD_MAX_COMPRESSION_RATIO", "25.5")

    limits = load_limits()

    assert limits == IntakeLimits(
        max_entries=50,
        max_total_bytes=1048576,
        max_folder_depth=4,
        max_compression_ratio=25.5,
    )


def test_blank_environment_value_uses_default(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SHAREMYAD_MAX_ENTRIES", "  ")

    assert load_limits().max_entries == MAX_ENTRIES


def test_invalid_environment_value_raises(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SHAREMYAD_MAX_ENTRIES", "lots")

    with pytest.raises(ValueError, match="SHAREMYAD_MAX_ENTRIES"):
        load_limits()


@pytest.mark.parametrize(
    "kwargs",
    [
        {"max_entries": 0},
        {"max_total_bytes": 0},
        {"max_folder_depth": 11},
        {"max_folder_depth": -1},
        {"max_compression_ratio": 1},
    ],
)
def test_intake_limits_validation(kwargs: dict[str, float]) -> None:
    with pytest.raises(ValueError):
        IntakeLimits(**kwargs)
