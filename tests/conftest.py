from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest

from sharemyad.data.db import init_db, reset_engine


@pytest.fixture
def api_db(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[None]:
    """Use a temporary SQLite DB for API and persistence tests.

    Modules that touch the database opt in with
    ``pytestmark = pytest.mark.usefixtures("api_db")``.
    """
    db_path = tmp_path / "sharemyad.db"
    monkeypatch.setenv("DB_URL", f"sqlite:///{db_path.as_posix()}")
    reset_engine()
    init_db()
    yield
    # Dispose engine to release connections
    reset_engine()
