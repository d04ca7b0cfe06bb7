"""Engine and session handling for the upload tables.

The engine is created lazily from ``DB_URL`` (a SQLite file named
``sharemyad.db`` at the project root when unset) and the upload tables are
created on first use. Callers get transactional sessions through
:func:`get_session`; the processing core never opens one itself.
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy.engine import URL, Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

DEFAULT_DB_FILENAME = "sharemyad.db"


class Base(DeclarativeBase):
    """Declarative base shared by the upload ORM models."""


_engine: Engine | None = None
_session_factory: sessionmaker[Session] | None = None


def get_database_url() -> str:
    """Return ``DB_URL`` or the project-local SQLite URL."""
    configured = os.getenv("DB_URL")
    if configured:
        return configured

    db_path = Path(__file__).resolve().parents[3] / DEFAULT_DB_FILENAME
    return URL.create("sqlite", database=str(db_path)).render_as_string(hide_password=False)


def _get_engine() -> Engine:
    global _engine
    if _engine is None:
        _engine = create_engine(get_database_url(), echo=False, future=True)
        # Registers the upload tables on Base.metadata.
        import sharemyad.data.models  # noqa: F401

        Base.metadata.create_all(bind=_engine)
    return _engine


def _get_session_factory() -> sessionmaker[Session]:
    global _session_factory
    if _session_factory is None:
        _session_factory = sessionmaker(
            bind=_get_engine(),
            autoflush=False,
            expire_on_commit=False,
        )
    return _session_factory


def init_db() -> None:
    """Create the upload tables now instead of on first session."""
    _get_engine()


def reset_engine() -> None:
    """Dispose the cached engine so the next access re-reads ``DB_URL``."""
    global _engine, _session_factory
    if _engine is not None:
        _engine.dispose()
    _engine = None
    _session_factory = None


@contextmanager
def get_session() -> Iterator[Session]:
    """Yield a session that commits on success and rolls back on error."""
    session = _get_session_factory()()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
