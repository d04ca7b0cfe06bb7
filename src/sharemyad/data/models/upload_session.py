"""ORM model for upload sessions.

One session is created per uploaded archive and owns the creative sets
detected in it.
"""

from __future__ import annotations

from datetime import UTC, datetime
from enum import StrEnum
from typing import TYPE_CHECKING

from sqlalchemy import BigInteger, Boolean, CheckConstraint, DateTime, Enum, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from sharemyad.data.db import Base

if TYPE_CHECKING:
    from sharemyad.data.models.creative_set import CreativeSetRecord


class SessionStatus(StrEnum):
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


class UploadSession(Base):
    """Persisted metadata for one processed archive.

    Attributes:
        id: Auto-incrementing primary key.
        filename: Name of the uploaded archive.
        status: Processing status.
        total_files: Number of accepted files.
        total_size_bytes: Uncompressed size of accepted files.
        has_html5_bundle: True when any file is an index.html.
        error_code: Intake error code for failed sessions.
        created_at: UTC timestamp of when the session was created.
        completed_at: UTC timestamp of when processing finished.
    """

    __tablename__ = "upload_sessions"
    __table_args__ = (
        CheckConstraint("total_files <= 500", name="total_files_limit"),
        CheckConstraint("total_size_bytes <= 524288000", name="total_size_limit"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    filename: Mapped[str] = mapped_column(String, nullable=False)
    status: Mapped[SessionStatus] = mapped_column(
        Enum(SessionStatus, native_enum=False), nullable=False, default=SessionStatus.PENDING
    )
    total_files: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    total_size_bytes: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    has_html5_bundle: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    error_code: Mapped[str | None] = mapped_column(String, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(UTC)
    )
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    creative_sets: Mapped[list[CreativeSetRecord]] = relationship(
        "CreativeSetRecord",
        back_populates="upload_session",
        cascade="all, delete-orphan",
        order_by="CreativeSetRecord.id",
    )
