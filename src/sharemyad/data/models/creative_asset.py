"""ORM model for individual creative assets."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import BigInteger, Boolean, CheckConstraint, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from sharemyad.data.db import Base

if TYPE_CHECKING:
    from sharemyad.data.models.creative_set import CreativeSetRecord


class CreativeAsset(Base):
    """A file extracted from an upload, attributed to one creative set."""

    __tablename__ = "creative_assets"
    __table_args__ = (CheckConstraint("file_size_bytes > 0", name="file_size_positive"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    creative_set_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("creative_sets.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    filename_original: Mapped[str] = mapped_column(String(255), nullable=False)
    filename_sanitized: Mapped[str] = mapped_column(String(255), nullable=False)
    full_path: Mapped[str] = mapped_column(String, nullable=False)
    folder_path: Mapped[str | None] = mapped_column(String, nullable=True)
    file_type: Mapped[str] = mapped_column(String(20), nullable=False)
    mime_type: Mapped[str] = mapped_column(String(100), nullable=False)
    file_size_bytes: Mapped[int] = mapped_column(BigInteger, nullable=False)
    is_html5_bundle: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(UTC)
    )

    creative_set: Mapped[CreativeSetRecord] = relationship(
        "CreativeSetRecord", back_populates="assets"
    )
