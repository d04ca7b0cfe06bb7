"""ORM model for creative sets detected within an upload session."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, CheckConstraint, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from sharemyad.data.db import Base

if TYPE_CHECKING:
    from sharemyad.data.models.creative_asset import CreativeAsset
    from sharemyad.data.models.folder_structure import FolderStructure
    from sharemyad.data.models.upload_session import UploadSession


class CreativeSetRecord(Base):
    """Persisted creative set with its derived asset count."""

    __tablename__ = "creative_sets"
    __table_args__ = (CheckConstraint("asset_count >= 0", name="asset_count_positive"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    upload_session_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("upload_sessions.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    set_name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    original_folder_path: Mapped[str | None] = mapped_column(String, nullable=True)
    asset_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_default: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_html5_bundle: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(UTC)
    )

    upload_session: Mapped[UploadSession] = relationship(
        "UploadSession", back_populates="creative_sets"
    )
    folders: Mapped[list[FolderStructure]] = relationship(
        "FolderStructure",
        back_populates="creative_set",
        cascade="all, delete-orphan",
    )
    assets: Mapped[list[CreativeAsset]] = relationship(
        "CreativeAsset",
        back_populates="creative_set",
        cascade="all, delete-orphan",
        order_by="CreativeAsset.id",
    )
