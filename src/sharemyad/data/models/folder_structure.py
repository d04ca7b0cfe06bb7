"""ORM model mirroring the folder hierarchy of a creative set."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from sharemyad.data.db import Base

if TYPE_CHECKING:
    from sharemyad.data.models.creative_set import CreativeSetRecord


class FolderStructure(Base):
    """One folder row, keyed by ``(creative_set_id, full_path)``."""

    __tablename__ = "folder_structure"
    __table_args__ = (
        UniqueConstraint("creative_set_id", "full_path", name="uq_folder_set_path"),
        CheckConstraint("depth_level BETWEEN 0 AND 10", name="depth_limit"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    creative_set_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("creative_sets.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    parent_folder_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("folder_structure.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    folder_name: Mapped[str] = mapped_column(String(255), nullable=False)
    full_path: Mapped[str] = mapped_column(String, nullable=False)
    depth_level: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    asset_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    total_asset_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_html5_bundle: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    creative_set: Mapped[CreativeSetRecord] = relationship(
        "CreativeSetRecord", back_populates="folders"
    )
