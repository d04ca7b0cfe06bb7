"""Pydantic schemas for upload API responses."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class CreativeSetSummary(BaseModel):
    """Creative set as shown in the preview tabs."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    set_name: str
    original_folder_path: str | None
    asset_count: int = Field(ge=0)
    is_default: bool
    is_html5_bundle: bool


class WarningSummary(BaseModel):
    """Non-fatal notice produced while processing the archive."""

    code: str
    message: str
    path: str | None = None
    count: int = 1


class AssetSummary(BaseModel):
    """Single creative asset."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    creative_set_id: int
    filename_original: str
    filename_sanitized: str
    full_path: str
    file_type: str
    mime_type: str
    file_size_bytes: int
    is_html5_bundle: bool


class FolderSummary(BaseModel):
    """Folder row of a creative set's hierarchy."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    parent_folder_id: int | None
    folder_name: str
    full_path: str
    depth_level: int = Field(ge=0, le=10)
    asset_count: int
    total_asset_count: int
    is_html5_bundle: bool


class UploadResponse(BaseModel):
    """Response schema for the archive upload endpoint."""

    session_id: int
    filename: str
    status: str
    total_files: int
    total_size_bytes: int
    has_html5_bundle: bool
    created_at: datetime
    creative_sets: list[CreativeSetSummary]
    warnings: list[WarningSummary] = Field(default_factory=list)


class UploadStatusResponse(BaseModel):
    """Response schema for the upload status endpoint."""

    session_id: int
    filename: str
    status: str
    total_files: int
    total_size_bytes: int
    has_html5_bundle: bool
    error_code: str | None
    created_at: datetime
    completed_at: datetime | None
    creative_sets: list[CreativeSetSummary]
    assets: list[AssetSummary] | None = None
