"""Upload routes for the API."""

from __future__ import annotations

import logging
from pathlib import Path
from tempfile import TemporaryDirectory
from typing import Annotated

from fastapi import APIRouter, File, HTTPException, Query, UploadFile, status

from sharemyad.api.schemas.uploads import (
    AssetSummary,
    CreativeSetSummary,
    FolderSummary,
    UploadResponse,
    UploadStatusResponse,
    WarningSummary,
)
from sharemyad.config import load_limits
from sharemyad.data.db import get_session
from sharemyad.data.models import CreativeSetRecord, FolderStructure, UploadSession
from sharemyad.models.intake import (
    ArchiveIntakeError,
    ArchiveTooLargeError,
    TooManyEntriesError,
)
from sharemyad.services.persistence import (
    create_upload_session,
    mark_session_failed,
    persist_processing_result,
)
from sharemyad.workflows.upload_pipeline import process_archive

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/uploads", tags=["uploads"])

CHUNK_SIZE = 8192


def _status_code_for(exc: ArchiveIntakeError) -> int:
    if isinstance(exc, (ArchiveTooLargeError, TooManyEntriesError)):
        return status.HTTP_413_REQUEST_ENTITY_TOO_LARGE
    return status.HTTP_400_BAD_REQUEST


def _record_failure(filename: str, exc: ArchiveIntakeError) -> None:
    with get_session() as session:
        upload = create_upload_session(session, filename)
        mark_session_failed(session, upload, exc.code)


@router.post(
    "",
    response_model=UploadResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Upload a creative archive",
    description="Upload a ZIP file, detect creative sets and persist the folder structure.",
    responses={
        400: {"description": "Invalid or unsafe ZIP file"},
        413: {"description": "Archive exceeds the file count or size limits"},
        500: {"description": "Upload could not be persisted"},
    },
)
async def upload_archive(
    file: Annotated[UploadFile, File(description="ZIP archive containing creative assets")],
) -> UploadResponse:
    limits = load_limits()
    filename = Path(file.filename or "upload.zip").name

    with TemporaryDirectory() as temp_dir:
        temp_path = Path(temp_dir) / "upload.zip"
        received = 0
        with temp_path.open("wb") as f:
            while True:
                chunk = await file.read(CHUNK_SIZE)
                if not chunk:
                    break
                received += len(chunk)
                if received > limits.max_total_bytes:
                    raise HTTPException(
                        status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                        detail={
                            "code": ArchiveTooLargeError.code,
                            "message": "Uploaded file exceeds the maximum upload size.",
                        },
                    )
                f.write(chunk)

        try:
            result = process_archive(temp_path, limits)
        except ArchiveIntakeError as exc:
            _record_failure(filename, exc)
            raise HTTPException(
                status_code=_status_code_for(exc),
                detail={"code": exc.code, "message": exc.message},
            ) from exc

    try:
        with get_session() as session:
            upload = create_upload_session(session, filename)
            set_rows = persist_processing_result(session, upload, result)
            response = UploadResponse(
                session_id=upload.id,
                filename=upload.filename,
                status=upload.status.value,
                total_files=upload.total_files,
                total_size_bytes=upload.total_size_bytes,
                has_html5_bundle=upload.has_html5_bundle,
                created_at=upload.created_at,
                creative_sets=[CreativeSetSummary.model_validate(row) for row in set_rows],
                warnings=[
                    WarningSummary(
                        code=warning.code.value,
                        message=warning.message,
                        path=warning.path,
                        count=warning.count,
                    )
                    for warning in result.warnings
                ],
            )
    except Exception as exc:
        logger.exception("Failed to store upload %s", filename)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to store upload.",
        ) from exc
    return response


@router.get(
    "/{session_id}",
    response_model=UploadStatusResponse,
    summary="Get upload status",
    responses={404: {"description": "Upload session not found"}},
)
def get_upload_status(
    session_id: int,
    include_assets: Annotated[bool, Query(description="Include asset details")] = False,
) -> UploadStatusResponse:
    with get_session() as session:
        upload = session.get(UploadSession, session_id)
        if upload is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Upload session not found.",
            )
        assets = None
        if include_assets:
            assets = [
                AssetSummary.model_validate(asset)
                for creative_set in upload.creative_sets
                for asset in creative_set.assets
            ]
        return UploadStatusResponse(
            session_id=upload.id,
            filename=upload.filename,
            status=upload.status.value,
            total_files=upload.total_files,
            total_size_bytes=upload.total_size_bytes,
            has_html5_bundle=upload.has_html5_bundle,
            error_code=upload.error_code,
            created_at=upload.created_at,
            completed_at=upload.completed_at,
            creative_sets=[
                CreativeSetSummary.model_validate(row) for row in upload.creative_sets
            ],
            assets=assets,
        )


@router.get(
    "/{session_id}/sets/{set_id}/folders",
    response_model=list[FolderSummary],
    summary="List the folder hierarchy of a creative set",
    responses={404: {"description": "Creative set not found"}},
)
def list_set_folders(session_id: int, set_id: int) -> list[FolderSummary]:
    with get_session() as session:
        creative_set = session.get(CreativeSetRecord, set_id)
        if creative_set is None or creative_set.upload_session_id != session_id:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Creative set not found.",
            )
        folders = (
            session.query(FolderStructure)
            .filter(FolderStructure.creative_set_id == set_id)
            .order_by(FolderStructure.depth_level.asc(), FolderStructure.full_path.asc())
            .all()
        )
        return [FolderSummary.model_validate(folder) for folder in folders]
