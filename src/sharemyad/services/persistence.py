"""Persist processing results into the upload tables.

The caller owns the session and therefore the transaction; nothing here
commits. All counts come from the processing result, so no database
triggers are involved.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime

from sqlalchemy.orm import Session

from sharemyad.data.models import (
    CreativeAsset,
    CreativeSetRecord,
    FolderStructure,
    SessionStatus,
    UploadSession,
)
from sharemyad.models.creative import FolderNode, ProcessingResult
from sharemyad.utils.paths import sanitize_filename

logger = logging.getLogger(__name__)


def _folders_for_set(set_name: str, nodes: list[FolderNode]) -> list[FolderNode]:
    """Return the set's folders plus their ancestors, parents first."""
    by_path = {node.full_path: node for node in nodes}
    selected: dict[str, FolderNode] = {}
    for node in nodes:
        if node.set_name != set_name:
            continue
        current: FolderNode | None = node
        while current is not None and current.full_path not in selected:
            selected[current.full_path] = current
            current = by_path.get(current.parent_path) if current.parent_path else None
    return sorted(selected.values(), key=lambda n: (n.depth_level, n.full_path))


def store_folder_structure(
    session: Session, creative_set: CreativeSetRecord, nodes: list[FolderNode]
) -> list[FolderStructure]:
    """Insert folder rows for one set, parents before children.

    Ancestor folders that belong to no set of their own are stored with a
    zero direct count so the set's rollup only covers its own assets.
    """
    rows: dict[str, FolderStructure] = {}
    for node in nodes:
        parent = rows.get(node.parent_path) if node.parent_path else None
        direct = node.asset_count if node.set_name == creative_set.set_name else 0
        row = FolderStructure(
            creative_set=creative_set,
            parent_folder_id=parent.id if parent is not None else None,
            folder_name=node.name,
            full_path=node.full_path,
            depth_level=node.depth_level,
            asset_count=direct,
            total_asset_count=direct,
            is_html5_bundle=node.is_html5_bundle,
        )
        session.add(row)
        session.flush()
        rows[node.full_path] = row

    for node in reversed(nodes):
        if node.parent_path in rows:
            rows[node.parent_path].total_asset_count += rows[node.full_path].total_asset_count
    return list(rows.values())


def create_upload_session(session: Session, filename: str) -> UploadSession:
    """Create a session row in ``processing`` state."""
    upload = UploadSession(filename=filename, status=SessionStatus.PROCESSING)
    session.add(upload)
    session.flush()
    return upload


def mark_session_failed(session: Session, upload: UploadSession, error_code: str) -> None:
    upload.status = SessionStatus.FAILED
    upload.error_code = error_code
    upload.completed_at = datetime.now(UTC)
    session.flush()


def persist_processing_result(
    session: Session, upload: UploadSession, result: ProcessingResult
) -> list[CreativeSetRecord]:
    """Store sets, folders and assets of *result* under *upload*.

    Args:
        session: Open session; the caller commits or rolls back.
        upload: Session row created by :func:`create_upload_session`.
        result: Output of the processing pipeline.

    Returns:
        Created creative set rows in result order.
    """
    set_rows: dict[str, CreativeSetRecord] = {}
    for creative_set in result.sets:
        row = CreativeSetRecord(
            upload_session=upload,
            set_name=creative_set.name,
            original_folder_path=(
                creative_set.source_folders[0] if creative_set.source_folders else None
            ),
            asset_count=creative_set.asset_count,
            is_default=creative_set.is_default,
            is_html5_bundle=creative_set.is_html5_bundle,
        )
        session.add(row)
        set_rows[creative_set.name] = row
    session.flush()

    for name, row in set_rows.items():
        store_folder_structure(session, row, _folders_for_set(name, result.folders))

    for entry in result.entries:
        set_row = set_rows[result.entry_sets[entry.full_path]]
        session.add(
            CreativeAsset(
                creative_set=set_row,
                filename_original=entry.filename,
                filename_sanitized=sanitize_filename(entry.filename),
                full_path=entry.full_path,
                folder_path=entry.folder or None,
                file_type=entry.file_type,
                mime_type=entry.mime_hint,
                file_size_bytes=entry.size_bytes,
                is_html5_bundle=entry.is_html5_marker,
            )
        )

    upload.status = SessionStatus.COMPLETED
    upload.total_files = result.file_count
    upload.total_size_bytes = result.total_size_bytes
    upload.has_html5_bundle = result.has_html5_bundle
    upload.completed_at = datetime.now(UTC)
    session.flush()

    logger.info(
        "Stored upload session %d with %d sets and %d assets",
        upload.id,
        len(set_rows),
        result.file_count,
    )
    return list(set_rows.values())
