"""Archive intake: read a zip upload into a validated, flat list of entries."""

from __future__ import annotations

import io
import logging
import zlib
from pathlib import Path
from typing import BinaryIO
from zipfile import BadZipFile, LargeZipFile, ZipFile, ZipInfo

from sharemyad.config import IntakeLimits, load_limits
from sharemyad.constants.file_types import (
    DEFAULT_MIME_TYPE,
    EXTENSION_MIME_TYPES,
    IGNORED_DIRECTORIES,
    IGNORED_FILENAMES,
    MAGIC_SIGNATURES,
    RESOURCE_FORK_PREFIX,
    ZIP_MIME_TYPE,
    ZIP_SIGNATURE,
)
from sharemyad.models.intake import (
    ArchiveEntry,
    ArchiveTooLargeError,
    CorruptArchiveError,
    EncryptedArchiveError,
    IntakeResult,
    IntakeWarning,
    TooManyEntriesError,
    WarningCode,
    ZipBombError,
)
from sharemyad.utils.paths import normalize_archive_path

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024

ArchiveSource = bytes | bytearray | BinaryIO | Path | str


def _format_mib(size_bytes: int) -> str:
    return f"{size_bytes / (1024 * 1024):.0f} MiB"


def _open_archive(archive: ArchiveSource) -> tuple[ZipFile, int]:
    """Open *archive* and return it with the container size in bytes.

    Raises:
        CorruptArchiveError: If the data is not a readable zip container.
    """
    try:
        if isinstance(archive, (bytes, bytearray)):
            return ZipFile(io.BytesIO(bytes(archive))), len(archive)
        if isinstance(archive, (str, Path)):
            path = Path(archive)
            return ZipFile(path), path.stat().st_size
        archive.seek(0, io.SEEK_END)
        container_size = archive.tell()
        archive.seek(0)
        return ZipFile(archive), container_size
    except (BadZipFile, LargeZipFile, OSError, ValueError, EOFError) as exc:
        raise CorruptArchiveError("Uploaded file is not a readable zip archive") from exc


def _is_ignored(segments: tuple[str, ...]) -> bool:
    """Return True for OS metadata that is never a creative asset."""
    if any(part in IGNORED_DIRECTORIES for part in segments):
        return True
    filename = segments[-1]
    return filename in IGNORED_FILENAMES or filename.startswith(RESOURCE_FORK_PREFIX)


def detect_mime_type(filename: str, head: bytes) -> str:
    """Derive a MIME type from magic bytes, falling back to the extension.

    Args:
        filename: Base name of the file.
        head: First bytes of the file content.

    Returns:
        MIME type string, ``application/octet-stream`` when unknown.
    """
    _, dot, extension = filename.rpartition(".")
    extension = f".{extension.lower()}" if dot else ""

    for offset, signature, mime_type in MAGIC_SIGNATURES:
        if head[offset : offset + len(signature)] == signature:
            # Office documents and other zip-based formats keep their own type.
            if mime_type == ZIP_MIME_TYPE and extension not in {"", ".zip"}:
                return EXTENSION_MIME_TYPES.get(extension, DEFAULT_MIME_TYPE)
            return mime_type

    return EXTENSION_MIME_TYPES.get(extension, DEFAULT_MIME_TYPE)


def _collect_members(
    archive: ZipFile, warnings: list[IntakeWarning]
) -> list[tuple[ZipInfo, tuple[str, ...]]]:
    """Validate central directory names and return the file members to read.

    Directory records, OS metadata and duplicate names are skipped. Every
    name is checked for path safety before any data is decompressed.
    """
    members: list[tuple[ZipInfo, tuple[str, ...]]] = []
    seen: set[tuple[str, ...]] = set()
    ignored = 0

    for info in archive.infolist():
        segments = normalize_archive_path(info.filename)
        if info.is_dir() or not segments:
            continue
        if info.flag_bits & 0x1:
            raise EncryptedArchiveError(
                "Cannot extract password-protected archive. "
                "Please upload an unprotected zip file."
            )
        if _is_ignored(segments):
            ignored += 1
            continue
        if segments in seen:
            warnings.append(
                IntakeWarning(
                    code=WarningCode.DUPLICATE_ENTRY,
                    message=f"Duplicate entry skipped: {'/'.join(segments)}",
                    path="/".join(segments),
                )
            )
            continue
        seen.add(segments)
        members.append((info, segments))

    if ignored:
        warnings.append(
            IntakeWarning(
                code=WarningCode.IGNORED_ENTRY,
                message=f"{ignored} system metadata file(s) were ignored",
                count=ignored,
            )
        )
    return members


def _check_declared_sizes(
    members: list[tuple[ZipInfo, tuple[str, ...]]],
    container_size: int,
    limits: IntakeLimits,
) -> None:
    """Reject archives whose central directory already breaks the limits."""
    declared_total = 0
    for info, segments in members:
        declared_total += info.file_size
        if info.file_size < limits.ratio_floor_bytes:
            continue
        ratio = info.file_size / info.compress_size if info.compress_size else float("inf")
        if ratio > limits.max_compression_ratio:
            raise ZipBombError(
                f"Entry {'/'.join(segments)} has a compression ratio above "
                f"{limits.max_compression_ratio:g}:1. Upload rejected for security."
            )

    if declared_total > limits.max_total_bytes:
        raise ArchiveTooLargeError(
            f"Archive expands to {_format_mib(declared_total)}, exceeding the maximum "
            f"of {_format_mib(limits.max_total_bytes)}"
        )
    if (
        declared_total >= limits.ratio_floor_bytes
        and declared_total > limits.max_compression_ratio * max(container_size, 1)
    ):
        raise ZipBombError(
            "Zip file appears to be a zip bomb (excessive compression ratio). "
            "Upload rejected for security."
        )


def _read_member(archive: ZipFile, info: ZipInfo, budget: int, limits: IntakeLimits) -> bytes:
    """Read one member in chunks, stopping as soon as *budget* is exceeded."""
    chunks: list[bytes] = []
    read = 0
    try:
        with archive.open(info) as handle:
            while True:
                chunk = handle.read(CHUNK_SIZE)
                if not chunk:
                    break
                read += len(chunk)
                if read > budget:
                    raise ArchiveTooLargeError(
                        "Archive exceeds the maximum total size of "
                        f"{_format_mib(limits.max_total_bytes)}"
                    )
                chunks.append(chunk)
    except (BadZipFile, zlib.error, EOFError, OSError, NotImplementedError) as exc:
        raise CorruptArchiveError(f"Archive entry {info.filename!r} could not be read") from exc
    return b"".join(chunks)


def _check_nested_archive(
    content: bytes, path: str, budget: int, limits: IntakeLimits
) -> IntakeWarning | None:
    """Guard against archives hidden inside the upload.

    Nested archives are kept as opaque assets; only their declared size is
    checked against the remaining budget and the compression ratio.
    """
    try:
        with ZipFile(io.BytesIO(content)) as nested:
            declared = sum(info.file_size for info in nested.infolist())
    except (BadZipFile, LargeZipFile, OSError, ValueError, EOFError):
        return None

    if declared > budget:
        raise ArchiveTooLargeError(
            f"Nested archive {path} expands beyond the maximum total size of "
            f"{_format_mib(limits.max_total_bytes)}"
        )
    if (
        declared >= limits.ratio_floor_bytes
        and declared > limits.max_compression_ratio * max(len(content), 1)
    ):
        raise ZipBombError(
            f"Nested archive {path} appears to be a zip bomb. Upload rejected for security."
        )
    return IntakeWarning(
        code=WarningCode.NESTED_ARCHIVE,
        message=f"Nested archive {path} was kept as a single asset and not extracted",
        path=path,
    )


def _collect_folders(entries: list[ArchiveEntry]) -> list[str]:
    folders: set[str] = set()
    for entry in entries:
        for index in range(1, len(entry.path)):
            folders.add("/".join(entry.path[:index]))
    return sorted(folders)


def intake(archive: ArchiveSource, limits: IntakeLimits | None = None) -> IntakeResult:
    """Read *archive* into a validated flat list of entries.

    The central directory is validated first (names, entry count, declared
    sizes); data is then decompressed one entry at a time with a running
    total so oversized archives are rejected before full extraction.

    Args:
        archive: Zip bytes, a binary file object or a path to a zip file.
        limits: Ceilings to enforce; environment defaults when omitted.

    Returns:
        IntakeResult with entries in archive order, warnings and folders.

    Raises:
        CorruptArchiveError: If the container is unreadable or encrypted.
        UnsafePathError: If any entry name is unsafe.
        TooManyEntriesError: If there are more file entries than allowed.
        ArchiveTooLargeError: If the uncompressed size exceeds the ceiling.
    """
    limits = limits or load_limits()
    result = IntakeResult()

    zip_file, container_size = _open_archive(archive)
    with zip_file:
        members = _collect_members(zip_file, result.warnings)

        if len(members) > limits.max_entries:
            raise TooManyEntriesError(
                f"Archive contains {len(members)} files, exceeding the maximum "
                f"of {limits.max_entries}"
            )
        _check_declared_sizes(members, container_size, limits)

        for info, segments in members:
            budget = limits.max_total_bytes - result.total_size_bytes
            content = _read_member(zip_file, info, budget, limits)
            full_path = "/".join(segments)

            if not content:
                result.warnings.append(
                    IntakeWarning(
                        code=WarningCode.EMPTY_ENTRY,
                        message=f"Empty file skipped: {full_path}",
                        path=full_path,
                    )
                )
                continue

            mime_type = detect_mime_type(segments[-1], content[:16])
            if content.startswith(ZIP_SIGNATURE):
                nested_warning = _check_nested_archive(
                    content, full_path, budget - len(content), limits
                )
                if nested_warning is not None and mime_type == ZIP_MIME_TYPE:
                    result.warnings.append(nested_warning)

            result.entries.append(
                ArchiveEntry(
                    path=segments,
                    size_bytes=len(content),
                    mime_hint=mime_type,
                    content=content,
                )
            )
            result.total_size_bytes += len(content)

    result.folders = _collect_folders(result.entries)
    logger.info(
        "Read %d entries (%d bytes) across %d folders",
        result.file_count,
        result.total_size_bytes,
        len(result.folders),
    )
    return result
