"""Data models and errors for archive intake."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum


class ArchiveIntakeError(Exception):
    """Base class for errors that reject a whole archive.

    Attributes:
        code: Stable machine-readable error code.
        message: User-facing message citing the violated limit.
    """

    code = "ARCHIVE_INVALID"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ArchiveTooLargeError(ArchiveIntakeError):
    """Raised when the cumulative uncompressed size exceeds the ceiling."""

    code = "ARCHIVE_TOO_LARGE"


class ZipBombError(ArchiveTooLargeError):
    """Raised when declared sizes are implausible for the compressed data."""

    code = "ZIP_BOMB"


class TooManyEntriesError(ArchiveIntakeError):
    """Raised when the archive holds more file entries than allowed."""

    code = "TOO_MANY_ENTRIES"


class UnsafePathError(ArchiveIntakeError):
    """Raised when an entry name escapes the archive root or is malformed."""

    code = "UNSAFE_PATH"


class CorruptArchiveError(ArchiveIntakeError):
    """Raised when the container cannot be read as a zip archive."""

    code = "CORRUPT_ARCHIVE"


class EncryptedArchiveError(CorruptArchiveError):
    """Raised when the archive contains password-protected entries."""

    code = "ENCRYPTED_ARCHIVE"


class WarningCode(StrEnum):
    """Kinds of non-fatal notices produced while processing an archive."""

    IGNORED_ENTRY = "ignored_entry"
    EMPTY_ENTRY = "empty_entry"
    DUPLICATE_ENTRY = "duplicate_entry"
    NESTED_ARCHIVE = "nested_archive"
    INVALID_FOLDER_NAME = "invalid_folder_name"
    UNPARSED_PATH = "unparsed_path"
    DEPTH_LIMIT_EXCEEDED = "depth_limit_exceeded"
    HTML5_BUNDLE_INCOMPLETE = "html5_bundle_incomplete"


@dataclass(slots=True, frozen=True)
class IntakeWarning:
    """A non-fatal notice surfaced to the caller.

    Attributes:
        code: Kind of notice.
        message: Human readable description.
        path: Archive path the notice refers to, if any.
        count: Number of files affected.
    """

    code: WarningCode
    message: str
    path: str | None = None
    count: int = 1


@dataclass(slots=True, frozen=True)
class ArchiveEntry:
    """A single file read from an archive.

    Attributes:
        path: Normalized path segments, the last one being the file name.
        size_bytes: Uncompressed size in bytes.
        mime_hint: MIME type derived from magic bytes or extension.
        content: Raw file content for downstream metadata extraction.
    """

    path: tuple[str, ...]
    size_bytes: int
    mime_hint: str = "application/octet-stream"
    content: bytes = field(default=b"", repr=False, compare=False)

    def __post_init__(self) -> None:
        if not self.path or any(not segment for segment in self.path):
            raise ValueError(f"Archive entry path must have non-empty segments: {self.path!r}")
        if self.size_bytes < 0:
            raise ValueError(f"Archive entry size cannot be negative: {self.size_bytes}")

    @property
    def full_path(self) -> str:
        return "/".join(self.path)

    @property
    def filename(self) -> str:
        return self.path[-1]

    @property
    def folder(self) -> str:
        """Parent folder path, empty for files at the archive root."""
        return "/".join(self.path[:-1])

    @property
    def depth(self) -> int:
        return len(self.path) - 1

    @property
    def is_html5_marker(self) -> bool:
        return self.filename.lower() == "index.html"

    @property
    def file_type(self) -> str:
        if self.mime_hint.startswith("image/"):
            return "image"
        if self.mime_hint.startswith("video/"):
            return "video"
        if self.mime_hint in {"text/html", "application/zip"}:
            return "html5"
        return "other"


@dataclass(slots=True)
class IntakeResult:
    """Validated output of archive intake.

    Attributes:
        entries: Flat list of accepted files, in archive order.
        warnings: Non-fatal notices collected while reading.
        folders: Sorted unique folder paths, ancestors included.
        total_size_bytes: Sum of the entries' uncompressed sizes.
    """

    entries: list[ArchiveEntry] = field(default_factory=list)
    warnings: list[IntakeWarning] = field(default_factory=list)
    folders: list[str] = field(default_factory=list)
    total_size_bytes: int = 0

    @property
    def file_count(self) -> int:
        return len(self.entries)
