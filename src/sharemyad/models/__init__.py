"""Data models and type definitions"""

from sharemyad.models.creative import (
    DEFAULT_SET_NAME,
    UNPARSED_FOLDER_NAME,
    CreativeSet,
    FolderNode,
    HierarchyResult,
    ProcessingResult,
    ResolutionResult,
    SetMatch,
)
from sharemyad.models.intake import (
    ArchiveEntry,
    ArchiveIntakeError,
    ArchiveTooLargeError,
    CorruptArchiveError,
    EncryptedArchiveError,
    IntakeResult,
    IntakeWarning,
    TooManyEntriesError,
    UnsafePathError,
    WarningCode,
    ZipBombError,
)

__all__ = [
    "DEFAULT_SET_NAME",
    "UNPARSED_FOLDER_NAME",
    "ArchiveEntry",
    "ArchiveIntakeError",
    "ArchiveTooLargeError",
    "CorruptArchiveError",
    "CreativeSet",
    "EncryptedArchiveError",
    "FolderNode",
    "HierarchyResult",
    "IntakeResult",
    "IntakeWarning",
    "ProcessingResult",
    "ResolutionResult",
    "SetMatch",
    "TooManyEntriesError",
    "UnsafePathError",
    "WarningCode",
    "ZipBombError",
]
