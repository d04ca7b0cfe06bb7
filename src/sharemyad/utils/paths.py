"""Path normalization and name sanitizing helpers."""

from __future__ import annotations

import re
import unicodedata
from pathlib import PurePosixPath

from sharemyad.models.intake import UnsafePathError

_DRIVE_RE = re.compile(r"^[A-Za-z]:")
_INVALID_FOLDER_CHARS_RE = re.compile(r"[^A-Za-z0-9\-_ ]+")
_INVALID_FILENAME_CHARS_RE = re.compile(r"[^a-z0-9\-_]")


def has_control_chars(value: str) -> bool:
    """Return True when *value* contains a null byte or control character."""
    return any(ord(char) < 32 or ord(char) == 127 for char in value)


def normalize_archive_path(name: str) -> tuple[str, ...]:
    """Normalize an archive entry name into path segments.

    Backslashes are treated as separators, ``.`` and empty segments are
    dropped and ``..`` is resolved against the segments seen so far.

    Args:
        name: Raw entry name from the archive's central directory.

    Returns:
        Tuple of path segments; empty for names that denote the root itself.

    Raises:
        UnsafePathError: If the name contains control characters, is absolute,
            or climbs above the archive root.
    """
    if has_control_chars(name):
        raise UnsafePathError(f"Archive entry name contains control characters: {name!r}")

    unified = name.replace("\\", "/")
    if unified.startswith("/") or _DRIVE_RE.match(unified):
        raise UnsafePathError(f"Archive entry uses an absolute path: {name!r}")

    segments: list[str] = []
    for part in PurePosixPath(unified).parts:
        if part in {"", "."}:
            continue
        if part == "..":
            if not segments:
                raise UnsafePathError(f"Archive entry escapes the archive root: {name!r}")
            segments.pop()
            continue
        segments.append(part)
    return tuple(segments)


def sanitize_folder_name(name: str) -> str:
    """Fold *name* into the allowed folder-name alphabet.

    Accented letters are reduced to ASCII, remaining invalid characters are
    replaced by ``_``. Returns an empty string when nothing usable is left.
    """
    folded = unicodedata.normalize("NFKD", name).encode("ascii", "ignore").decode("ascii")
    cleaned = _INVALID_FOLDER_CHARS_RE.sub("_", folded)
    cleaned = re.sub(r"_{2,}", "_", cleaned).strip()
    if not any(char.isalnum() for char in cleaned):
        return ""
    return cleaned


def sanitize_filename(filename: str) -> str:
    """Return a storage-safe, lowercase version of *filename*.

    Only ``a-z``, ``0-9``, ``-`` and ``_`` survive in the stem; the extension
    is kept and lowercased.
    """
    stem, dot, extension = filename.rpartition(".")
    if not dot or not stem:
        stem, extension = filename, ""

    sanitized = _INVALID_FILENAME_CHARS_RE.sub("-", stem.lower())
    sanitized = re.sub(r"-+", "-", sanitized).strip("-")[:100] or "file"
    if extension:
        return f"{sanitized}.{extension.lower()}"
    return sanitized
