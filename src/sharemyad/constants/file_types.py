"""Constants for classifying archive entries."""

# Extension fallback when magic bytes are not recognised.
EXTENSION_MIME_TYPES: dict[str, str] = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".gif": "image/gif",
    ".mp4": "video/mp4",
    ".webm": "video/webm",
    ".html": "text/html",
    ".htm": "text/html",
    ".zip": "application/zip",
    ".js": "text/javascript",
    ".css": "text/css",
    ".json": "application/json",
    ".svg": "image/svg+xml",
    ".docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    ".xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    ".pptx": "application/vnd.openxmlformats-officedocument.presentationml.presentation",
}

ZIP_SIGNATURE = b"PK\x03\x04"
ZIP_MIME_TYPE = "application/zip"

# (offset, signature, mime type); checked in order.
MAGIC_SIGNATURES: tuple[tuple[int, bytes, str], ...] = (
    (0, b"\xff\xd8\xff", "image/jpeg"),
    (0, b"\x89PNG", "image/png"),
    (0, b"GIF87a", "image/gif"),
    (0, b"GIF89a", "image/gif"),
    (4, b"ftyp", "video/mp4"),
    (0, b"\x1a\x45\xdf\xa3", "video/webm"),
    (0, ZIP_SIGNATURE, ZIP_MIME_TYPE),
)

DEFAULT_MIME_TYPE = "application/octet-stream"

# OS metadata that never counts as a creative asset.
IGNORED_DIRECTORIES: frozenset[str] = frozenset({"__MACOSX"})
IGNORED_FILENAMES: frozenset[str] = frozenset({".DS_Store", "Thumbs.db", "desktop.ini"})
RESOURCE_FORK_PREFIX = "._"

# Files that indicate an HTML5 ad unit when found without an index.html.
HTML5_COMPANION_EXTENSIONS: frozenset[str] = frozenset({".html", ".htm", ".js", ".css"})
