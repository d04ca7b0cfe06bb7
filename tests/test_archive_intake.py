from __future__ import annotations

import io
from collections.abc import Iterable
from pathlib import Path
from zipfile import ZIP_DEFLATED, ZipFile

import pytest

from sharemyad.config import IntakeLimits
from sharemyad.models.intake import (
    ArchiveTooLargeError,
    CorruptArchiveError,
    EncryptedArchiveError,
    TooManyEntriesError,
    UnsafePathError,
    WarningCode,
    ZipBombError,
)
from sharemyad.services.archive_intake import detect_mime_type, intake

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"fake-png"
JPEG_BYTES = b"\xff\xd8\xff\xe0" + b"fake-jpeg"
MP4_BYTES = b"\x00\x00\x00\x18ftypmp42" + b"fake-mp4"


def _create_zip_bytes(entries: Iterable[tuple[str, bytes]]) -> bytes:
    buffer = io.BytesIO()
    with ZipFile(buffer, "w", ZIP_DEFLATED) as archive:
        for name, data in entries:
            archive.writestr(name, data)
    return buffer.getvalue()


def _mark_encrypted(zip_bytes: bytes) -> bytes:
    """Set the encryption flag on every central directory record."""
    data = bytearray(zip_bytes)
    index = data.find(b"PK\x01\x02")
    while index != -1:
        data[index + 8] |= 0x01
        index = data.find(b"PK\x01\x02", index + 4)
    return bytes(data)


def test_intake_returns_entries_in_archive_order() -> None:
    zip_bytes = _create_zip_bytes(
        [
            ("Campaign/Set-A/banner.png", PNG_BYTES),
            ("Campaign/Set-A/photo.jpg", JPEG_BYTES),
            ("Campaign/Set-B/spot.mp4", MP4_BYTES),
            ("readme.txt", b"notes"),
        ]
    )

    result = intake(zip_bytes)

    assert [entry.full_path for entry in result.entries] == [
        "Campaign/Set-A/banner.png",
        "Campaign/Set-A/photo.jpg",
        "Campaign/Set-B/spot.mp4",
        "readme.txt",
    ]
    assert result.file_count == 4
    assert result.entries[0].path == ("Campaign", "Set-A", "banner.png")
    assert result.entries[0].folder == "Campaign/Set-A"
    assert result.entries[0].depth == 2
    assert result.entries[3].folder == ""
    assert result.entries[0].size_bytes == len(PNG_BYTES)
    assert result.entries[0].content == PNG_BYTES
    assert result.total_size_bytes == sum(
        len(data) for data in (PNG_BYTES, JPEG_BYTES, MP4_BYTES, b"notes")
    )
    assert result.warnings == []


def test_intake_folders_include_ancestors() -> None:
    zip_bytes = _create_zip_bytes(
        [
            ("Campaign/Display/Set-A/banner.png", PNG_BYTES),
            ("Campaign/Video/Set-A/spot.mp4", MP4_BYTES),
            ("root.png", PNG_BYTES),
        ]
    )

    result = intake(zip_bytes)

    assert result.folders == [
        "Campaign",
        "Campaign/Display",
        "Campaign/Display/Set-A",
        "Campaign/Video",
        "Campaign/Video/Set-A",
    ]


def test_intake_accepts_path_and_file_object(tmp_path: Path) -> None:
    zip_bytes = _create_zip_bytes([("Set-A/banner.png", PNG_BYTES)])
    zip_path = tmp_path / "creatives.zip"
    zip_path.write_bytes(zip_bytes)

    from_path = intake(zip_path)
    from_str = intake(str(zip_path))
    from_stream = intake(io.BytesIO(zip_bytes))

    assert [e.full_path for e in from_path.entries] == ["Set-A/banner.png"]
    assert from_str.entries == from_path.entries
    assert from_stream.entries == from_path.entries


def test_intake_detects_mime_from_magic_bytes() -> None:
    zip_bytes = _create_zip_bytes(
        [
            ("Set-A/renamed.bin", PNG_BYTES),
            ("Set-A/spot.mp4", MP4_BYTES),
            ("Set-A/index.html", b"<html></html>"),
            ("Set-A/data.xyz", b"unknown"),
        ]
    )

    result = intake(zip_bytes)
    mime_types = {entry.filename: entry.mime_hint for entry in result.entries}

    assert mime_types == {
        "renamed.bin": "image/png",
        "spot.mp4": "video/mp4",
        "index.html": "text/html",
        "data.xyz": "application/octet-stream",
    }


def test_detect_mime_type_falls_back_to_extension() -> None:
    assert detect_mime_type("photo.JPG", b"plain text") == "image/jpeg"
    assert detect_mime_type("app.js", b"console.log(1)") == "text/javascript"
    assert detect_mime_type("noextension", b"") == "application/octet-stream"
    assert detect_mime_type("anything.txt", b"GIF89a....") == "image/gif"


def test_detect_mime_type_keeps_zip_based_formats() -> None:
    assert detect_mime_type("bundle.zip", b"PK\x03\x04rest") == "application/zip"
    assert detect_mime_type("bundle", b"PK\x03\x04rest") == "application/zip"
    assert detect_mime_type("deck.PPTX", b"PK\x03\x04rest") == (
        "application/vnd.openxmlformats-officedocument.presentationml.presentation"
    )
    assert detect_mime_type("design.sketch", b"PK\x03\x04rest") == "application/octet-stream"


def test_intake_skips_directory_records() -> None:
    zip_bytes = _create_zip_bytes(
        [
            ("Set-A/", b""),
            ("Set-A/banner.png", PNG_BYTES),
        ]
    )

    result = intake(zip_bytes)

    assert [entry.full_path for entry in result.entries] == ["Set-A/banner.png"]


def test_intake_ignores_os_metadata() -> None:
    zip_bytes = _create_zip_bytes(
        [
            ("Set-A/banner.png", PNG_BYTES),
            ("__MACOSX/Set-A/._banner.png", b"fork"),
            ("Set-A/.DS_Store", b"meta"),
            ("Set-A/Thumbs.db", b"thumbs"),
        ]
    )

    result = intake(zip_bytes)

    assert [entry.full_path for entry in result.entries] == ["Set-A/banner.png"]
    assert len(result.warnings) == 1
    assert result.warnings[0].code == WarningCode.IGNORED_ENTRY
    assert result.warnings[0].count == 3


def test_intake_skips_empty_files_with_warning() -> None:
    zip_bytes = _create_zip_bytes(
        [
            ("Set-A/banner.png", PNG_BYTES),
            ("Set-A/empty.png", b""),
        ]
    )

    result = intake(zip_bytes)

    assert [entry.full_path for entry in result.entries] == ["Set-A/banner.png"]
    assert [w.code for w in result.warnings] == [WarningCode.EMPTY_ENTRY]
    assert result.warnings[0].path == "Set-A/empty.png"


def test_intake_skips_duplicate_normalized_paths() -> None:
    zip_bytes = _create_zip_bytes(
        [
            ("Set-A/banner.png", PNG_BYTES),
            ("Set-A/./banner.png", b"second copy"),
        ]
    )

    result = intake(zip_bytes)

    assert result.file_count == 1
    assert result.entries[0].content == PNG_BYTES
    assert [w.code for w in result.warnings] == [WarningCode.DUPLICATE_ENTRY]


def test_intake_resolves_dot_dot_inside_archive() -> None:
    zip_bytes = _create_zip_bytes([("Set-A/../banner.png", PNG_BYTES)])

    result = intake(zip_bytes)

    assert [entry.full_path for entry in result.entries] == ["banner.png"]


@pytest.mark.parametrize(
    "name",
    [
        "../../etc/passwd",
        "Set-A/../../escape.png",
        "..\\..\\windows\\evil.png",
        "/etc/passwd",
        "C:\\Windows\\evil.png",
        "Set-A/bad\x01name.png",
    ],
)
def test_intake_rejects_unsafe_paths(name: str) -> None:
    zip_bytes = _create_zip_bytes(
        [
            ("Set-A/banner.png", PNG_BYTES),
            (name, b"payload"),
        ]
    )

    with pytest.raises(UnsafePathError) as exc_info:
        intake(zip_bytes)

    assert exc_info.value.code == "UNSAFE_PATH"


def test_intake_rejects_too_many_entries() -> None:
    zip_bytes = _create_zip_bytes((f"Set-A/file_{i}.png", b"x") for i in range(501))

    with pytest.raises(TooManyEntriesError) as exc_info:
        intake(zip_bytes)

    assert "501" in exc_info.value.message
    assert "500" in exc_info.value.message


def test_intake_accepts_exactly_max_entries() -> None:
    zip_bytes = _create_zip_bytes((f"Set-A/file_{i}.png", b"x") for i in range(500))

    result = intake(zip_bytes)

    assert result.file_count == 500


def test_intake_entry_limit_ignores_os_metadata() -> None:
    entries = [(f"Set-A/file_{i}.png", b"x") for i in range(3)]
    entries.append(("__MACOSX/._file_0.png", b"fork"))
    zip_bytes = _create_zip_bytes(entries)

    result = intake(zip_bytes, IntakeLimits(max_entries=3))

    assert result.file_count == 3


def test_intake_rejects_archive_over_size_limit() -> None:
    zip_bytes = _create_zip_bytes(
        [
            ("Set-A/one.bin", b"a" * 600),
            ("Set-A/two.bin", b"b" * 600),
        ]
    )

    with pytest.raises(ArchiveTooLargeError) as exc_info:
        intake(zip_bytes, IntakeLimits(max_total_bytes=1000))

    assert exc_info.value.code == "ARCHIVE_TOO_LARGE"


def test_intake_rejects_highly_compressed_entry() -> None:
    zip_bytes = _create_zip_bytes([("Set-A/zeros.bin", b"\0" * (2 * 1024 * 1024))])

    with pytest.raises(ZipBombError) as exc_info:
        intake(zip_bytes)

    assert isinstance(exc_info.value, ArchiveTooLargeError)
    assert exc_info.value.code == "ZIP_BOMB"


def test_intake_rejects_high_aggregate_compression_ratio() -> None:
    zip_bytes = _create_zip_bytes(
        (f"Set-A/zeros_{i}.bin", b"\0" * (900 * 1024)) for i in range(3)
    )

    with pytest.raises(ZipBombError):
        intake(zip_bytes)


def test_intake_keeps_small_nested_archive_as_asset() -> None:
    inner = _create_zip_bytes([("index.html", b"<html></html>")])
    zip_bytes = _create_zip_bytes([("Set-A/bundle.zip", inner)])

    result = intake(zip_bytes)

    assert result.file_count == 1
    assert result.entries[0].mime_hint == "application/zip"
    assert result.entries[0].file_type == "html5"
    assert [w.code for w in result.warnings] == [WarningCode.NESTED_ARCHIVE]


def test_intake_rejects_nested_zip_bomb() -> None:
    inner = _create_zip_bytes([("zeros.bin", b"\0" * (2 * 1024 * 1024))])
    zip_bytes = _create_zip_bytes([("Set-A/bundle.zip", inner)])

    with pytest.raises(ZipBombError):
        intake(zip_bytes)


def test_intake_treats_office_documents_as_plain_assets() -> None:
    document = _create_zip_bytes([("word/document.xml", b"<w:document/>")])
    zip_bytes = _create_zip_bytes([("Set-A/brief.docx", document)])

    result = intake(zip_bytes)

    entry = result.entries[0]
    assert entry.mime_hint == (
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
    )
    assert entry.file_type == "other"
    assert result.warnings == []


def test_intake_rejects_zip_bomb_disguised_as_document() -> None:
    inner = _create_zip_bytes([("zeros.bin", b"\0" * (2 * 1024 * 1024))])
    zip_bytes = _create_zip_bytes([("Set-A/report.xlsx", inner)])

    with pytest.raises(ZipBombError):
        intake(zip_bytes)


def test_intake_rejects_encrypted_archive() -> None:
    zip_bytes = _mark_encrypted(_create_zip_bytes([("Set-A/banner.png", PNG_BYTES)]))

    with pytest.raises(EncryptedArchiveError) as exc_info:
        intake(zip_bytes)

    assert isinstance(exc_info.value, CorruptArchiveError)
    assert "password" in exc_info.value.message


def test_intake_rejects_non_zip_data(tmp_path: Path) -> None:
    corrupt_path = tmp_path / "broken.zip"
    corrupt_path.write_bytes(b"not a real zip")

    with pytest.raises(CorruptArchiveError) as exc_info:
        intake(corrupt_path)

    assert exc_info.value.code == "CORRUPT_ARCHIVE"


def test_intake_rejects_truncated_archive() -> None:
    zip_bytes = _create_zip_bytes([("Set-A/banner.png", PNG_BYTES * 100)])

    with pytest.raises(CorruptArchiveError):
        intake(zip_bytes[: len(zip_bytes) // 2])


def test_intake_missing_file_is_corrupt(tmp_path: Path) -> None:
    with pytest.raises(CorruptArchiveError):
        intake(tmp_path / "missing.zip")
