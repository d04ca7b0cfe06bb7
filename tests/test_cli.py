from __future__ import annotations

import json
from pathlib import Path
from zipfile import ZIP_DEFLATED, ZipFile

import pytest

from sharemyad.cli import main

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"fake-png"


def _create_zip(zip_path: Path, entries: list[tuple[str, bytes]]) -> None:
    with ZipFile(zip_path, mode="w", compression=ZIP_DEFLATED) as archive:
        for relative_path, data in entries:
            archive.writestr(relative_path, data)


@pytest.fixture
def campaign_zip(tmp_path: Path) -> Path:
    zip_path = tmp_path / "campaign.zip"
    _create_zip(
        zip_path,
        [
            ("Campaign/Set-A/banner.png", PNG_BYTES),
            ("Campaign/Set-A/index.html", b"<html></html>"),
            ("Campaign/Set-B/banner.png", PNG_BYTES),
        ],
    )
    return zip_path


def test_inspect_json_output(campaign_zip: Path, capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = main(["inspect", str(campaign_zip), "--json"])

    assert exit_code == 0
    data = json.loads(capsys.readouterr().out)
    assert data["file_count"] == 3
    assert data["has_html5_bundle"] is True
    assert [s["name"] for s in data["sets"]] == ["Set-A", "Set-B"]
    assert [f["full_path"] for f in data["folders"]] == [
        "Campaign",
        "Campaign/Set-A",
        "Campaign/Set-B",
    ]
    assert {e["path"]: e["set_name"] for e in data["entries"]} == {
        "Campaign/Set-A/banner.png": "Set-A",
        "Campaign/Set-A/index.html": "Set-A",
        "Campaign/Set-B/banner.png": "Set-B",
    }


def test_inspect_text_output(campaign_zip: Path, capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = main(["inspect", str(campaign_zip)])

    assert exit_code == 0
    out = capsys.readouterr().out
    assert "Processing: campaign.zip" in out
    assert "Set-A: 2 asset(s)" in out
    assert "Set-B: 1 asset(s)" in out
    assert "[HTML5]" in out


def test_inspect_rejected_archive(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    zip_path = tmp_path / "evil.zip"
    _create_zip(zip_path, [("../escape.png", PNG_BYTES)])

    exit_code = main(["inspect", str(zip_path), "--json"])

    assert exit_code == 1
    data = json.loads(capsys.readouterr().out)
    assert data["error"]["code"] == "UNSAFE_PATH"


def test_inspect_requires_archive_argument() -> None:
    with pytest.raises(SystemExit):
        main(["inspect"])
