from pathlib import Path

import pytest

from invisible_overlay.export import output_name_for, save_output


@pytest.mark.parametrize(
    "filename,expected",
    [
        ("resume.pdf", "resumeUpdated.pdf"),
        ("my.resume.v2.PDF", "my.resume.v2Updated.pdf"),
        ("noextension", "noextensionUpdated.pdf"),
        ("/tmp/docs/cv.pdf", "cvUpdated.pdf"),
    ],
)
def test_output_name_strips_last_extension(filename, expected):
    assert output_name_for(filename) == expected


def test_output_name_custom_suffix():
    assert output_name_for("cv.pdf", suffix="_hidden") == "cv_hidden.pdf"


def test_save_output_writes_and_cleans_up(tmp_path: Path):
    target = tmp_path / "out" / "cvUpdated.pdf"
    assert save_output(b"%PDF-1.7 data", target) == target
    assert target.read_bytes() == b"%PDF-1.7 data"
    assert [p.name for p in target.parent.iterdir()] == ["cvUpdated.pdf"]


def test_save_output_removes_temp_file_on_failure(tmp_path: Path, monkeypatch):
    def boom(self, target):
        raise OSError("disk full")

    monkeypatch.setattr(Path, "replace", boom)
    target = tmp_path / "cvUpdated.pdf"
    with pytest.raises(OSError):
        save_output(b"data", target)
    assert list(tmp_path.iterdir()) == []
