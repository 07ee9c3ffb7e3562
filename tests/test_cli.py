import numpy as np
import pytest
from PIL import Image as PILImage

from pixmap.cli.ppm_tool import main

from conftest import TWO_BY_ONE


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv("PIXMAP_TEMP_SUFFIX", raising=False)
    monkeypatch.delenv("PIXMAP_FSYNC", raising=False)


def test_blank(tmp_path):
    dest = tmp_path / "blank.ppm"
    assert main(["blank", "2", "1", str(dest), "--color", "1", "2", "3"]) == 0
    assert dest.read_text(encoding="ascii") == "P3\n2 1\n255\n1 2 3\n1 2 3\n"


def test_info(tmp_path, caplog):
    src = tmp_path / "in.ppm"
    src.write_text(TWO_BY_ONE, encoding="ascii")
    with caplog.at_level("INFO"):
        assert main(["info", str(src)]) == 0
    assert "2x1, 2 pixels" in caplog.text


def test_info_reports_bad_file(tmp_path, caplog):
    src = tmp_path / "bad.ppm"
    src.write_text("P6\n", encoding="ascii")
    assert main(["info", str(src)]) == 1
    assert "wrong magic marker" in caplog.text


def test_convert_png_to_ppm(tmp_path):
    png = tmp_path / "in.png"
    PILImage.fromarray(np.full((1, 2, 3), 200, dtype=np.uint8)).save(png)
    dest = tmp_path / "out.ppm"
    assert main(["convert", str(png), str(dest)]) == 0
    assert dest.read_text(encoding="ascii") == "P3\n2 1\n255\n200 200 200\n200 200 200\n"


def test_invalid_color_fails_cleanly(tmp_path):
    assert main(["blank", "1", "1", str(tmp_path / "x.ppm"), "--color", "300", "0", "0"]) == 1
    assert not (tmp_path / "x.ppm").exists()


def test_unknown_log_level_falls_back_to_info(tmp_path, monkeypatch, caplog):
    monkeypatch.setenv("PIXMAP_LOG_LEVEL", "VERBOSE")
    dest = tmp_path / "blank.ppm"
    assert main(["blank", "1", "1", str(dest)]) == 0
    assert dest.exists()
    assert "Unknown PIXMAP_LOG_LEVEL 'VERBOSE'" in caplog.text


def test_empty_temp_suffix_fails_cleanly(tmp_path, monkeypatch):
    monkeypatch.setenv("PIXMAP_TEMP_SUFFIX", "")
    assert main(["blank", "1", "1", str(tmp_path / "x.ppm")]) == 1
    assert not (tmp_path / "x.ppm").exists()
