from __future__ import annotations

import json

from PIL import Image

from conftest import nine_patch_argb, write_oversized_png, write_rgba
from dpiforge.main import main
from dpiforge.utils.pixels import unpack_argb


def test_converts_into_default_catalog(icon_png, capsys):
    assert main(["-d", "mdpi", str(icon_png)]) == 0
    for name, size in [("ldpi", (30, 18)), ("xhdpi", (80, 48)), ("xxxhdpi", (160, 96))]:
        with Image.open(icon_png.parent / f"drawable-{name}" / "icon.png") as im:
            assert im.size == size
    out = capsys.readouterr().out
    assert "icon.png: Finished" in out
    assert "Converted 1/1 images into 6 densities" in out


def test_custom_catalog(icon_png, tmp_path):
    catalog = tmp_path / "densities.json"
    catalog.write_text(json.dumps({"mdpi": 1.0, "tvdpi": 1.33}))
    assert main(["-d", "mdpi", "--densities", str(catalog), "-w", "1", str(icon_png)]) == 0
    assert sorted(p.name for p in tmp_path.glob("drawable-*")) == ["drawable-mdpi", "drawable-tvdpi"]


def test_failed_job_sets_exit_code(icon_png, tmp_path, capsys):
    arr = nine_patch_argb(10)
    arr[4, 0] = 0xFFFFFFFF
    bad = write_rgba(tmp_path / "bad.9.png", unpack_argb(arr))
    assert main(["-q", "-d", "mdpi", str(icon_png), str(bad)]) == 1
    out = capsys.readouterr().out
    assert "bad.9.png: Error (malformed 9-patch" in out
    assert "Converted 1/2 images" in out


def test_unknown_density(icon_png, capsys):
    assert main(["-d", "retina", str(icon_png)]) == 2
    assert "Unknown density" in capsys.readouterr().out


def test_missing_input(tmp_path, capsys):
    assert main(["-d", "mdpi", str(tmp_path / "nope.png")]) == 2
    assert "Input file not found" in capsys.readouterr().out


def test_bad_worker_count(icon_png):
    assert main(["-d", "mdpi", "-w", "0", str(icon_png)]) == 2


def test_nine_patch_from_cli(tmp_path):
    src = write_rgba(tmp_path / "panel.9.png", unpack_argb(nine_patch_argb(10)))
    assert main(["-d", "xhdpi", str(src)]) == 0
    with Image.open(tmp_path / "drawable-mdpi" / "panel.9.png") as im:
        assert im.size == (6, 6)
    assert (tmp_path / "drawable-xhdpi" / "panel.9.png").read_bytes() == src.read_bytes()


def test_undecodable_input_sets_exit_code(icon_png, tmp_path, capsys):
    huge = write_oversized_png(tmp_path / "huge.png")
    assert main(["-q", "-d", "mdpi", str(icon_png), str(huge)]) == 1
    out = capsys.readouterr().out
    assert "huge.png: Error (Image too large to decode" in out
    assert "Converted 1/2 images" in out
