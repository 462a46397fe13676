from __future__ import annotations

import subprocess
from pathlib import Path

import pytest

from pocketdraw.core.palette import STANDARD
from pocketdraw.core.runtime_config import runtime_config, set_config_path
from pocketdraw.export import image


# `pocketdraw.export.image`（SVG→PNG / resvg）をテストする。

@pytest.fixture(autouse=True)
def _reset_runtime_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    set_config_path(None)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    yield
    set_config_path(None)


def test_default_output_path_uses_output_dir_and_palette_name():
    path = image.default_output_path(STANDARD)
    assert path.parts[0] == "data"
    assert path.parts[1] == "output"
    assert path.parts[2] == "png"
    assert path.name == "console_standard.png"


def test_default_output_path_for_svg():
    path = image.default_output_path(STANDARD, "svg")
    assert path == Path("data") / "output" / "svg" / "console_standard.svg"


def test_png_output_size_scales_canvas_by_png_scale():
    scale = float(runtime_config().png_scale)
    expected = (int(360 * scale), int(592 * scale))
    assert image.png_output_size((360, 592)) == expected


def test_png_output_size_rejects_non_positive_canvas():
    with pytest.raises(ValueError):
        image.png_output_size((0, 10))


def test_export_image_png_writes_svg_then_invokes_resvg(tmp_path, monkeypatch: pytest.MonkeyPatch):
    out_png = tmp_path / "out" / "console.png"
    calls: list[list[str]] = []

    def fake_run(cmd, *, capture_output: bool, text: bool, check: bool):
        assert capture_output is True
        assert text is True
        assert check is False
        calls.append(list(cmd))
        return subprocess.CompletedProcess(args=cmd, returncode=0, stdout="", stderr="")

    monkeypatch.setattr(image.subprocess, "run", fake_run)

    path = image.export_image(out_png, palette=STANDARD)
    assert path == out_png
    assert out_png.with_suffix(".svg").exists()

    (cmd,) = calls
    assert cmd[0] == "resvg"
    assert cmd[cmd.index("--width") + 1] == "720"
    assert cmd[cmd.index("--height") + 1] == "1184"
    assert cmd[cmd.index("--background") + 1] == "#FFFFFF"
    assert Path(cmd[-2]) == out_png.with_suffix(".svg")
    assert Path(cmd[-1]) == out_png


def test_export_image_svg_skips_rasterizer(tmp_path, monkeypatch: pytest.MonkeyPatch):
    def fail(*args, **kwargs):
        raise AssertionError("resvg must not be called")

    monkeypatch.setattr(image.subprocess, "run", fail)
    out = image.export_image(tmp_path / "a.svg", palette=STANDARD)
    assert out.exists()


def test_export_image_rejects_unknown_suffix(tmp_path):
    with pytest.raises(ValueError, match="未対応"):
        image.export_image(tmp_path / "a.jpg", palette=STANDARD)


def test_rasterize_svg_to_png_raises_when_resvg_is_missing(tmp_path, monkeypatch: pytest.MonkeyPatch):
    src_svg = tmp_path / "in.svg"
    src_svg.write_text(
        "\n".join(
            [
                '<?xml version="1.0" encoding="UTF-8"?>',
                '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 10 10" width="10" height="10">',
                "</svg>",
                "",
            ]
        ),
        encoding="utf-8",
    )

    def missing(*args, **kwargs):
        raise FileNotFoundError

    monkeypatch.setattr(image.subprocess, "run", missing)

    with pytest.raises(RuntimeError, match="resvg が見つかりません"):
        image.rasterize_svg_to_png(src_svg, tmp_path / "out.png", output_size=(10, 10))


def test_rasterize_svg_to_png_reports_failure(tmp_path, monkeypatch: pytest.MonkeyPatch):
    def failing(cmd, **kwargs):
        return subprocess.CompletedProcess(args=cmd, returncode=2, stdout="", stderr="bad svg")

    monkeypatch.setattr(image.subprocess, "run", failing)

    with pytest.raises(RuntimeError, match="bad svg"):
        image.rasterize_svg_to_png(tmp_path / "in.svg", tmp_path / "out.png", output_size=(10, 10))
