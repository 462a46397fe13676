"""公開 API `pocketdraw.api.Export` のテスト。"""

from __future__ import annotations

import subprocess
from pathlib import Path

import pytest

from pocketdraw.api import Export
from pocketdraw.core.palette import MONO, STANDARD
from pocketdraw.core.runtime_config import set_config_path
from pocketdraw.export import image


@pytest.fixture(autouse=True)
def _reset_runtime_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    set_config_path(None)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    yield
    set_config_path(None)


def test_export_svg_with_palette_name(tmp_path: Path) -> None:
    out = tmp_path / "mono.svg"
    exp = Export("svg", out, palette="monochrome")
    assert exp.palette == MONO
    assert exp.path == out
    text = out.read_text(encoding="utf-8")
    assert 'fill="#9BBC0F"' in text


def test_export_uses_config_palette_and_default_path() -> None:
    exp = Export("SVG")
    assert exp.palette == STANDARD
    assert exp.path == Path("data") / "output" / "svg" / "console_standard.svg"
    assert exp.path.exists()


def test_export_uses_config_background(tmp_path: Path) -> None:
    cfg = tmp_path / "c.yaml"
    cfg.write_text("export:\n  background: [0, 0, 0]\n", encoding="utf-8")
    set_config_path(cfg)

    exp = Export("svg", tmp_path / "bg.svg")
    assert '<rect x="0" y="0" width="360" height="592" fill="#000000" />' in exp.path.read_text(
        encoding="utf-8"
    )


def test_export_png_goes_through_rasterizer(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    seen: list[list[str]] = []

    def fake_run(cmd, **kwargs):
        seen.append(list(cmd))
        return subprocess.CompletedProcess(args=cmd, returncode=0, stdout="", stderr="")

    monkeypatch.setattr(image.subprocess, "run", fake_run)

    exp = Export("image", tmp_path / "c.png", palette=STANDARD)
    assert exp.path == tmp_path / "c.png"
    assert len(seen) == 1


def test_export_rejects_unknown_format(tmp_path: Path) -> None:
    with pytest.raises(ValueError, match="gcode"):
        Export("gcode", tmp_path / "x.gcode")


def test_export_rejects_unknown_palette(tmp_path: Path) -> None:
    with pytest.raises(ValueError):
        Export("svg", tmp_path / "x.svg", palette="sepia")
