"""リポジトリ直下 `main.py` のテスト。"""

from __future__ import annotations

import runpy
from pathlib import Path

import pytest

from pocketdraw.core.runtime_config import set_config_path

MAIN_PY = Path(__file__).resolve().parents[2] / "main.py"


@pytest.fixture(autouse=True)
def _reset_runtime_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    set_config_path(None)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    yield
    set_config_path(None)


def test_main_exports_builtin_and_config_palettes(tmp_path: Path) -> None:
    cfg = tmp_path / ".pocketdraw" / "config.yaml"
    cfg.parent.mkdir(parents=True)
    cfg.write_text(
        "palettes:\n  teal:\n    base: mono\n    shell: '#008080'\n",
        encoding="utf-8",
    )

    runpy.run_path(str(MAIN_PY), run_name="__main__")

    out_dir = tmp_path / "data" / "output" / "svg"
    names = sorted(p.name for p in out_dir.glob("*.svg"))
    assert names == [
        "console_bw.svg",
        "console_mono.svg",
        "console_rainbow.svg",
        "console_standard.svg",
        "console_teal.svg",
    ]
    assert 'fill="#008080"' in (out_dir / "console_teal.svg").read_text(encoding="utf-8")
