"""
どこで: `src/pocketdraw/export/image.py`。
何を: シーンを SVG/PNG として保存し、PNG は外部ラスタライザ（resvg）で生成する関数を提供する。
なぜ: SVG を正（ソース）として保存し、PNG は任意の倍率で再生成できる導線を用意するため。
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

from pocketdraw.core.color import Color, rgb_hex
from pocketdraw.core.palette import Palette
from pocketdraw.core.runtime_config import output_root_dir, runtime_config
from pocketdraw.core.scene import CANVAS_SIZE
from pocketdraw.export.svg import export_svg

_logger = logging.getLogger(__name__)

_WHITE: Color = (255, 255, 255)


def export_image(
    path: str | Path,
    *,
    palette: Palette,
    canvas_size: tuple[int, int] = CANVAS_SIZE,
    background: Color | None = None,
) -> Path:
    """シーンを画像として保存する。

    Notes
    -----
    `.svg` はそのまま保存する。`.png` は同名の SVG を保存してから resvg でラスタライズする。

    Raises
    ------
    ValueError
        未対応の拡張子の場合。
    """
    _path = Path(path)
    suffix = _path.suffix.lower()

    if suffix == ".svg":
        return export_svg(_path, palette=palette, canvas_size=canvas_size, background=background)

    if suffix == ".png":
        svg_path = _path.with_suffix(".svg")
        export_svg(svg_path, palette=palette, canvas_size=canvas_size, background=background)
        return rasterize_svg_to_png(
            svg_path,
            _path,
            output_size=png_output_size(canvas_size),
            background=background if background is not None else _WHITE,
        )

    raise ValueError(f"未対応の画像フォーマット: {suffix!r}")


def default_output_path(palette: Palette, suffix: str = ".png") -> Path:
    """パレット名に基づく既定の保存パスを返す。

    Notes
    -----
    パスは `{output_root}/{kind}/console_{palette}{suffix}`（kind は拡張子から決める）。
    """

    ext = str(suffix) if str(suffix).startswith(".") else f".{suffix}"
    kind = ext.lstrip(".").lower() or "out"
    return output_root_dir() / kind / f"console_{palette.name}{ext}"


def png_output_size(canvas_size: tuple[int, int]) -> tuple[int, int]:
    """canvas_size を基準に PNG 出力ピクセルサイズを返す。"""

    canvas_w, canvas_h = canvas_size
    if int(canvas_w) <= 0 or int(canvas_h) <= 0:
        raise ValueError("canvas_size は正の (width, height) である必要がある")
    scale = float(runtime_config().png_scale)
    return int(int(canvas_w) * scale), int(int(canvas_h) * scale)


def _resvg_command(
    *,
    input_svg: Path,
    output_png: Path,
    output_size: tuple[int, int],
    background: Color,
) -> list[str]:
    out_w, out_h = output_size
    if int(out_w) <= 0 or int(out_h) <= 0:
        raise ValueError("output_size は正の (width, height) である必要がある")
    return [
        "resvg",
        "--width",
        str(int(out_w)),
        "--height",
        str(int(out_h)),
        "--background",
        rgb_hex(background),
        str(input_svg),
        str(output_png),
    ]


def rasterize_svg_to_png(
    svg_path: str | Path,
    png_path: str | Path,
    *,
    output_size: tuple[int, int],
    background: Color = _WHITE,
) -> Path:
    """SVG を PNG として保存する。

    Parameters
    ----------
    svg_path : str or Path
        入力 SVG パス。
    png_path : str or Path
        出力 PNG パス。
    output_size : tuple[int, int]
        出力 PNG の (width, height) ピクセルサイズ。
    background : Color
        背景色 RGB255。既定は白。

    Returns
    -------
    Path
        出力 PNG パス。

    Raises
    ------
    RuntimeError
        resvg が見つからない、またはラスタライズに失敗した場合。
    """

    _svg_path = Path(svg_path)
    _png_path = Path(png_path)
    _png_path.parent.mkdir(parents=True, exist_ok=True)

    cmd = _resvg_command(
        input_svg=_svg_path,
        output_png=_png_path,
        output_size=output_size,
        background=background,
    )
    try:
        proc = subprocess.run(cmd, capture_output=True, text=True, check=False)
    except FileNotFoundError as e:
        raise RuntimeError(
            "resvg が見つかりません（`resvg` をインストールして PATH を通してください）"
        ) from e

    if proc.returncode != 0:
        details = (proc.stderr or proc.stdout or "").strip()
        raise RuntimeError(f"resvg が失敗しました (code={proc.returncode}). {details}".strip())

    _logger.info("PNG を保存: %s (%dx%d)", _png_path, int(output_size[0]), int(output_size[1]))
    return _png_path


__all__ = ["default_output_path", "export_image", "png_output_size", "rasterize_svg_to_png"]
