"""
どこで: `src/pocketdraw/export/svg.py`。
何を: パスを SVG 要素として蓄積する `SvgContext` と、シーンを SVG として保存する関数を提供する。
なぜ: ホスト描画面なしで（headless に）イラストを出力し、差分比較できる決定的なテキストを得るため。
"""

from __future__ import annotations

import logging
import math
from pathlib import Path

from pocketdraw.core.color import Color, rgb_hex
from pocketdraw.core.context import PathCanvas
from pocketdraw.core.palette import Palette
from pocketdraw.core.path import DevicePath
from pocketdraw.core.scene import CANVAS_SIZE, compose

_logger = logging.getLogger(__name__)

_SVG_NS = "http://www.w3.org/2000/svg"
_FLOAT_DECIMALS = 3
_FULL_TURN_EPS = 1e-9


def _fmt(value: float, *, decimals: int = _FLOAT_DECIMALS) -> str:
    """SVG 出力向けに float を決定的な文字列へ変換して返す。"""
    text = f"{float(value):.{int(decimals)}f}"
    if text.startswith("-0") and float(text) == 0.0:
        return text[1:]
    return text


def _pt(p: tuple[float, float]) -> str:
    return f"{_fmt(p[0])} {_fmt(p[1])}"


def _arc_to_d(center: tuple[float, float], r: float, start: float, sweep: float) -> list[str]:
    """円弧セグメントを SVG の A コマンド列に変換する。全周は半円 2 本に分ける。"""
    cx, cy = center
    flag = 1 if sweep > 0 else 0
    rr = _fmt(r)
    if abs(sweep) >= 2.0 * math.pi - _FULL_TURN_EPS:
        mid = start + math.copysign(math.pi, sweep)
        end = start + sweep
        p_mid = (cx + r * math.cos(mid), cy + r * math.sin(mid))
        p_end = (cx + r * math.cos(end), cy + r * math.sin(end))
        return [
            f"A {rr} {rr} 0 0 {flag} {_pt(p_mid)}",
            f"A {rr} {rr} 0 0 {flag} {_pt(p_end)}",
        ]
    end = start + sweep
    large = 1 if abs(sweep) > math.pi else 0
    p_end = (cx + r * math.cos(end), cy + r * math.sin(end))
    return [f"A {rr} {rr} 0 {large} {flag} {_pt(p_end)}"]


def path_to_d(path: DevicePath) -> str:
    """DevicePath を SVG path の d 属性へ変換して返す。"""
    parts: list[str] = []
    for seg in path.segments:
        kind = seg[0]
        if kind == "M":
            parts.append(f"M {_pt(seg[1])}")
        elif kind == "L":
            parts.append(f"L {_pt(seg[1])}")
        elif kind == "Q":
            parts.append(f"Q {_pt(seg[1])} {_pt(seg[2])}")
        elif kind == "C":
            parts.append(f"C {_pt(seg[1])} {_pt(seg[2])} {_pt(seg[3])}")
        elif kind == "A":
            parts.extend(_arc_to_d(seg[1], seg[2], seg[3], seg[4]))
        elif kind == "Z":
            parts.append("Z")
    return " ".join(parts)


class SvgContext(PathCanvas):
    """fill/stroke ごとに SVG の `<path>` 要素を生成する DrawingContext。

    Parameters
    ----------
    canvas_size : tuple[int, int]
        viewBox と width/height に使う寸法。
    background : Color or None, optional
        背景色。None なら背景矩形を出力しない。

    Raises
    ------
    ValueError
        canvas_size が正の値でない場合。
    """

    def __init__(
        self,
        canvas_size: tuple[int, int] = CANVAS_SIZE,
        *,
        background: Color | None = None,
    ) -> None:
        super().__init__()
        canvas_w, canvas_h = canvas_size
        if int(canvas_w) <= 0 or int(canvas_h) <= 0:
            raise ValueError("canvas_size は正の値である必要がある")
        self.canvas_size = (int(canvas_w), int(canvas_h))
        self.background = background
        self.elements: list[str] = []

    def _on_fill(self, path: DevicePath, color: Color) -> None:
        if not path.segments:
            return
        self.elements.append(f'  <path d="{path_to_d(path)}" fill="{rgb_hex(color)}" />')

    def _on_stroke(self, path: DevicePath, color: Color, width: float) -> None:
        if not path.segments:
            return
        self.elements.append(
            (
                f'  <path d="{path_to_d(path)}" fill="none" stroke="{rgb_hex(color)}" '
                f'stroke-width="{_fmt(width)}" />'
            )
        )

    def _on_fill_rect(self, path: DevicePath, color: Color) -> None:
        self._on_fill(path, color)

    def to_svg(self) -> str:
        """蓄積した要素から SVG テキストを組み立てて返す。"""
        canvas_w, canvas_h = self.canvas_size
        lines: list[str] = []
        lines.append('<?xml version="1.0" encoding="UTF-8"?>')
        lines.append(
            (
                f'<svg xmlns="{_SVG_NS}" viewBox="0 0 {canvas_w} {canvas_h}" '
                f'width="{canvas_w}" height="{canvas_h}">'
            )
        )
        if self.background is not None:
            lines.append(
                (
                    f'  <rect x="0" y="0" width="{canvas_w}" height="{canvas_h}" '
                    f'fill="{rgb_hex(self.background)}" />'
                )
            )
        lines.extend(self.elements)
        lines.append("</svg>")
        return "\n".join(lines) + "\n"


def render_svg(
    palette: Palette,
    *,
    canvas_size: tuple[int, int] = CANVAS_SIZE,
    background: Color | None = None,
) -> str:
    """ゲーム機のシーンを描画した SVG テキストを返す。"""
    ctx = SvgContext(canvas_size, background=background)
    compose(ctx, palette)
    return ctx.to_svg()


def export_svg(
    path: str | Path,
    *,
    palette: Palette,
    canvas_size: tuple[int, int] = CANVAS_SIZE,
    background: Color | None = None,
) -> Path:
    """ゲーム機のシーンを SVG として保存する。

    Parameters
    ----------
    path : str or Path
        出力先パス。親ディレクトリは作成する。
    palette : Palette
        描画に使うパレット。
    canvas_size : tuple[int, int], optional
        キャンバス寸法。
    background : Color or None, optional
        背景色。

    Returns
    -------
    Path
        保存先パス。
    """
    _path = Path(path)
    text = render_svg(palette, canvas_size=canvas_size, background=background)

    _path.parent.mkdir(parents=True, exist_ok=True)
    with _path.open("w", encoding="utf-8", newline="\n") as f:
        f.write(text)

    _logger.info("SVG を保存: %s (palette=%s)", _path, palette.name)
    return _path


__all__ = ["SvgContext", "export_svg", "path_to_d", "render_svg"]
