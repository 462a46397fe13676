"""
どこで: `src/pocketdraw/core/shapes.py`。
何を: ゲーム機イラストを構成するパラメトリック図形（console 矩形/stadium/rectellipse/円/線/三角形/矩形）。
なぜ: 状態を持たない描画関数として、任意の DrawingContext へ同じ図形を再現できるようにするため。

各関数は ctx をその呼び出しの間だけ借り、変換状態を呼び出し前と同じに戻して返す。
幾何パラメータは検証しない（不正値は崩れたパスになるだけ）。
"""

from __future__ import annotations

import math

from pocketdraw.core.color import Color
from pocketdraw.core.context import DrawingContext
from pocketdraw.core.shape_registry import shape
from pocketdraw.core.transform import rotated


@shape
def console_rect(
    ctx: DrawingContext,
    color: Color,
    x: float,
    y: float,
    w: float,
    h: float,
    sc: float,
    bc: float,
) -> None:
    """本体形状の矩形を描く。右下だけ大きく丸め、他の 3 隅は小さく丸める。

    Parameters
    ----------
    ctx : DrawingContext
        描画先。
    color : Color
        塗り色。
    x, y : float
        左上隅。
    w, h : float
        幅と高さ。
    sc : float
        左上・右上・左下の角の大きさ。
    bc : float
        右下の角の大きさ。
    """
    ctx.begin_path()
    ctx.move_to(x, y + sc)
    ctx.quadratic_curve_to(x, y, x + sc, y)
    ctx.line_to(x + w - sc, y)
    ctx.quadratic_curve_to(x + w, y, x + w, y + sc)
    ctx.line_to(x + w, y + h - bc)
    ctx.quadratic_curve_to(x + w, y + h, x + w - bc, y + h)
    ctx.line_to(x + sc, y + h)
    ctx.quadratic_curve_to(x, y + h, x, y + h - sc)
    ctx.line_to(x, y + sc)
    ctx.close_path()
    ctx.fill(color)


@shape
def stadium(
    ctx: DrawingContext,
    color: Color,
    cx: float,
    cy: float,
    w: float,
    h: float,
    a: float = 0.0,
) -> None:
    """両端が丸い矩形（カプセル）を描く。

    h が丸い端の寸法で、通常は w の方が長い。縦向きにしたい場合は a=90。
    端の丸みは 3 次ベジェ 1 本で、制御点を角から h だけ外へ延ばした点に置く
    （真の半円ではない）。

    Parameters
    ----------
    cx, cy : float
        回転中心。
    w, h : float
        幅と高さ。
    a : float, optional
        回転角 [deg]。
    """
    x = cx + h - w * 0.5
    y = cy - h * 0.5

    with rotated(ctx, cx, cy, a):
        ctx.begin_path()
        ctx.move_to(x, y)
        ctx.line_to(x + w - h, y)
        ctx.bezier_curve_to(x + w, y, x + w, y + h, x + w - h, y + h)
        ctx.line_to(x, y + h)
        ctx.bezier_curve_to(x - h, y + h, x - h, y, x, y)
        ctx.close_path()
        ctx.fill(color)


@shape
def rectellipse(
    ctx: DrawingContext,
    color: Color,
    cx: float,
    cy: float,
    w: float,
    h: float,
    sc: float,
    a: float = 0.0,
) -> None:
    """4 隅を同じ大きさ sc で丸めた矩形を、中心 (cx, cy) まわりに a [deg] 回転して描く。"""
    x = cx - w * 0.5
    y = cy - h * 0.5

    with rotated(ctx, cx, cy, a):
        ctx.begin_path()
        ctx.move_to(x, y + sc)
        ctx.quadratic_curve_to(x, y, x + sc, y)
        ctx.line_to(x + w - sc, y)
        ctx.quadratic_curve_to(x + w, y, x + w, y + sc)
        ctx.line_to(x + w, y + h - sc)
        ctx.quadratic_curve_to(x + w, y + h, x + w - sc, y + h)
        ctx.line_to(x + sc, y + h)
        ctx.quadratic_curve_to(x, y + h, x, y + h - sc)
        ctx.line_to(x, y + sc)
        ctx.close_path()
        ctx.fill(color)


@shape
def circle(ctx: DrawingContext, color: Color, x: float, y: float, r: float) -> None:
    """中心 (x, y)、半径 r の円を塗る。"""
    ctx.begin_path()
    ctx.arc(x, y, r, 0.0, math.pi * 2.0)
    ctx.close_path()
    ctx.fill(color)


@shape
def line(
    ctx: DrawingContext,
    color: Color,
    sx: float,
    sy: float,
    ex: float,
    ey: float,
    width: float = 1.0,
) -> None:
    """(sx, sy) から (ex, ey) への線分を線幅 width でストロークする。"""
    ctx.begin_path()
    ctx.move_to(sx, sy)
    ctx.line_to(ex, ey)
    ctx.close_path()
    ctx.stroke(color, width)


@shape
def triangle(
    ctx: DrawingContext,
    color: Color,
    cx: float,
    cy: float,
    w: float,
    a: float = 0.0,
) -> None:
    """底辺 w・高さ w の二等辺三角形を描く。a=0 で頂点が上を向く。"""
    x = cx - w / 2
    y = cy + w / 2

    with rotated(ctx, cx, cy, a):
        ctx.begin_path()
        ctx.move_to(x, y)
        ctx.line_to(x + w, y)
        ctx.line_to(x + w / 2, y - w)
        ctx.line_to(x, y)
        ctx.close_path()
        ctx.fill(color)


@shape
def rect(ctx: DrawingContext, color: Color, x: float, y: float, w: float, h: float) -> None:
    ctx.fill_rect(x, y, w, h, color)


__all__ = ["circle", "console_rect", "line", "rect", "rectellipse", "stadium", "triangle"]
