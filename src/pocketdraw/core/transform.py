# どこで: `src/pocketdraw/core/transform.py`。
# 何を: 中心点まわりの回転ヘルパと、回転描画のスコープ（save/restore を保証する context manager）。
# なぜ: 回転図形の描画後に変換状態を必ず元へ戻すため（途中で例外が出ても）。

from __future__ import annotations

import math
from collections.abc import Iterator
from contextlib import contextmanager

from pocketdraw.core.context import DrawingContext


def rotate_about(ctx: DrawingContext, cx: float, cy: float, radians: float) -> None:
    """(cx, cy) を中心に ctx を回転させる。

    translate(cx, cy) → rotate(r) → translate(-cx, -cy) の順で適用する。
    同じ中心・符号反転した角度で再度呼ぶと逆変換になる。
    """
    ctx.translate(cx, cy)
    ctx.rotate(radians)
    ctx.translate(-cx, -cy)


@contextmanager
def rotated(ctx: DrawingContext, cx: float, cy: float, degrees: float) -> Iterator[DrawingContext]:
    """(cx, cy) を中心に degrees 回転した座標系で描画するスコープ。

    Parameters
    ----------
    ctx : DrawingContext
        描画コンテキスト。
    cx, cy : float
        回転中心。
    degrees : float
        回転角 [deg]。

    Notes
    -----
    抜ける際は例外の有無にかかわらず restore される。
    """
    ctx.save()
    try:
        rotate_about(ctx, cx, cy, math.radians(float(degrees)))
        yield ctx
    finally:
        ctx.restore()


__all__ = ["rotate_about", "rotated"]
