"""
どこで: `src/pocketdraw/core/context.py`。
何を: 描画コンテキストのプロトコル `DrawingContext` と、変換状態を追跡する基底 `PathCanvas` を定義する。
なぜ: 図形ライブラリを特定の描画面（記録用/SVG）から切り離し、Canvas 互換の意味論で扱うため。
"""

from __future__ import annotations

import math
from typing import Any, Protocol, runtime_checkable

import numpy as np

from pocketdraw.core import affine
from pocketdraw.core.color import Color
from pocketdraw.core.path import DevicePath, arc_sweep


@runtime_checkable
class DrawingContext(Protocol):
    """図形ライブラリが借用する 2D 描画コンテキスト。

    Notes
    -----
    意味論は HTML Canvas 2D に揃える。
    - translate/rotate は現在の変換行列に後置合成される。
    - save/restore は変換行列を push/pop する。
    - fill_rect は現在のパスに影響しない。
    """

    def begin_path(self) -> None: ...

    def move_to(self, x: float, y: float) -> None: ...

    def line_to(self, x: float, y: float) -> None: ...

    def quadratic_curve_to(self, cpx: float, cpy: float, x: float, y: float) -> None: ...

    def bezier_curve_to(
        self,
        cp1x: float,
        cp1y: float,
        cp2x: float,
        cp2y: float,
        x: float,
        y: float,
    ) -> None: ...

    def arc(
        self,
        x: float,
        y: float,
        r: float,
        start: float,
        end: float,
        anticlockwise: bool = False,
    ) -> None: ...

    def close_path(self) -> None: ...

    def fill(self, color: Color) -> None: ...

    def stroke(self, color: Color, width: float) -> None: ...

    def fill_rect(self, x: float, y: float, w: float, h: float, color: Color) -> None: ...

    def translate(self, x: float, y: float) -> None: ...

    def rotate(self, radians: float) -> None: ...

    def save(self) -> None: ...

    def restore(self) -> None: ...


def require_context(ctx: object) -> DrawingContext:
    """描画コンテキストの存在を確認して返す。

    Raises
    ------
    TypeError
        ctx が None、または DrawingContext を満たさない場合。
    """
    if ctx is None:
        raise TypeError("描画コンテキストが None（描画面を取得できていない）")
    if not isinstance(ctx, DrawingContext):
        raise TypeError(f"DrawingContext ではない: {type(ctx)!r}")
    return ctx


class PathCanvas:
    """変換行列とカレントパスを device 空間で保持する DrawingContext 基底。

    サブクラスは ``_on_fill`` / ``_on_stroke`` / ``_on_fill_rect`` で出力を受け取り、
    ``_record`` で全呼び出しを観測できる。
    """

    def __init__(self) -> None:
        self._matrix = affine.identity()
        self._stack: list[np.ndarray] = []
        self._path = DevicePath()

    @property
    def transform(self) -> np.ndarray:
        """現在の変換行列のコピー。"""
        return self._matrix.copy()

    @property
    def depth(self) -> int:
        """save の入れ子の深さ。"""
        return len(self._stack)

    def _record(self, name: str, *args: Any) -> None:
        """呼び出しフック（既定は何もしない）。"""

    def _on_fill(self, path: DevicePath, color: Color) -> None:
        pass

    def _on_stroke(self, path: DevicePath, color: Color, width: float) -> None:
        pass

    def _on_fill_rect(self, path: DevicePath, color: Color) -> None:
        pass

    def _map(self, x: float, y: float) -> tuple[float, float]:
        return affine.apply_point(self._matrix, float(x), float(y))

    # --- path ---

    def begin_path(self) -> None:
        self._record("begin_path")
        self._path.clear()

    def move_to(self, x: float, y: float) -> None:
        self._record("move_to", float(x), float(y))
        self._path.move_to(self._map(x, y))

    def line_to(self, x: float, y: float) -> None:
        self._record("line_to", float(x), float(y))
        self._path.line_to(self._map(x, y))

    def quadratic_curve_to(self, cpx: float, cpy: float, x: float, y: float) -> None:
        self._record("quadratic_curve_to", float(cpx), float(cpy), float(x), float(y))
        self._path.quad_to(self._map(cpx, cpy), self._map(x, y))

    def bezier_curve_to(
        self,
        cp1x: float,
        cp1y: float,
        cp2x: float,
        cp2y: float,
        x: float,
        y: float,
    ) -> None:
        self._record(
            "bezier_curve_to",
            float(cp1x),
            float(cp1y),
            float(cp2x),
            float(cp2y),
            float(x),
            float(y),
        )
        self._path.cubic_to(self._map(cp1x, cp1y), self._map(cp2x, cp2y), self._map(x, y))

    def arc(
        self,
        x: float,
        y: float,
        r: float,
        start: float,
        end: float,
        anticlockwise: bool = False,
    ) -> None:
        self._record("arc", float(x), float(y), float(r), float(start), float(end), bool(anticlockwise))
        sweep = arc_sweep(float(start), float(end), bool(anticlockwise))
        offset = affine.rotation_angle(self._matrix)
        self._path.arc(
            self._map(x, y),
            float(r) * affine.scale_factor(self._matrix),
            float(start) + offset,
            sweep,
        )

    def close_path(self) -> None:
        self._record("close_path")
        self._path.close()

    def fill(self, color: Color) -> None:
        self._record("fill", color)
        self._on_fill(self._path.copy(), color)

    def stroke(self, color: Color, width: float) -> None:
        self._record("stroke", color, float(width))
        self._on_stroke(
            self._path.copy(), color, float(width) * affine.scale_factor(self._matrix)
        )

    def fill_rect(self, x: float, y: float, w: float, h: float, color: Color) -> None:
        self._record("fill_rect", float(x), float(y), float(w), float(h), color)
        rect = DevicePath()
        rect.move_to(self._map(x, y))
        rect.line_to(self._map(x + w, y))
        rect.line_to(self._map(x + w, y + h))
        rect.line_to(self._map(x, y + h))
        rect.close()
        self._on_fill_rect(rect, color)

    # --- transform ---

    def translate(self, x: float, y: float) -> None:
        self._record("translate", float(x), float(y))
        self._matrix = self._matrix @ affine.translation(x, y)

    def rotate(self, radians: float) -> None:
        self._record("rotate", float(radians))
        if not math.isfinite(float(radians)):
            # Canvas は非有限の角度を無視する。
            return
        self._matrix = self._matrix @ affine.rotation(radians)

    def save(self) -> None:
        self._record("save")
        self._stack.append(self._matrix.copy())

    def restore(self) -> None:
        self._record("restore")
        if not self._stack:
            return
        self._matrix = self._stack.pop()


__all__ = ["DrawingContext", "PathCanvas", "require_context"]
