"""
どこで: `src/pocketdraw/core/scene.py`。
何を: ゲーム機イラストの描画呼び出し表 `CONSOLE_SCENE` と、それを DrawingContext に流す `compose` を提供する。
なぜ: 座標リテラルの列をロジックではなくデータとして持ち、パレットを明示的に渡して描き直せるようにするため。
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from math import isfinite
from typing import Any

# 図形モジュールをインポートしてレジストリに登録させる。
from pocketdraw.core import shapes as _shapes  # noqa: F401
from pocketdraw.core.context import DrawingContext, require_context
from pocketdraw.core.palette import ROLES, Palette
from pocketdraw.core.shape_registry import shape_registry

_logger = logging.getLogger(__name__)

CANVAS_SIZE: tuple[int, int] = (360, 592)
"""シーン全体の寸法 (width, height)。"""


def _normalize_number(name: str, value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"シーン引数 {name!r} は数値である必要がある: {value!r}")
    v = float(value)
    if not isfinite(v):
        raise ValueError(f"シーン引数 {name!r} に非有限の値は使えない: {value!r}")
    return v


@dataclass(frozen=True, slots=True)
class SceneCall:
    """シーン表の 1 行（図形 op 名・色の役割・引数）。

    Parameters
    ----------
    op : str
        shape レジストリの op 名。
    role : str
        Palette の役割名。
    args : tuple[tuple[str, float], ...]
        宣言順の (引数名, 値) タプル列。
    """

    op: str
    role: str
    args: tuple[tuple[str, float], ...]

    @classmethod
    def create(cls, op: str, role: str, **params: Any) -> "SceneCall":
        """op 名・役割・キーワード引数から SceneCall を生成する。

        Raises
        ------
        KeyError
            role が未知の場合。
        """
        if role not in ROLES:
            raise KeyError(f"未知の色の役割: {role!r}")
        args = tuple((str(k), _normalize_number(k, v)) for k, v in params.items())
        return cls(op=str(op), role=str(role), args=args)


_call = SceneCall.create

CONSOLE_SCENE: tuple[SceneCall, ...] = (
    # 本体
    _call("console_rect", "shell", x=0, y=0, w=360, h=592, sc=10, bc=70),
    # 画面まわり
    _call("console_rect", "face", x=30, y=50, w=300, h=230, sc=10, bc=40),
    # 画面
    _call("rect", "screen", x=85, y=80, w=190, h=170),
    # 十字キー
    _call("rectellipse", "dpad", cx=75, cy=400, w=90, h=30, sc=6, a=0),
    _call("rectellipse", "dpad", cx=75, cy=400, w=90, h=30, sc=6, a=90),
    # A/B ボタン
    _call("circle", "a_b", x=250, y=400, r=20),
    _call("circle", "a_b", x=310, y=380, r=20),
    # start/select
    _call("stadium", "face", cx=130, cy=490, w=40, h=15, a=337.5),
    _call("stadium", "face", cx=190, cy=490, w=40, h=15, a=337.5),
    # スピーカー
    _call("stadium", "detail", cx=255, cy=555, w=50, h=5, a=67.5),
    _call("stadium", "detail", cx=270, cy=547.5, w=50, h=5, a=67.5),
    _call("stadium", "detail", cx=285, cy=540, w=50, h=5, a=67.5),
    _call("stadium", "detail", cx=300, cy=532.5, w=50, h=5, a=67.5),
    _call("stadium", "detail", cx=315, cy=525, w=50, h=5, a=67.5),
    _call("stadium", "detail", cx=330, cy=517.5, w=50, h=5, a=67.5),
    # 電源ランプ
    _call("circle", "battery", x=55, y=140, r=5),
    # イヤホン端子
    _call("stadium", "detail", cx=160, cy=575, w=40, h=15, a=0),
    _call("line", "detail", sx=165, sy=575, ex=165, ey=592, width=3),
    _call("line", "detail", sx=172, sy=575, ex=172, ey=592, width=3),
    _call("line", "detail", sx=179, sy=575, ex=179, ey=592, width=3),
    # 電源スイッチ
    _call("stadium", "detail", cx=80, cy=15, w=50, h=15, a=0),
    _call("line", "detail", sx=70, sy=15, ex=70, ey=0, width=3),
    _call("line", "detail", sx=77, sy=15, ex=77, ey=0, width=3),
    _call("line", "detail", sx=84, sy=15, ex=84, ey=0, width=3),
    # 上部の溝
    _call("line", "detail", sx=0, sy=30, ex=360, ey=30, width=3),
    _call("line", "detail", sx=30, sy=0, ex=30, ey=30, width=3),
    _call("line", "detail", sx=330, sy=0, ex=330, ey=30, width=3),
    # 画面上部のアクセント線
    _call("line", "line_1", sx=40, sy=60, ex=320, ey=60, width=3),
    _call("line", "line_2", sx=40, sy=65, ex=320, ey=65, width=3),
    # 十字キーまわりの三角
    _call("triangle", "detail", cx=75, cy=350, w=7, a=0),
    _call("triangle", "detail", cx=25, cy=400, w=7, a=270),
    _call("triangle", "detail", cx=125, cy=400, w=7, a=90),
    _call("triangle", "detail", cx=75, cy=450, w=7, a=180),
)

del _call


def compose(
    ctx: DrawingContext | None,
    palette: Palette,
    scene: Sequence[SceneCall] = CONSOLE_SCENE,
) -> int:
    """シーン表を順に ctx へ描画する。

    Parameters
    ----------
    ctx : DrawingContext
        描画先。None なら描画前に失敗する。
    palette : Palette
        役割 → 色 の対応。
    scene : Sequence[SceneCall], optional
        描画呼び出し表。

    Returns
    -------
    int
        描画した呼び出し数。

    Raises
    ------
    TypeError
        ctx が None の場合。
    KeyError
        未登録の op、または未知の役割が含まれる場合。
    """
    target = require_context(ctx)

    count = 0
    for call in scene:
        func = shape_registry.get(call.op)
        func(target, palette.color(call.role), call.args)
        count += 1

    _logger.debug("scene を描画: calls=%d palette=%s", count, palette.name)
    return count


__all__ = ["CANVAS_SIZE", "CONSOLE_SCENE", "SceneCall", "compose"]
