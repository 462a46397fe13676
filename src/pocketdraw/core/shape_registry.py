# src/pocketdraw/core/shape_registry.py
# 図形描画関数のレジストリ。
# シーン表の op 名から描画関数を引けるようにする。

from __future__ import annotations

import inspect
from collections.abc import ItemsView
from typing import Any, Callable

from pocketdraw.core.color import Color
from pocketdraw.core.context import DrawingContext

ShapeFunc = Callable[[DrawingContext, Color, tuple[tuple[str, Any], ...]], None]


class ShapeRegistry:
    """op 名と図形描画関数を対応付けるレジストリ。

    Notes
    -----
    登録された関数は
    ``func(ctx, color, args: tuple[tuple[str, Any], ...]) -> None`` の形で呼ぶ。
    args は `SceneCall.args` と同じ正規化済み表現を受け取る。
    """

    def __init__(self) -> None:
        """空のレジストリを初期化する。"""
        self._items: dict[str, ShapeFunc] = {}
        self._param_order: dict[str, tuple[str, ...]] = {}
        self._defaults: dict[str, dict[str, Any]] = {}

    def _register(
        self,
        name: str,
        func: ShapeFunc,
        *,
        overwrite: bool = True,
        param_order: tuple[str, ...] = (),
        defaults: dict[str, Any] | None = None,
    ) -> None:
        """図形を登録する（内部用）。

        Notes
        -----
        登録は `@shape` デコレータ経由に統一する。
        """
        if not overwrite and name in self._items:
            raise ValueError(f"shape '{name}' は既に登録されている")
        self._items[name] = func
        self._param_order[name] = tuple(str(a) for a in param_order)
        self._defaults[name] = dict(defaults or {})

    def get(self, name: str) -> ShapeFunc:
        """op 名に対応する描画関数を取得する。

        Raises
        ------
        KeyError
            未登録の op 名が指定された場合。
        """
        try:
            return self._items[name]
        except KeyError:
            raise KeyError(f"未登録の shape: {name!r}") from None

    def __contains__(self, name: object) -> bool:
        return name in self._items

    def __getitem__(self, name: str) -> ShapeFunc:
        return self.get(name)

    def items(self) -> ItemsView[str, ShapeFunc]:
        """登録済みエントリの (name, func) ビューを返す。"""
        return self._items.items()

    def get_param_order(self, name: str) -> tuple[str, ...]:
        """op 名に対応する引数名の宣言順を返す。"""
        return tuple(self._param_order.get(name, ()))

    def get_defaults(self, name: str) -> dict[str, Any]:
        """op 名に対応するデフォルト引数辞書を返す。"""
        return dict(self._defaults.get(name, {}))


shape_registry = ShapeRegistry()
"""グローバルな shape レジストリインスタンス。"""


def shape(
    func: Callable[..., None] | None = None,
    *,
    overwrite: bool = True,
):
    """グローバル shape レジストリ用デコレータ。

    関数名をそのまま op 名として登録する。デコレート後も関数自体は
    そのまま返すので、通常の関数としても呼べる。

    Examples
    --------
    @shape
    def circle(ctx, color, x, y, r):
        ...
    """

    def decorator(f: Callable[..., None]) -> Callable[..., None]:
        sig = inspect.signature(f)
        # 先頭 2 引数（ctx, color）以外を図形パラメータとみなす。
        params = list(sig.parameters.values())[2:]
        param_order = tuple(p.name for p in params)
        defaults = {
            p.name: p.default for p in params if p.default is not inspect.Parameter.empty
        }

        def wrapper(
            ctx: DrawingContext, color: Color, args: tuple[tuple[str, Any], ...]
        ) -> None:
            f(ctx, color, **dict(args))

        shape_registry._register(
            f.__name__,
            wrapper,
            overwrite=overwrite,
            param_order=param_order,
            defaults=defaults,
        )
        return f

    if func is None:
        return decorator
    return decorator(func)


__all__ = ["ShapeFunc", "ShapeRegistry", "shape", "shape_registry"]
