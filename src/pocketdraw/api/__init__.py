# どこで: `src/pocketdraw/api/__init__.py`。
# 何を: 公開 API（Export / compose / パレット選択 / 図形登録）を再エクスポートする。
# なぜ: ユーザーコードからシンプルに API を import できるようにするため。

from __future__ import annotations

from .export import Export
from pocketdraw.core.palette import Palette, palette_by_name, palette_names
from pocketdraw.core.scene import CANVAS_SIZE, CONSOLE_SCENE, SceneCall, compose
from pocketdraw.core.shape_registry import shape

__all__ = [
    "CANVAS_SIZE",
    "CONSOLE_SCENE",
    "Export",
    "Palette",
    "SceneCall",
    "compose",
    "palette_by_name",
    "palette_names",
    "shape",
]
