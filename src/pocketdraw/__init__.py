# どこで: `src/pocketdraw/__init__.py`。
# 何を: ルート `pocketdraw` パッケージを定義する。
# なぜ: import 起点を `pocketdraw` に統一するため。

from __future__ import annotations

from pocketdraw.api import Export, Palette, SceneCall, compose, palette_by_name, shape

__all__ = ["Export", "Palette", "SceneCall", "compose", "palette_by_name", "shape"]
