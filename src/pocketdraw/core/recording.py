"""
どこで: `src/pocketdraw/core/recording.py`。
何を: 全呼び出しを記録し、変換行列と塗り/線パスを追跡する `RecordingContext`。
なぜ: 図形の変換復元や、シーン全体の描画列（ゴールデン出力）を検証できるようにするため。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pocketdraw.core.color import Color
from pocketdraw.core.context import PathCanvas
from pocketdraw.core.path import DevicePath

DrawCommand = tuple[Any, ...]


@dataclass(frozen=True, slots=True)
class RecordedPath:
    """fill/stroke/fill_rect 時点の device 空間パス。

    kind は ``"fill"`` / ``"stroke"`` / ``"fill_rect"`` のいずれか。
    width は stroke の device 線幅（それ以外は None）。
    """

    kind: str
    path: DevicePath
    color: Color
    width: float | None = None

    def bounds(self) -> tuple[float, float, float, float]:
        return self.path.bounds()


class RecordingContext(PathCanvas):
    """呼び出し列と描画結果を記録する DrawingContext。

    Attributes
    ----------
    commands : list[DrawCommand]
        ``(name, *args)`` の列。引数はローカル座標のまま float 化して保存する。
    paths : list[RecordedPath]
        塗り/線ごとの device 空間パス。
    """

    def __init__(self) -> None:
        super().__init__()
        self.commands: list[DrawCommand] = []
        self.paths: list[RecordedPath] = []

    def _record(self, name: str, *args: Any) -> None:
        self.commands.append((name, *args))

    def _on_fill(self, path: DevicePath, color: Color) -> None:
        self.paths.append(RecordedPath(kind="fill", path=path, color=color))

    def _on_stroke(self, path: DevicePath, color: Color, width: float) -> None:
        self.paths.append(RecordedPath(kind="stroke", path=path, color=color, width=width))

    def _on_fill_rect(self, path: DevicePath, color: Color) -> None:
        self.paths.append(RecordedPath(kind="fill_rect", path=path, color=color))

    def names(self) -> list[str]:
        """記録済みコマンド名の列を返す。"""
        return [c[0] for c in self.commands]

    def clear(self) -> None:
        """記録を消去する（変換状態は保持する）。"""
        self.commands.clear()
        self.paths.clear()


__all__ = ["DrawCommand", "RecordedPath", "RecordingContext"]
