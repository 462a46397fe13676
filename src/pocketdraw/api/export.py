"""
どこで: `src/pocketdraw/api/export.py`。
何を: ヘッドレス export の公開導線 `Export` を提供する。
なぜ: パレット名と出力先だけ指定して、ゲーム機イラストを 1 回で書き出せるようにするため。
"""

from __future__ import annotations

from pathlib import Path

from pocketdraw.core.color import Color
from pocketdraw.core.palette import Palette, resolve_palette
from pocketdraw.core.runtime_config import runtime_config
from pocketdraw.core.scene import CANVAS_SIZE
from pocketdraw.export.image import default_output_path, export_image
from pocketdraw.export.svg import export_svg


class Export:
    """ゲーム機のシーンをファイルへ書き出す。

    Attributes
    ----------
    palette : Palette
        解決済みのパレット。
    path : Path
        保存先パス。
    """

    def __init__(
        self,
        fmt: str,
        path: str | Path | None = None,
        *,
        palette: Palette | str | None = None,
        canvas_size: tuple[int, int] = CANVAS_SIZE,
        background: Color | None = None,
    ) -> None:
        """export を実行する。

        Parameters
        ----------
        fmt : str
            出力フォーマット。`"svg"`, `"image"`/`"png"`。
        path : str or Path or None, optional
            出力先パス。None なら config の output_dir 配下に既定名で保存する。
        palette : Palette or str or None, optional
            パレット（値または名前）。None なら config の `scene.palette`。
        canvas_size : tuple[int, int]
            キャンバス寸法。
        background : Color or None
            背景色。None なら config の `export.background`。

        Raises
        ------
        ValueError
            未対応の fmt の場合。
        """
        self.fmt = str(fmt).lower().strip()
        self.palette = resolve_palette(palette)
        if background is None:
            background = runtime_config().background

        if self.fmt == "svg":
            self.path = Path(path) if path is not None else default_output_path(self.palette, ".svg")
            export_svg(self.path, palette=self.palette, canvas_size=canvas_size, background=background)
            return
        if self.fmt in {"image", "png"}:
            self.path = Path(path) if path is not None else default_output_path(self.palette, ".png")
            export_image(self.path, palette=self.palette, canvas_size=canvas_size, background=background)
            return

        raise ValueError(f"未対応の export fmt: {fmt!r}")
