"""
どこで: `src/pocketdraw/core/color.py`。
何を: RGB255 色タプル `Color` の正規化と解釈（CSS rgb()/#RRGGBB）と #RRGGBB 表現を提供する。
なぜ: パレット定義・config・SVG 出力で同じ色表現を共有するため。
"""

from __future__ import annotations

import re
from typing import Any, TypeAlias, cast

Color: TypeAlias = tuple[int, int, int]


_CSS_RGB_RE = re.compile(r"^\s*rgb\(\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d+)\s*\)\s*$")
_HEX_RE = re.compile(r"^\s*#([0-9a-fA-F]{6})\s*$")


def coerce_rgb255(value: object) -> Color:
    """値を RGB255 タプル `(r, g, b)`（0..255）に正規化して返す。

    Parameters
    ----------
    value : object
        `(r, g, b)` の 3 要素シーケンス。

    Returns
    -------
    Color
        `int()` 化 + 0..255 clamp 済みの RGB。

    Raises
    ------
    ValueError
        長さ 3 のシーケンスでない場合。
    """

    r: object
    g: object
    b: object
    try:
        r, g, b = value  # type: ignore[misc]
    except Exception as exc:
        raise ValueError(f"rgb value must be a length-3 sequence: {value!r}") from exc

    def _clamp(v: object) -> int:
        iv = int(cast(Any, v))
        return 0 if iv < 0 else 255 if iv > 255 else iv

    return _clamp(r), _clamp(g), _clamp(b)


def parse_color(value: object) -> Color:
    """config 等の値（`[r, g, b]` / `"rgb(r,g,b)"` / `"#RRGGBB"`）を Color に変換する。"""

    if isinstance(value, str):
        m = _CSS_RGB_RE.match(value)
        if m is not None:
            return coerce_rgb255(m.groups())
        m = _HEX_RE.match(value)
        if m is not None:
            h = m.group(1)
            return int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16)
        raise ValueError(f"色文字列を解釈できない: {value!r}")
    return coerce_rgb255(value)


def rgb_hex(color: Color) -> str:
    """Color を `#RRGGBB` 形式で返す。"""

    r, g, b = coerce_rgb255(color)
    return f"#{r:02X}{g:02X}{b:02X}"


__all__ = ["Color", "coerce_rgb255", "parse_color", "rgb_hex"]
