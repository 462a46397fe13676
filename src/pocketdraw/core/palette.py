"""
どこで: `src/pocketdraw/core/palette.py`。
何を: 色の役割（本体/前面/画面/十字キー等）を具体色へ対応付ける不変の `Palette` と、組み込みパレットを定義する。
なぜ: パレット切替を「共有テーブルの書き換え」ではなく「新しい値の選択」として扱い、描画へ明示的に渡すため。
"""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from pocketdraw.core.color import Color, parse_color
from pocketdraw.core.runtime_config import runtime_config

ROLES: tuple[str, ...] = (
    "shell",
    "face",
    "screen",
    "dpad",
    "a_b",
    "detail",
    "battery",
    "line_1",
    "line_2",
)


@dataclass(frozen=True, slots=True)
class Palette:
    """役割名 → 色 の不変マッピング。

    Attributes
    ----------
    name : str
        パレット名。
    shell : Color
        本体。
    face : Color
        画面まわりの前面パネルと start/select。
    screen : Color
        液晶。
    dpad : Color
        十字キー。
    a_b : Color
        A/B ボタン。
    detail : Color
        スピーカー穴・端子・上部の溝などの装飾。
    battery : Color
        電源ランプ。
    line_1, line_2 : Color
        画面上部のアクセント線。
    """

    name: str
    shell: Color
    face: Color
    screen: Color
    dpad: Color
    a_b: Color
    detail: Color
    battery: Color
    line_1: Color
    line_2: Color

    def color(self, role: str) -> Color:
        """役割名に対応する色を返す。

        Raises
        ------
        KeyError
            未知の役割名の場合。
        """
        if role not in ROLES:
            raise KeyError(f"未知の色の役割: {role!r}")
        return getattr(self, role)

    def roles(self) -> dict[str, Color]:
        """役割名 → 色 の辞書を返す（ROLES 順）。"""
        return {role: getattr(self, role) for role in ROLES}

    def replace(self, **changes: Any) -> "Palette":
        """一部の役割（または name）を差し替えた新しい Palette を返す。"""
        unknown = set(changes) - set(ROLES) - {"name"}
        if unknown:
            raise KeyError(f"未知の色の役割: {sorted(unknown)!r}")
        normalized = {
            k: (v if k == "name" else parse_color(v)) for k, v in changes.items()
        }
        return dataclasses.replace(self, **normalized)


STANDARD = Palette(
    name="standard",
    shell=(190, 190, 190),
    face=(88, 88, 100),
    screen=(80, 100, 20),
    dpad=(0, 0, 0),
    a_b=(140, 30, 80),
    detail=(200, 200, 200),
    battery=(40, 40, 40),
    line_1=(140, 30, 80),
    line_2=(20, 30, 120),
)

# 4 階調の緑（液晶風）。
_MONO_DARKEST = (15, 56, 15)
_MONO_DARK = (48, 98, 48)
_MONO_LIGHT = (139, 172, 15)
_MONO_LIGHTEST = (155, 188, 15)

MONO = Palette(
    name="mono",
    shell=_MONO_LIGHTEST,
    face=_MONO_DARK,
    screen=_MONO_LIGHT,
    dpad=_MONO_DARKEST,
    a_b=_MONO_DARKEST,
    detail=_MONO_LIGHT,
    battery=_MONO_DARKEST,
    line_1=_MONO_LIGHT,
    line_2=_MONO_LIGHTEST,
)

_WHITE = (255, 255, 255)
_BLACK = (0, 0, 0)

BW = Palette(
    name="bw",
    shell=_WHITE,
    face=_BLACK,
    screen=_WHITE,
    dpad=_BLACK,
    a_b=_BLACK,
    detail=_BLACK,
    battery=_WHITE,
    line_1=_WHITE,
    line_2=_WHITE,
)

RAINBOW = Palette(
    name="rainbow",
    shell=(230, 60, 60),
    face=(40, 40, 160),
    screen=(120, 220, 120),
    dpad=(250, 200, 0),
    a_b=(160, 60, 200),
    detail=(255, 140, 0),
    battery=(0, 200, 200),
    line_1=(255, 0, 0),
    line_2=(0, 0, 255),
)

BUILTIN_PALETTES: dict[str, Palette] = {p.name: p for p in (STANDARD, MONO, BW, RAINBOW)}

_ALIASES = {
    "monochrome": "mono",
    "black/white": "bw",
    "blackwhite": "bw",
    "black_white": "bw",
}


def canonical_palette_name(name: str) -> str:
    """別名を正規のパレット名に変換して返す（大文字小文字は無視）。"""
    key = str(name).strip().lower()
    return _ALIASES.get(key, key)


def _derive_palette(
    name: str,
    defs: Mapping[str, Mapping[str, Any]],
    seen: tuple[str, ...],
) -> Palette:
    if name in seen:
        chain = " -> ".join((*seen, name))
        raise ValueError(f"パレットの base が循環している: {chain}")
    body = defs[name]
    base_name = canonical_palette_name(str(body.get("base", STANDARD.name)))
    if base_name in defs and base_name != name:
        base = _derive_palette(base_name, defs, (*seen, name))
    elif base_name in BUILTIN_PALETTES:
        base = BUILTIN_PALETTES[base_name]
    else:
        raise ValueError(f"パレット {name!r} の base が見つからない: {base_name!r}")
    overrides = {k: v for k, v in body.items() if k != "base"}
    return base.replace(name=name, **overrides)


def palette_by_name(
    name: str,
    *,
    custom: Mapping[str, Mapping[str, Any]] | None = None,
) -> Palette:
    """名前からパレットを選ぶ。

    Parameters
    ----------
    name : str
        パレット名または別名（`monochrome`, `black/white` など）。
    custom : Mapping or None, optional
        ユーザー定義パレット `{name: {base: ..., <role>: color}}`。
        組み込みと同名なら custom が優先する。

    Returns
    -------
    Palette
        選択されたパレット。選択は毎回独立で、以前の選択の影響は残らない。

    Raises
    ------
    ValueError
        未知の名前、または custom の base が解決できない場合。
    """
    key = canonical_palette_name(name)
    defs = {canonical_palette_name(str(k)): v for k, v in (custom or {}).items()}
    if key in defs:
        return _derive_palette(key, defs, ())
    if key in BUILTIN_PALETTES:
        return BUILTIN_PALETTES[key]
    known = sorted(set(BUILTIN_PALETTES) | set(defs))
    raise ValueError(f"未知のパレット名: {name!r}（候補: {', '.join(known)}）")


def palette_names(custom: Mapping[str, Any] | None = None) -> tuple[str, ...]:
    """選択可能なパレット名を返す（組み込み → custom の順）。"""
    names = list(BUILTIN_PALETTES)
    for k in custom or {}:
        if str(k) not in names:
            names.append(str(k))
    return tuple(names)


def resolve_palette(palette: Palette | str | None = None) -> Palette:
    """Palette / 名前 / None を Palette に解決する。

    None の場合は runtime config の `scene.palette` を使う。名前の解決には
    config の `palettes` も参照する。
    """
    if isinstance(palette, Palette):
        return palette

    cfg = runtime_config()
    name = cfg.palette if palette is None else str(palette)
    return palette_by_name(name, custom=cfg.palettes)


__all__ = [
    "BUILTIN_PALETTES",
    "BW",
    "MONO",
    "Palette",
    "RAINBOW",
    "ROLES",
    "STANDARD",
    "canonical_palette_name",
    "palette_by_name",
    "palette_names",
    "resolve_palette",
]
