"""
どこで: `src/pocketdraw/core/path.py`。
何を: device 空間に変換済みのパスセグメント列 `DevicePath` と、曲線サンプリング/外接矩形を提供する。
なぜ: 記録用コンテキストと SVG 出力の両方で、同じ「変換後のパス」表現を共有するため。
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any

import numpy as np

Point = tuple[float, float]
Segment = tuple[Any, ...]

_TAU = 2.0 * math.pi
_DEFAULT_SAMPLES = 33


def arc_sweep(start: float, end: float, anticlockwise: bool) -> float:
    """Canvas の arc 規則に従い、符号付きの掃引角 [rad] を返す。

    Notes
    -----
    掃引量が 2π 以上なら全周（±2π）とみなす。
    それ以外は剰余で [0, 2π) に畳み込む。
    """
    if not anticlockwise:
        delta = end - start
        if delta >= _TAU:
            return _TAU
        return math.fmod(delta, _TAU) % _TAU
    delta = start - end
    if delta >= _TAU:
        return -_TAU
    return -(math.fmod(delta, _TAU) % _TAU)


def _quad(p0: np.ndarray, c: np.ndarray, p1: np.ndarray, t: np.ndarray) -> np.ndarray:
    u = 1.0 - t
    return (u * u)[:, None] * p0 + (2.0 * u * t)[:, None] * c + (t * t)[:, None] * p1


def _cubic(
    p0: np.ndarray, c1: np.ndarray, c2: np.ndarray, p1: np.ndarray, t: np.ndarray
) -> np.ndarray:
    u = 1.0 - t
    return (
        (u * u * u)[:, None] * p0
        + (3.0 * u * u * t)[:, None] * c1
        + (3.0 * u * t * t)[:, None] * c2
        + (t * t * t)[:, None] * p1
    )


@dataclass(slots=True)
class DevicePath:
    """device 座標系のパス。

    Attributes
    ----------
    segments : list[tuple]
        ``("M", p)``, ``("L", p)``, ``("Q", c, p)``, ``("C", c1, c2, p)``,
        ``("A", center, r, start, sweep)``, ``("Z",)`` の列。
    """

    segments: list[Segment] = field(default_factory=list)
    current: Point | None = None
    subpath_start: Point | None = None

    def clear(self) -> None:
        self.segments.clear()
        self.current = None
        self.subpath_start = None

    def move_to(self, p: Point) -> None:
        self.segments.append(("M", p))
        self.current = p
        self.subpath_start = p

    def line_to(self, p: Point) -> None:
        if self.current is None:
            self.move_to(p)
            return
        self.segments.append(("L", p))
        self.current = p

    def quad_to(self, c: Point, p: Point) -> None:
        if self.current is None:
            self.move_to(c)
        self.segments.append(("Q", c, p))
        self.current = p

    def cubic_to(self, c1: Point, c2: Point, p: Point) -> None:
        if self.current is None:
            self.move_to(c1)
        self.segments.append(("C", c1, c2, p))
        self.current = p

    def arc(self, center: Point, r: float, start: float, sweep: float) -> None:
        """円弧を追加する。現在点があれば始点まで直線で接続する（Canvas と同じ）。"""
        cx, cy = center
        p_start = (cx + r * math.cos(start), cy + r * math.sin(start))
        if self.current is None:
            self.move_to(p_start)
        else:
            self.line_to(p_start)
        self.segments.append(("A", center, float(r), float(start), float(sweep)))
        end = start + sweep
        self.current = (cx + r * math.cos(end), cy + r * math.sin(end))

    def close(self) -> None:
        if self.current is None:
            return
        self.segments.append(("Z",))
        self.current = self.subpath_start

    def copy(self) -> "DevicePath":
        return DevicePath(
            segments=list(self.segments),
            current=self.current,
            subpath_start=self.subpath_start,
        )

    def sample(self, samples: int = _DEFAULT_SAMPLES) -> np.ndarray:
        """曲線を折れ線近似した点列（shape (N,2)）を返す。

        Parameters
        ----------
        samples : int, optional
            曲線 1 本あたりのサンプル数（端点を含む）。奇数なら t=0.5 を含む。
        """
        t = np.linspace(0.0, 1.0, num=max(int(samples), 2), dtype=np.float64)
        chunks: list[np.ndarray] = []
        last: np.ndarray | None = None
        for seg in self.segments:
            kind = seg[0]
            if kind in ("M", "L"):
                last = np.asarray(seg[1], dtype=np.float64)
                chunks.append(last[None, :])
            elif kind == "Q":
                c = np.asarray(seg[1], dtype=np.float64)
                p = np.asarray(seg[2], dtype=np.float64)
                p0 = last if last is not None else c
                chunks.append(_quad(p0, c, p, t))
                last = p
            elif kind == "C":
                c1 = np.asarray(seg[1], dtype=np.float64)
                c2 = np.asarray(seg[2], dtype=np.float64)
                p = np.asarray(seg[3], dtype=np.float64)
                p0 = last if last is not None else c1
                chunks.append(_cubic(p0, c1, c2, p, t))
                last = p
            elif kind == "A":
                (cx, cy), r, start, sweep = seg[1], seg[2], seg[3], seg[4]
                angles = start + sweep * t
                pts = np.stack(
                    [cx + r * np.cos(angles), cy + r * np.sin(angles)], axis=1
                )
                chunks.append(pts)
                last = pts[-1]
        if not chunks:
            return np.zeros((0, 2), dtype=np.float64)
        return np.concatenate(chunks, axis=0)

    def bounds(self, samples: int = _DEFAULT_SAMPLES) -> tuple[float, float, float, float]:
        """サンプル点の外接矩形 (min_x, min_y, max_x, max_y) を返す。

        Raises
        ------
        ValueError
            パスが空の場合。
        """
        pts = self.sample(samples)
        if pts.shape[0] == 0:
            raise ValueError("空のパスには外接矩形が無い")
        lo = pts.min(axis=0)
        hi = pts.max(axis=0)
        return float(lo[0]), float(lo[1]), float(hi[0]), float(hi[1])


__all__ = ["DevicePath", "Point", "Segment", "arc_sweep"]
