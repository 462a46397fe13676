# どこで: `src/pocketdraw/core/affine.py`。
# 何を: 2D アフィン変換（3x3 同次行列）の生成と点変換を提供する。
# なぜ: 描画コンテキストの translate/rotate を Canvas と同じ後置合成で追跡するため。

from __future__ import annotations

import math

import numpy as np


def identity() -> np.ndarray:
    """単位行列（float64, shape (3,3)）を返す。"""
    return np.eye(3, dtype=np.float64)


def translation(tx: float, ty: float) -> np.ndarray:
    """平行移動行列を返す。"""
    m = identity()
    m[0, 2] = float(tx)
    m[1, 2] = float(ty)
    return m


def rotation(radians: float) -> np.ndarray:
    """原点まわりの回転行列を返す。

    Notes
    -----
    y 軸下向きの画面座標系では、正の角度は時計回りに見える（Canvas と同じ）。
    """
    c = math.cos(float(radians))
    s = math.sin(float(radians))
    return np.array(
        [[c, -s, 0.0], [s, c, 0.0], [0.0, 0.0, 1.0]],
        dtype=np.float64,
    )


def apply_point(matrix: np.ndarray, x: float, y: float) -> tuple[float, float]:
    """1 点を行列で変換して返す。"""
    px = matrix[0, 0] * x + matrix[0, 1] * y + matrix[0, 2]
    py = matrix[1, 0] * x + matrix[1, 1] * y + matrix[1, 2]
    return float(px), float(py)


def scale_factor(matrix: np.ndarray) -> float:
    """線形部分の等方スケール係数 sqrt(|det|) を返す。

    半径や線幅を device 空間へ写すときに使う。回転・平行移動のみなら 1.0。
    """
    det = float(matrix[0, 0] * matrix[1, 1] - matrix[0, 1] * matrix[1, 0])
    return math.sqrt(abs(det))


def rotation_angle(matrix: np.ndarray) -> float:
    """行列の回転成分 [rad] を返す。"""
    return math.atan2(float(matrix[1, 0]), float(matrix[0, 0]))


__all__ = [
    "apply_point",
    "identity",
    "rotation",
    "rotation_angle",
    "scale_factor",
    "translation",
]
