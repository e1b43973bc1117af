# どこで: `src/imslider/core/utils.py`。
# 何を: clamp / 線形写像 / 矩形内判定 / パーセンテージ変換の数値ヘルパを提供する。
# なぜ: スライダーの値計算と描画で同じ丸め規則（単精度の中間値）を共有するため。

from __future__ import annotations

import numpy as np

Point = tuple[float, float]
Dimensions = tuple[float, float]


def clamp(v: float, lo: float, hi: float) -> float:
    """v を [lo, hi] に収めて返す。"""

    return max(lo, min(hi, v))


def map_range(
    val: float, in_min: float, in_max: float, out_min: float, out_max: float
) -> float:
    """val を [in_min, in_max] から [out_min, out_max] へ線形に写して返す。

    入力レンジが空（in_min == in_max）の場合は out_min を返す。
    """

    in_span = float(in_max) - float(in_min)
    if in_span == 0.0:
        return float(out_min)
    t = (float(val) - float(in_min)) / in_span
    return t * (float(out_max) - float(out_min)) + float(out_min)


def is_over_rect(rect_xy: Point, point: Point, dim: Dimensions) -> bool:
    """中心 rect_xy・寸法 dim の矩形に point が含まれるかを返す（境界を含む）。"""

    x, y = float(point[0]), float(point[1])
    cx, cy = float(rect_xy[0]), float(rect_xy[1])
    half_w, half_h = float(dim[0]) / 2.0, float(dim[1]) / 2.0
    return (cx - half_w) <= x <= (cx + half_w) and (cy - half_h) <= y <= (cy + half_h)


def percentage(value: float, min_value: float, max_value: float) -> np.float32:
    """value の [min, max] における割合を単精度で返す（クランプしない）。

    Notes
    -----
    レンジが空（max == min）の場合は 0 を返す。
    """

    v = np.float32(value)
    mn = np.float32(min_value)
    mx = np.float32(max_value)
    span = np.float32(mx - mn)
    if span == 0:
        return np.float32(0.0)
    return np.float32((v - mn) / span)


def value_from_perc(perc: float, min_value: float, max_value: float) -> float:
    """割合 perc から [min, max] 上の値を復元して返す。

    `(max - min) * perc` を単精度で計算し、min に足し戻す。
    """

    span = np.float32(float(max_value) - float(min_value))
    offset = np.float32(span * np.float32(perc))
    return float(min_value) + float(offset)
