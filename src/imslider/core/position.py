# どこで: `src/imslider/core/position.py`。
# 何を: 位置指定（絶対 / 直前ウィジェットからの相対）と整列、およびラベル配置用の整列ヘルパを定義する。
# なぜ: ウィジェットの中心座標の決定を 1 か所にまとめ、update から切り離すため。

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .utils import Dimensions, Point


class HorizontalAlign(Enum):
    LEFT = "left"
    MIDDLE = "middle"
    RIGHT = "right"


class VerticalAlign(Enum):
    TOP = "top"
    MIDDLE = "middle"
    BOTTOM = "bottom"


@dataclass(frozen=True, slots=True)
class Align:
    """水平・垂直の整列の組。"""

    horizontal: HorizontalAlign = HorizontalAlign.LEFT
    vertical: VerticalAlign = VerticalAlign.TOP


@dataclass(frozen=True, slots=True)
class Position:
    """ウィジェットの位置指定。

    Notes
    -----
    `relative=False` なら `(x, y)` はウィジェット中心の絶対座標。
    `relative=True` なら直前に配置したウィジェットからのオフセット。
    座標系は y 上向き。
    """

    x: float = 0.0
    y: float = 0.0
    relative: bool = False

    @classmethod
    def absolute(cls, x: float, y: float) -> "Position":
        return cls(float(x), float(y), relative=False)

    @classmethod
    def offset(cls, dx: float, dy: float) -> "Position":
        return cls(float(dx), float(dy), relative=True)


@dataclass(frozen=True, slots=True)
class Placement:
    """配置済みウィジェットの中心座標と寸法。"""

    xy: Point
    dim: Dimensions


def align_left_of(target_width: float, width: float) -> float:
    """幅 target_width の左端に幅 width の要素を揃えたときの中心 x を返す。"""

    return float(width) / 2.0 - float(target_width) / 2.0


def align_right_of(target_width: float, width: float) -> float:
    return float(target_width) / 2.0 - float(width) / 2.0


def align_bottom_of(target_height: float, height: float) -> float:
    """高さ target_height の下端に高さ height の要素を揃えたときの中心 y を返す。"""

    return float(height) / 2.0 - float(target_height) / 2.0


def align_top_of(target_height: float, height: float) -> float:
    return float(target_height) / 2.0 - float(height) / 2.0


def resolve_xy(
    position: Position,
    dim: Dimensions,
    h_align: HorizontalAlign,
    v_align: VerticalAlign,
    prev: Placement | None,
) -> Point:
    """位置指定と整列からウィジェット中心の座標を返す。

    相対指定では、直前ウィジェットの整列先の辺（MIDDLE は中心）に揃えたうえで
    オフセットを加える。直前ウィジェットが無い場合は原点を基準にする。
    """

    if not position.relative:
        return float(position.x), float(position.y)

    if prev is None:
        return float(position.x), float(position.y)

    px, py = float(prev.xy[0]), float(prev.xy[1])
    pw, ph = float(prev.dim[0]), float(prev.dim[1])
    w, h = float(dim[0]), float(dim[1])

    if h_align is HorizontalAlign.LEFT:
        x = px - pw / 2.0 + w / 2.0
    elif h_align is HorizontalAlign.RIGHT:
        x = px + pw / 2.0 - w / 2.0
    else:
        x = px

    if v_align is VerticalAlign.TOP:
        y = py + ph / 2.0 - h / 2.0
    elif v_align is VerticalAlign.BOTTOM:
        y = py - ph / 2.0 + h / 2.0
    else:
        y = py

    return x + float(position.x), y + float(position.y)
