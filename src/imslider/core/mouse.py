# どこで: `src/imslider/core/mouse.py`。
# 何を: 1 フレーム分のマウス入力スナップショット（座標とボタン状態）を定義する。
# なぜ: 入力ソースに依存せず、ウィジェットが座標変換とボタン判定だけを扱えるようにするため。

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

from .utils import Point


class ButtonState(Enum):
    UP = "up"
    DOWN = "down"


@dataclass(frozen=True, slots=True)
class Mouse:
    """マウス座標（y 上向き）と左右ボタンの状態。"""

    xy: Point = (0.0, 0.0)
    left: ButtonState = ButtonState.UP
    right: ButtonState = ButtonState.UP

    def relative_to(self, xy: Point) -> "Mouse":
        """座標を xy 基準の相対座標に変換したコピーを返す。"""

        return replace(
            self,
            xy=(float(self.xy[0]) - float(xy[0]), float(self.xy[1]) - float(xy[1])),
        )
