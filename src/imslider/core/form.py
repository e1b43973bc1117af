"""
どこで: `src/imslider/core/form.py`。
何を: レンダラーへ渡す宣言的な描画記述（矩形 / テキスト / それらを束ねた Element）を定義する。
なぜ: ウィジェットの draw をピクセル描画から切り離し、純粋関数として検証できるようにするため。
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Union

from .color import Color


@dataclass(frozen=True, slots=True)
class RectForm:
    """中心 (x, y)・寸法 (w, h) の塗りつぶし矩形。"""

    w: float
    h: float
    color: Color
    x: float = 0.0
    y: float = 0.0

    def shift(self, dx: float, dy: float) -> "RectForm":
        return replace(self, x=float(self.x) + float(dx), y=float(self.y) + float(dy))


@dataclass(frozen=True, slots=True)
class TextForm:
    """中心 (x, y) に置く 1 行テキスト。height はフォントサイズ。"""

    text: str
    color: Color
    height: float
    x: float = 0.0
    y: float = 0.0

    def shift(self, dx: float, dy: float) -> "TextForm":
        return replace(self, x=float(self.x) + float(dx), y=float(self.y) + float(dy))

    def floor_position(self) -> "TextForm":
        """座標を整数に切り捨てたコピーを返す（文字のにじみ防止）。"""

        return replace(self, x=float(math.floor(self.x)), y=float(math.floor(self.y)))


Form = Union[RectForm, TextForm]


@dataclass(frozen=True, slots=True)
class Element:
    """Form の列を束ねた描画単位（先頭から順に描く）。"""

    width: int
    height: int
    forms: tuple[Form, ...]

    def rects(self) -> tuple[RectForm, ...]:
        return tuple(f for f in self.forms if isinstance(f, RectForm))

    def texts(self) -> tuple[TextForm, ...]:
        return tuple(f for f in self.forms if isinstance(f, TextForm))


def collage(width: float, height: float, forms: list[Form] | tuple[Form, ...]) -> Element:
    """forms を 1 つの Element にまとめて返す。"""

    return Element(width=int(width), height=int(height), forms=tuple(forms))
