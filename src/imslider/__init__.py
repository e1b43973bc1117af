# どこで: `src/imslider/__init__.py`。
# 何を: ルート `imslider` パッケージを定義する。
# なぜ: import 起点を `imslider` に統一するため。

from __future__ import annotations

from imslider.core.color import Color
from imslider.core.mouse import ButtonState, Mouse
from imslider.core.position import HorizontalAlign, Position, VerticalAlign
from imslider.core.theme import Theme, WidgetStyle
from imslider.interactive.ui import Ui
from imslider.widget import Interaction, Slider, SliderState, SliderStyle

__all__ = [
    "ButtonState",
    "Color",
    "HorizontalAlign",
    "Interaction",
    "Mouse",
    "Position",
    "Slider",
    "SliderState",
    "SliderStyle",
    "Theme",
    "Ui",
    "VerticalAlign",
    "WidgetStyle",
]
