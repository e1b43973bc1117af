# どこで: `src/imslider/widget/__init__.py`。
# 何を: ウィジェット層の公開 API を再エクスポートする。
# なぜ: 利用側の import 経路を `imslider.widget` に揃えるため。

from __future__ import annotations

from .base import TextWidthFn, UiContext, Widget, WidgetState
from .slider import (
    Interaction,
    Slider,
    SliderState,
    build_form,
    get_new_interaction,
    interaction_color,
)
from .style import SLIDER_KIND, ResolvedSliderStyle, SliderStyle, resolve_attribute

__all__ = [
    "Interaction",
    "ResolvedSliderStyle",
    "SLIDER_KIND",
    "Slider",
    "SliderState",
    "SliderStyle",
    "TextWidthFn",
    "UiContext",
    "Widget",
    "WidgetState",
    "build_form",
    "get_new_interaction",
    "interaction_color",
    "resolve_attribute",
]
