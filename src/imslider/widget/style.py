# どこで: `src/imslider/widget/style.py`。
# 何を: スライダーのスタイル上書きと、その 3 段（インスタンス → テーマの種別既定 → テーマ全体既定）の解決を定義する。
# なぜ: 見た目の属性を保持状態に焼き込まず、毎フレームのテーマから独立に解決するため。

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeVar

from imslider.core.color import Color
from imslider.core.theme import Theme, WidgetStyle

SLIDER_KIND = "Slider"

T = TypeVar("T")


def resolve_attribute(instance: T | None, kind_default: T | None, global_default: T) -> T:
    """インスタンス上書き → 種別既定 → 全体既定の順で最初に見つかった値を返す。"""

    if instance is not None:
        return instance
    if kind_default is not None:
        return kind_default
    return global_default


@dataclass(frozen=True, slots=True)
class ResolvedSliderStyle:
    """欠損なく解決したスライダーのスタイル。"""

    color: Color
    frame: float
    frame_color: Color
    label_color: Color
    label_font_size: int


@dataclass(frozen=True, slots=True)
class SliderStyle:
    """スライダーのインスタンス単位のスタイル上書き（全項目 optional）。"""

    color: Color | None = None
    frame: float | None = None
    frame_color: Color | None = None
    label_color: Color | None = None
    label_font_size: int | None = None

    def _kind(self, theme: Theme) -> WidgetStyle:
        return theme.widget_style(SLIDER_KIND) or WidgetStyle()

    def resolve_color(self, theme: Theme) -> Color:
        return resolve_attribute(self.color, self._kind(theme).color, theme.shape_color)

    def resolve_frame(self, theme: Theme) -> float:
        return float(resolve_attribute(self.frame, self._kind(theme).frame, theme.frame_width))

    def resolve_frame_color(self, theme: Theme) -> Color:
        return resolve_attribute(self.frame_color, self._kind(theme).frame_color, theme.frame_color)

    def resolve_label_color(self, theme: Theme) -> Color:
        return resolve_attribute(self.label_color, self._kind(theme).label_color, theme.label_color)

    def resolve_label_font_size(self, theme: Theme) -> int:
        return int(
            resolve_attribute(
                self.label_font_size, self._kind(theme).label_font_size, theme.font_size_medium
            )
        )

    def resolve(self, theme: Theme) -> ResolvedSliderStyle:
        """5 属性をまとめて解決して返す。"""

        return ResolvedSliderStyle(
            color=self.resolve_color(theme),
            frame=self.resolve_frame(theme),
            frame_color=self.resolve_frame_color(theme),
            label_color=self.resolve_label_color(theme),
            label_font_size=self.resolve_label_font_size(theme),
        )
