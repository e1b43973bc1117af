# どこで: `src/imslider/widget/base.py`。
# 何を: ウィジェット共通の状態コンテナ（WidgetState）と、ウィジェット / UI コンテキストのプロトコルを定義する。
# なぜ: update / draw の入出力を型で固定し、ウィジェット木の管理側と疎結合にするため。

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, Protocol, TypeVar

from imslider.core.form import Element
from imslider.core.mouse import Mouse
from imslider.core.position import HorizontalAlign, Position, VerticalAlign
from imslider.core.theme import Theme
from imslider.core.utils import Dimensions, Point

S = TypeVar("S")
StyleT = TypeVar("StyleT")

Depth = float
TextWidthFn = Callable[[float, str], float]


@dataclass(frozen=True, slots=True)
class WidgetState(Generic[S]):
    """ウィジェットの保持状態と、そのフレームの配置（中心座標・寸法・深度）。

    Notes
    -----
    update の戻り値では `state` が None のとき「状態に変化なし」を意味する。
    """

    state: S
    dim: Dimensions
    xy: Point
    depth: Depth


class UiContext(Protocol):
    """ウィジェットが 1 フレームの計算で参照する外部サービス。"""

    @property
    def theme(self) -> Theme: ...

    def get_xy(
        self,
        position: Position,
        dim: Dimensions,
        h_align: HorizontalAlign,
        v_align: VerticalAlign,
    ) -> Point: ...

    def get_mouse_state(self, ui_id: int) -> Mouse: ...

    def text_width(self, font_size: float, text: str) -> float: ...


class Widget(Protocol[S, StyleT]):
    """即時モード UI のウィジェット。毎フレーム作り直され、状態は外部が保持する。"""

    def unique_kind(self) -> str: ...

    def init_state(self) -> S: ...

    def style(self) -> StyleT: ...

    def update(
        self,
        prev_state: WidgetState[S],
        style: StyleT,
        ui_id: int,
        ui: UiContext,
    ) -> WidgetState[S | None]: ...

    @staticmethod
    def draw(
        new_state: WidgetState[S], style: StyleT, theme: Theme, text_width: TextWidthFn
    ) -> Element:
        """保持状態とスタイルだけから描画記述を返す（入力状態は受け取らない）。"""
        ...
