"""
どこで: `src/imslider/widget/slider.py`。
何を: 線形値スライダー（状態遷移 / 値の更新 / 描画記述の構築）を定義する。
なぜ: 1 フレーム分の入力と前フレームの状態から、新しい状態・値・リアクション・描画を決定的に求めるため。

Notes
-----
幅が高さより大きければ水平、そうでなければ垂直スライダーになる（毎フレーム再判定）。
座標はウィジェット中心を原点とし、y は上向き。
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from enum import Enum

import numpy as np

from imslider.core.color import Color
from imslider.core.form import Element, Form, RectForm, TextForm, collage
from imslider.core.mouse import ButtonState
from imslider.core.position import (
    HorizontalAlign,
    Position,
    VerticalAlign,
    align_bottom_of,
    align_left_of,
)
from imslider.core.theme import Theme
from imslider.core.utils import (
    Dimensions,
    Point,
    clamp,
    is_over_rect,
    map_range,
    percentage,
    value_from_perc,
)

from .base import TextWidthFn, UiContext, WidgetState
from .style import SLIDER_KIND, ResolvedSliderStyle, SliderStyle

_logger = logging.getLogger(__name__)

DEFAULT_DIMENSIONS: Dimensions = (192.0, 48.0)
LABEL_TEXT_PADDING = 10.0
# 単精度の中間値を経由するため、この相対誤差以内の差は「値の変化」とみなさない。
VALUE_REL_TOLERANCE = 1e-6

Reaction = Callable[[float], None]


class Interaction(Enum):
    NORMAL = "normal"
    HIGHLIGHTED = "highlighted"
    CLICKED = "clicked"


def interaction_color(interaction: Interaction, color: Color) -> Color:
    """インタラクション状態に応じた表示色を返す。"""

    if interaction is Interaction.HIGHLIGHTED:
        return color.highlighted()
    if interaction is Interaction.CLICKED:
        return color.clicked()
    return color


def get_new_interaction(is_over: bool, prev: Interaction, left: ButtonState) -> Interaction:
    """ポインタ位置・前回状態・左ボタンから新しいインタラクション状態を返す。

    Notes
    -----
    上から順に最初に一致した規則を採用する。

    - over かつ前回 NORMAL でボタン DOWN → NORMAL
      （ウィジェット外で押してから入ってきた場合や、押した直後の 1 フレームはドラッグを始めない）
    - over かつボタン DOWN → CLICKED
    - over かつボタン UP → HIGHLIGHTED
    - over でなく前回 CLICKED でボタン DOWN → CLICKED（範囲外へのドラッグを維持）
    - それ以外 → NORMAL
    """

    down = left is ButtonState.DOWN
    if is_over:
        if down:
            return Interaction.NORMAL if prev is Interaction.NORMAL else Interaction.CLICKED
        return Interaction.HIGHLIGHTED
    if prev is Interaction.CLICKED and down:
        return Interaction.CLICKED
    return Interaction.NORMAL


def is_dragging(is_over: bool, prev: Interaction, new: Interaction) -> bool:
    """ポインタ座標で値を直接操作するフレームかを返す。"""

    if new is not Interaction.CLICKED:
        return False
    if prev is Interaction.CLICKED:
        return True
    return is_over and prev is Interaction.HIGHLIGHTED


def is_press_or_release(prev: Interaction, new: Interaction) -> bool:
    """HIGHLIGHTED ↔ CLICKED の遷移（押下 / ウィジェット上での解放）かを返す。"""

    return (prev, new) in (
        (Interaction.HIGHLIGHTED, Interaction.CLICKED),
        (Interaction.CLICKED, Interaction.HIGHLIGHTED),
    )


def fill_extent(value: float, min_value: float, max_value: float, inner_length: float) -> float:
    """value の割合に応じた塗り長さを [0, inner_length] で返す。"""

    if inner_length <= 0.0:
        return 0.0
    perc = clamp(float(percentage(value, min_value, max_value)), 0.0, 1.0)
    return clamp(perc * inner_length, 0.0, inner_length)


def slider_value(
    value: float,
    min_value: float,
    max_value: float,
    *,
    inner_length: float,
    drag_coord: float | None,
) -> float:
    """そのフレームの値を返す。

    Parameters
    ----------
    value : float
        呼び出し側が渡した現在値。
    min_value, max_value : float
        値域。
    inner_length : float
        向きに沿った内側領域の長さ。
    drag_coord : float or None
        ドラッグ中ならウィジェット中心基準のポインタ座標（向きに沿った成分）。
        None なら value の割合から再計算する。

    Returns
    -------
    float
        [min, max] に収まる値。
    """

    if inner_length <= 0.0:
        # 長さ 0 の領域では割合を直接使い、0 除算を避ける。
        perc = clamp(float(percentage(value, min_value, max_value)), 0.0, 1.0)
        return value_from_perc(perc, min_value, max_value)

    if drag_coord is not None:
        half = inner_length / 2.0
        extent = clamp(map_range(drag_coord, -half, half, 0.0, inner_length), 0.0, inner_length)
    else:
        perc = float(percentage(value, min_value, max_value))
        extent = clamp(perc * inner_length, 0.0, inner_length)
    return value_from_perc(np.float32(extent / inner_length), min_value, max_value)


def value_changed(value: float, new_value: float, min_value: float, max_value: float) -> bool:
    """単精度の丸めを超えて値が変わったかを返す。"""

    abs_tol = VALUE_REL_TOLERANCE * abs(float(max_value) - float(min_value))
    return not math.isclose(
        float(new_value), float(value), rel_tol=VALUE_REL_TOLERANCE, abs_tol=abs_tol
    )


@dataclass(frozen=True, slots=True)
class SliderState:
    """フレームをまたいで外部キャッシュに保持されるスライダー状態。"""

    value: float
    min_value: float
    max_value: float
    label: str | None
    interaction: Interaction

    def color(self, color: Color) -> Color:
        return interaction_color(self.interaction, color)


def build_form(
    state: SliderState,
    style: ResolvedSliderStyle,
    dim: Dimensions,
    xy: Point,
    text_width: TextWidthFn,
) -> Element:
    """保持状態と解決済みスタイルから描画記述を構築する。

    Notes
    -----
    形状はウィジェット中心を原点に組み立て、最後に xy だけ平行移動する。
    入力状態には依存しない。
    """

    w, h = float(dim[0]), float(dim[1])
    frame = float(style.frame)
    inner_w = max(0.0, w - frame * 2.0)
    inner_h = max(0.0, h - frame * 2.0)
    frame_color = state.color(style.frame_color)
    color = state.color(style.color)

    is_horizontal = w > h
    if is_horizontal:
        pad_w = fill_extent(state.value, state.min_value, state.max_value, inner_w)
        pad_rel_xy = (-(inner_w - pad_w) / 2.0, 0.0)
        pad_dim = (pad_w, inner_h)
    else:
        pad_h = fill_extent(state.value, state.min_value, state.max_value, inner_h)
        pad_rel_xy = (0.0, -(inner_h - pad_h) / 2.0)
        pad_dim = (inner_w, pad_h)

    frame_form = RectForm(w, h, frame_color)
    pad_form = RectForm(pad_dim[0], pad_dim[1], color).shift(pad_rel_xy[0], pad_rel_xy[1])
    x, y = float(xy[0]), float(xy[1])
    forms: list[Form] = [frame_form.shift(x, y), pad_form.shift(x, y)]

    if state.label is not None:
        size = int(style.label_font_size)
        if is_horizontal:
            label_w = float(text_width(float(size), state.label))
            l_pos = (align_left_of(w, label_w) + LABEL_TEXT_PADDING, 0.0)
        else:
            l_pos = (0.0, align_bottom_of(h, float(size)) + LABEL_TEXT_PADDING)
        label_form = (
            TextForm(state.label, style.label_color, float(size))
            .shift(l_pos[0], l_pos[1])
            .floor_position()
            .shift(math.floor(x), math.floor(y))
        )
        forms.append(label_form)

    return collage(w, h, forms)


@dataclass(frozen=True, slots=True)
class Slider:
    """線形値スライダーの 1 フレーム分の設定。

    値が更新されたとき、またはウィジェット上でボタンを押下 / 解放したときに
    リアクションが呼ばれる。各設定メソッドは新しい Slider を返す。

    Examples
    --------
    >>> slider = Slider(50.0, 0.0, 100.0).xy(0.0, 0.0).width(200.0).label("volume")
    """

    value: float
    min_value: float
    max_value: float
    pos: Position = Position()
    maybe_h_align: HorizontalAlign | None = None
    maybe_v_align: VerticalAlign | None = None
    dim: Dimensions = DEFAULT_DIMENSIONS
    z_depth: float = 0.0
    maybe_react: Reaction | None = None
    maybe_label: str | None = None
    slider_style: SliderStyle = field(default_factory=SliderStyle)
    is_enabled: bool = True

    # --- builder ---

    def with_value(self, value: float) -> "Slider":
        return replace(self, value=float(value))

    def with_range(self, min_value: float, max_value: float) -> "Slider":
        return replace(self, min_value=float(min_value), max_value=float(max_value))

    def position(self, pos: Position) -> "Slider":
        return replace(self, pos=pos)

    def xy(self, x: float, y: float) -> "Slider":
        return replace(self, pos=Position.absolute(x, y))

    def relative(self, dx: float, dy: float) -> "Slider":
        return replace(self, pos=Position.offset(dx, dy))

    def horizontal_align(self, h_align: HorizontalAlign) -> "Slider":
        return replace(self, maybe_h_align=h_align)

    def vertical_align(self, v_align: VerticalAlign) -> "Slider":
        return replace(self, maybe_v_align=v_align)

    def width(self, w: float) -> "Slider":
        return replace(self, dim=(float(w), float(self.dim[1])))

    def height(self, h: float) -> "Slider":
        return replace(self, dim=(float(self.dim[0]), float(h)))

    def dimensions(self, w: float, h: float) -> "Slider":
        return replace(self, dim=(float(w), float(h)))

    def depth(self, depth: float) -> "Slider":
        return replace(self, z_depth=float(depth))

    def enabled(self, flag: bool) -> "Slider":
        """False ならユーザー入力を受け付けない。"""

        return replace(self, is_enabled=bool(flag))

    def react(self, reaction: Reaction) -> "Slider":
        return replace(self, maybe_react=reaction)

    def label(self, text: str) -> "Slider":
        return replace(self, maybe_label=str(text))

    def color(self, color: Color) -> "Slider":
        return replace(self, slider_style=replace(self.slider_style, color=color))

    def frame(self, width: float) -> "Slider":
        return replace(self, slider_style=replace(self.slider_style, frame=float(width)))

    def frame_color(self, color: Color) -> "Slider":
        return replace(self, slider_style=replace(self.slider_style, frame_color=color))

    def label_color(self, color: Color) -> "Slider":
        return replace(self, slider_style=replace(self.slider_style, label_color=color))

    def label_font_size(self, size: int) -> "Slider":
        return replace(self, slider_style=replace(self.slider_style, label_font_size=int(size)))

    # --- widget ---

    def unique_kind(self) -> str:
        return SLIDER_KIND

    def init_state(self) -> SliderState:
        return SliderState(
            value=float(self.value),
            min_value=float(self.min_value),
            max_value=float(self.max_value),
            label=None,
            interaction=Interaction.NORMAL,
        )

    def style(self) -> SliderStyle:
        return self.slider_style

    def update(
        self,
        prev_state: WidgetState[SliderState],
        style: SliderStyle,
        ui_id: int,
        ui: UiContext,
    ) -> WidgetState[SliderState | None]:
        """前フレームの状態と入力から、新しい状態（変化なしなら None）と配置を返す。"""

        state = prev_state.state
        dim = (float(self.dim[0]), float(self.dim[1]))
        theme = ui.theme
        h_align = self.maybe_h_align if self.maybe_h_align is not None else theme.align.horizontal
        v_align = self.maybe_v_align if self.maybe_v_align is not None else theme.align.vertical
        xy = ui.get_xy(self.pos, dim, h_align, v_align)
        mouse = ui.get_mouse_state(ui_id).relative_to(xy)
        is_over = is_over_rect((0.0, 0.0), mouse.xy, dim)

        if self.is_enabled:
            new_interaction = get_new_interaction(is_over, state.interaction, mouse.left)
        else:
            new_interaction = Interaction.NORMAL

        frame = style.resolve_frame(theme)
        inner_w = max(0.0, dim[0] - frame * 2.0)
        inner_h = max(0.0, dim[1] - frame * 2.0)

        is_horizontal = dim[0] > dim[1]
        drag = is_dragging(is_over, state.interaction, new_interaction)
        if is_horizontal:
            inner_length = inner_w
            drag_coord = float(mouse.xy[0]) if drag else None
        else:
            inner_length = inner_h
            drag_coord = float(mouse.xy[1]) if drag else None

        new_value = slider_value(
            self.value,
            self.min_value,
            self.max_value,
            inner_length=inner_length,
            drag_coord=drag_coord,
        )

        label = self.maybe_label
        state_has_changed = (
            state.interaction is not new_interaction
            or state.value != float(self.value)
            or state.min_value != float(self.min_value)
            or state.max_value != float(self.max_value)
            or state.label != label
        )
        maybe_new_state = (
            SliderState(
                value=float(self.value),
                min_value=float(self.min_value),
                max_value=float(self.max_value),
                label=None if label is None else str(label),
                interaction=new_interaction,
            )
            if state_has_changed
            else None
        )

        if self.maybe_react is not None and (
            value_changed(self.value, new_value, self.min_value, self.max_value)
            or is_press_or_release(state.interaction, new_interaction)
        ):
            _logger.debug(
                "slider reaction: ui_id=%d value=%r -> %r interaction=%s -> %s",
                ui_id,
                self.value,
                new_value,
                state.interaction.value,
                new_interaction.value,
            )
            self.maybe_react(new_value)

        return WidgetState(state=maybe_new_state, dim=dim, xy=xy, depth=float(self.z_depth))

    @staticmethod
    def draw(
        new_state: WidgetState[SliderState],
        style: SliderStyle,
        theme: Theme,
        text_width: TextWidthFn,
    ) -> Element:
        """保持状態からスライダーの描画記述を返す。"""

        return build_form(
            new_state.state,
            style.resolve(theme),
            new_state.dim,
            new_state.xy,
            text_width,
        )
