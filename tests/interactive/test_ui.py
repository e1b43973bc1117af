"""Ui（フレーム駆動 / 状態キャッシュ / 再描画の省略 / 相対配置）のテスト。"""

from __future__ import annotations

import pytest

from imslider.core.color import Color
from imslider.core.mouse import ButtonState
from imslider.core.position import HorizontalAlign, VerticalAlign
from imslider.core.text_metrics import FixedAdvanceMetrics
from imslider.core.theme import Theme
from imslider.interactive.ui import Ui
from imslider.widget.slider import Interaction, Slider, SliderState

DOWN = ButtonState.DOWN
UP = ButtonState.UP


@pytest.fixture
def ui() -> Ui:
    return Ui(theme=Theme(), text_metrics=FixedAdvanceMetrics(0.6))


class _Host:
    """フレームごとに Slider を組み立て、リアクションで値を書き戻す呼び出し側。"""

    def __init__(self, ui: Ui, value: float = 50.0) -> None:
        self.ui = ui
        self.value = value
        self.reactions: list[float] = []

    def _react(self, v: float) -> None:
        self.reactions.append(v)
        self.value = v

    def frame(self, *, xy=None, left=None):
        if xy is not None or left is not None:
            self.ui.handle_mouse(xy=xy, left=left)
        self.ui.begin_frame()
        return self.ui.set_widget(0, Slider(self.value, 0.0, 100.0).label("v").react(self._react))

    def interaction(self) -> Interaction:
        state = self.ui.widget_state(0)
        assert state is not None
        return state.state.interaction


def test_first_frame_initializes_and_draws(ui: Ui):
    host = _Host(ui)
    element = host.frame(xy=(1000.0, 1000.0))
    assert ui.redraw_count == 1
    assert (element.width, element.height) == (192, 48)
    state = ui.widget_state(0)
    assert state is not None
    assert state.state == SliderState(50.0, 0.0, 100.0, "v", Interaction.NORMAL)
    assert host.reactions == []


def test_idle_frames_reuse_cached_element(ui: Ui):
    host = _Host(ui)
    first = host.frame(xy=(1000.0, 1000.0))
    second = host.frame()
    third = host.frame()
    assert ui.redraw_count == 1
    assert second is first
    assert third is first


def test_hover_press_drag_release_flow(ui: Ui):
    host = _Host(ui)
    host.frame(xy=(1000.0, 1000.0))

    host.frame(xy=(0.0, 0.0))
    assert host.interaction() is Interaction.HIGHLIGHTED
    assert host.reactions == []

    # 押下: HIGHLIGHTED → CLICKED でリアクション（ポインタは中央 = 50）。
    host.frame(left=DOWN)
    assert host.interaction() is Interaction.CLICKED
    assert host.reactions == [pytest.approx(50.0)]

    # ドラッグ: 内側の幅 190 の左端から 1/4 の位置へ。
    host.frame(xy=(-95.0 + 47.5, 0.0))
    assert host.reactions[-1] == pytest.approx(25.0)
    assert host.value == pytest.approx(25.0)

    # 範囲外へ出てもドラッグは続き、値は端で止まる。
    host.frame(xy=(-500.0, 300.0))
    assert host.interaction() is Interaction.CLICKED
    assert host.reactions[-1] == pytest.approx(0.0)

    host.frame(xy=(0.0, 0.0), left=UP)
    assert host.interaction() is Interaction.HIGHLIGHTED


def test_value_written_back_is_held_on_next_frame(ui: Ui):
    host = _Host(ui)
    host.frame(xy=(0.0, 0.0))
    host.frame(left=DOWN)
    host.frame(xy=(95.0, 0.0))
    assert host.value == pytest.approx(100.0)
    host.frame()
    state = ui.widget_state(0)
    assert state is not None
    assert state.state.value == pytest.approx(100.0)


def test_press_outside_then_enter_does_not_start_drag(ui: Ui):
    host = _Host(ui)
    host.frame(xy=(1000.0, 0.0), left=DOWN)
    host.frame(xy=(0.0, 0.0))
    assert host.interaction() is Interaction.NORMAL
    host.frame(xy=(50.0, 0.0))
    assert host.interaction() is Interaction.NORMAL
    assert host.reactions == []


def test_press_is_seen_one_frame_after_hover(ui: Ui):
    host = _Host(ui)
    # 最初のフレームで既に押されていても NORMAL のまま。
    host.frame(xy=(0.0, 0.0), left=DOWN)
    assert host.interaction() is Interaction.NORMAL
    host.frame(left=UP)
    assert host.interaction() is Interaction.HIGHLIGHTED
    host.frame(left=DOWN)
    assert host.interaction() is Interaction.CLICKED


def test_geometry_change_redraws_without_state_change(ui: Ui):
    ui.handle_mouse(xy=(1000.0, 1000.0))
    ui.set_widget(3, Slider(10.0, 0.0, 100.0).xy(0.0, 0.0))
    count = ui.redraw_count
    element = ui.set_widget(3, Slider(10.0, 0.0, 100.0).xy(20.0, 0.0))
    assert ui.redraw_count == count + 1
    backdrop = element.rects()[0]
    assert backdrop.x == 20.0


def test_style_change_redraws_idle_widget(ui: Ui):
    red = Color.rgb255(255, 0, 0)
    ui.handle_mouse(xy=(1000.0, 1000.0))
    ui.begin_frame()
    first = ui.set_widget(0, Slider(50.0, 0.0, 100.0))
    ui.begin_frame()
    second = ui.set_widget(0, Slider(50.0, 0.0, 100.0).color(red).frame(10.0))
    assert second is not first
    assert ui.redraw_count == 2
    _backdrop, pad = second.rects()
    assert pad.color == red
    assert pad.w == pytest.approx((192.0 - 20.0) / 2.0)
    assert pad.h == pytest.approx(48.0 - 20.0)

    # 同じスタイルが続けばキャッシュを使う。
    ui.begin_frame()
    third = ui.set_widget(0, Slider(50.0, 0.0, 100.0).color(red).frame(10.0))
    assert third is second
    assert ui.redraw_count == 2


def test_relative_position_aligns_to_previous_widget(ui: Ui):
    ui.handle_mouse(xy=(1000.0, 1000.0))
    ui.begin_frame()
    ui.set_widget(0, Slider(0.0, 0.0, 1.0).xy(10.0, 20.0).dimensions(200.0, 40.0))
    ui.set_widget(
        1,
        Slider(0.0, 0.0, 1.0)
        .relative(0.0, -50.0)
        .dimensions(100.0, 20.0)
        .horizontal_align(HorizontalAlign.LEFT)
        .vertical_align(VerticalAlign.TOP),
    )
    second = ui.widget_state(1)
    assert second is not None
    # 左端・上端を揃えてからオフセット。
    assert second.xy == (10.0 - 100.0 + 50.0, 20.0 + 20.0 - 10.0 - 50.0)


def test_relative_position_uses_theme_align_by_default():
    theme = Theme()
    ui = Ui(theme=theme, text_metrics=FixedAdvanceMetrics(0.6))
    ui.handle_mouse(xy=(1000.0, 1000.0))
    ui.begin_frame()
    ui.set_widget(0, Slider(0.0, 0.0, 1.0).xy(0.0, 0.0).dimensions(200.0, 40.0))
    ui.set_widget(1, Slider(0.0, 0.0, 1.0).relative(0.0, 0.0).dimensions(100.0, 20.0))
    second = ui.widget_state(1)
    assert second is not None
    assert second.xy == (-50.0, 10.0)


def test_relative_position_without_previous_is_offset_from_origin(ui: Ui):
    ui.handle_mouse(xy=(1000.0, 1000.0))
    ui.begin_frame()
    ui.set_widget(0, Slider(0.0, 0.0, 1.0).relative(5.0, -5.0))
    state = ui.widget_state(0)
    assert state is not None
    assert state.xy == (5.0, -5.0)


def test_elements_are_ordered_back_to_front(ui: Ui):
    ui.handle_mouse(xy=(1000.0, 1000.0))
    front = ui.set_widget(0, Slider(0.0, 0.0, 1.0).depth(-1.0))
    back = ui.set_widget(1, Slider(0.0, 0.0, 1.0).xy(5.0, 0.0).depth(2.0))
    middle = ui.set_widget(2, Slider(0.0, 0.0, 1.0).xy(10.0, 0.0))
    assert ui.elements() == [back, middle, front]


def test_unknown_ui_id_has_no_state(ui: Ui):
    assert ui.widget_state(42) is None


def test_handle_mouse_keeps_unspecified_fields(ui: Ui):
    ui.handle_mouse(xy=(3.0, 4.0), left=DOWN)
    ui.handle_mouse(xy=(5.0, 6.0))
    assert ui.mouse.xy == (5.0, 6.0)
    assert ui.mouse.left is DOWN
    ui.handle_mouse(left=UP)
    assert ui.mouse.xy == (5.0, 6.0)
    assert ui.mouse.left is UP


def test_ui_without_arguments_loads_runtime_config(monkeypatch, tmp_path):
    from imslider.core import runtime_config as rc

    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    rc.set_config_path(None)
    try:
        ui = Ui()
        assert ui.theme == rc.default_theme()
        assert ui.text_width(10.0, "ab") == pytest.approx(12.0)
    finally:
        rc.set_config_path(None)


def test_widgets_not_set_in_previous_frame_are_dropped(ui: Ui):
    ui.handle_mouse(xy=(1000.0, 1000.0))
    ui.begin_frame()
    kept = ui.set_widget(0, Slider(0.0, 0.0, 1.0))
    ui.set_widget(1, Slider(0.0, 0.0, 1.0).xy(0.0, 100.0))
    assert len(ui.elements()) == 2

    ui.begin_frame()
    ui.set_widget(0, Slider(0.0, 0.0, 1.0))
    ui.begin_frame()
    assert ui.widget_state(1) is None
    assert ui.widget_state(0) is not None
    assert ui.elements() == [kept]


def test_dropped_widget_starts_from_initial_state_again(ui: Ui):
    host = _Host(ui)
    host.frame(xy=(0.0, 0.0))
    host.frame()
    assert host.interaction() is Interaction.HIGHLIGHTED

    ui.begin_frame()
    ui.begin_frame()
    assert ui.widget_state(0) is None
    count = ui.redraw_count
    host.frame()
    assert ui.redraw_count == count + 1
