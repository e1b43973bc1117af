# どこで: `src/imslider/interactive/pyglet_backend.py`。
# 何を: pyglet の backend（ウィンドウ生成 / マウス入力の取り込み / Element の描画 / テキスト計測）を提供する。
# なぜ: ウィジェットの計算（Ui / Slider）から、ウィンドウ・GL 固有の処理を分離するため。

from __future__ import annotations

import logging
from typing import Any

from imslider.core.form import Element, RectForm, TextForm
from imslider.core.mouse import ButtonState
from imslider.core.runtime_config import runtime_config

from .ui import Ui

_logger = logging.getLogger(__name__)


class PygletTextMetrics:
    """pyglet の Label レイアウトでテキスト幅を計測する。"""

    def __init__(self, *, font_name: str | None = None) -> None:
        self._font_name = font_name
        self._cache: dict[tuple[float, str], float] = {}

    def width(self, font_size: float, text: str) -> float:
        key = (float(font_size), str(text))
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        import pyglet

        label = pyglet.text.Label(str(text), font_name=self._font_name, font_size=float(font_size))
        out = float(label.content_width)
        self._cache[key] = out
        return out


def window_to_ui_xy(x: float, y: float, *, window_size: tuple[int, int]) -> tuple[float, float]:
    """pyglet のウィンドウ座標（左下原点）を UI 座標（中心原点・y 上向き）へ変換する。"""

    w, h = window_size
    return float(x) - float(w) / 2.0, float(y) - float(h) / 2.0


def render_element(
    element: Element, batch: Any, *, window_size: tuple[int, int], order_base: int = 0
) -> list[Any]:
    """Element を pyglet の shape / label として batch に積み、その参照列を返す。

    Notes
    -----
    返り値の参照を保持している間だけ batch に残る。
    """

    import pyglet

    w, h = window_size
    ox, oy = float(w) / 2.0, float(h) / 2.0
    drawables: list[Any] = []
    for order, form in enumerate(element.forms):
        group = pyglet.graphics.Group(order=int(order_base) + order)
        if isinstance(form, RectForm):
            drawables.append(
                pyglet.shapes.Rectangle(
                    ox + form.x - form.w / 2.0,
                    oy + form.y - form.h / 2.0,
                    max(0.0, form.w),
                    max(0.0, form.h),
                    color=form.color.to_rgba255(),
                    batch=batch,
                    group=group,
                )
            )
        elif isinstance(form, TextForm):
            drawables.append(
                pyglet.text.Label(
                    form.text,
                    font_size=float(form.height),
                    x=ox + form.x,
                    y=oy + form.y,
                    anchor_x="center",
                    anchor_y="center",
                    color=form.color.to_rgba255(),
                    batch=batch,
                    group=group,
                )
            )
    return drawables


def run_slider_demo() -> None:
    """スライダー 3 本（水平 / 垂直 / 無効）を表示するデモウィンドウを実行する。"""

    import pyglet

    from imslider.widget.slider import Slider

    cfg = runtime_config()
    window_size = cfg.window_size
    window = pyglet.window.Window(  # type: ignore[abstract]
        width=int(window_size[0]),
        height=int(window_size[1]),
        caption="imslider demo",
        resizable=False,
    )
    ui = Ui(theme=cfg.theme, text_metrics=PygletTextMetrics())
    values = {"volume": 50.0, "gain": 0.25, "locked": 0.7}

    def _set(name: str):
        def _react(value: float) -> None:
            values[name] = float(value)
            _logger.info("%s = %.3f", name, value)

        return _react

    bg = cfg.theme.background_color.to_rgba255()
    drawables: list[Any] = []

    def _frame(_dt: float) -> None:
        ui.begin_frame()
        ui.set_widget(
            0,
            Slider(values["volume"], 0.0, 100.0)
            .xy(-80.0, 120.0)
            .dimensions(320.0, 48.0)
            .label("volume")
            .react(_set("volume")),
        )
        ui.set_widget(
            1,
            Slider(values["gain"], 0.0, 1.0)
            .xy(200.0, 0.0)
            .dimensions(48.0, 240.0)
            .label("gain")
            .react(_set("gain")),
        )
        ui.set_widget(
            2,
            Slider(values["locked"], 0.0, 1.0)
            .xy(-80.0, -120.0)
            .dimensions(320.0, 48.0)
            .label("locked")
            .enabled(False)
            .react(_set("locked")),
        )

    def on_mouse_motion(x: int, y: int, _dx: int, _dy: int) -> None:
        ui.handle_mouse(xy=window_to_ui_xy(x, y, window_size=window_size))

    def on_mouse_drag(x: int, y: int, _dx: int, _dy: int, _buttons: int, _mods: int) -> None:
        ui.handle_mouse(xy=window_to_ui_xy(x, y, window_size=window_size))

    def on_mouse_press(x: int, y: int, button: int, _mods: int) -> None:
        if button == pyglet.window.mouse.LEFT:
            ui.handle_mouse(xy=window_to_ui_xy(x, y, window_size=window_size), left=ButtonState.DOWN)

    def on_mouse_release(x: int, y: int, button: int, _mods: int) -> None:
        if button == pyglet.window.mouse.LEFT:
            ui.handle_mouse(xy=window_to_ui_xy(x, y, window_size=window_size), left=ButtonState.UP)

    def on_draw() -> None:
        window.clear()
        batch = pyglet.graphics.Batch()
        background = pyglet.shapes.Rectangle(
            0, 0, window.width, window.height, color=bg, batch=batch
        )
        drawables[:] = [background]
        order_base = 1
        for element in ui.elements():
            drawables.extend(
                render_element(element, batch, window_size=window_size, order_base=order_base)
            )
            order_base += len(element.forms)
        batch.draw()

    window.push_handlers(
        on_mouse_motion=on_mouse_motion,
        on_mouse_drag=on_mouse_drag,
        on_mouse_press=on_mouse_press,
        on_mouse_release=on_mouse_release,
        on_draw=on_draw,
    )
    pyglet.clock.schedule_interval(_frame, 1.0 / float(cfg.window_fps))
    _frame(0.0)
    pyglet.app.run()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    run_slider_demo()
