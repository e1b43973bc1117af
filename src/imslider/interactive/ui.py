# どこで: `src/imslider/interactive/ui.py`。
# 何を: ウィジェットを 1 フレームずつ駆動する最小の UI コンテキスト（状態キャッシュ / 入力 / 配置）を提供する。
# なぜ: ウィジェットの update / draw を、ヘッドレスでもウィンドウ backend からでも同じ手順で回すため。

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from imslider.core.form import Element
from imslider.core.mouse import ButtonState, Mouse
from imslider.core.position import HorizontalAlign, Placement, Position, VerticalAlign, resolve_xy
from imslider.core.runtime_config import runtime_config
from imslider.core.text_metrics import TextMetrics, text_metrics_from_config
from imslider.core.theme import Theme
from imslider.core.utils import Dimensions, Point
from imslider.widget.base import Widget, WidgetState

_logger = logging.getLogger(__name__)


@dataclass(slots=True)
class _CacheEntry:
    kind: str
    state: WidgetState[Any]
    style: Any
    element: Element


class Ui:
    """ウィジェット状態のキャッシュと、そのフレームの入力・配置を持つ UI コンテキスト。

    Notes
    -----
    - 状態は ui_id ごとに保持し、update が None を返したフレームは前回の状態を使い回す。
    - 状態・配置・スタイルのいずれも変わらないフレームは再描画せず、キャッシュ済み Element を返す。
    - `begin_frame` の時点で直前フレームに set_widget されなかった ui_id は破棄する。
    """

    def __init__(self, *, theme: Theme | None = None, text_metrics: TextMetrics | None = None) -> None:
        if theme is None or text_metrics is None:
            cfg = runtime_config()
            if theme is None:
                theme = cfg.theme
            if text_metrics is None:
                text_metrics = text_metrics_from_config(cfg)
        self._theme = theme
        self._text_metrics = text_metrics
        self._mouse = Mouse()
        self._cache: dict[int, _CacheEntry] = {}
        self._prev_placement: Placement | None = None
        self._seen: set[int] = set()
        self._redraw_count = 0

    @property
    def theme(self) -> Theme:
        return self._theme

    @property
    def mouse(self) -> Mouse:
        return self._mouse

    @property
    def redraw_count(self) -> int:
        """draw を実行した累計回数を返す。"""

        return int(self._redraw_count)

    def handle_mouse(
        self,
        *,
        xy: Point | None = None,
        left: ButtonState | None = None,
        right: ButtonState | None = None,
    ) -> None:
        """入力スナップショットを更新する（None の項目は据え置き）。"""

        m = self._mouse
        self._mouse = Mouse(
            xy=m.xy if xy is None else (float(xy[0]), float(xy[1])),
            left=m.left if left is None else left,
            right=m.right if right is None else right,
        )

    def begin_frame(self) -> None:
        """フレーム先頭で呼ぶ。相対配置の基準をリセットし、前フレームで使われなかった状態を破棄する。"""

        stale = [key for key in self._cache if key not in self._seen]
        for key in stale:
            _logger.debug("ui_id=%d は前フレームで使われなかったため状態を破棄", key)
            del self._cache[key]
        self._seen.clear()
        self._prev_placement = None

    def get_xy(
        self,
        position: Position,
        dim: Dimensions,
        h_align: HorizontalAlign,
        v_align: VerticalAlign,
    ) -> Point:
        return resolve_xy(position, dim, h_align, v_align, self._prev_placement)

    def get_mouse_state(self, ui_id: int) -> Mouse:
        return self._mouse

    def text_width(self, font_size: float, text: str) -> float:
        return float(self._text_metrics.width(float(font_size), str(text)))

    def widget_state(self, ui_id: int) -> WidgetState[Any] | None:
        """ui_id に保持している状態を返す。未登録なら None。"""

        entry = self._cache.get(int(ui_id))
        return None if entry is None else entry.state

    def set_widget(self, ui_id: int, widget: Widget[Any, Any]) -> Element:
        """widget を 1 フレーム分更新し、その描画記述を返す。"""

        key = int(ui_id)
        self._seen.add(key)
        kind = widget.unique_kind()
        entry = self._cache.get(key)
        if entry is not None and entry.kind != kind:
            _logger.debug("ui_id=%d の種別が変わったため状態を破棄: %s -> %s", key, entry.kind, kind)
            entry = None

        if entry is None:
            prev = WidgetState(state=widget.init_state(), dim=(0.0, 0.0), xy=(0.0, 0.0), depth=0.0)
        else:
            prev = entry.state

        style = widget.style()
        updated = widget.update(prev, style, key, self)
        state_replaced = updated.state is not None
        new_state = WidgetState(
            state=updated.state if state_replaced else prev.state,
            dim=updated.dim,
            xy=updated.xy,
            depth=updated.depth,
        )
        self._prev_placement = Placement(xy=new_state.xy, dim=new_state.dim)

        geometry_changed = entry is None or (
            new_state.dim != prev.dim or new_state.xy != prev.xy or new_state.depth != prev.depth
        )
        style_changed = entry is not None and style != entry.style
        if entry is not None and not state_replaced and not geometry_changed and not style_changed:
            _logger.debug("ui_id=%d は変化なしのため再描画を省略", key)
            self._cache[key] = _CacheEntry(
                kind=kind, state=new_state, style=style, element=entry.element
            )
            return entry.element

        element = widget.draw(new_state, style, self._theme, self.text_width)
        self._redraw_count += 1
        self._cache[key] = _CacheEntry(kind=kind, state=new_state, style=style, element=element)
        return element

    def elements(self) -> list[Element]:
        """保持している Element を奥（depth 大）から手前の順で返す。"""

        entries = sorted(self._cache.values(), key=lambda e: -float(e.state.depth))
        return [e.element for e in entries]
