# どこで: `src/imslider/core/theme.py`。
# 何を: テーマ（全体既定値 + ウィジェット種別ごとの上書き）と、その mapping からの構築を定義する。
# なぜ: スタイル解決の下位 2 段（種別既定 → 全体既定）を値として持ち、config.yaml から差し替えられるようにするため。

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from .color import Color
from .position import Align, HorizontalAlign, VerticalAlign

_logger = logging.getLogger(__name__)

_WIDGET_STYLE_KEYS = ("color", "frame", "frame_color", "label_color", "label_font_size")
_THEME_KEYS = (
    "background_color",
    "shape_color",
    "frame_color",
    "frame_width",
    "label_color",
    "font_size_large",
    "font_size_medium",
    "font_size_small",
    "align",
    "widgets",
)


@dataclass(frozen=True, slots=True)
class WidgetStyle:
    """テーマ側のウィジェット種別ごとの上書き（全項目 optional）。"""

    color: Color | None = None
    frame: float | None = None
    frame_color: Color | None = None
    label_color: Color | None = None
    label_font_size: int | None = None


@dataclass(frozen=True, slots=True)
class Theme:
    """全体既定値とウィジェット種別ごとの上書きを束ねたテーマ。"""

    background_color: Color = Color.rgb255(30, 30, 34)
    shape_color: Color = Color.rgb255(160, 160, 170)
    frame_color: Color = Color.rgb255(20, 20, 20)
    frame_width: float = 1.0
    label_color: Color = Color.rgb255(240, 240, 240)
    font_size_large: int = 26
    font_size_medium: int = 18
    font_size_small: int = 12
    align: Align = Align()
    widget_styles: Mapping[str, WidgetStyle] = field(default_factory=dict)

    @classmethod
    def default(cls) -> "Theme":
        """組み込みの既定テーマを返す（config は読まない）。"""

        return cls()

    def widget_style(self, kind: str) -> WidgetStyle | None:
        """kind 用の上書きを返す。未登録なら None。"""

        return self.widget_styles.get(str(kind))


def _as_mapping(value: Any, *, key: str) -> dict[str, Any]:
    if value is None:
        return {}
    if isinstance(value, Mapping):
        return dict(value)
    raise RuntimeError(f"{key} は mapping である必要があります: got={value!r}")


def _as_color(value: Any, *, key: str) -> Color | None:
    if value is None:
        return None
    try:
        return Color.coerce(value)
    except ValueError as exc:
        raise RuntimeError(f"{key} は色（#RRGGBB または [r, g, b]）である必要があります: got={value!r}") from exc


def _as_non_negative_float(value: Any, *, key: str) -> float | None:
    if value is None:
        return None
    try:
        f = float(value)
    except Exception as exc:
        raise RuntimeError(f"{key} は数値である必要があります: got={value!r}") from exc
    if f < 0.0:
        raise ValueError(f"{key} は 0 以上である必要があります: got={f}")
    return f


def _as_font_size(value: Any, *, key: str) -> int | None:
    if value is None:
        return None
    try:
        size = int(value)
    except Exception as exc:
        raise RuntimeError(f"{key} は整数である必要があります: got={value!r}") from exc
    if size <= 0:
        raise ValueError(f"{key} は正の値である必要があります: got={size}")
    return size


def _as_enum(enum_type: Any, value: Any, *, key: str) -> Any:
    try:
        return enum_type(str(value).lower())
    except ValueError as exc:
        choices = ", ".join(m.value for m in enum_type)
        raise RuntimeError(f"{key} は {choices} のいずれかである必要があります: got={value!r}") from exc


def _warn_unknown_keys(payload: Mapping[str, Any], known: tuple[str, ...], *, key: str) -> None:
    unknown = sorted(str(k) for k in payload if k not in known)
    if unknown:
        _logger.warning("未知のキーを無視しました: %s: %s", key, ", ".join(unknown))


def widget_style_from_mapping(payload: Mapping[str, Any], *, key: str) -> WidgetStyle:
    """mapping から WidgetStyle を構築する。"""

    _warn_unknown_keys(payload, _WIDGET_STYLE_KEYS, key=key)
    return WidgetStyle(
        color=_as_color(payload.get("color"), key=f"{key}.color"),
        frame=_as_non_negative_float(payload.get("frame"), key=f"{key}.frame"),
        frame_color=_as_color(payload.get("frame_color"), key=f"{key}.frame_color"),
        label_color=_as_color(payload.get("label_color"), key=f"{key}.label_color"),
        label_font_size=_as_font_size(payload.get("label_font_size"), key=f"{key}.label_font_size"),
    )


def theme_from_mapping(payload: Mapping[str, Any] | None, *, base: Theme | None = None) -> Theme:
    """config.yaml の `theme:` セクションから Theme を構築する。

    Parameters
    ----------
    payload : Mapping or None
        `theme:` セクション。None なら base をそのまま返す。
    base : Theme or None, optional
        未指定キーの既定値。None なら `Theme()`。

    Raises
    ------
    RuntimeError
        型が合わないキーがある場合。
    ValueError
        値域外の数値がある場合。
    """

    theme = Theme() if base is None else base
    data = _as_mapping(payload, key="theme")
    if not data:
        return theme
    _warn_unknown_keys(data, _THEME_KEYS, key="theme")

    def _pick(name: str, parsed: Any) -> Any:
        return getattr(theme, name) if parsed is None else parsed

    align_data = _as_mapping(data.get("align"), key="theme.align")
    align = Align(
        horizontal=(
            theme.align.horizontal
            if align_data.get("horizontal") is None
            else _as_enum(HorizontalAlign, align_data["horizontal"], key="theme.align.horizontal")
        ),
        vertical=(
            theme.align.vertical
            if align_data.get("vertical") is None
            else _as_enum(VerticalAlign, align_data["vertical"], key="theme.align.vertical")
        ),
    )

    widgets = _as_mapping(data.get("widgets"), key="theme.widgets")
    widget_styles = dict(theme.widget_styles)
    for kind, style_payload in widgets.items():
        style_key = f"theme.widgets.{kind}"
        widget_styles[str(kind)] = widget_style_from_mapping(
            _as_mapping(style_payload, key=style_key), key=style_key
        )

    return Theme(
        background_color=_pick(
            "background_color", _as_color(data.get("background_color"), key="theme.background_color")
        ),
        shape_color=_pick("shape_color", _as_color(data.get("shape_color"), key="theme.shape_color")),
        frame_color=_pick("frame_color", _as_color(data.get("frame_color"), key="theme.frame_color")),
        frame_width=_pick(
            "frame_width", _as_non_negative_float(data.get("frame_width"), key="theme.frame_width")
        ),
        label_color=_pick("label_color", _as_color(data.get("label_color"), key="theme.label_color")),
        font_size_large=_pick(
            "font_size_large", _as_font_size(data.get("font_size_large"), key="theme.font_size_large")
        ),
        font_size_medium=_pick(
            "font_size_medium", _as_font_size(data.get("font_size_medium"), key="theme.font_size_medium")
        ),
        font_size_small=_pick(
            "font_size_small", _as_font_size(data.get("font_size_small"), key="theme.font_size_small")
        ),
        align=align,
        widget_styles=widget_styles,
    )
