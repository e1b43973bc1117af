"""
どこで: `src/imslider/export/svg.py`。
何を: ウィジェットの描画記述（Element 列）を SVG として保存する関数を提供する。
なぜ: ウィンドウ backend なしで描画結果を確認・比較できるようにするため。
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from xml.sax.saxutils import escape

import numpy as np

from imslider.core.color import Color
from imslider.core.form import Element, RectForm, TextForm

_SVG_NS = "http://www.w3.org/2000/svg"
_FLOAT_DECIMALS = 3


def _fmt(value: float, *, decimals: int = _FLOAT_DECIMALS) -> str:
    """SVG 出力向けに float を決定的な文字列へ変換して返す。"""
    text = f"{float(value):.{int(decimals)}f}"
    if text.startswith("-0") and float(text) == 0.0:
        return text[1:]
    return text


def _fill_attrs(color: Color) -> str:
    attrs = f'fill="{color.to_hex()}"'
    if float(color.a) < 1.0:
        attrs += f' fill-opacity="{_fmt(color.a)}"'
    return attrs


def _rects_to_svg_xywh(rects: Sequence[RectForm], *, canvas_w: int, canvas_h: int) -> np.ndarray:
    """中心原点・y 上向きの矩形列を SVG の左上 (x, y, w, h)（shape (N,4)）へ変換して返す。"""
    if not rects:
        return np.zeros((0, 4), dtype=np.float64)
    cxywh = np.asarray([(r.x, r.y, r.w, r.h) for r in rects], dtype=np.float64)
    out = np.empty_like(cxywh)
    out[:, 0] = canvas_w / 2.0 + cxywh[:, 0] - cxywh[:, 2] / 2.0
    out[:, 1] = canvas_h / 2.0 - cxywh[:, 1] - cxywh[:, 3] / 2.0
    out[:, 2] = np.maximum(cxywh[:, 2], 0.0)
    out[:, 3] = np.maximum(cxywh[:, 3], 0.0)
    return out


def export_svg(
    elements: Sequence[Element],
    path: str | Path,
    *,
    canvas_size: tuple[int, int],
    background: Color | None = None,
) -> Path:
    """Element 列を SVG として保存する。

    Parameters
    ----------
    elements : Sequence[Element]
        描画順（奥から手前）に並んだ Element 列。
    path : str or Path
        出力先パス。
    canvas_size : tuple[int, int]
        キャンバス寸法。座標原点はキャンバス中心。
    background : Color or None, optional
        背景色。None なら背景矩形を出力しない。

    Returns
    -------
    Path
        保存先パス。

    Raises
    ------
    ValueError
        canvas_size が正でない場合。
    """
    _path = Path(path)
    canvas_w, canvas_h = int(canvas_size[0]), int(canvas_size[1])
    if canvas_w <= 0 or canvas_h <= 0:
        raise ValueError("canvas_size は正の値である必要がある")

    lines: list[str] = []
    lines.append('<?xml version="1.0" encoding="UTF-8"?>')
    lines.append(
        (
            f'<svg xmlns="{_SVG_NS}" viewBox="0 0 {canvas_w} {canvas_h}" '
            f'width="{canvas_w}" height="{canvas_h}">'
        )
    )
    if background is not None:
        lines.append(
            f'  <rect x="0" y="0" width="{canvas_w}" height="{canvas_h}" {_fill_attrs(background)} />'
        )

    for element in elements:
        rect_xywh = _rects_to_svg_xywh(element.rects(), canvas_w=canvas_w, canvas_h=canvas_h)
        rect_index = 0
        for form in element.forms:
            if isinstance(form, RectForm):
                x, y, w, h = rect_xywh[rect_index]
                rect_index += 1
                lines.append(
                    f'  <rect x="{_fmt(x)}" y="{_fmt(y)}" width="{_fmt(w)}" '
                    f'height="{_fmt(h)}" {_fill_attrs(form.color)} />'
                )
            elif isinstance(form, TextForm):
                tx = canvas_w / 2.0 + float(form.x)
                ty = canvas_h / 2.0 - float(form.y)
                lines.append(
                    f'  <text x="{_fmt(tx)}" y="{_fmt(ty)}" font-size="{_fmt(form.height)}" '
                    f'text-anchor="middle" dominant-baseline="central" '
                    f"{_fill_attrs(form.color)}>{escape(form.text)}</text>"
                )

    lines.append("</svg>")

    _path.parent.mkdir(parents=True, exist_ok=True)
    with _path.open("w", encoding="utf-8", newline="\n") as f:
        f.write("\n".join(lines) + "\n")

    return _path
