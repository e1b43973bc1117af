"""RectForm / TextForm / collage のテスト。"""

from __future__ import annotations

from imslider.core.color import Color
from imslider.core.form import RectForm, TextForm, collage

GRAY = Color(0.5, 0.5, 0.5)


def test_shift_returns_moved_copy():
    rect = RectForm(10.0, 4.0, GRAY, 1.0, 2.0)
    moved = rect.shift(3.0, -5.0)
    assert (moved.x, moved.y) == (4.0, -3.0)
    assert (rect.x, rect.y) == (1.0, 2.0)


def test_floor_position_snaps_towards_negative_infinity():
    text = TextForm("a", GRAY, 12.0, -72.5, 3.9).floor_position()
    assert (text.x, text.y) == (-73.0, 3.0)


def test_collage_splits_rects_and_texts():
    rect = RectForm(10.0, 4.0, GRAY)
    text = TextForm("a", GRAY, 12.0)
    element = collage(10.7, 4.2, [rect, text])
    assert (element.width, element.height) == (10, 4)
    assert element.rects() == (rect,)
    assert element.texts() == (text,)
