import logging
from pathlib import Path

import pytest

from imslider.core.runtime_config import RuntimeConfig
from imslider.core.text_metrics import (
    FixedAdvanceMetrics,
    FontTextMetrics,
    text_metrics_from_config,
)
from imslider.core.theme import Theme


def _write_test_font(path: Path) -> Path:
    """advance が既知の最小 TTF（unitsPerEm=1000）を書き出す。"""
    from fontTools.fontBuilder import FontBuilder
    from fontTools.pens.ttGlyphPen import TTGlyphPen

    def _box_glyph():
        pen = TTGlyphPen(None)
        pen.moveTo((0, 0))
        pen.lineTo((0, 500))
        pen.lineTo((400, 500))
        pen.lineTo((400, 0))
        pen.closePath()
        return pen.glyph()

    fb = FontBuilder(1000, isTTF=True)
    fb.setupGlyphOrder([".notdef", "A", "B", "space"])
    fb.setupCharacterMap({ord("A"): "A", ord("B"): "B", ord(" "): "space"})
    fb.setupGlyf(
        {
            ".notdef": _box_glyph(),
            "A": _box_glyph(),
            "B": _box_glyph(),
            "space": TTGlyphPen(None).glyph(),
        }
    )
    fb.setupHorizontalMetrics(
        {".notdef": (300, 0), "A": (600, 0), "B": (500, 0), "space": (250, 0)}
    )
    fb.setupHorizontalHeader(ascent=800, descent=-200)
    fb.setupNameTable({"familyName": "ImsliderTest", "styleName": "Regular"})
    fb.setupOS2(sTypoAscender=800, usWinAscent=800, usWinDescent=200)
    fb.setupPost()
    fb.save(str(path))
    return path


def _config(font_path: Path | None, advance_em: float = 0.5) -> RuntimeConfig:
    return RuntimeConfig(
        config_path=None,
        theme=Theme(),
        font_path=font_path,
        fallback_advance_em=advance_em,
        window_size=(640, 480),
        window_fps=60.0,
    )


def test_fixed_advance_metrics_scales_with_length_and_size():
    metrics = FixedAdvanceMetrics(0.5)
    assert metrics.width(20.0, "abcd") == pytest.approx(40.0)
    assert metrics.width(20.0, "") == 0.0


def test_fixed_advance_metrics_rejects_non_positive_advance():
    with pytest.raises(ValueError):
        FixedAdvanceMetrics(0.0)


def test_font_metrics_sums_advances(tmp_path: Path):
    font_path = _write_test_font(tmp_path / "test.ttf")
    metrics = FontTextMetrics(font_path)
    assert metrics.width(10.0, "A") == pytest.approx(6.0)
    assert metrics.width(10.0, "AB A") == pytest.approx(6.0 + 5.0 + 2.5 + 6.0)


def test_font_metrics_falls_back_to_notdef_and_warns_once(tmp_path: Path, caplog):
    font_path = _write_test_font(tmp_path / "test.ttf")
    metrics = FontTextMetrics(font_path)
    with caplog.at_level(logging.WARNING, logger="imslider.core.text_metrics"):
        assert metrics.width(10.0, "ZZ") == pytest.approx(6.0)
    warnings = [r for r in caplog.records if "not found" in r.getMessage()]
    assert len(warnings) == 1


def test_font_metrics_missing_file_raises(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        FontTextMetrics(tmp_path / "missing.ttf")


def test_text_metrics_from_config(tmp_path: Path):
    assert isinstance(text_metrics_from_config(_config(None)), FixedAdvanceMetrics)
    font_path = _write_test_font(tmp_path / "test.ttf")
    metrics = text_metrics_from_config(_config(font_path))
    assert isinstance(metrics, FontTextMetrics)
    assert metrics.path == font_path.resolve()
