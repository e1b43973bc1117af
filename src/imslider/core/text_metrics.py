# どこで: `src/imslider/core/text_metrics.py`。
# 何を: ラベル配置に使うテキスト幅の計測（フォントの advance / 固定幅近似）を提供する。
# なぜ: ウィジェットを特定のレンダラーのフォント実装から切り離し、ヘッドレスでも配置を決定的にするため。

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Protocol

from .runtime_config import RuntimeConfig

_logger = logging.getLogger(__name__)


class TextMetrics(Protocol):
    def width(self, font_size: float, text: str) -> float:
        """font_size で描いた text の幅を返す。"""
        ...


class FixedAdvanceMetrics:
    """全グリフの advance を `advance_em` 倍の固定幅とみなす近似。"""

    def __init__(self, advance_em: float = 0.6) -> None:
        _advance = float(advance_em)
        if _advance <= 0:
            raise ValueError("advance_em は正の値である必要がある")
        self._advance_em = _advance

    def width(self, font_size: float, text: str) -> float:
        return float(len(str(text))) * float(font_size) * self._advance_em


class FontTextMetrics:
    """フォントファイルの hmtx から advance を読み、テキスト幅を返す。"""

    _fonts: dict[str, Any] = {}

    def __init__(self, path: str | Path, *, font_index: int = 0) -> None:
        p = Path(path).expanduser()
        if not p.is_file():
            raise FileNotFoundError(f"フォントファイルが見つかりません: {p}")
        self._path = p.resolve()
        self._font_index = max(0, int(font_index))
        self._advance_em_cache: dict[str, float] = {}
        self._warned: set[str] = set()

    @property
    def path(self) -> Path:
        return self._path

    def _font(self) -> Any:
        """TTFont を取得する（キャッシュ）。"""
        from fontTools.ttLib import TTFont  # type: ignore[import-untyped]

        cache_key = f"{self._path}|{self._font_index}"
        cached = self._fonts.get(cache_key)
        if cached is not None:
            return cached

        if self._path.suffix.lower() == ".ttc":
            font = TTFont(self._path, fontNumber=self._font_index)
        else:
            font = TTFont(self._path)
        self._fonts[cache_key] = font
        return font

    def _advance_em(self, char: str) -> float:
        """1em を 1.0 とした char の advance を返す。"""

        cached = self._advance_em_cache.get(char)
        if cached is not None:
            return cached

        font = self._font()
        units_per_em = float(font["head"].unitsPerEm)
        metrics = font["hmtx"].metrics
        cmap = font.getBestCmap() or {}
        glyph_name = cmap.get(ord(char))
        if glyph_name is None or glyph_name not in metrics:
            if char not in self._warned:
                self._warned.add(char)
                _logger.warning(
                    "Character '%s' (U+%04X) not found in font '%s'",
                    char,
                    ord(char),
                    str(self._path),
                )
            glyph_name = ".notdef"
        advance = metrics.get(glyph_name, (0, 0))[0]
        out = float(advance) / units_per_em
        self._advance_em_cache[char] = out
        return out

    def width(self, font_size: float, text: str) -> float:
        total_em = sum(self._advance_em(ch) for ch in str(text))
        return float(total_em) * float(font_size)


def text_metrics_from_config(cfg: RuntimeConfig) -> TextMetrics:
    """config の `text` セクションから TextMetrics を作る。"""

    if cfg.font_path is not None:
        return FontTextMetrics(cfg.font_path)
    return FixedAdvanceMetrics(cfg.fallback_advance_em)
