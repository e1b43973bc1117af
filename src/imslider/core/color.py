"""
どこで: `src/imslider/core/color.py`。
何を: RGBA 色の値型と、インタラクション状態ごとの派生色（highlighted / clicked）を定義する。
なぜ: 描画時の色変化を状態の純粋関数として表し、テーマ・スタイルと同じ色表現を共有するため。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, cast


def _clamp01(v: float) -> float:
    fv = float(v)
    return 0.0 if fv < 0.0 else 1.0 if fv > 1.0 else fv


def coerce_rgb255(value: object) -> tuple[int, int, int]:
    """値を RGB255 タプル `(r, g, b)`（0..255）に正規化して返す。

    Raises
    ------
    ValueError
        長さ 3 のシーケンスでない場合。
    """

    try:
        r, g, b = value  # type: ignore[misc]
    except Exception as exc:
        raise ValueError(f"rgb value must be a length-3 sequence: {value!r}") from exc

    def _clamp(v: object) -> int:
        iv = int(cast(Any, v))
        return 0 if iv < 0 else 255 if iv > 255 else iv

    return _clamp(r), _clamp(g), _clamp(b)


def rgb01_to_rgb255(rgb: tuple[float, float, float]) -> tuple[int, int, int]:
    """0..1 float の RGB を 0..255 int の RGB に変換して返す。"""

    r, g, b = rgb
    return (
        int(round(_clamp01(r) * 255.0)),
        int(round(_clamp01(g) * 255.0)),
        int(round(_clamp01(b) * 255.0)),
    )


def rgb255_to_rgb01(rgb: tuple[int, int, int]) -> tuple[float, float, float]:
    """0..255 int の RGB を 0..1 float の RGB に変換して返す。"""

    r, g, b = rgb
    return float(r) / 255.0, float(g) / 255.0, float(b) / 255.0


@dataclass(frozen=True, slots=True)
class Color:
    """0..1 float の RGBA 色。"""

    r: float
    g: float
    b: float
    a: float = 1.0

    @classmethod
    def rgb255(cls, r: int, g: int, b: int, a: float = 1.0) -> "Color":
        """0..255 int の RGB から Color を作る。"""

        rf, gf, bf = rgb255_to_rgb01(coerce_rgb255((r, g, b)))
        return cls(rf, gf, bf, _clamp01(a))

    @classmethod
    def from_hex(cls, text: str) -> "Color":
        """`#RRGGBB` / `#RRGGBBAA` 形式の文字列から Color を作る。"""

        s = str(text).strip().removeprefix("#")
        if len(s) not in (6, 8):
            raise ValueError(f"hex color must be #RRGGBB or #RRGGBBAA: {text!r}")
        try:
            parts = [int(s[i : i + 2], 16) for i in range(0, len(s), 2)]
        except ValueError as exc:
            raise ValueError(f"hex color must be #RRGGBB or #RRGGBBAA: {text!r}") from exc
        alpha = 1.0 if len(parts) == 3 else float(parts[3]) / 255.0
        return cls.rgb255(parts[0], parts[1], parts[2], alpha)

    @classmethod
    def coerce(cls, value: object) -> "Color":
        """Color / hex 文字列 / 0..255 の 3 要素または 4 要素シーケンスを Color に変換する。"""

        if isinstance(value, Color):
            return value
        if isinstance(value, str):
            return cls.from_hex(value)
        try:
            seq = list(value)  # type: ignore[call-overload]
        except Exception as exc:
            raise ValueError(f"color must be a hex string or rgb255 sequence: {value!r}") from exc
        if len(seq) == 4:
            r, g, b = coerce_rgb255(seq[:3])
            return cls.rgb255(r, g, b, float(seq[3]))
        r, g, b = coerce_rgb255(seq)
        return cls.rgb255(r, g, b)

    def to_rgb255(self) -> tuple[int, int, int]:
        return rgb01_to_rgb255((self.r, self.g, self.b))

    def to_rgba255(self) -> tuple[int, int, int, int]:
        r, g, b = self.to_rgb255()
        return r, g, b, int(round(_clamp01(self.a) * 255.0))

    def to_hex(self) -> str:
        r, g, b = self.to_rgb255()
        return f"#{r:02X}{g:02X}{b:02X}"

    def luminance(self) -> float:
        """RGB の平均を明度として返す。"""

        return (float(self.r) + float(self.g) + float(self.b)) / 3.0

    def highlighted(self) -> "Color":
        """ホバー時の派生色を返す。

        明るい色は暗く、暗い色は明るく、中間色は白寄りに少しだけ寄せる。
        """

        lum = self.luminance()
        r, g, b = float(self.r), float(self.g), float(self.b)
        if lum > 0.8:
            r, g, b = r - 0.2, g - 0.2, b - 0.2
        elif lum < 0.2:
            r, g, b = r + 0.2, g + 0.2, b + 0.2
        else:
            r = (1.0 - r) * 0.5 * r + r
            g = (1.0 - g) * 0.1 * g + g
            b = (1.0 - b) * 0.1 * b + b
        a = (1.0 - float(self.a)) * 0.5 + float(self.a)
        return Color(_clamp01(r), _clamp01(g), _clamp01(b), _clamp01(a))

    def clicked(self) -> "Color":
        """押下中の派生色を返す（highlighted より変化が大きい）。"""

        lum = self.luminance()
        r, g, b = float(self.r), float(self.g), float(self.b)
        if lum > 0.8:
            g, b = g - 0.2, b - 0.2
        elif lum < 0.2:
            r, g, b = r + 0.4, g + 0.2, b + 0.2
        else:
            r = (1.0 - r) * 0.75 + r
            g = (1.0 - g) * 0.25 + g
            b = (1.0 - b) * 0.25 + b
        a = (1.0 - float(self.a)) * 0.75 + float(self.a)
        return Color(_clamp01(r), _clamp01(g), _clamp01(b), _clamp01(a))

