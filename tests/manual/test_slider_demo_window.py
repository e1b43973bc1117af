"""
どこで: tests/manual/test_slider_demo_window.py。
何を: pyglet ウィンドウでスライダー 3 本（水平 / 垂直 / 無効）を操作する手動スモーク。
なぜ: ドラッグ・ホバー・押下時の色変化と値の追従を目視で確認するため。
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from imslider.interactive.pyglet_backend import run_slider_demo  # noqa: E402


def main() -> None:
    """デモウィンドウを開く。閉じるまで戻らない。"""
    logging.basicConfig(level=logging.DEBUG)
    run_slider_demo()


if __name__ == "__main__":
    main()
