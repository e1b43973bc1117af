"""
どこで: リポジトリ直下 `main.py`。
何を: スライダーのデモウィンドウを起動する。
なぜ: 動作確認用の最小エントリポイントとして利用するため。
"""

import sys

sys.path.append("src")

import logging

from imslider.interactive.pyglet_backend import run_slider_demo

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    run_slider_demo()
