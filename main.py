"""
どこで: リポジトリ直下 `main.py`。
何を: 組み込みパレットと config 定義パレットごとにゲーム機イラストを SVG で書き出す。
なぜ: 動作確認用の最小エントリポイントとして利用するため。
"""

import logging
import sys

sys.path.append("src")

from pocketdraw.api import Export, palette_names
from pocketdraw.core.runtime_config import runtime_config

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    for name in palette_names(custom=runtime_config().palettes):
        Export("svg", palette=name)
