"""文字オフセット → 行番号 変換ユーティリティ。

行頭オフセットの昇順リストを一度だけ作り、二分探索で 1-based の行番号を求める。
"""
from __future__ import annotations
from bisect import bisect_right
from typing import List, Sequence


def build_line_starts(text: str) -> List[int]:
    starts = [0]
    idx = text.find("\n")
    while idx != -1:
        starts.append(idx + 1)
        idx = text.find("\n", idx + 1)
    return starts


def index_to_line(index: int, line_starts: Sequence[int]) -> int:
    # index 以下で最も右にある行頭の位置 = 行番号(1-based)
    return bisect_right(line_starts, index)


__all__ = ["build_line_starts", "index_to_line"]
