"""コメント検出・抽出エンジン。

2段構え:
- detect_comment_types: 文法ごとに1回だけ正規表現 search して種別集合を返す(位置は計算しない)
- extract_comments: 全コメントの位置(行範囲)と原文を列挙する

注意: これはヒューリスティックです。文字列リテラル中の '//' や '#' を誤認する可能性があります。
ブロックと行コメントは独立に走査するため、ブロック内の '//' も行コメントとして重複報告されます
(件数はこの挙動を前提にしているので重複排除はしない)。
"""
from __future__ import annotations
import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Dict, List, Pattern, Set

from .line_index import build_line_starts, index_to_line
from .profiles import BLOCK, LINE, MARKUP, SyntaxProfile

_LINE_SPLIT = re.compile(r"\r?\n")


@dataclass(frozen=True)
class CommentSpan:
    kind: str
    start_line: int
    end_line: int
    text: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.kind,
            "startLine": self.start_line,
            "endLine": self.end_line,
            "text": self.text,
        }

    def line_range(self, prefix: str = "") -> str:
        if self.start_line == self.end_line:
            return f"{prefix}{self.start_line}"
        return f"{prefix}{self.start_line}-{prefix}{self.end_line}"


@lru_cache(maxsize=None)
def _delimited(start: str, end: str) -> Pattern[str]:
    # 非貪欲: 直近の終端で閉じる
    return re.compile(re.escape(start) + r".*?" + re.escape(end), re.DOTALL)


@lru_cache(maxsize=None)
def _marker(text: str) -> Pattern[str]:
    return re.compile(re.escape(text))


@lru_cache(maxsize=None)
def _line_presence(marker: str) -> Pattern[str]:
    return re.compile(r"(^|\s)" + re.escape(marker) + r".*$", re.MULTILINE)


def detect_comment_types(content: str, profile: SyntaxProfile) -> Set[str]:
    types: Set[str] = set()
    if profile.markup_delimiters and _marker(profile.markup_delimiters[0]).search(content):
        types.add(MARKUP)
    if profile.block_delimiters and _delimited(*profile.block_delimiters).search(content):
        types.add(BLOCK)
    for quote in profile.string_block_quotes:
        if _delimited(quote, quote).search(content):
            types.add(BLOCK)
            break
    if profile.line_marker and _line_presence(profile.line_marker).search(content):
        types.add(LINE)
    return types


def _delimited_spans(content: str, pattern: Pattern[str], kind: str, line_starts: List[int]) -> List[CommentSpan]:
    spans: List[CommentSpan] = []
    for m in pattern.finditer(content):
        spans.append(CommentSpan(
            kind=kind,
            start_line=index_to_line(m.start(), line_starts),
            end_line=index_to_line(m.end() - 1, line_starts),
            text=m.group(0),
        ))
    return spans


def _line_spans(content: str, marker: str, guard: str | None) -> List[CommentSpan]:
    spans: List[CommentSpan] = []
    for lineno, line in enumerate(_LINE_SPLIT.split(content), start=1):
        idx = line.find(marker)
        while idx != -1:
            if guard is None or idx == 0 or line[idx - 1] != guard:
                spans.append(CommentSpan(LINE, lineno, lineno, line[idx:]))
                break
            # ガードに掛かったら同じ行の次の出現を探す
            idx = line.find(marker, idx + len(marker))
    return spans


def extract_comments(content: str, profile: SyntaxProfile) -> List[CommentSpan]:
    line_starts = build_line_starts(content)
    comments: List[CommentSpan] = []

    if profile.block_delimiters:
        comments.extend(_delimited_spans(content, _delimited(*profile.block_delimiters), BLOCK, line_starts))
    for quote in profile.string_block_quotes:
        comments.extend(_delimited_spans(content, _delimited(quote, quote), BLOCK, line_starts))
    if profile.markup_delimiters:
        comments.extend(_delimited_spans(content, _delimited(*profile.markup_delimiters), MARKUP, line_starts))
    if profile.line_marker:
        comments.extend(_line_spans(content, profile.line_marker, profile.line_guard))

    comments.sort(key=lambda c: (c.start_line, c.kind))
    return comments


__all__ = ["CommentSpan", "detect_comment_types", "extract_comments"]
