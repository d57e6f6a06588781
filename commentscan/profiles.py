"""拡張子ごとのコメント文法(Syntax Profile)定義と分類。

対応ファミリ:
- c-family: // 行コメント, /* ... */ ブロックコメント
- markup-embedded: c-family + <!-- ... --> (Vue/HTML など埋め込みスクリプト/スタイル)
- markup: <!-- ... --> のみ
- hash-triple: # 行コメント + 三重引用符文字列をブロックコメント扱い (Python)
- hash: # 行コメントのみ

プロファイルは設定データであり振る舞いは持たない。抽出側(comments.py)が参照する。
"""
from __future__ import annotations
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Tuple, Collection

BLOCK = "block"
LINE = "line"
MARKUP = "markup"
COMMENT_KINDS: Tuple[str, ...] = (BLOCK, LINE, MARKUP)


@dataclass(frozen=True)
class SyntaxProfile:
    name: str
    line_marker: str | None = None
    block_delimiters: Tuple[str, str] | None = None
    markup_delimiters: Tuple[str, str] | None = None
    string_block_quotes: Tuple[str, ...] = field(default_factory=tuple)
    # 行コメント直前がこの文字なら誤検出とみなす (http:// 対策)
    line_guard: str | None = None

    def kinds(self) -> frozenset[str]:
        found = set()
        if self.block_delimiters or self.string_block_quotes:
            found.add(BLOCK)
        if self.line_marker:
            found.add(LINE)
        if self.markup_delimiters:
            found.add(MARKUP)
        return frozenset(found)


C_FAMILY = SyntaxProfile(
    name="c-family",
    line_marker="//",
    block_delimiters=("/*", "*/"),
    line_guard=":",
)
MARKUP_EMBEDDED = SyntaxProfile(
    name="markup-embedded",
    line_marker="//",
    block_delimiters=("/*", "*/"),
    markup_delimiters=("<!--", "-->"),
    line_guard=":",
)
MARKUP_ONLY = SyntaxProfile(name="markup", markup_delimiters=("<!--", "-->"))
HASH_TRIPLE = SyntaxProfile(
    name="hash-triple",
    line_marker="#",
    string_block_quotes=('"""', "'''"),
)
HASH = SyntaxProfile(name="hash", line_marker="#")

BUILTIN_PROFILES: Mapping[str, SyntaxProfile] = MappingProxyType({
    p.name: p for p in (C_FAMILY, MARKUP_EMBEDDED, MARKUP_ONLY, HASH_TRIPLE, HASH)
})


def _by_ext(profile: SyntaxProfile, *exts: str) -> dict[str, SyntaxProfile]:
    return {e: profile for e in exts}


EXTENSION_PROFILES: Mapping[str, SyntaxProfile] = MappingProxyType({
    **_by_ext(
        C_FAMILY,
        ".js", ".mjs", ".cjs", ".jsx", ".ts", ".tsx",
        ".css", ".scss", ".less",
        ".java", ".c", ".h", ".cpp", ".hpp", ".cs", ".go", ".rs", ".kt", ".swift", ".php",
    ),
    **_by_ext(MARKUP_EMBEDDED, ".vue", ".svelte", ".html", ".htm"),
    **_by_ext(MARKUP_ONLY, ".xml", ".svg", ".md"),
    **_by_ext(HASH_TRIPLE, ".py"),
    **_by_ext(HASH, ".sh", ".bash", ".rb", ".yaml", ".yml", ".toml"),
})


def classify(
    extension: str,
    active: Collection[str],
    profiles: Mapping[str, SyntaxProfile] | None = None,
) -> SyntaxProfile | None:
    """拡張子(先頭ドット込み, 大文字小文字を区別)からプロファイルを返す。

    有効拡張子集合に無い、またはプロファイル未定義なら None (エラーにはしない)。
    """
    if extension not in active:
        return None
    table = EXTENSION_PROFILES if profiles is None else profiles
    return table.get(extension)


__all__ = [
    "SyntaxProfile",
    "BLOCK",
    "LINE",
    "MARKUP",
    "COMMENT_KINDS",
    "C_FAMILY",
    "MARKUP_EMBEDDED",
    "MARKUP_ONLY",
    "HASH_TRIPLE",
    "HASH",
    "BUILTIN_PROFILES",
    "EXTENSION_PROFILES",
    "classify",
]
