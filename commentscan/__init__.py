"""commentscan
ソースツリーからコメントを検出し、件数と位置を報告するライブラリ/CLI。

主な提供機能:
- 拡張子ごとのコメント文法(プロファイル)に基づく種別検出と位置付き抽出
- ディレクトリ走査(除外ディレクトリ/サイズ上限/並列)と集計
- 一覧/JSON/Markdown/CSV 出力
"""
from .comments import CommentSpan, detect_comment_types, extract_comments
from .config import ScanConfig
from .profiles import SyntaxProfile, classify
from .scanner import FileResult, ScanResult, ScanSummary, run

__all__ = [
    "CommentSpan",
    "detect_comment_types",
    "extract_comments",
    "ScanConfig",
    "SyntaxProfile",
    "classify",
    "FileResult",
    "ScanResult",
    "ScanSummary",
    "run",
]

__version__ = "0.1.0"
