"""高レベル API: パス群を走査してコメントを集計する (Aggregator)

- 拡張子でプロファイル分類 → サイズ確認 → 読込
- 種別検出(軽量) → 必要な場合のみ位置付き抽出
- 並列実行(ワーカー数指定時)。集計は呼び出し側スレッドのみで行う
"""
from __future__ import annotations

import logging
import os
import threading
from collections import deque
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Deque, Dict, Iterable, Iterator, List, Tuple

from .comments import CommentSpan, detect_comment_types, extract_comments
from .config import ScanConfig
from .file_scanner import read_text, walk_directory
from .profiles import COMMENT_KINDS, classify

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FileResult:
    path: str
    extension: str
    types: Tuple[str, ...]
    comments: Tuple[CommentSpan, ...] | None = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "path": self.path,
            "extension": self.extension,
            "types": list(self.types),
        }
        if self.comments is not None:
            data["comments"] = [c.to_dict() for c in self.comments]
        return data


@dataclass
class ScanSummary:
    total_scanned: int = 0
    total_matched: int = 0
    by_extension: Dict[str, int] = field(default_factory=dict)
    by_type: Dict[str, int] = field(default_factory=lambda: {k: 0 for k in COMMENT_KINDS})

    def add(self, result: FileResult) -> None:
        self.total_matched += 1
        self.by_extension[result.extension] = self.by_extension.get(result.extension, 0) + 1
        for kind in result.types:
            self.by_type[kind] = self.by_type.get(kind, 0) + 1

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalScanned": self.total_scanned,
            "totalMatched": self.total_matched,
            "byExtension": dict(self.by_extension),
            "byType": dict(self.by_type),
        }


@dataclass(frozen=True)
class FileOutcome:
    scanned: bool
    result: FileResult | None = None


@dataclass
class ScanResult:
    root: Path
    results: List[FileResult]
    summary: ScanSummary


def _display_path(path: Path, root: Path, relative: bool) -> str:
    if relative:
        return os.path.relpath(path, root)
    return str(path.absolute())


def scan_file(path: Path, root: Path, config: ScanConfig) -> FileOutcome:
    """1ファイル分の処理。I/O 失敗は例外にせずスキップ扱いで返す。"""
    ext = path.suffix
    profile = classify(ext, config.extensions, config.profiles)
    if profile is None:
        return FileOutcome(scanned=False)
    try:
        size = path.stat().st_size
    except OSError as e:
        logger.debug("stat failed: %s (%s)", path, e)
        return FileOutcome(scanned=False)
    if config.max_size_bytes and size > config.max_size_bytes:
        logger.debug("size limit exceeded: %s (%d bytes)", path, size)
        return FileOutcome(scanned=False)

    content = read_text(path)
    if content is None:
        return FileOutcome(scanned=True)

    types = detect_comment_types(content, profile)
    if not types:
        return FileOutcome(scanned=True)

    comments = None
    if config.wants_comments:
        comments = tuple(extract_comments(content, profile))
    return FileOutcome(scanned=True, result=FileResult(
        path=_display_path(path, root, config.relative),
        extension=ext,
        types=tuple(sorted(types)),
        comments=comments,
    ))


def _take(paths: Iterator[Path], cancel: threading.Event | None) -> Iterator[Path]:
    for p in paths:
        if cancel is not None and cancel.is_set():
            logger.info("scan cancelled; no further files are queued")
            return
        yield p


def run(
    config: ScanConfig,
    cancel: threading.Event | None = None,
    paths: Iterable[str | os.PathLike[str]] | None = None,
) -> ScanResult:
    root = Path(config.root)
    summary = ScanSummary(by_extension={ext: 0 for ext in sorted(config.extensions)})
    results: List[FileResult] = []

    if paths is None:
        source: Iterator[Path] = walk_directory(root, config.ignore_dirs())
    else:
        source = (Path(p) for p in paths)

    def _fold(outcome: FileOutcome) -> None:
        if outcome.scanned:
            summary.total_scanned += 1
        if outcome.result is not None:
            summary.add(outcome.result)
            results.append(outcome.result)

    # 並列/直列実行
    if config.jobs and config.jobs > 1:
        window = config.jobs * 4
        pending: Deque[Future] = deque()
        with ThreadPoolExecutor(max_workers=config.jobs) as ex:
            for p in _take(source, cancel):
                pending.append(ex.submit(scan_file, p, root, config))
                # 投入済みが上限に達したら先頭から順に回収(結果は走査順を保つ)
                while len(pending) >= window:
                    _fold(pending.popleft().result())
            while pending:
                _fold(pending.popleft().result())
    else:
        for p in _take(source, cancel):
            _fold(scan_file(p, root, config))

    logger.info("scanned %d file(s), matched %d", summary.total_scanned, summary.total_matched)
    return ScanResult(root=root, results=results, summary=summary)


__all__ = ["FileResult", "ScanSummary", "ScanResult", "FileOutcome", "scan_file", "run"]
