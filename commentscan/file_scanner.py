"""ディレクトリ走査とテキスト読込のユーティリティ。

- 除外ディレクトリ名(完全一致)には降りない。
- バイナリらしいものは読込段階で除外(ヒューリスティック)。
"""
from __future__ import annotations
import codecs
import logging
import os
from pathlib import Path
from typing import Iterator, Collection

logger = logging.getLogger(__name__)

BINARY_BYTES = set(range(0, 9)) | {11, 12} | set(range(14, 32))


def is_probably_text(data: bytes, threshold: float = 0.30) -> bool:
    if not data:
        return True
    non_text = sum(b in BINARY_BYTES for b in data)
    ratio = non_text / len(data)
    return ratio < threshold


def read_text(path: Path) -> str | None:
    """UTF-8 として読む。UTF-16 は BOM がある場合のみ。復号できないバイトは置換文字にする。"""
    try:
        raw = path.read_bytes()
    except OSError as e:
        logger.debug("read failed: %s (%s)", path, e)
        return None
    # UTF-16 はヌルバイトが多くバイナリ判定に掛かるため先に BOM で判別する
    if raw.startswith((codecs.BOM_UTF16_LE, codecs.BOM_UTF16_BE)):
        try:
            return raw.decode("utf-16")
        except UnicodeDecodeError:
            logger.debug("invalid utf-16 despite BOM: %s", path)
    if not is_probably_text(raw):
        logger.debug("binary-looking file skipped: %s", path)
        return None
    return raw.decode("utf-8-sig", errors="replace")


def walk_directory(root: str | os.PathLike[str], ignore_dirs: Collection[str]) -> Iterator[Path]:
    """root 以下の通常ファイルを遅延列挙する。並びはディレクトリ内で名前順。"""
    def _onerror(err: OSError) -> None:
        logger.debug("cannot list directory: %s", err)

    for current, dirs, files in os.walk(root, onerror=_onerror):
        dirs[:] = sorted(d for d in dirs if d not in ignore_dirs)
        for name in sorted(files):
            path = Path(current) / name
            if path.is_file():
                yield path


__all__ = ["walk_directory", "read_text", "is_probably_text"]
