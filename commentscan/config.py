"""走査設定。

既定値(拡張子集合・除外ディレクトリ集合)は不変の定数とし、ScanConfig に注入して Aggregator へ渡す。
pyproject.toml などの [tool.commentscan] テーブルからも既定値を補える。
"""
from __future__ import annotations
import math
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping
import tomllib

from .profiles import EXTENSION_PROFILES, SyntaxProfile

DEFAULT_EXTENSIONS: frozenset[str] = frozenset({".vue", ".js", ".css"})
DEFAULT_IGNORE_DIRS: frozenset[str] = frozenset({
    "node_modules",
    ".git",
    ".hg",
    ".svn",
    ".next",
    ".nuxt",
    "dist",
    "build",
    "coverage",
    ".cache",
    "out",
    "target",
    ".output",
    "public",
    "temp",
    "logs",
    "cache",
    "vendor",
})
DEFAULT_MAX_SIZE = 5 * 1024 * 1024
DEFAULT_MD_NAME = "comment-report.md"
DEFAULT_CSV_NAME = "comment-lines.csv"


@dataclass(frozen=True)
class ScanConfig:
    root: Path = field(default_factory=Path.cwd)
    extensions: frozenset[str] = DEFAULT_EXTENSIONS
    max_size_bytes: float = DEFAULT_MAX_SIZE
    relative: bool = False
    include_lines: bool = False
    include_snippets: bool = False
    md_out: Path | None = None
    csv_out: Path | None = None
    include_dirs: frozenset[str] = frozenset()
    exclude_dirs: frozenset[str] = frozenset()
    jobs: int = 1
    profiles: Mapping[str, SyntaxProfile] = field(default_factory=lambda: EXTENSION_PROFILES)

    @property
    def wants_comments(self) -> bool:
        return bool(self.include_lines or self.include_snippets or self.md_out or self.csv_out)

    def ignore_dirs(self) -> frozenset[str]:
        return (DEFAULT_IGNORE_DIRS - self.include_dirs) | self.exclude_dirs


def split_list(value: str | Iterable[str]) -> list[str]:
    if isinstance(value, str):
        value = value.split(",")
    return [s.strip() for s in value if s and s.strip()]


def parse_extensions(value: str | Iterable[str]) -> frozenset[str]:
    return frozenset(p if p.startswith(".") else f".{p}" for p in split_list(value))


def parse_max_size(value: Any) -> float:
    try:
        num = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"--max-size must be a positive number: {value!r}")
    if not math.isfinite(num) or num <= 0:
        raise ValueError(f"--max-size must be a positive number: {value!r}")
    return num


def load_config_file(path: str | os.PathLike[str]) -> Dict[str, Any]:
    """TOML から [tool.commentscan] を読む。該当テーブルが無ければ空 dict。"""
    p = Path(path)
    if not p.is_file():
        raise FileNotFoundError(str(p))
    with p.open("rb") as f:
        cfg = tomllib.load(f)
    tool = cfg.get("tool", {}) if isinstance(cfg, dict) else {}
    section = tool.get("commentscan", {}) if isinstance(tool, dict) else {}
    return section if isinstance(section, dict) else {}


__all__ = [
    "ScanConfig",
    "DEFAULT_EXTENSIONS",
    "DEFAULT_IGNORE_DIRS",
    "DEFAULT_MAX_SIZE",
    "DEFAULT_MD_NAME",
    "DEFAULT_CSV_NAME",
    "split_list",
    "parse_extensions",
    "parse_max_size",
    "load_config_file",
]
