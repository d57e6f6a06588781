from __future__ import annotations
import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Dict

from .config import (
    DEFAULT_CSV_NAME,
    DEFAULT_EXTENSIONS,
    DEFAULT_MAX_SIZE,
    DEFAULT_MD_NAME,
    ScanConfig,
    load_config_file,
    parse_extensions,
    parse_max_size,
    split_list,
)
from .external_profiles import load_profile_file, merge_profiles
from .report import to_csv, to_json, to_listing, to_markdown, write_report
from .scanner import run


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="commentscan",
        description="ディレクトリ配下のソースファイルからコメントを検出して一覧/JSON/Markdown/CSVで出力します"
    )
    p.add_argument("--root", help="走査するルートディレクトリ (既定: カレントディレクトリ)")
    p.add_argument("--json", action="store_true", help="JSONで出力")
    p.add_argument("--counts", action="store_true", help="一覧の末尾に件数サマリを表示")
    p.add_argument("--exts", help="対象拡張子のカンマ区切り (既定: .vue,.js,.css)")
    p.add_argument("--relative", action="store_true", default=None, help="ルートからの相対パスで表示")
    p.add_argument("--max-size", dest="max_size", help="この大きさ(バイト)を超えるファイルは読まない (既定: 5MiB)")
    p.add_argument("--lines", action="store_true", default=None, help="コメントの行番号を出力")
    p.add_argument("--snippets", action="store_true", default=None, help="Markdownにコメント本文を含める")
    # 値を省略した場合はカレントディレクトリに既定名で出力
    p.add_argument("--md", nargs="?", const=DEFAULT_MD_NAME, metavar="FILE", help=f"Markdownレポートを出力 (既定: {DEFAULT_MD_NAME})")
    p.add_argument("--csv", nargs="?", const=DEFAULT_CSV_NAME, metavar="FILE", help=f"CSVを出力 (既定: {DEFAULT_CSV_NAME})")
    p.add_argument("--include", help="既定の除外ディレクトリのうち走査対象に戻す名前 (カンマ区切り)")
    p.add_argument("--exclude", help="追加で除外するディレクトリ名 (カンマ区切り)")
    p.add_argument("--jobs", type=int, help="並列実行のワーカー数")
    p.add_argument("--config", help="設定ファイル(TOML: pyproject.toml など)を読み込み、既定値を上書き")
    p.add_argument("--profiles", action="append", metavar="FILE", help="追加のYAML/JSONプロファイル定義ファイル (複数指定は繰り返し)")
    p.add_argument("-v", "--verbose", action="store_true", help="スキップしたファイルなどの詳細ログを標準エラーに出す")
    return p


def _apply_file_config(args: argparse.Namespace, cfg: Dict[str, Any]) -> None:
    # CLI引数が最優先。未指定の項目だけ設定で補完する。
    for key, attr in [("exts", "exts"), ("maxSize", "max_size"), ("include", "include"), ("exclude", "exclude")]:
        if key in cfg and getattr(args, attr) is None:
            val = cfg[key]
            setattr(args, attr, ",".join(map(str, val)) if isinstance(val, list) else str(val))
    for key, attr in [("relative", "relative"), ("lines", "lines"), ("snippets", "snippets")]:
        if key in cfg and getattr(args, attr) is None:
            setattr(args, attr, bool(cfg[key]))
    if "jobs" in cfg and args.jobs is None:
        args.jobs = int(cfg["jobs"])
    if "profiles" in cfg and not args.profiles:
        val = cfg["profiles"]
        args.profiles = [str(x) for x in val] if isinstance(val, list) else [str(val)]


def build_config(args: argparse.Namespace) -> ScanConfig:
    """引数から ScanConfig を組み立てる。設定不備は ValueError / FileNotFoundError 等で通知。"""
    cwd = Path.cwd()
    root = (cwd / args.root).resolve() if args.root else cwd
    if not root.is_dir():
        raise FileNotFoundError(f"--root is not a directory: {root}")
    profiles = merge_profiles(load_profile_file(f) for f in (args.profiles or []))
    return ScanConfig(
        root=root,
        extensions=parse_extensions(args.exts) if args.exts else DEFAULT_EXTENSIONS,
        max_size_bytes=parse_max_size(args.max_size) if args.max_size is not None else DEFAULT_MAX_SIZE,
        relative=bool(args.relative),
        include_lines=bool(args.lines),
        include_snippets=bool(args.snippets),
        md_out=(cwd / args.md).resolve() if args.md else None,
        csv_out=(cwd / args.csv).resolve() if args.csv else None,
        include_dirs=frozenset(split_list(args.include or "")),
        exclude_dirs=frozenset(split_list(args.exclude or "")),
        jobs=args.jobs or 1,
        profiles=profiles,
    )


def main(argv: list[str] | None = None):
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    # 設定ファイル読込（TOMLのみ）。読めない場合は警告のみで続行。
    if args.config:
        try:
            _apply_file_config(args, load_config_file(args.config))
        except (OSError, ValueError, RuntimeError) as e:
            print(f"[warn] failed to load config {args.config}: {e}", file=sys.stderr)
    if args.exts is not None and not parse_extensions(args.exts):
        parser.error("--exts requires a comma-separated list like .vue,.js,.css")
    try:
        config = build_config(args)
    except (ValueError, OSError, RuntimeError) as e:
        parser.error(str(e))

    scan = run(config)

    if config.md_out or config.csv_out:
        status = 0
        outputs = []
        if config.md_out:
            outputs.append(("Markdown report", config.md_out, lambda: to_markdown(
                scan, include_snippets=config.include_snippets, relative=config.relative)))
        if config.csv_out:
            outputs.append(("CSV", config.csv_out, lambda: to_csv(scan.results)))
        for label, target, render in outputs:
            try:
                written = write_report(target, render())
            except OSError as e:
                print(f"error: cannot write {label.lower()} to {target}: {e}", file=sys.stderr)
                status = 1
                continue
            print(f"{label} written to: {written}")
        return status
    if args.json:
        print(to_json(scan))
        return 0
    listing = to_listing(scan, include_lines=config.include_lines, counts=args.counts)
    if listing:
        print(listing)
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
