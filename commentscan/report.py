"""走査結果の出力整形 (JSON / Markdown / CSV / 一覧表示)。"""
from __future__ import annotations
import json
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterable, List

from .scanner import FileResult, ScanResult, ScanSummary


def to_payload(scan: ScanResult) -> Dict[str, Any]:
    return {
        "root": str(scan.root),
        "results": [r.to_dict() for r in scan.results],
        "summary": scan.summary.to_dict(),
    }


def to_json(scan: ScanResult) -> str:
    return json.dumps(to_payload(scan), ensure_ascii=False, indent=2)


def _line_numbers(item: FileResult) -> str:
    return ",".join(c.line_range() for c in item.comments or ())


def _summary_lines(summary: ScanSummary) -> List[str]:
    lines = [
        f"Scanned files: {summary.total_scanned}",
        f"Matched files: {summary.total_matched}",
    ]
    lines.extend(f"{ext}: {count}" for ext, count in summary.by_extension.items())
    return lines


def to_markdown(
    scan: ScanResult,
    include_snippets: bool = False,
    relative: bool = False,
    generated: datetime | None = None,
) -> str:
    generated = generated or datetime.now(timezone.utc)
    root = os.path.relpath(scan.root, Path.cwd()) if relative else str(scan.root)
    lines = [
        "# Comment Report",
        "",
        f"Root: {root}",
        f"Generated: {generated.isoformat()}",
        "",
    ]
    for item in scan.results:
        comments = item.comments or ()
        lines.append(f"## {item.path}")
        lines.append(f"- Comments: {len(comments)}")
        lines.append("")
        if not comments:
            continue
        for c in comments:
            lines.append(f"- Type: {c.kind} | {c.line_range('L')}")
            if include_snippets:
                lines.extend(["", "```", c.text, "```", ""])
        lines.append("")
    lines.extend(["", "---", "", "Summary", ""])
    lines.extend(f"- {s}" for s in _summary_lines(scan.summary))
    return "\n".join(lines)


def csv_escape(value: Any) -> str:
    s = str(value)
    if '"' in s or "," in s or "\n" in s:
        return '"' + s.replace('"', '""') + '"'
    return s


def to_csv(results: Iterable[FileResult]) -> str:
    lines = ["file,line_numbers"]
    for item in results:
        lines.append(f"{csv_escape(item.path)},{csv_escape(_line_numbers(item))}")
    return "\n".join(lines)


def to_listing(scan: ScanResult, include_lines: bool = False, counts: bool = False) -> str:
    lines: List[str] = []
    for item in scan.results:
        if include_lines and item.comments:
            lines.append(f"{item.path}:{_line_numbers(item)}")
        else:
            lines.append(item.path)
    if counts:
        lines.append("")
        lines.extend(_summary_lines(scan.summary))
    return "\n".join(lines)


def write_report(path: str | os.PathLike[str], text: str) -> Path:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(text, encoding="utf-8")
    return p


__all__ = ["to_payload", "to_json", "to_markdown", "to_csv", "csv_escape", "to_listing", "write_report"]
