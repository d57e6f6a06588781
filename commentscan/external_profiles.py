"""YAML / JSON から拡張子 → SyntaxProfile の追加定義をロードするユーティリティ。
フォーマット例:

YAML:
---
- extensions: [".jsonc", ".json5"]
  profile: c-family
- extensions: [".sql"]
  name: sql
  line: "--"
  block: ["/*", "*/"]

JSON: 上記と同じ構造の配列。
"""
from __future__ import annotations
from dataclasses import replace
from pathlib import Path
import json
from typing import Any, Dict, Iterable, Mapping

from .profiles import BUILTIN_PROFILES, EXTENSION_PROFILES, SyntaxProfile

try:
    import yaml  # type: ignore
except ImportError:  # pragma: no cover
    yaml = None  # YAML未インストール時はJSONのみ


def _pair(value: Any, key: str) -> tuple[str, str] | None:
    if value is None:
        return None
    if not isinstance(value, (list, tuple)) or len(value) != 2 or not all(isinstance(v, str) and v for v in value):
        raise ValueError(f"'{key}' は [開始, 終了] の2要素である必要があります: {value!r}")
    return (value[0], value[1])


def _marker(value: Any, key: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str) or not value:
        raise ValueError(f"'{key}' は空でない文字列である必要があります: {value!r}")
    return value


def _profile_from_item(item: Dict[str, Any]) -> SyntaxProfile:
    base_name = item.get("profile")
    if base_name is not None:
        base = BUILTIN_PROFILES.get(str(base_name))
        if base is None:
            raise ValueError(f"未知のプロファイル: {base_name}")
    else:
        base = SyntaxProfile(name=str(item.get("name") or "custom"))

    changes: Dict[str, Any] = {}
    if "name" in item:
        changes["name"] = str(item["name"])
    if "line" in item:
        changes["line_marker"] = _marker(item["line"], "line")
    if "block" in item:
        changes["block_delimiters"] = _pair(item["block"], "block")
    if "markup" in item:
        changes["markup_delimiters"] = _pair(item["markup"], "markup")
    if "string_quotes" in item:
        quotes = item["string_quotes"] or []
        if isinstance(quotes, str):
            quotes = [quotes]
        changes["string_block_quotes"] = tuple(str(q) for q in quotes if q)
    if "line_guard" in item:
        guard = _marker(item["line_guard"], "line_guard")
        if guard is not None and len(guard) != 1:
            raise ValueError(f"'line_guard' は1文字である必要があります: {guard!r}")
        changes["line_guard"] = guard
    profile = replace(base, **changes) if changes else base
    if not profile.kinds():
        raise ValueError(f"コメント文法が1つも定義されていません: {profile.name}")
    return profile


def _decode(raw: bytes) -> str:
    # いくつかのエンコーディング候補を試す (PowerShell Set-Content デフォルト UTF-16 対応)
    for enc in ("utf-8", "utf-8-sig", "utf-16", "utf-16-le", "utf-16-be", "cp932"):
        try:
            return raw.decode(enc).lstrip("\ufeff")
        except UnicodeDecodeError:
            continue
    raise UnicodeDecodeError("unknown", raw, 0, 1, "Unable to decode profile file with tried encodings")


def load_profile_file(path: str) -> Dict[str, SyntaxProfile]:
    p = Path(path)
    if not p.is_file():
        raise FileNotFoundError(path)
    text = _decode(p.read_bytes())
    if p.suffix.lower() in {".yaml", ".yml"}:
        if yaml is None:
            raise RuntimeError("PyYAMLがインストールされていないためYAMLは読み込めません。'pip install PyYAML' を実行してください")
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise ValueError(f"YAMLの解析に失敗しました: {path}: {e}") from e
    else:
        data = json.loads(text)
    if not isinstance(data, list):
        raise ValueError("プロファイルファイルは配列である必要があります")
    table: Dict[str, SyntaxProfile] = {}
    for item in data:
        if not isinstance(item, dict):
            continue
        exts = item.get("extensions")
        if isinstance(exts, str):
            exts = [exts]
        if not exts:
            raise ValueError(f"'extensions' がありません: {item!r}")
        profile = _profile_from_item(item)
        for ext in exts:
            ext = str(ext).strip()
            table[ext if ext.startswith(".") else f".{ext}"] = profile
    return table


def merge_profiles(
    overrides: Iterable[Mapping[str, SyntaxProfile]],
    base: Mapping[str, SyntaxProfile] = EXTENSION_PROFILES,
) -> Dict[str, SyntaxProfile]:
    merged = dict(base)
    for table in overrides:
        merged.update(table)
    return merged


__all__ = ["load_profile_file", "merge_profiles"]
