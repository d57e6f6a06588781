from pathlib import Path

import pytest

from commentscan.config import (
    DEFAULT_IGNORE_DIRS,
    ScanConfig,
    load_config_file,
    parse_extensions,
    parse_max_size,
)


def test_ignore_dirs_layering():
    config = ScanConfig(include_dirs=frozenset({"vendor"}), exclude_dirs=frozenset({"fixtures"}))
    ignored = config.ignore_dirs()
    assert "vendor" not in ignored
    assert "fixtures" in ignored
    assert "node_modules" in ignored
    assert "vendor" in DEFAULT_IGNORE_DIRS


def test_wants_comments():
    assert not ScanConfig().wants_comments
    assert ScanConfig(include_lines=True).wants_comments
    assert ScanConfig(csv_out=Path("out.csv")).wants_comments


def test_parse_extensions():
    assert parse_extensions("vue, .js,,") == {".vue", ".js"}
    assert parse_extensions([".py", "rb"]) == {".py", ".rb"}


@pytest.mark.parametrize("value", ["0", "-1", "abc", "nan", "inf", None])
def test_parse_max_size_rejects(value):
    with pytest.raises(ValueError):
        parse_max_size(value)


def test_parse_max_size_accepts():
    assert parse_max_size("1024") == 1024
    assert parse_max_size(2.5) == 2.5


def test_load_config_file(tmp_path):
    path = tmp_path / "pyproject.toml"
    path.write_text(
        '[project]\nname = "x"\n\n[tool.commentscan]\nexts = [".py"]\nlines = true\njobs = 2\n',
        encoding="utf-8",
    )
    assert load_config_file(path) == {"exts": [".py"], "lines": True, "jobs": 2}


def test_load_config_file_without_section(tmp_path):
    path = tmp_path / "pyproject.toml"
    path.write_text('[project]\nname = "x"\n', encoding="utf-8")
    assert load_config_file(path) == {}


def test_load_config_file_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config_file(tmp_path / "missing.toml")


def test_default_profiles_are_builtin_table():
    from commentscan.profiles import EXTENSION_PROFILES

    assert ScanConfig().profiles is EXTENSION_PROFILES
    assert ScanConfig(jobs=2).profiles[".vue"].name == "markup-embedded"
