"""Tests for loading target URLs from a file."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from loadpool._internal.errors import TargetFileError
from loadpool.input.url_file import load_urls

if TYPE_CHECKING:
    from pathlib import Path


def test_loads_one_url_per_line(tmp_path: Path):
    path = tmp_path / "urls.txt"
    path.write_text("http://a.test/\nhttp://b.test/x\n")
    assert load_urls(path) == ["http://a.test/", "http://b.test/x"]


def test_skips_blank_lines_and_strips_whitespace(tmp_path: Path):
    path = tmp_path / "urls.txt"
    path.write_text("\n  http://a.test/  \n\n\t\nhttp://b.test/\r\n")
    assert load_urls(path) == ["http://a.test/", "http://b.test/"]


def test_keeps_duplicates_and_order(tmp_path: Path):
    path = tmp_path / "urls.txt"
    path.write_text("http://b.test/\nhttp://a.test/\nhttp://b.test/\n")
    assert load_urls(path) == ["http://b.test/", "http://a.test/", "http://b.test/"]


def test_empty_file_yields_no_urls(tmp_path: Path):
    path = tmp_path / "urls.txt"
    path.write_text("")
    assert load_urls(path) == []


def test_accepts_string_path(tmp_path: Path):
    path = tmp_path / "urls.txt"
    path.write_text("http://a.test/")
    assert load_urls(str(path)) == ["http://a.test/"]


def test_missing_file_raises_error(tmp_path: Path):
    with pytest.raises(TargetFileError, match="not found"):
        load_urls(tmp_path / "missing.txt")


def test_directory_raises_error(tmp_path: Path):
    with pytest.raises(TargetFileError, match="not a regular file"):
        load_urls(tmp_path)


def test_undecodable_file_raises_error(tmp_path: Path):
    path = tmp_path / "urls.txt"
    path.write_bytes(b"\xff\xfe\xfa")
    with pytest.raises(TargetFileError, match="Failed to read"):
        load_urls(path)
