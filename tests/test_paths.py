from pathlib import Path

import pytest

from folio.paths import InvalidIdentifierError, join_identifier, resolve_file_path
from folio.sources import ContentSource, DirectorySource


def test_prefers_named_file(tmp_path: Path) -> None:
    site = tmp_path / "site"
    site.mkdir()
    (site / "about.html").write_text("<p>about</p>", encoding="utf-8")

    assert resolve_file_path(site / "about", "html") == site / "about.html"


def test_falls_back_to_index_without_checking(tmp_path: Path) -> None:
    site = tmp_path / "site"

    resolved = resolve_file_path(str(site / "blog"), "html")

    assert resolved == site / "blog" / "index.html"
    assert not resolved.exists()


def test_extension_may_include_dot(tmp_path: Path) -> None:
    (tmp_path / "notes.md").write_text("", encoding="utf-8")

    assert resolve_file_path(tmp_path / "notes", ".md") == tmp_path / "notes.md"


def test_join_identifier_stays_inside_root(tmp_path: Path) -> None:
    assert join_identifier(tmp_path, "posts/a.md") == tmp_path / "posts" / "a.md"
    assert join_identifier(tmp_path, "posts\\b.md") == tmp_path / "posts" / "b.md"

    with pytest.raises(InvalidIdentifierError):
        join_identifier(tmp_path, "../outside.md")


def test_directory_source_reads_relative_items(tmp_path: Path) -> None:
    (tmp_path / "posts").mkdir()
    (tmp_path / "posts" / "hello.md").write_bytes(b"hello")
    source = DirectorySource(tmp_path)

    assert isinstance(source, ContentSource)
    assert source.read_file("posts/hello.md") == b"hello"
    with pytest.raises(FileNotFoundError):
        source.read_file("posts/missing.md")
    with pytest.raises(InvalidIdentifierError):
        source.read_file("../secret")
