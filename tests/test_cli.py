from __future__ import annotations

from pathlib import Path

from typer.testing import CliRunner

from folio.cli import app


def _write_project(root: Path) -> None:
    (root / "folio.yml").write_text(
        (
            "project_name: Test Project\n"
            "source_dir: source\n"
            "cache_dir: cache\n"
            "site:\n"
            "  name: Folio\n"
        ),
        encoding="utf-8",
    )
    post = root / "source" / "posts" / "hello.md"
    post.parent.mkdir(parents=True)
    post.write_text(
        "---\ntitle: Hello {{ site.name }}\n---\n*Hi* {{ who }}\n",
        encoding="utf-8",
    )


def test_fetch_warms_cache() -> None:
    runner = CliRunner()
    with runner.isolated_filesystem():
        _write_project(Path.cwd())

        result = runner.invoke(app, ["fetch", "posts/hello.md"])
        assert result.exit_code == 0, result.output
        assert "Fetched posts/hello.md" in result.output
        assert Path("cache/posts/hello.md").exists()

        again = runner.invoke(app, ["fetch", "posts/hello.md"])
        assert again.exit_code == 0, again.output
        assert "Cached posts/hello.md" in again.output


def test_fetch_missing_item_fails() -> None:
    runner = CliRunner()
    with runner.isolated_filesystem():
        _write_project(Path.cwd())

        result = runner.invoke(app, ["fetch", "posts/absent.md"])

        assert result.exit_code == 1
        assert "Fetch failed" in result.output
        assert not Path("cache/posts/absent.md").exists()


def test_render_prints_title_and_body() -> None:
    runner = CliRunner()
    with runner.isolated_filesystem():
        _write_project(Path.cwd())

        result = runner.invoke(app, ["render", "posts/hello.md", "--var", "who=there"])

        assert result.exit_code == 0, result.output
        assert "Title: Hello Folio" in result.output
        assert "*Hi* there" in result.output


def test_render_html() -> None:
    runner = CliRunner()
    with runner.isolated_filesystem():
        _write_project(Path.cwd())

        result = runner.invoke(app, ["render", "posts/hello.md", "--html", "--var", "who=you"])

        assert result.exit_code == 0, result.output
        assert "<p><em>Hi</em> you</p>" in result.output


def test_render_rejects_malformed_variables() -> None:
    runner = CliRunner()
    with runner.isolated_filesystem():
        _write_project(Path.cwd())

        result = runner.invoke(app, ["render", "posts/hello.md", "--var", "novalue"])

        assert result.exit_code != 0


def test_render_reports_front_matter_errors() -> None:
    runner = CliRunner()
    with runner.isolated_filesystem():
        _write_project(Path.cwd())
        Path("source/posts/broken.md").write_text("---\ntitle: open\n", encoding="utf-8")

        result = runner.invoke(app, ["render", "posts/broken.md"])

        assert result.exit_code == 1
        assert "Render failed" in result.output


def test_resolve_path_uses_index_fallback() -> None:
    runner = CliRunner()
    with runner.isolated_filesystem():
        _write_project(Path.cwd())
        Path("content").mkdir()
        Path("content/about.md").write_text("About", encoding="utf-8")

        about = runner.invoke(app, ["resolve-path", "/about"])
        assert about.exit_code == 0, about.output
        assert about.output.strip().endswith("about.md")

        blog = runner.invoke(app, ["resolve-path", "/blog", "--ext", "html"])
        assert blog.exit_code == 0, blog.output
        assert blog.output.strip().endswith(str(Path("blog") / "index.html"))


def test_missing_source_dir_is_a_usage_error() -> None:
    runner = CliRunner()
    with runner.isolated_filesystem():
        Path("folio.yml").write_text("project_name: Bare\n", encoding="utf-8")

        result = runner.invoke(app, ["fetch", "posts/hello.md"])

        assert result.exit_code == 2
