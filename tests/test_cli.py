"""Tests for the mooltipage command line."""

from __future__ import annotations

from pathlib import Path

import pytest

from mooltipage import __version__
from mooltipage.cli import expand_page_paths, main, parse_args
from mooltipage.environment import terminal


@pytest.fixture
def site(tmp_path: Path) -> Path:
    root = tmp_path / "site"
    (root / "blog").mkdir(parents=True)
    (root / "index.html").write_text("<p>${ 'home' }</p>")
    (root / "blog" / "post.html").write_text("<p>post</p>")
    (root / "notes.txt").write_text("not a page")
    return root


class TestParseArgs:
    def test_defaults(self) -> None:
        args = parse_args(["index.html"])
        assert args.pages == ["index.html"]
        assert args.inpath is None
        assert args.outpath is None
        assert args.formatter == "pretty"
        assert args.verbose == 0

    def test_options(self) -> None:
        args = parse_args(["a.html", "b.html", "--inpath=src", "--outpath=out", "--formatter=minimized", "-vv"])
        assert args.pages == ["a.html", "b.html"]
        assert (args.inpath, args.outpath, args.formatter, args.verbose) == ("src", "out", "minimized", 2)

    def test_unknown_formatter_rejected(self) -> None:
        with pytest.raises(SystemExit):
            parse_args(["a.html", "--formatter=fancy"])

    def test_version(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            parse_args(["--version"])
        assert exc_info.value.code == 0
        assert __version__ in capsys.readouterr().out


class TestExpandPagePaths:
    def test_directory_searched_recursively(self, site: Path) -> None:
        assert expand_page_paths([str(site)], site) == ["blog/post.html", "index.html"]

    def test_single_file(self, site: Path) -> None:
        assert expand_page_paths([str(site / "blog" / "post.html")], site) == ["blog/post.html"]

    def test_non_html_ignored(self, site: Path) -> None:
        assert expand_page_paths([str(site / "notes.txt")], site) == []

    def test_outside_base_rejected(self, site: Path, tmp_path: Path) -> None:
        outside = tmp_path / "other.html"
        outside.write_text("")
        with pytest.raises(ValueError):
            expand_page_paths([str(outside)], site)


class TestMain:
    def test_compiles_directory(self, site: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        out = tmp_path / "out"
        code = main([str(site), f"--inpath={site}", f"--outpath={out}", "--formatter=none"])

        stdout = capsys.readouterr().out
        assert code == 0
        assert "Page count: 2" in stdout
        assert "Compiled [index.html]." in stdout
        assert "Compiled [blog/post.html]." in stdout
        assert stdout.rstrip().endswith("Done.")
        assert (out / "index.html").read_text() == "<html><head><title></title></head><body><p>home</p></body></html>"
        assert (out / "blog" / "post.html").exists()

    def test_output_defaults_to_source(self, site: Path) -> None:
        assert main([str(site / "index.html"), f"--inpath={site}"]) == 0
        assert (site / "index.html").read_text().startswith("<html>")

    def test_compile_error(self, site: Path, capsys: pytest.CaptureFixture[str]) -> None:
        (site / "broken.html").write_text('<m-fragment src="missing.html"></m-fragment>')
        code = main([str(site / "broken.html"), f"--inpath={site}"])

        assert code == 1
        stderr = terminal.strip_colors(capsys.readouterr().err)
        assert "M-RES-001" in stderr
        assert "missing.html" in stderr

    def test_page_outside_source(self, site: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        outside = tmp_path / "other.html"
        outside.write_text("<p>x</p>")
        assert main([str(outside), f"--inpath={site}"]) == 1
        assert "outside the source directory" in capsys.readouterr().err
