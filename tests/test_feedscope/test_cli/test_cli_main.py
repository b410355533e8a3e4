"""Tests for the CLI main module."""

import json
from pathlib import Path

import pytest

from feedscope.cli.main import CLIConfig, create_argument_parser, format_text, main
from feedscope.formats import RssIter
from feedscope.shared import ContentMode

RSS_TEXT = (
    "<rss><channel><title>T</title></x>"
    "<item><title>I</title><enclosure url=\"u\"/></item>"
    "</channel></rss>"
)
PAGE = (
    '<html><head><base href="https://example.com/">'
    '<link rel="alternate" type="application/rss+xml" title="Feed" href="/rss">'
    '<link rel="feed" href="/all"></head></html>'
)


@pytest.fixture
def rss_file(tmp_path):
    path = tmp_path / "feed.xml"
    path.write_text(RSS_TEXT, encoding="utf-8")
    return path


class TestCLIConfig:
    """Test CLI configuration management."""

    def test_default_config(self):
        """Test default configuration values."""
        config = CLIConfig()
        assert config.output_format == "json"
        assert config.parser_config.content_mode is ContentMode.OWNED

    def test_config_from_file(self, tmp_path):
        """Test loading configuration from file."""
        config_path = tmp_path / "config.json"
        config_path.write_text(json.dumps({
            "parser": {"content_mode": "borrowed", "correlation_id": "cli-1"},
            "output_format": "text",
        }))

        config = CLIConfig.from_file(config_path)
        assert config.output_format == "text"
        assert config.parser_config.content_mode is ContentMode.BORROWED
        assert config.parser_config.correlation_id == "cli-1"

    def test_config_from_nonexistent_file(self, tmp_path, capsys):
        """Test handling non-existent config file."""
        config = CLIConfig.from_file(tmp_path / "missing.json")
        assert config.output_format == "json"
        assert "Warning" in capsys.readouterr().err

    def test_config_from_invalid_json(self, tmp_path):
        """Test a malformed config file falls back to defaults."""
        config_path = tmp_path / "broken.json"
        config_path.write_text("{not json")
        assert CLIConfig.from_file(config_path).output_format == "json"


class TestArgumentParser:
    """Test command-line argument parsing."""

    def test_dump_arguments(self):
        """Test dump options."""
        args = create_argument_parser().parse_args(
            ["dump", "feed.xml", "--type", "rss", "-f", "text"]
        )
        assert args.command == "dump"
        assert args.path == Path("feed.xml")
        assert args.type == "rss"
        assert args.format == "text"
        assert args.config is None

    def test_dump_defaults(self):
        """Test dump defaults to auto-detection."""
        args = create_argument_parser().parse_args(["dump", "feed.xml"])
        assert args.type == "auto"
        assert args.format is None

    def test_detect_requires_paths(self):
        """Test detect needs at least one path."""
        with pytest.raises(SystemExit):
            create_argument_parser().parse_args(["detect"])

    def test_invalid_type(self):
        """Test unknown feed types are rejected."""
        with pytest.raises(SystemExit):
            create_argument_parser().parse_args(["dump", "feed.xml", "--type", "json"])


class TestFormatText:
    """Test the indented text rendering."""

    def test_outline(self):
        """Test containers are indented and attributes shown."""
        lines = format_text(RssIter(RSS_TEXT))
        assert lines == [
            "title: T",
            "item",
            "  title: I",
            '  enclosure [url="u"]',
        ]

    def test_long_text_is_truncated(self):
        """Test long content is shortened with an ellipsis."""
        text = "word " * 30
        lines = format_text(RssIter(f"<rss><channel><description>{text}</description></channel></rss>"))
        assert len(lines) == 1
        assert lines[0].endswith("...")
        assert len(lines[0]) == len("description: ") + 60


class TestMain:
    """Test the CLI entry point."""

    def test_no_command(self, capsys):
        """Test running without a command prints help."""
        assert main([]) == 1
        assert "feedscope" in capsys.readouterr().out

    def test_detect(self, rss_file, tmp_path, capsys):
        """Test detect prints one type per path."""
        atom_file = tmp_path / "atom.xml"
        atom_file.write_text("<feed></feed>")

        assert main(["detect", str(rss_file), str(atom_file)]) == 0
        out = capsys.readouterr().out.splitlines()
        assert out == [f"{rss_file}: rss", f"{atom_file}: atom"]

    def test_detect_missing_file(self, tmp_path, capsys):
        """Test unreadable paths set the exit code."""
        assert main(["detect", str(tmp_path / "missing.xml")]) == 1
        assert "error" in capsys.readouterr().err

    def test_dump_json(self, rss_file, capsys):
        """Test JSON dump with records and diagnostics."""
        assert main(["dump", str(rss_file)]) == 0
        document = json.loads(capsys.readouterr().out)
        assert document["root"] == "rss"
        assert document["elements"][0] == {
            "name": "title", "kind": "leaf", "attributes": {}, "content": "T",
        }
        assert document["elements"][1]["children"][1]["attributes"] == {"url": "u"}
        assert [d["code"] for d in document["diagnostics"]] == ["stray_end_tag"]

    def test_dump_text(self, rss_file, capsys):
        """Test text dump."""
        assert main(["dump", str(rss_file), "--format", "text"]) == 0
        assert capsys.readouterr().out.splitlines()[0] == "title: T"

    def test_dump_text_from_config(self, rss_file, tmp_path, capsys):
        """Test the output format can come from a config file."""
        config_path = tmp_path / "config.json"
        config_path.write_text(json.dumps({"output_format": "text"}))
        assert main(["dump", str(rss_file), "-c", str(config_path)]) == 0
        assert capsys.readouterr().out.splitlines()[1] == "item"

    def test_dump_forced_type(self, tmp_path, capsys):
        """Test forcing a format skips detection."""
        path = tmp_path / "subs.xml"
        path.write_text("<opml><body><outline text='a'/></body></opml>")
        assert main(["dump", str(path), "-t", "opml", "-f", "text"]) == 0
        assert capsys.readouterr().out.strip() == 'outline [text="a"]'

    def test_dump_unsupported(self, tmp_path, capsys):
        """Test non-feed documents fail with exit code 1."""
        path = tmp_path / "page.html"
        path.write_text("<html><body></body></html>")
        assert main(["dump", str(path)]) == 1
        assert "xml_or_html" in capsys.readouterr().err

    def test_dump_missing_file(self, tmp_path, capsys):
        """Test unreadable files fail with exit code 1."""
        assert main(["dump", str(tmp_path / "missing.xml")]) == 1
        assert "Error reading" in capsys.readouterr().err

    def test_links(self, tmp_path, capsys):
        """Test feed links and the base URL are listed."""
        path = tmp_path / "page.html"
        path.write_text(PAGE)
        assert main(["links", str(path)]) == 0
        assert capsys.readouterr().out.splitlines() == [
            "base\thttps://example.com/",
            "feed\t/rss\tapplication/rss+xml\tFeed",
            "feed\t/all",
        ]

    def test_links_none_found(self, tmp_path):
        """Test pages without feed links exit with 1."""
        path = tmp_path / "page.html"
        path.write_text("<html></html>")
        assert main(["links", str(path)]) == 1
