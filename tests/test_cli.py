"""
Tests for CLI module.

Tests command-line interface commands and output.
"""

import json
from pathlib import Path

import pytest
import yaml
from typer.testing import CliRunner

from distiller import __version__
from distiller.cli import app


@pytest.fixture
def runner() -> CliRunner:
    """Provide a CLI test runner."""
    return CliRunner()


@pytest.fixture
def article_file(temp_dir: Path, article_html: str) -> Path:
    path = temp_dir / "article.html"
    path.write_text(article_html, encoding="utf-8")
    return path


class TestCLI:
    """Tests for CLI commands."""

    def test_cli_help(self, runner: CliRunner):
        """CLI should show help."""
        result = runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        assert "Usage" in result.output

    def test_version(self, runner: CliRunner):
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_parse_help(self, runner: CliRunner):
        """Parse command should show help."""
        result = runner.invoke(app, ["parse", "--help"])

        assert result.exit_code == 0
        assert "--html-file" in result.output

    def test_config_show(self, runner: CliRunner):
        """Config show command should display settings."""
        result = runner.invoke(app, ["config", "show"])

        assert result.exit_code == 0
        assert "pagination" in result.output
        assert "max_pages" in result.output

    def test_config_init(self, runner: CliRunner, temp_dir: Path):
        output = temp_dir / "distiller.yaml"

        result = runner.invoke(app, ["config", "init", "--output", str(output)])

        assert result.exit_code == 0
        data = yaml.safe_load(output.read_text())
        assert data["pagination"]["max_pages"] == 25

    def test_config_show_reads_file(self, runner: CliRunner, temp_dir: Path):
        config_path = temp_dir / "distiller.yaml"
        config_path.write_text(yaml.dump({"pagination": {"max_pages": 4}}))

        result = runner.invoke(app, ["config", "show", "--config", str(config_path)])

        assert result.exit_code == 0
        assert "max_pages: 4" in result.output


class TestParseCommand:
    """Tests for parse command."""

    def test_parse_missing_url(self, runner: CliRunner):
        """Parse without URL should fail."""
        result = runner.invoke(app, ["parse"])

        assert result.exit_code != 0

    def test_parse_html_file(self, runner: CliRunner, article_file: Path, article_url: str):
        result = runner.invoke(app, [
            "parse", article_url, "--html-file", str(article_file), "--no-pages",
        ])

        assert result.exit_code == 0
        assert "How Tides Work" in result.output
        assert "regular rise and fall" in result.output

    def test_parse_json(self, runner: CliRunner, article_file: Path, article_url: str):
        result = runner.invoke(app, [
            "parse", article_url, "--html-file", str(article_file),
            "--no-pages", "--json", "--format", "text",
        ])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["title"] == "How Tides Work"
        assert data["author"] == "Jane Doe"
        assert data["total_pages"] == 1
        assert "<p>" not in data["content"]

    def test_parse_no_content(self, runner: CliRunner, temp_dir: Path):
        path = temp_dir / "empty.html"
        path.write_text("<p>Fragment</p>")

        result = runner.invoke(app, [
            "parse", "https://example.com/a", "--html-file", str(path), "--no-pages",
        ])

        assert result.exit_code == 1
        assert "No extractable content" in result.output

    def test_parse_invalid_url(self, runner: CliRunner, article_file: Path):
        result = runner.invoke(app, [
            "parse", "not-a-url", "--html-file", str(article_file),
        ])

        assert result.exit_code == 1
        assert "Invalid URL" in result.output

    def test_parse_invalid_format(self, runner: CliRunner, article_file: Path, article_url: str):
        result = runner.invoke(app, [
            "parse", article_url, "--html-file", str(article_file), "--format", "pdf",
        ])

        assert result.exit_code != 0
