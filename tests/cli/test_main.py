"""Tests for the CLI entry point and global options."""

import logging

import pytest
import yaml

from specsearch.cli.main import create_console, setup_logging


class TestCLIEntryPoint:
    """Test the main CLI entry point."""

    def test_cli_help(self, cli_runner):
        """--help lists the commands."""
        result = cli_runner.invoke(["--help"])

        pytest.assert_exit_success(result)
        pytest.assert_output_contains(result, "Commands:", "search", "parse", "syntax")

    def test_cli_version_flag(self, cli_runner):
        """--version prints the package version."""
        result = cli_runner.invoke(["--version"])

        pytest.assert_exit_success(result)
        pytest.assert_output_contains(result, "specsearch version 0.1.0")

    def test_explicit_config_file(self, cli_runner, docs_file, tmp_path):
        """-c loads settings from the given file."""
        config = tmp_path / "custom.yaml"
        config.write_text(
            yaml.safe_dump(
                {"documents": str(docs_file), "search": {"max_matches_per_spec": 1}}
            )
        )

        result = cli_runner.invoke(["-c", str(config), "search", "token"])

        pytest.assert_exit_success(result)
        pytest.assert_output_contains(result, "... and 3 more matches")

    def test_invalid_config_file(self, cli_runner, tmp_path):
        """Invalid settings stop the CLI before any command runs."""
        config = tmp_path / "bad.yaml"
        config.write_text(yaml.safe_dump({"search": {"context_length": 0}}))

        result = cli_runner.invoke(["-c", str(config), "syntax"])

        pytest.assert_exit_failure(result)
        pytest.assert_output_contains(result, "Error loading configuration:")

    def test_environment_overrides(self, cli_runner, docs_file):
        """Environment variables override config defaults."""
        result = cli_runner.invoke(
            ["search", "token", "-d", str(docs_file)],
            env={"SPECSEARCH_MAX_MATCHES": "1"},
        )

        pytest.assert_exit_success(result)
        pytest.assert_output_contains(result, "... and 3 more matches")


class TestHelpers:
    """Test CLI setup helpers."""

    def test_setup_logging_levels(self, monkeypatch):
        """Quiet, verbose and default flags pick log levels."""
        calls = []
        monkeypatch.setattr(
            logging, "basicConfig", lambda **kwargs: calls.append(kwargs["level"])
        )

        setup_logging(quiet=True)
        setup_logging(verbose=True)
        setup_logging()

        assert calls == [logging.ERROR, logging.DEBUG, logging.WARNING]

    def test_create_console_no_color(self):
        """--no-color disables the color system."""
        console = create_console(no_color=True)

        assert console.no_color
        assert console.color_system is None
