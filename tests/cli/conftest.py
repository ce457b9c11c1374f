"""Pytest configuration and fixtures for CLI tests."""

import pytest
import yaml
from click.testing import CliRunner


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep user and project config files out of CLI tests."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.chdir(tmp_path)
    for name in (
        "SPECSEARCH_DOCUMENTS",
        "SPECSEARCH_MAX_MATCHES",
        "SPECSEARCH_CONTEXT_LENGTH",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def cli_runner():
    """Click CLI test runner bound to the specsearch command group."""

    class SpecSearchCliRunner(CliRunner):
        def invoke(self, args, **kwargs):  # type: ignore[override]
            from specsearch.cli.main import cli

            return super().invoke(cli, args, **kwargs)

    return SpecSearchCliRunner()


@pytest.fixture
def docs_file(tmp_path, sample_records):
    """A YAML documents file holding the sample specs."""
    path = tmp_path / "specs.yaml"
    path.write_text(yaml.safe_dump(sample_records))
    return path


def assert_exit_success(result):
    """Assert CLI command exited successfully."""
    assert result.exit_code == 0, f"Command failed: {result.output}"


def assert_exit_failure(result, expected_code=1):
    """Assert CLI command failed with expected code."""
    assert result.exit_code == expected_code, (
        f"Expected exit code {expected_code}, got {result.exit_code}: {result.output}"
    )


def assert_output_contains(result, *expected):
    """Assert CLI output contains expected strings."""
    for text in expected:
        assert text in result.output, f"Expected '{text}' in output:\n{result.output}"


def assert_output_not_contains(result, *unexpected):
    """Assert CLI output does not contain strings."""
    for text in unexpected:
        assert text not in result.output, (
            f"Unexpected '{text}' in output:\n{result.output}"
        )


# Export test helpers
pytest.assert_exit_success = assert_exit_success  # type: ignore[attr-defined]
pytest.assert_exit_failure = assert_exit_failure  # type: ignore[attr-defined]
pytest.assert_output_contains = assert_output_contains  # type: ignore[attr-defined]
pytest.assert_output_not_contains = assert_output_not_contains  # type: ignore[attr-defined]
