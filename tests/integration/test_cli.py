# =============================================================================
# tlafmt - TLA+ Specification Formatter
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2025 Michael Gardner, A Bit of Help, Inc.
# See LICENSE file in the project root.
# =============================================================================

"""Integration tests for the command-line interface."""

import io

import pytest
from returns.io import IOSuccess
from typer.testing import CliRunner

from tlafmt import __version__
from tlafmt.cli import EXIT_ERROR, EXIT_NEEDS_FORMATTING, EXIT_OK, EXIT_USAGE, _read_input, app
from tlafmt.formatter import format_text
from tlafmt.token import render_module_header

pytestmark = pytest.mark.integration


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


class TestFormatCommand:
    """Test formatting to stdout and in place."""

    def test_format_file_to_stdout(self, runner, tmp_path, simple_spec):
        """Test formatted output is printed."""
        path = tmp_path / "B.tla"
        path.write_text(simple_spec)

        result = runner.invoke(app, [str(path)])

        assert result.exit_code == EXIT_OK
        assert render_module_header("B") in result.output
        assert "Init == x = 0\n" in result.output
        assert path.read_text() == simple_spec

    def test_format_stdin(self, runner, simple_spec):
        """Test input can be read from stdin."""
        result = runner.invoke(app, ["--stdin"], input=simple_spec)

        assert result.exit_code == EXIT_OK
        assert render_module_header("B") in result.output

    def test_in_place(self, runner, temp_tla_file):
        """Test the file is rewritten with a trailing newline."""
        result = runner.invoke(app, ["--in-place", str(temp_tla_file)])

        assert result.exit_code == EXIT_OK
        content = temp_tla_file.read_text()
        assert content.startswith(render_module_header("Spec"))
        assert content.endswith("=" * 80 + "\n")
        assert "\n\n\n" not in content

    def test_config_file(self, runner, tmp_path, simple_spec):
        """Test options are read from --config."""
        path = tmp_path / "B.tla"
        path.write_text(simple_spec)
        config = tmp_path / "opts.json"
        config.write_text('{"line_width": 40}')

        result = runner.invoke(app, ["--config", str(config), str(path)])

        assert result.exit_code == EXIT_OK
        assert render_module_header("B", 40) in result.output
        assert "=" * 41 not in result.output

    def test_version(self, runner):
        """Test --version prints the version."""
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == EXIT_OK
        assert __version__ in result.output


class TestCheckCommand:
    """Test --check mode."""

    def test_check_unformatted(self, runner, temp_tla_file):
        """Test unformatted input exits with code 3 and a diff."""
        result = runner.invoke(app, ["--check", str(temp_tla_file)])

        assert result.exit_code == EXIT_NEEDS_FORMATTING
        assert "input file needs formatting" in result.output
        assert "+ " + render_module_header("Spec") in result.output

    def test_check_formatted(self, runner, tmp_path, simple_spec):
        """Test formatted input passes."""
        path = tmp_path / "B.tla"
        path.write_text(format_text(simple_spec).unwrap() + "\n")

        result = runner.invoke(app, ["--check", str(path)])

        assert result.exit_code == EXIT_OK
        assert "needs formatting" not in result.output

    def test_check_does_not_modify(self, runner, temp_tla_file):
        """Test --check leaves the file alone."""
        before = temp_tla_file.read_text()
        runner.invoke(app, ["--check", str(temp_tla_file)])
        assert temp_tla_file.read_text() == before


class TestUsageErrors:
    """Test argument and input errors."""

    def test_no_input(self, runner):
        """Test a file or --stdin is required."""
        result = runner.invoke(app, [])
        assert result.exit_code == EXIT_USAGE

    def test_file_and_stdin(self, runner, temp_tla_file):
        """Test a file and --stdin are mutually exclusive."""
        result = runner.invoke(app, ["--stdin", str(temp_tla_file)], input="")
        assert result.exit_code == EXIT_USAGE

    @pytest.mark.parametrize("flags", [["--in-place", "--check"], ["--in-place", "--stdin"]])
    def test_in_place_conflicts(self, runner, temp_tla_file, flags):
        """Test --in-place cannot be combined with --check or --stdin."""
        args = flags + ([] if "--stdin" in flags else [str(temp_tla_file)])
        result = runner.invoke(app, args, input="")
        assert result.exit_code == EXIT_USAGE

    def test_missing_file(self, runner, tmp_path):
        """Test a missing input file is an error."""
        result = runner.invoke(app, [str(tmp_path / "absent.tla")])

        assert result.exit_code == EXIT_ERROR
        assert "File not found" in result.output

    def test_invalid_config(self, runner, tmp_path, temp_tla_file):
        """Test an invalid options file is a usage error."""
        config = tmp_path / "opts.json"
        config.write_text('{"indent_width": 0}')

        result = runner.invoke(app, ["--config", str(config), str(temp_tla_file)])

        assert result.exit_code == EXIT_USAGE
        assert "Configuration error" in result.output


class TestReadInput:
    """Test input selection."""

    def test_no_file_reads_stdin(self, monkeypatch, simple_spec):
        """Test stdin is read when no file is given."""
        monkeypatch.setattr("sys.stdin", io.StringIO(simple_spec))
        assert _read_input(None) == IOSuccess(simple_spec)

    def test_file_is_read(self, temp_tla_file):
        """Test the given file is read."""
        assert _read_input(temp_tla_file) == IOSuccess(temp_tla_file.read_text())
