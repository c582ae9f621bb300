# =============================================================================
# tlafmt - TLA+ Specification Formatter
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2025 Michael Gardner, A Bit of Help, Inc.
# See LICENSE file in the project root.
# =============================================================================

"""Unit tests for the formatter options model."""

import json

import pytest
from pydantic import ValidationError

from tlafmt.options import INDENT_WIDTH, LINE_WIDTH, FormatOptions


class TestFormatOptions:
    """Test option defaults and validation."""

    def test_defaults(self):
        """Test the canonical layout is the default."""
        options = FormatOptions()
        assert options.line_width == LINE_WIDTH == 80
        assert options.indent_width == INDENT_WIDTH == 4
        assert options.diagnostics is True
        assert options.indent_unit == "    "

    def test_frozen(self):
        """Test options cannot be mutated."""
        options = FormatOptions()
        with pytest.raises(ValidationError):
            options.line_width = 100

    def test_rejects_unknown_fields(self):
        """Test typos in configuration are reported."""
        with pytest.raises(ValidationError):
            FormatOptions(line_widht=100)

    @pytest.mark.parametrize("field,value", [
        ("line_width", 10),
        ("indent_width", 0),
        ("indent_width", 17),
    ])
    def test_rejects_out_of_range(self, field, value):
        """Test numeric bounds."""
        with pytest.raises(ValidationError):
            FormatOptions(**{field: value})


class TestLoadOptions:
    """Test loading options from JSON files."""

    def test_load_missing_file_uses_defaults(self, tmp_path):
        """Test a missing file yields the defaults."""
        assert FormatOptions.load(tmp_path / "absent.json") == FormatOptions()

    def test_load_file(self, tmp_path):
        """Test values are read from JSON."""
        path = tmp_path / "tlafmt.json"
        path.write_text(json.dumps({"line_width": 100, "indent_width": 2}))

        options = FormatOptions.load(path)

        assert options.line_width == 100
        assert options.indent_width == 2
        assert options.indent_unit == "  "

    def test_load_invalid_json(self, tmp_path):
        """Test malformed JSON is a validation error."""
        path = tmp_path / "tlafmt.json"
        path.write_text("{not json")
        with pytest.raises(ValidationError):
            FormatOptions.load(path)

    def test_default_file_in_cwd(self, tmp_path, monkeypatch):
        """Test ./tlafmt.json is picked up when no path is given."""
        (tmp_path / "tlafmt.json").write_text(json.dumps({"indent_width": 3}))
        monkeypatch.chdir(tmp_path)

        assert FormatOptions.load_from_path_or_default(None).indent_width == 3

    def test_no_default_file(self, tmp_path, monkeypatch):
        """Test defaults when neither a path nor ./tlafmt.json exists."""
        monkeypatch.chdir(tmp_path)
        assert FormatOptions.load_from_path_or_default(None) == FormatOptions()
