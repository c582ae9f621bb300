# =============================================================================
# tlafmt - TLA+ Specification Formatter
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2025 Michael Gardner, A Bit of Help, Inc.
# See LICENSE file in the project root.
# =============================================================================

"""Unit tests for indentation depth and the indenting writer."""

import io

import pytest

from tlafmt.indent import MAX_DEPTH, Indent, IndentDecorator, split_lines


class TestIndent:
    """Test the bounded indentation depth."""

    def test_default_is_zero(self):
        """Test a new depth starts at zero."""
        assert Indent().depth == 0

    def test_increment_and_decrement(self):
        """Test stepping the depth."""
        depth = Indent().increment().increment()
        assert depth == Indent(2)
        assert depth.decrement() == Indent(1)

    def test_decrement_below_zero_fails(self):
        """Test zero cannot be decremented."""
        with pytest.raises(AssertionError):
            Indent().decrement()

    def test_bounds(self):
        """Test depths outside 0..MAX_DEPTH are rejected."""
        assert Indent(MAX_DEPTH).at_max
        with pytest.raises(ValueError):
            Indent(MAX_DEPTH + 1)
        with pytest.raises(ValueError):
            Indent(-1)

    def test_arithmetic(self):
        """Test adding and subtracting levels."""
        assert Indent(3) + 1 == Indent(4)
        assert Indent(5) - Indent(2) == Indent(3)
        assert Indent(5) - 1 == Indent(4)

    def test_ordering(self):
        """Test depths compare by level."""
        assert Indent(1) < Indent(2)
        assert max(Indent(1), Indent(3)) == Indent(3)


class TestSplitLines:
    """Test newline-preserving line splitting."""

    def test_keeps_newlines(self):
        """Test each chunk keeps its newline."""
        assert list(split_lines("a\nb\n\nc")) == ["a\n", "b\n", "\n", "c"]

    def test_empty(self):
        """Test empty text has no chunks."""
        assert list(split_lines("")) == []

    def test_only_newline_is_a_boundary(self):
        """Test carriage returns and form feeds are not line breaks."""
        assert list(split_lines("a\rb\x0cc")) == ["a\rb\x0cc"]


class TestIndentDecorator:
    """Test indentation injection."""

    def test_no_indent_before_first_line(self):
        """Test the very first line is not indented."""
        sink = io.StringIO()
        out = IndentDecorator(sink)
        out.set(2)
        out.write("Bananas")
        assert sink.getvalue() == "Bananas"

    def test_newline_in_buf(self):
        """Test indentation after newlines embedded in written text."""
        sink = io.StringIO()
        out = IndentDecorator(sink)
        out.write("Bananas\n")
        out.set(2)
        out.write("Are good?\n\nYes.\n")
        assert sink.getvalue() == "Bananas\n        Are good?\n\n        Yes.\n"

    def test_indent_applied_lazily(self):
        """Test the depth at the time of the next write is used."""
        sink = io.StringIO()
        out = IndentDecorator(sink, unit="  ")
        out.set(1)
        out.write("a\n")
        out.set(3)
        out.write("b")
        assert sink.getvalue() == "a\n      b"

    def test_at_line_start(self):
        """Test line start tracking."""
        out = IndentDecorator(io.StringIO())
        assert not out.at_line_start
        out.write("a\n")
        assert out.at_line_start
        out.write("b")
        assert not out.at_line_start

    def test_blank_lines_stay_empty(self):
        """Test no trailing whitespace is written on empty lines."""
        sink = io.StringIO()
        out = IndentDecorator(sink)
        out.set(1)
        out.write("a\n")
        out.write("\n")
        out.write("\n")
        out.write("b")
        assert sink.getvalue() == "a\n\n\n    b"
