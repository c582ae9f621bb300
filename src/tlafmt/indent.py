# =============================================================================
# tlafmt - TLA+ Specification Formatter
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2025 Michael Gardner, A Bit of Help, Inc.
# See LICENSE file in the project root.
# =============================================================================

"""Indentation depth and the indenting output decorator."""

from dataclasses import dataclass
from typing import Iterator, TextIO, Union


MAX_DEPTH = 255


@dataclass(frozen=True, order=True)
class Indent:
    """A bounded nesting depth, converted to text only when rendered."""
    depth: int = 0

    def __post_init__(self):
        if not 0 <= self.depth <= MAX_DEPTH:
            raise ValueError(f"indent depth out of range: {self.depth}")

    @property
    def at_max(self) -> bool:
        return self.depth == MAX_DEPTH

    def increment(self) -> "Indent":
        return Indent(self.depth + 1)

    def decrement(self) -> "Indent":
        assert self.depth > 0, "indent decremented below zero"
        return Indent(self.depth - 1)

    def __add__(self, other: int) -> "Indent":
        return Indent(self.depth + other)

    def __sub__(self, other: Union["Indent", int]) -> "Indent":
        if isinstance(other, Indent):
            other = other.depth
        return Indent(self.depth - other)


def split_lines(text: str) -> Iterator[str]:
    """Split `text` after every newline, keeping the newline characters.

    Unlike str.splitlines, only "\\n" is a line boundary.
    """
    start = 0
    while start < len(text):
        end = text.find("\n", start)
        if end == -1:
            yield text[start:]
            return
        yield text[start:end + 1]
        start = end + 1


class IndentDecorator:
    """Writes to a text sink, inserting indentation at the start of each line.

    Indentation is inserted before the first character written after any
    newline, including newlines embedded in the written text. Empty lines
    are left without indentation.
    """

    def __init__(self, sink: TextIO, unit: str = "    "):
        self._sink = sink
        self._unit = unit
        self._depth = 0
        self._at_line_start = False

    @property
    def at_line_start(self) -> bool:
        """True when the last character written was a newline."""
        return self._at_line_start

    def set(self, depth: int) -> None:
        """Set the depth used for subsequently started lines."""
        self._depth = depth

    def write(self, text: str) -> None:
        for chunk in split_lines(text):
            if self._at_line_start and chunk != "\n":
                self._sink.write(self._unit * self._depth)
            self._sink.write(chunk)
            self._at_line_start = chunk.endswith("\n")
