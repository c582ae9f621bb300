# =============================================================================
# tlafmt - TLA+ Specification Formatter
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2025 Michael Gardner, A Bit of Help, Inc.
# See LICENSE file in the project root.
# =============================================================================

"""Blank line preservation and squashing between consecutive syntax nodes."""

from typing import TYPE_CHECKING

from .syntax_tree import SyntaxNode
from .token import SourceNewline

if TYPE_CHECKING:
    from .renderer import Renderer


class EmptyLines:
    """Cursor over the source row at which the last observed node ended."""

    def __init__(self):
        self.last_row = 0

    def maybe_insert(self, node: SyntaxNode, renderer: "Renderer") -> int:
        """Emit line breaks separating `node` from the previously observed node.

        No break is emitted for a node on the same row, one for the next row,
        and two (a single empty line) for anything further away.

        Returns:
            int: Number of newline tokens pushed
        """
        existing = max(0, node.start_row - self.last_row)
        self.last_row = node.end_row

        count = min(existing, 2)
        for _ in range(count):
            renderer.push(SourceNewline())
        return count

    def suppress(self, node: SyntaxNode) -> None:
        """Observe `node` without emitting any line break."""
        self.last_row = node.end_row
