# =============================================================================
# tlafmt - TLA+ Specification Formatter
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2025 Michael Gardner, A Bit of Help, Inc.
# See LICENSE file in the project root.
# =============================================================================

"""Lowering of syntax trees into formatter tokens."""

from ..empty_lines import EmptyLines
from ..options import FormatOptions
from ..renderer import Renderer
from ..syntax_tree import SyntaxNode
from .node import LoweringContext, format_node, into_output_token

__all__ = ["LoweringContext", "format_node", "into_output_token", "lower_tree"]


def lower_tree(root: SyntaxNode, renderer: Renderer, options: FormatOptions) -> None:
    """Lower the tree under `root` into `renderer`'s buffer.

    Raises:
        StructuralFault: If the tree has a shape that cannot be lowered
    """
    ctx = LoweringContext(
        renderer=renderer,
        empty_lines=EmptyLines(),
        diagnostics=options.diagnostics,
    )
    format_node(root, ctx)
