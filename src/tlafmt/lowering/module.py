# =============================================================================
# tlafmt - TLA+ Specification Formatter
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2025 Michael Gardner, A Bit of Help, Inc.
# See LICENSE file in the project root.
# =============================================================================

"""Module lowering, including normalisation of the module header line."""

from typing import TYPE_CHECKING, Sequence

from ..errors import StructuralFault, module_header_malformed
from ..syntax_tree import SyntaxNode
from ..token import ModuleHeader

if TYPE_CHECKING:
    from .node import LoweringContext


def format_module(node: SyntaxNode, ctx: "LoweringContext") -> None:
    """Lower a `module` node, the entry point into a TLA+ specification."""
    from .node import format_node

    children = list(node.named_children)
    i = 0
    while i < len(children):
        child = children[i]
        ctx.empty_lines.maybe_insert(child, ctx.renderer)

        if child.kind == "header_line":
            i = _format_module_header(children, i, ctx)
        else:
            format_node(child, ctx)
            i += 1


def _format_module_header(children: Sequence[SyntaxNode], start: int, ctx: "LoweringContext") -> int:
    """Consume the header_line, identifier, header_line triple at `start`.

    Returns:
        int: Index of the first child after the header

    Raises:
        StructuralFault: If the triple is incomplete
    """
    left = children[start]

    name = children[start + 1] if start + 1 < len(children) else None
    if name is None or name.kind != "identifier":
        raise StructuralFault(module_header_malformed(left.start_row, left.start_column))

    right = children[start + 2] if start + 2 < len(children) else None
    if right is None or right.kind != "header_line":
        raise StructuralFault(module_header_malformed(left.start_row, left.start_column))

    ctx.renderer.push(ModuleHeader(name.text.strip()))
    return start + 3
