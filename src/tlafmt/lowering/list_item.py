# =============================================================================
# tlafmt - TLA+ Specification Formatter
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2025 Michael Gardner, A Bit of Help, Inc.
# See LICENSE file in the project root.
# =============================================================================

"""Conjunction and disjunction list item lowering."""

from typing import TYPE_CHECKING

from ..syntax_tree import SyntaxNode
from ..token import Newline, Sym, Symbol

if TYPE_CHECKING:
    from .node import LoweringContext


_BULLETS = {
    "bullet_conj": Symbol.AND,
    "bullet_disj": Symbol.OR,
}


def format_list_item(node: SyntaxNode, ctx: "LoweringContext") -> None:
    """Lower a list item onto its own line, its body indented past the bullet."""
    from .node import dedent, format_node

    renderer = ctx.renderer
    ctx.empty_lines.maybe_insert(node, renderer)
    renderer.push(Newline())

    indented = 0
    for child in node.named_children:
        bullet = _BULLETS.get(child.kind)
        if bullet is not None:
            renderer.push(Sym(bullet))
            renderer.indent_inc()
            indented += 1
        else:
            format_node(child, ctx)

    for _ in range(indented):
        dedent(renderer)
