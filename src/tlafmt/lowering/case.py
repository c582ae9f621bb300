# =============================================================================
# tlafmt - TLA+ Specification Formatter
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2025 Michael Gardner, A Bit of Help, Inc.
# See LICENSE file in the project root.
# =============================================================================

"""CASE expression lowering: one arm per line, arms indented past `CASE`."""

from typing import TYPE_CHECKING

from ..syntax_tree import SyntaxNode
from ..token import Newline, Sym, Symbol

if TYPE_CHECKING:
    from .node import LoweringContext


def format_case(node: SyntaxNode, ctx: "LoweringContext") -> None:
    """Lower a `case` node.

    Every `[]` separator starts a new line. Arm positions are observed
    without emitting line breaks, so the breaks between arms come only from
    the separators.
    """
    from .node import dedent, format_node

    renderer = ctx.renderer
    empty_lines = ctx.empty_lines

    empty_lines.maybe_insert(node, renderer)
    renderer.indent_inc()
    renderer.push(Sym(Symbol.CASE))

    children = list(node.named_children)
    arms_indented = False

    for i, child in enumerate(children):
        if child.kind == "case_box":
            renderer.push(Newline())
            renderer.push(Sym(Symbol.CASE_BOX))
        elif child.kind in ("case_arm", "other_arm"):
            empty_lines.suppress(child)
            if i + 1 < len(children):
                empty_lines.suppress(children[i + 1])

            renderer.indent_inc()
            format_node(child, ctx)
            dedent(renderer)

            # Arms after the first are one level deeper than the CASE keyword.
            if not arms_indented:
                renderer.indent_inc()
                arms_indented = True
        else:
            format_node(child, ctx)

    if arms_indented:
        dedent(renderer)
    dedent(renderer)
