# =============================================================================
# tlafmt - TLA+ Specification Formatter
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2025 Michael Gardner, A Bit of Help, Inc.
# See LICENSE file in the project root.
# =============================================================================

"""
Comment lowering.

The grammar attaches comments to whichever node is open at that point,
which is not always the node the comment visually belongs to. The depth a
comment is pushed at is adjusted here:

- A comment starting at column 0 stays at column 0. Block comment
  continuation lines are always rendered flush left by the renderer, so a
  second formatting pass sees the same columns as the first.
- A comment opening an operator body is indented at least one level, where
  the body that follows it will be rendered.
- A comment trailing a conjunction/disjunction list (no list item follows
  it) renders one level shallower than the list items.
"""

from typing import TYPE_CHECKING

from ..indent import Indent
from ..syntax_tree import SyntaxNode
from ..token import Comment, Source
from .node import LIST_ITEM_KINDS, LIST_KINDS

if TYPE_CHECKING:
    from .node import LoweringContext


def format_comment(node: SyntaxNode, ctx: "LoweringContext") -> None:
    renderer = ctx.renderer
    entry_depth = renderer.depth

    token = Comment(node.text, Source(row=node.start_row, col=node.start_column))

    renderer.indent_set(_comment_depth(node, entry_depth))
    renderer.push(token)
    renderer.indent_set(entry_depth)


def _comment_depth(node: SyntaxNode, current: Indent) -> Indent:
    if node.start_column == 0:
        return Indent(0)

    parent = node.parent
    if parent is None:
        return current

    if parent.kind == "operator_definition":
        return max(Indent(1), current)

    if parent.kind in LIST_KINDS and _trails_list(node, parent):
        return Indent(max(current.depth - 1, 0))

    return current


def _trails_list(node: SyntaxNode, parent: SyntaxNode) -> bool:
    """True when no list item of `parent` starts after `node`."""
    position = (node.start_row, node.start_column)
    return not any(
        child.kind in LIST_ITEM_KINDS and (child.start_row, child.start_column) > position
        for child in parent.named_children
    )
