# =============================================================================
# tlafmt - TLA+ Specification Formatter
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2025 Michael Gardner, A Bit of Help, Inc.
# See LICENSE file in the project root.
# =============================================================================

"""
Lowering of arbitrary syntax nodes into formatter tokens.

Nodes fall into a few classes:

- Leaf nodes with a direct token (keywords, operators, brackets,
  identifiers, numbers). Opening brackets indent what follows them and
  closing brackets undo it. Declaration keywords are pushed one level
  shallower than their body for a hanging indent.
- Composite nodes that indent their children, unless a node of the same
  class already started on the same source row (to avoid indenting twice
  for what renders as one line).
- Composite nodes that never indent their children.
- Nodes with dedicated lowering: modules, comments, CASE expressions,
  conjunction/disjunction list items, `[Next]_vars` sequences.
- Everything else, including ERROR nodes, is passed through verbatim.
"""

import logging
from dataclasses import dataclass
from typing import Dict, FrozenSet, Optional

from ..empty_lines import EmptyLines
from ..errors import StructuralFault, step_or_stutter_malformed
from ..renderer import Renderer
from ..syntax_tree import SyntaxNode
from ..token import Ident, LineDivider, Lit, Raw, StepOrStutter, Sym, Symbol, Token

logger = logging.getLogger(__name__)


@dataclass
class LoweringContext:
    """State of one lowering pass over a document."""
    renderer: Renderer
    empty_lines: EmptyLines
    diagnostics: bool = True


# =============================================================================
# Classification Tables
# =============================================================================

DIRECT_SYMBOLS: Dict[str, Symbol] = {
    "LET": Symbol.LET,
    "IN": Symbol.IN,
    "CHOOSE": Symbol.CHOOSE,
    "LOCAL": Symbol.LOCAL,
    "IF": Symbol.IF,
    "THEN": Symbol.THEN,
    "ELSE": Symbol.ELSE,
    "CASE": Symbol.CASE,
    "OTHER": Symbol.OTHER,
    "INSTANCE": Symbol.INSTANCE,
    "EXTENDS": Symbol.EXTENDS,
    "CONSTANT": Symbol.CONSTANT,
    "CONSTANTS": Symbol.CONSTANTS,
    "VARIABLE": Symbol.VARIABLE,
    "VARIABLES": Symbol.VARIABLES,
    "EXCEPT": Symbol.EXCEPT,
    "THEOREM": Symbol.THEOREM,
    "ASSUME": Symbol.ASSUME,
    "unchanged": Symbol.UNCHANGED,
    "powerset": Symbol.SUBSET,
    "domain": Symbol.DOMAIN,
    "enabled": Symbol.ENABLED,
    "union": Symbol.UNION,
    "implies": Symbol.IMPLIES,
    "compose": Symbol.COMPOSE,
    "TRUE": Symbol.TRUE,
    "FALSE": Symbol.FALSE,
    "exists": Symbol.EXISTS,
    "forall": Symbol.FORALL,
    "case_arrow": Symbol.CASE_ARROW,
    "in": Symbol.SET_IN,
    "set_in": Symbol.SET_IN,
    "notin": Symbol.SET_NOT_IN,
    "/\\": Symbol.AND,
    "land": Symbol.AND,
    "\\/": Symbol.OR,
    "lor": Symbol.OR,
    "lnot": Symbol.NOT,
    "eq": Symbol.EQ,
    "=": Symbol.EQ,
    "def_eq": Symbol.EQ2,
    "neq": Symbol.NOT_EQ,
    "prev_func_val": Symbol.AT,
    ":": Symbol.COLON,
    "!": Symbol.BANG,
    "(": Symbol.PAREN_OPEN,
    ")": Symbol.PAREN_CLOSE,
    ",": Symbol.COMMA,
    "[": Symbol.SQUARE_OPEN,
    "]": Symbol.SQUARE_CLOSE,
    "{": Symbol.CURLY_OPEN,
    "}": Symbol.CURLY_CLOSE,
    "plus": Symbol.PLUS,
    "minus": Symbol.MINUS,
    "mul": Symbol.MULTIPLY,
    "slash": Symbol.DIVIDE,
    "map_to": Symbol.MAP_TO,
    "maps_to": Symbol.MAPS_TO,
    "all_map_to": Symbol.ALL_MAP_TO,
    ".": Symbol.DOT,
    "dots_2": Symbol.DOTS_2,
    "langle_bracket": Symbol.ANGLE_OPEN,
    "rangle_bracket": Symbol.ANGLE_CLOSE,
    "circ": Symbol.APPEND_SHORT,
    "gt": Symbol.GREATER_THAN,
    "geq": Symbol.GREATER_THAN_EQUAL,
    "lt": Symbol.LESS_THAN,
    "leq": Symbol.LESS_THAN_EQUAL,
    "real_number_set": Symbol.REAL,
    "int_number_set": Symbol.INT,
    "nat_number_set": Symbol.NAT,
    "setminus": Symbol.SET_MINUS,
    "prime": Symbol.PRIME,
    "[]": Symbol.ALWAYS,
    "<>": Symbol.EVENTUALLY,
    "cup": Symbol.SET_UNION,
    "cap": Symbol.SET_INTERSECT,
    "subseteq": Symbol.SUBSET_EQ,
    "WF_": Symbol.WEAK_FAIRNESS,
    "SF_": Symbol.STRONG_FAIRNESS,
}

IDENT_KINDS: FrozenSet[str] = frozenset({"identifier", "identifier_ref"})

LITERAL_KINDS: FrozenSet[str] = frozenset({"nat_number", "real_number", "string"})

DIVIDER_CHARS: Dict[str, str] = {"single_line": "-", "double_line": "="}

# Pushed one level shallower than their body.
DEDENT_SYMBOLS: FrozenSet[Symbol] = frozenset({
    Symbol.EXCEPT, Symbol.VARIABLE, Symbol.VARIABLES,
    Symbol.CONSTANT, Symbol.CONSTANTS, Symbol.EXTENDS,
})

OPEN_SYMBOLS: FrozenSet[Symbol] = frozenset({
    Symbol.PAREN_OPEN, Symbol.CURLY_OPEN, Symbol.ANGLE_OPEN, Symbol.SQUARE_OPEN,
})

CLOSE_SYMBOLS: FrozenSet[Symbol] = frozenset({
    Symbol.PAREN_CLOSE, Symbol.CURLY_CLOSE, Symbol.ANGLE_CLOSE, Symbol.SQUARE_CLOSE,
})

COMMENT_KINDS: FrozenSet[str] = frozenset({"comment", "block_comment", "extramodular_text"})

LIST_ITEM_KINDS: FrozenSet[str] = frozenset({"conj_item", "disj_item"})

LIST_KINDS: FrozenSet[str] = frozenset({"conj_list", "disj_list"})

# Always indent their children.
ALWAYS_INDENT: FrozenSet[str] = frozenset({"disj_list", "conj_list", "let_in"})

# Indent their children unless an ancestor of this class starts on the same
# row. List items and let_in never reach the indent decision themselves and
# are here only to suppress the indentation of nodes nested in them.
MAY_INDENT: FrozenSet[str] = frozenset({
    "disj_item",
    "conj_item",
    "let_in",
    "bound_infix_op",
    "bound_op",
    "except",
    "extends",
    "choose",
    "record_literal",
    "constant_declaration",
    "variable_declaration",
    "bounded_quantification",
    "quantifier_bound",
    "function_definition",
    "function_literal",
    "if_then_else",
    "finite_set_literal",
    "operator_definition",
    "set_of_functions",
    "set_of_records",
    "set_map",
})

NEVER_INDENT: FrozenSet[str] = frozenset({
    "source_file",
    "case_arm",
    "other_arm",
    "case_box",
    "function_evaluation",
    "except_update_record_field",
    "except_update_specifier",
    "except_update_fn_appl",
    "except_update",
    "record_value",
    "always",
    "eventually",
    "boolean",
    "fairness",
    "bound_postfix_op",
    "bullet_conj",
    "bullet_disj",
    "bound_prefix_op",
    "tuple_literal",
    "parentheses",
    "local_definition",
    "set_filter",
    "subexpr_component",
    "infix_op_symbol",
    "instance",
    "domain",
    "theorem",
    "assumption",
})

# Definitions directly inside these are top level and not indented.
TOP_LEVEL_PARENTS: FrozenSet[str] = frozenset({"module", "local_definition"})


# =============================================================================
# Lowering
# =============================================================================

def into_output_token(node: SyntaxNode) -> Optional[Token]:
    """Return the token `node` maps to one-to-one, if any."""
    kind = node.kind
    symbol = DIRECT_SYMBOLS.get(kind)
    if symbol is not None:
        return Sym(symbol)
    if kind in IDENT_KINDS:
        return Ident(node.text)
    if kind in LITERAL_KINDS:
        return Lit(node.text)
    if kind in DIVIDER_CHARS:
        return LineDivider(DIVIDER_CHARS[kind])
    return None


def format_node(node: SyntaxNode, ctx: LoweringContext) -> None:
    """Lower `node` and its descendants into tokens pushed to the renderer.

    Composite nodes leave the indentation depth as they found it. A node
    that does not (which only happens for unbalanced brackets in damaged
    trees) is logged and the depth is restored.

    Raises:
        StructuralFault: If the tree has a shape that cannot be lowered
    """
    renderer = ctx.renderer
    ctx.empty_lines.maybe_insert(node, renderer)

    token = into_output_token(node)
    if token is not None:
        _push_direct(token, renderer)
        return

    entry_depth = renderer.depth
    _format_composite(node, ctx)

    if renderer.depth != entry_depth:
        logger.debug(
            "unbalanced indentation after %r (%d -> %d), restoring",
            node, entry_depth.depth, renderer.depth.depth,
        )
        renderer.indent_set(entry_depth)


def _push_direct(token: Token, renderer: Renderer) -> None:
    # An empty identifier (a recovered, missing node) adds stray spacing.
    if isinstance(token, Ident) and not token.text:
        return

    symbol = token.symbol if isinstance(token, Sym) else None

    if symbol in DEDENT_SYMBOLS and renderer.depth.depth > 0:
        renderer.indent_dec()
        renderer.push(token)
        renderer.indent_inc()
    elif symbol in OPEN_SYMBOLS:
        renderer.push(token)
        renderer.indent_inc()
    elif symbol in CLOSE_SYMBOLS:
        dedent(renderer)
        renderer.push(token)
    else:
        renderer.push(token)


def _format_composite(node: SyntaxNode, ctx: LoweringContext) -> None:
    # Imported here: these modules lower their children through format_node.
    from .case import format_case
    from .comment import format_comment
    from .list_item import format_list_item
    from .module import format_module

    kind = node.kind

    if kind == "module":
        format_module(node, ctx)
        return
    if kind in COMMENT_KINDS:
        format_comment(node, ctx)
        return
    if kind == "case":
        format_case(node, ctx)
        return
    if kind == "]_":
        # Emitted as part of the enclosing step_expr_or_stutter.
        return
    if kind == "step_expr_or_stutter":
        _format_step_or_stutter(node, ctx)
        return
    if kind in LIST_ITEM_KINDS:
        format_list_item(node, ctx)
        return

    if kind in ALWAYS_INDENT:
        skip_indent = False
    elif kind == "operator_definition" and _is_top_level(node):
        skip_indent = True
    elif kind in MAY_INDENT:
        skip_indent = _indented_on_same_row(node)
    elif kind in NEVER_INDENT:
        skip_indent = True
    else:
        _format_passthrough(node, ctx)
        return

    renderer = ctx.renderer
    for child in node.children:
        ctx.empty_lines.maybe_insert(child, renderer)

        if not skip_indent:
            renderer.indent_inc()

        format_node(child, ctx)

        if not skip_indent:
            dedent(renderer)


def dedent(renderer: Renderer) -> None:
    """Decrement the depth, stopping at zero."""
    if renderer.depth.depth > 0:
        renderer.indent_dec()


def _is_top_level(node: SyntaxNode) -> bool:
    parent = node.parent
    return parent is not None and parent.kind in TOP_LEVEL_PARENTS


def _indented_on_same_row(node: SyntaxNode) -> bool:
    """True when an ancestor starting on the same row already indents."""
    parent = node.parent
    while parent is not None and parent.start_row == node.start_row:
        if parent.kind in MAY_INDENT:
            return True
        parent = parent.parent
    return False


def _format_step_or_stutter(node: SyntaxNode, ctx: LoweringContext) -> None:
    """Lower `[Next]_vars`: the action as one token, then the variables."""
    action = node.named_child(0)
    if action is None:
        raise StructuralFault(step_or_stutter_malformed(node.start_row, node.start_column))

    ctx.renderer.push(StepOrStutter(action.text))

    variables = node.named_child(1)
    if variables is None:
        raise StructuralFault(step_or_stutter_malformed(node.start_row, node.start_column))

    format_node(variables, ctx)


def _format_passthrough(node: SyntaxNode, ctx: LoweringContext) -> None:
    text = node.text
    if ctx.diagnostics:
        if node.kind == "ERROR":
            logger.error("syntax parsing error for %r => '%s'", node, text)
        else:
            logger.warning("unformatted node %r => '%s'", node, text)
    ctx.renderer.push(Raw(text))
