# =============================================================================
# tlafmt - TLA+ Specification Formatter
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2025 Michael Gardner, A Bit of Help, Inc.
# See LICENSE file in the project root.
# =============================================================================

"""
Output tokens produced by the lowering pass.

A token is one of a closed set of frozen dataclasses. Keywords, operators
and brackets share the `Sym` token, parameterised by a `Symbol`. Everything
the renderer needs to know about a token pair (whether the first may be
emitted at all, and how many spaces separate them) is answered here, so
the renderer and the comment alignment pass agree on line lengths.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Dict, FrozenSet, Optional, Union

from .options import LINE_WIDTH


class Symbol(Enum):
    """Fixed-text keywords, operators and brackets."""

    # Keywords
    CHOOSE = auto()
    LET = auto()
    IN = auto()
    UNCHANGED = auto()
    LOCAL = auto()
    INSTANCE = auto()
    DOMAIN = auto()
    SUBSET = auto()
    UNION = auto()
    IF = auto()
    THEN = auto()
    ELSE = auto()
    CASE = auto()
    OTHER = auto()
    EXTENDS = auto()
    CONSTANT = auto()
    CONSTANTS = auto()
    VARIABLE = auto()
    VARIABLES = auto()
    EXCEPT = auto()
    ENABLED = auto()
    THEOREM = auto()
    ASSUME = auto()

    # Logic
    EXISTS = auto()
    FORALL = auto()
    SET_IN = auto()
    SET_NOT_IN = auto()
    AND = auto()
    OR = auto()
    NOT = auto()
    IMPLIES = auto()
    TRUE = auto()
    FALSE = auto()

    # Mappings
    MAPS_TO = auto()
    MAP_TO = auto()
    ALL_MAP_TO = auto()
    COMPOSE = auto()

    # Brackets and punctuation
    PAREN_OPEN = auto()
    PAREN_CLOSE = auto()
    SQUARE_OPEN = auto()
    SQUARE_CLOSE = auto()
    CURLY_OPEN = auto()
    CURLY_CLOSE = auto()
    ANGLE_OPEN = auto()
    ANGLE_CLOSE = auto()
    COMMA = auto()
    COLON = auto()
    DOT = auto()
    DOTS_2 = auto()
    AT = auto()
    BANG = auto()
    PRIME = auto()

    # Arithmetic and comparison
    PLUS = auto()
    MINUS = auto()
    MULTIPLY = auto()
    DIVIDE = auto()
    EQ = auto()
    EQ2 = auto()
    NOT_EQ = auto()
    LESS_THAN = auto()
    LESS_THAN_EQUAL = auto()
    GREATER_THAN = auto()
    GREATER_THAN_EQUAL = auto()

    # Sets and sequences
    SET_MINUS = auto()
    SUBSET_EQ = auto()
    SET_UNION = auto()
    SET_INTERSECT = auto()
    APPEND_SHORT = auto()
    INT = auto()
    NAT = auto()
    REAL = auto()

    # Temporal
    ALWAYS = auto()
    EVENTUALLY = auto()
    WEAK_FAIRNESS = auto()
    STRONG_FAIRNESS = auto()

    # CASE
    CASE_BOX = auto()
    CASE_ARROW = auto()

    @property
    def text(self) -> str:
        """The rendered text of this symbol."""
        return _SYMBOL_TEXT[self]


_SYMBOL_TEXT: Dict[Symbol, str] = {
    Symbol.CHOOSE: "CHOOSE",
    Symbol.LET: "LET",
    Symbol.IN: "IN",
    Symbol.UNCHANGED: "UNCHANGED",
    Symbol.LOCAL: "LOCAL",
    Symbol.INSTANCE: "INSTANCE",
    Symbol.DOMAIN: "DOMAIN",
    Symbol.SUBSET: "SUBSET",
    Symbol.UNION: "UNION",
    Symbol.IF: "IF",
    Symbol.THEN: "THEN",
    Symbol.ELSE: "ELSE",
    Symbol.CASE: "CASE",
    Symbol.OTHER: "OTHER",
    Symbol.EXTENDS: "EXTENDS",
    Symbol.CONSTANT: "CONSTANT",
    Symbol.CONSTANTS: "CONSTANTS",
    Symbol.VARIABLE: "VARIABLE",
    Symbol.VARIABLES: "VARIABLES",
    Symbol.EXCEPT: "EXCEPT",
    Symbol.ENABLED: "ENABLED",
    Symbol.THEOREM: "THEOREM",
    Symbol.ASSUME: "ASSUME",
    Symbol.EXISTS: r"\E",
    Symbol.FORALL: r"\A",
    Symbol.SET_IN: r"\in",
    Symbol.SET_NOT_IN: r"\notin",
    Symbol.AND: "/\\",
    Symbol.OR: "\\/",
    Symbol.NOT: "~",
    Symbol.IMPLIES: "=>",
    Symbol.TRUE: "TRUE",
    Symbol.FALSE: "FALSE",
    Symbol.MAPS_TO: "->",
    Symbol.MAP_TO: ":>",
    Symbol.ALL_MAP_TO: "|->",
    Symbol.COMPOSE: "@@",
    Symbol.PAREN_OPEN: "(",
    Symbol.PAREN_CLOSE: ")",
    Symbol.SQUARE_OPEN: "[",
    Symbol.SQUARE_CLOSE: "]",
    Symbol.CURLY_OPEN: "{",
    Symbol.CURLY_CLOSE: "}",
    Symbol.ANGLE_OPEN: "<<",
    Symbol.ANGLE_CLOSE: ">>",
    Symbol.COMMA: ",",
    Symbol.COLON: ":",
    Symbol.DOT: ".",
    Symbol.DOTS_2: "..",
    Symbol.AT: "@",
    Symbol.BANG: "!",
    Symbol.PRIME: "'",
    Symbol.PLUS: "+",
    Symbol.MINUS: "-",
    Symbol.MULTIPLY: "*",
    Symbol.DIVIDE: "/",
    Symbol.EQ: "=",
    Symbol.EQ2: "==",
    Symbol.NOT_EQ: "/=",
    Symbol.LESS_THAN: "<",
    Symbol.LESS_THAN_EQUAL: "<=",
    Symbol.GREATER_THAN: ">",
    Symbol.GREATER_THAN_EQUAL: ">=",
    Symbol.SET_MINUS: "\\",
    Symbol.SUBSET_EQ: r"\subseteq",
    Symbol.SET_UNION: r"\union",
    Symbol.SET_INTERSECT: r"\intersect",
    Symbol.APPEND_SHORT: r"\o",
    Symbol.INT: "Int",
    Symbol.NAT: "Nat",
    Symbol.REAL: "Real",
    Symbol.ALWAYS: "[]",
    Symbol.EVENTUALLY: "<>",
    Symbol.WEAK_FAIRNESS: "WF_",
    Symbol.STRONG_FAIRNESS: "SF_",
    Symbol.CASE_BOX: "[]",
    Symbol.CASE_ARROW: "->",
}


# =============================================================================
# Comment Positions
# =============================================================================

@dataclass(frozen=True)
class Source:
    """Comment position as authored (0-based row, character column)."""
    row: int
    col: int


@dataclass(frozen=True)
class Relative:
    """Number of spaces to write before a realigned comment."""
    pad: int


Position = Union[Source, Relative]


# =============================================================================
# Tokens
# =============================================================================

@dataclass(frozen=True)
class SourceNewline:
    """A line break present in the input."""


@dataclass(frozen=True)
class Newline:
    """A line break inserted by the formatter; dropped after another newline."""


@dataclass(frozen=True)
class Sym:
    """A keyword, operator or bracket."""
    symbol: Symbol


@dataclass(frozen=True)
class Ident:
    text: str


@dataclass(frozen=True)
class Lit:
    """A number or string literal."""
    text: str


@dataclass(frozen=True)
class Raw:
    """Verbatim source text for nodes that are not formatted (may span lines)."""
    text: str


@dataclass(frozen=True)
class ModuleHeader:
    """A `---- MODULE name ----` line, centred at render time."""
    name: str


@dataclass(frozen=True)
class LineDivider:
    """A full-width line of one repeated character."""
    char: str


@dataclass(frozen=True)
class StepOrStutter:
    """The `[ident]_` part of a `[Next]_vars` expression."""
    ident: str


@dataclass(frozen=True)
class Comment:
    """A line or block comment; block comment text may span lines."""
    text: str
    position: Position


Token = Union[
    SourceNewline, Newline, Sym, Ident, Lit, Raw,
    ModuleHeader, LineDivider, StepOrStutter, Comment,
]


def sym(symbol: Symbol) -> Sym:
    """Shorthand for a symbol token."""
    return Sym(symbol)


def is_newline(token: Token) -> bool:
    return isinstance(token, (SourceNewline, Newline))


def _symbol_of(token: Optional[Token]) -> Optional[Symbol]:
    if isinstance(token, Sym):
        return token.symbol
    return None


# =============================================================================
# Rendered Text and Width
# =============================================================================

_MODULE = " MODULE "


def render_module_header(name: str, line_width: int = LINE_WIDTH) -> str:
    """Render a module header line centring `name` within `line_width`.

    When the dashes cannot be split evenly the right-hand run gets the
    extra dash. Names too long to fit get a single dash on each side.
    """
    remaining = line_width - len(name) - len(_MODULE) - 1
    dashes = remaining // 2 if remaining >= 0 else 1

    right_extra = 0
    if dashes * 2 + len(_MODULE) + 1 + len(name) == line_width - 1:
        right_extra = 1

    return f"{'-' * dashes}{_MODULE}{name} {'-' * (dashes + right_extra)}"


def token_text(token: Token, line_width: int = LINE_WIDTH) -> str:
    """The text written for `token`, exclusive of surrounding whitespace."""
    if isinstance(token, Sym):
        return token.symbol.text
    if isinstance(token, (Ident, Lit, Raw, Comment)):
        return token.text
    if isinstance(token, (SourceNewline, Newline)):
        return "\n"
    if isinstance(token, ModuleHeader):
        return render_module_header(token.name, line_width)
    if isinstance(token, LineDivider):
        return token.char * line_width
    if isinstance(token, StepOrStutter):
        return f"[{token.ident}]_"
    raise TypeError(f"not a token: {token!r}")


def token_len(token: Token, line_width: int = LINE_WIDTH) -> int:
    """The rendered width of `token`; newlines have no width."""
    if isinstance(token, Sym):
        return len(token.symbol.text)
    if isinstance(token, (Ident, Lit, Raw, Comment)):
        return len(token.text)
    if isinstance(token, (SourceNewline, Newline)):
        return 0
    if isinstance(token, ModuleHeader):
        return len(render_module_header(token.name, line_width))
    if isinstance(token, LineDivider):
        return line_width
    if isinstance(token, StepOrStutter):
        return len(token.ident) + 3
    raise TypeError(f"not a token: {token!r}")


# =============================================================================
# Adjacency and Spacing Rules
# =============================================================================

def can_precede(token: Token, following: Token) -> bool:
    """Return False when `token` must be dropped because of `following`.

    A trailing comma before a closing parenthesis is removed.
    """
    return not (
        _symbol_of(token) is Symbol.COMMA
        and _symbol_of(following) is Symbol.PAREN_CLOSE
    )


# Never followed by a space, whatever comes next.
_NO_SPACE_AFTER: FrozenSet[Symbol] = frozenset({
    Symbol.PAREN_OPEN, Symbol.SQUARE_OPEN, Symbol.CURLY_OPEN, Symbol.DOTS_2,
})

# Never preceded by a space, whatever comes before.
_NO_SPACE_BEFORE: FrozenSet[Symbol] = frozenset({
    Symbol.PAREN_OPEN, Symbol.PAREN_CLOSE, Symbol.SQUARE_CLOSE, Symbol.CURLY_CLOSE,
    Symbol.COMMA, Symbol.DOTS_2, Symbol.COLON, Symbol.PRIME,
})

_CLOSERS_BEFORE_DOT: FrozenSet[Symbol] = frozenset({
    Symbol.PAREN_CLOSE, Symbol.SQUARE_CLOSE, Symbol.ANGLE_CLOSE,
})

_COMPARISONS: FrozenSet[Symbol] = frozenset({
    Symbol.GREATER_THAN, Symbol.GREATER_THAN_EQUAL,
    Symbol.LESS_THAN, Symbol.LESS_THAN_EQUAL, Symbol.COMPOSE,
})

_EQUALITIES: FrozenSet[Symbol] = frozenset({Symbol.EQ, Symbol.NOT_EQ, Symbol.EQ2})

_EQUALITY_OPENERS: FrozenSet[Symbol] = frozenset({
    Symbol.PAREN_OPEN, Symbol.SQUARE_OPEN, Symbol.ANGLE_OPEN,
})

_TEMPORAL: FrozenSet[Symbol] = frozenset({Symbol.ALWAYS, Symbol.EVENTUALLY})

_FAIRNESS: FrozenSet[Symbol] = frozenset({Symbol.WEAK_FAIRNESS, Symbol.STRONG_FAIRNESS})


def delimiting_space_len(token: Token, following: Token) -> int:
    """Number of spaces to write between `token` and `following`."""
    if isinstance(following, ModuleHeader):
        return 0

    if is_newline(token) or is_newline(following):
        return 0

    # The line break inside the raw text already separates the two.
    if isinstance(token, Raw) and token.text.endswith("\n"):
        return 0

    if isinstance(following, Comment) and isinstance(following.position, Relative):
        return following.position.pad

    if isinstance(token, Raw) or isinstance(following, Raw):
        return 1

    left = _symbol_of(token)
    right = _symbol_of(following)

    if left in _NO_SPACE_AFTER:
        return 0

    # Function application `f[x]` and chained application `f[x][y]`
    if right is Symbol.SQUARE_OPEN and (isinstance(token, Ident) or left is Symbol.SQUARE_CLOSE):
        return 0

    # Empty sequence `<<>>`
    if left is Symbol.ANGLE_OPEN and right is Symbol.ANGLE_CLOSE:
        return 0

    # Record field access `r.field`, `f(x).field`
    if right is Symbol.DOT and (isinstance(token, Ident) or left in _CLOSERS_BEFORE_DOT):
        return 0
    if left is Symbol.DOT and isinstance(following, Ident):
        return 0

    # `EXCEPT !.field` and `EXCEPT ![x]`
    if left is Symbol.BANG and right in (Symbol.DOT, Symbol.SQUARE_OPEN):
        return 0

    if left in _COMPARISONS and right is Symbol.PAREN_OPEN:
        return 1

    if left is Symbol.NOT:
        return 0

    # `<>[]P` and `[][Next]_vars`
    if left in _TEMPORAL and (right in _TEMPORAL or isinstance(following, StepOrStutter)):
        return 0

    # `WF_vars`, `[Next]_vars`
    if left in _FAIRNESS or isinstance(token, StepOrStutter):
        return 0

    if left in _EQUALITIES and right in _EQUALITY_OPENERS:
        return 1

    if right in _NO_SPACE_BEFORE:
        return 0

    return 1
