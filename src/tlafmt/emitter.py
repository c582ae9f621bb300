# =============================================================================
# tlafmt - TLA+ Specification Formatter
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2025 Michael Gardner, A Bit of Help, Inc.
# See LICENSE file in the project root.
# =============================================================================

"""
Token buffer emission.

The renderer and the comment alignment pass both walk the token buffer
through `emit_tokens`, so the line lengths measured during alignment are
the lengths the renderer later writes.
"""

from typing import Iterator, List, Optional, Tuple

from .indent import Indent, IndentDecorator
from .options import LINE_WIDTH
from .token import (
    Comment,
    Newline,
    Relative,
    Token,
    can_precede,
    delimiting_space_len,
    is_newline,
    token_len,
    token_text,
)


Entry = Tuple[Token, Indent]
TokenBuffer = List[Entry]


def rendered_tokens(buf: TokenBuffer) -> Iterator[Tuple[int, Token, Indent, Optional[Token]]]:
    """Yield the buffer entries that are written, in order.

    Each item is (buffer index, token, indent, following token) where the
    following token is the next buffer entry, rendered or not.

    A token that cannot precede the following token is skipped, as is a
    formatter newline immediately after another newline.
    """
    last_was_newline = False
    for index, (token, indent) in enumerate(buf):
        following = buf[index + 1][0] if index + 1 < len(buf) else None

        if following is not None and not can_precede(token, following):
            continue

        if isinstance(token, Newline) and last_was_newline:
            continue

        yield index, token, indent, following
        last_was_newline = is_newline(token)


def emit_tokens(
    buf: TokenBuffer,
    out: IndentDecorator,
    line_width: int = LINE_WIDTH,
) -> Iterator[Tuple[int, Token, int]]:
    """Write the buffer to `out`, yielding before each token is written.

    Each item is (buffer index, token, gap), where gap is the number of
    spaces already written after the previous token. Consumers that only
    want the output exhaust the iterator.
    """
    gap = 0
    for index, token, indent, following in rendered_tokens(buf):
        out.set(indent.depth)
        yield index, token, gap

        if isinstance(token, Comment):
            _write_comment(out, token, indent)
        else:
            text = token_text(token, line_width)
            assert is_newline(token) or len(text) == token_len(token, line_width), text
            out.write(text)

        gap = delimiting_space_len(token, following) if following is not None else 0
        out.write(" " * gap)


def _write_comment(out: IndentDecorator, comment: Comment, indent: Indent) -> None:
    # A realigned comment opening a line is padded after the indentation.
    if isinstance(comment.position, Relative) and out.at_line_start:
        out.write(" " * comment.position.pad)

    first, *rest = comment.text.split("\n")
    out.write(first)

    # Continuation lines of a block comment are written flush left, otherwise
    # every formatting pass would indent them further.
    out.set(0)
    for line in rest:
        out.write("\n")
        out.write(line)
    out.set(indent.depth)
