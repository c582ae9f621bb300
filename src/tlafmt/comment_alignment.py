# =============================================================================
# tlafmt - TLA+ Specification Formatter
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2025 Michael Gardner, A Bit of Help, Inc.
# See LICENSE file in the project root.
# =============================================================================

"""
Comment column alignment.

End-of-line comments written at the same column on consecutive lines are
kept vertically aligned after their lines are reformatted:

    Op == /\\ bananas = 42       \\* This is an important number.
          /\\ platanos' = 42     \\* That should be assigned here.

Each aligned comment has its Source position replaced with a Relative pad,
which the renderer expands to spaces. Comments stay at their original
column unless a reformatted line reaches it, in which case the whole run
moves right to one space past the longest line.
"""

import logging
from dataclasses import dataclass
from typing import List

from .emitter import TokenBuffer, emit_tokens
from .indent import IndentDecorator
from .indent_limit import limit_indents
from .options import INDENT_WIDTH, LINE_WIDTH
from .token import Comment, Relative, Source, is_newline

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Candidate:
    """An end-of-line comment eligible for alignment."""
    index: int          # buffer index
    line: int           # rendered output line
    column: int         # source column
    length: int         # rendered line width before the comment and its gap
    line_start: bool    # no code precedes the comment on its line


class _LineMeter:
    """Text sink tracking the current output line and column."""

    def __init__(self):
        self.line = 0
        self.column = 0

    def write(self, text: str) -> int:
        newlines = text.count("\n")
        if newlines:
            self.line += newlines
            self.column = len(text) - text.rfind("\n") - 1
        else:
            self.column += len(text)
        return len(text)


def align_comments(
    buf: TokenBuffer,
    indent_width: int = INDENT_WIDTH,
    line_width: int = LINE_WIDTH,
) -> None:
    """Replace the positions of vertically aligned end-of-line comments in place."""
    candidates = _find_candidates(buf, indent_width, line_width)

    run: List[_Candidate] = []
    for candidate in candidates:
        if run and not _continues(run[-1], candidate):
            _align_run(buf, run)
            run = []
        run.append(candidate)

    _align_run(buf, run)


def _continues(previous: _Candidate, candidate: _Candidate) -> bool:
    return candidate.line == previous.line + 1 and candidate.column == previous.column


def _find_candidates(buf: TokenBuffer, indent_width: int, line_width: int) -> List[_Candidate]:
    """Measure every single-line end-of-line comment in `buf`.

    Lines are measured at the depths the final render uses, after
    excessive indentation has been corrected.
    """
    settled = list(buf)
    limit_indents(settled)

    meter = _LineMeter()
    out = IndentDecorator(meter, " " * indent_width)

    candidates = []
    for index, token, gap in emit_tokens(settled, out, line_width):
        if not isinstance(token, Comment) or not isinstance(token.position, Source):
            continue
        if "\n" in token.text:
            continue
        if index + 1 >= len(buf) or not is_newline(buf[index + 1][0]):
            continue

        if out.at_line_start:
            length = settled[index][1].depth * indent_width
        else:
            length = meter.column - gap

        candidates.append(_Candidate(
            index=index,
            line=meter.line,
            column=token.position.col,
            length=length,
            line_start=out.at_line_start,
        ))

    return candidates


def _align_run(buf: TokenBuffer, run: List[_Candidate]) -> None:
    if len(run) < 2:
        return

    # No line break precedes the run, which happens when the document opens
    # with unparsed text; leave it alone.
    if run[0].line == 0:
        logger.debug("not aligning comment run without a preceding line break")
        return

    if all(c.line_start for c in run):
        # Nothing but comments: keep the first line where it is.
        new_col = run[0].length
    else:
        new_col = max(max(c.length for c in run) + 1, run[0].column)

    for candidate in run:
        comment, indent = buf[candidate.index]
        pad = max(new_col - candidate.length, 0)
        buf[candidate.index] = (Comment(comment.text, Relative(pad)), indent)
