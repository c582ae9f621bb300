# =============================================================================
# tlafmt - TLA+ Specification Formatter
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2025 Michael Gardner, A Bit of Help, Inc.
# See LICENSE file in the project root.
# =============================================================================

"""
Excessive indentation correction.

Grammar nesting does not always match the desired visual nesting: a block
can start several levels deeper than the line that introduces it, without
any line at the levels in between. Such a block is shifted left so it sits
exactly one level deeper than its parent, recursively:

    LET n == Len(InitVals)
            gg == CHOOSE g:
                    \\E e \\in PosReal:
                        D[X |-> 42] = 0

becomes

    LET n == Len(InitVals)
        gg == CHOOSE g:
            \\E e \\in PosReal:
                D[X |-> 42] = 0

A block that looks excessive on its first line but later contains a line at
exactly one level deeper than its parent (a closing bracket, for example)
is left unchanged.

Only the depth of a token directly after a newline decides the indentation
of a line, so only those tokens are read or rewritten.
"""

from dataclasses import dataclass
from typing import Union

from .emitter import TokenBuffer
from .indent import Indent
from .token import is_newline


@dataclass(frozen=True)
class _Skipping:
    """Walking lines at the block's own depth."""


@dataclass(frozen=True)
class _ScanningMin:
    """A line more than one level deeper was found at `start`; track the
    shallowest line of the nested region."""
    start: int
    min: Indent


@dataclass(frozen=True)
class _Rewriting:
    """The region from `start` is confirmed excessive; shift it by `delta`."""
    start: int
    delta: int


_State = Union[_Skipping, _ScanningMin, _Rewriting]

_SKIPPING = _Skipping()


def limit_indents(buf: TokenBuffer) -> None:
    """Rewrite excessively indented blocks in `buf` in place."""
    _limit_block(buf, 0)


def _limit_block(buf: TokenBuffer, base: int) -> int:
    """Process the block starting at `buf[base]`.

    The block's depth is the depth of its first entry. Returns the number of
    entries visited, relative to `base`, so the caller can resume after them.
    """
    if base >= len(buf):
        return 0

    current = buf[base][1]
    # Plain ints: current + 1 may lie past the deepest representable Indent.
    nested = current.depth + 1
    state: _State = _SKIPPING
    last_was_newline = False

    i = 0
    size = len(buf) - base
    while i < size:
        token, this = buf[base + i]

        last = last_was_newline
        last_was_newline = is_newline(token)
        if not last:
            i += 1
            continue

        if isinstance(state, _Skipping):
            if this == current:
                pass
            elif this.depth == nested:
                i += _limit_block(buf, base + i)
                continue
            elif this.depth > nested:
                state = _ScanningMin(start=i, min=this)
            else:
                # The block ended.
                return i

        elif isinstance(state, _ScanningMin):
            if this <= current:
                # Every line of the nested region was deeper than current + 1.
                # Go back to its start and shift it.
                i = state.start
                last_was_newline = True
                state = _Rewriting(start=state.start, delta=(state.min - current).depth - 1)
                continue

            if state.min.depth == nested:
                # The nested region has a line at current + 1, so it is valid.
                start = state.start
                state = _SKIPPING
                i = start + _limit_block(buf, base + start)
                continue

            state = _ScanningMin(start=state.start, min=min(state.min, this))

        else:
            if this > current:
                buf[base + i] = (token, this - state.delta)
            else:
                # Correct any excessive indentation nested inside the region.
                start = state.start
                state = _SKIPPING
                i = start + _limit_block(buf, base + start)
                continue

        i += 1

    return i
