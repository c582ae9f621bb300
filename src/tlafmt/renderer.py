# =============================================================================
# tlafmt - TLA+ Specification Formatter
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2025 Michael Gardner, A Bit of Help, Inc.
# See LICENSE file in the project root.
# =============================================================================

"""
Token buffer owner and final emission.

The lowering pass pushes every token together with the indentation depth
active at that moment. Flushing runs the two global passes over the
buffer, comment alignment first and excessive indent correction second,
then writes the result to the sink.
"""

import logging
from typing import List, Optional, TextIO

from .comment_alignment import align_comments
from .emitter import Entry, TokenBuffer, emit_tokens
from .errors import StructuralFault, nesting_too_deep
from .indent import Indent, IndentDecorator
from .indent_limit import limit_indents
from .options import FormatOptions
from .token import Token

logger = logging.getLogger(__name__)


class Renderer:
    """Collects (token, indent) pairs and renders them to a text sink."""

    def __init__(self, sink: TextIO, options: Optional[FormatOptions] = None):
        self._sink = sink
        self._options = options or FormatOptions()
        self._depth = Indent()
        self._buf: TokenBuffer = []

    @property
    def depth(self) -> Indent:
        """The indentation depth applied to the next pushed token."""
        return self._depth

    @property
    def buffer(self) -> List[Entry]:
        """A copy of the pending token buffer."""
        return list(self._buf)

    def indent_inc(self) -> None:
        """Increase the indentation depth.

        Raises:
            StructuralFault: If the depth limit is reached
        """
        if self._depth.at_max:
            raise StructuralFault(nesting_too_deep())
        self._depth = self._depth.increment()

    def indent_dec(self) -> None:
        """Decrease the indentation depth; the depth must be positive."""
        self._depth = self._depth.decrement()

    def indent_set(self, depth: Indent) -> None:
        self._depth = depth

    def push(self, token: Token) -> None:
        """Queue `token` at the current depth."""
        self._buf.append((token, self._depth))

    def flush(self) -> None:
        """Correct the buffer and write it to the sink, draining the buffer.

        Raises:
            OSError: If writing to the sink fails; output may be partial
        """
        buf, self._buf = self._buf, []
        logger.debug("rendering %d tokens", len(buf))

        align_comments(buf, self._options.indent_width, self._options.line_width)
        limit_indents(buf)

        out = IndentDecorator(self._sink, self._options.indent_unit)
        for _ in emit_tokens(buf, out, self._options.line_width):
            pass
