# =============================================================================
# tlafmt - TLA+ Specification Formatter
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2025 Michael Gardner, A Bit of Help, Inc.
# See LICENSE file in the project root.
# =============================================================================

"""
Public formatting entry points.

A single call lowers the whole tree, runs the comment alignment and
excessive indent passes, and renders once. Anticipated failures are
returned as Result/IOResult containers; anything else is a bug and
propagates.
"""

import difflib
import io
from pathlib import Path
from typing import List, Optional, TextIO

from returns.io import impure_safe
from returns.result import Result, safe

from .errors import (
    FormatEither,
    FormatIOEither,
    SinkError,
    StructuralFault,
    TlafmtError,
    nesting_too_deep,
)
from .lowering import lower_tree
from .options import FormatOptions
from .renderer import Renderer
from .syntax_tree import ParsedDocument, parse_tla_content

# Failures a format call can run into on valid or invalid input.
_FORMAT_FAULTS = (StructuralFault, RecursionError, OSError)


def _render(document: ParsedDocument, sink: TextIO, options: FormatOptions) -> None:
    renderer = Renderer(sink, options)
    lower_tree(document.root, renderer, options)
    renderer.flush()


def _render_to_string(document: ParsedDocument, options: FormatOptions) -> str:
    out = io.StringIO()
    _render(document, out, options)
    return out.getvalue()


def _to_format_error(exc: Exception) -> TlafmtError:
    """Map an exception raised while formatting to its error type."""
    if isinstance(exc, StructuralFault):
        return exc.error
    if isinstance(exc, RecursionError):
        return nesting_too_deep()
    return SinkError(message=f"Failed to write formatted output: {exc}", original_error=str(exc))


def format_document(
    document: ParsedDocument,
    sink: TextIO,
    options: Optional[FormatOptions] = None,
) -> FormatIOEither:
    """Format a parsed document, writing the output to `sink`.

    Args:
        document: Parsed TLA+ document
        sink: Text stream receiving the output; may hold partial output on failure
        options: Formatter options (defaults if None)

    Returns:
        IOResult[None, TlafmtError]: Success, StructuralError or SinkError
    """
    options = options or FormatOptions()
    return impure_safe(_FORMAT_FAULTS)(_render)(document, sink, options).alt(_to_format_error)


def format_text(
    text: str,
    options: Optional[FormatOptions] = None,
    path: Optional[Path] = None,
) -> FormatEither:
    """Parse and format `text` in memory.

    Args:
        text: TLA+ source text
        options: Formatter options (defaults if None)
        path: Optional source path for error context

    Returns:
        Result[str, TlafmtError]: Formatted text, ParseError or StructuralError
    """
    options = options or FormatOptions()

    def _format(document: ParsedDocument) -> FormatEither:
        return safe(_FORMAT_FAULTS)(_render_to_string)(document, options).alt(_to_format_error)

    return parse_tla_content(text, path).bind(_format)


def diff_lines(original: str, formatted: str) -> List[str]:
    """Line diff of two texts, ignoring surrounding whitespace.

    Lines are prefixed "- " (removed), "+ " (added) or "  " (unchanged).
    Returns an empty list when the texts match.
    """
    original = original.strip()
    formatted = formatted.strip()
    if original == formatted:
        return []

    return [
        line
        for line in difflib.ndiff(original.splitlines(), formatted.splitlines())
        if not line.startswith("? ")
    ]


def check_text(
    text: str,
    options: Optional[FormatOptions] = None,
    path: Optional[Path] = None,
) -> Result[List[str], TlafmtError]:
    """Format `text` and diff it against the input.

    Returns:
        Result[List[str], TlafmtError]: Diff lines (empty if already formatted)
    """
    return format_text(text, options, path).map(lambda formatted: diff_lines(text, formatted))


__all__ = [
    "check_text",
    "diff_lines",
    "format_document",
    "format_text",
]
