# =============================================================================
# tlafmt - TLA+ Specification Formatter
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2025 Michael Gardner, A Bit of Help, Inc.
# See LICENSE file in the project root.
# =============================================================================

"""tlafmt - a formatter for TLA+ specifications."""

__version__ = "0.1.0"

from .errors import (
    ConfigError,
    FileError,
    ParseError,
    SinkError,
    StructuralError,
    TlafmtError,
)
from .formatter import check_text, format_document, format_text
from .options import FormatOptions
from .syntax_tree import ParsedDocument, parse_tla_content

__all__ = [
    "__version__",
    "ConfigError",
    "FileError",
    "FormatOptions",
    "ParseError",
    "ParsedDocument",
    "SinkError",
    "StructuralError",
    "TlafmtError",
    "check_text",
    "format_document",
    "format_text",
    "parse_tla_content",
]
