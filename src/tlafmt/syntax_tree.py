# =============================================================================
# tlafmt - TLA+ Specification Formatter
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2025 Michael Gardner, A Bit of Help, Inc.
# See LICENSE file in the project root.
# =============================================================================

"""
Parser wrapper for the tree-sitter TLA+ grammar.

This module provides a functional interface to the tree-sitter parser,
using Result types for error handling, and exposes parsed trees through
the read-only SyntaxNode protocol consumed by the lowering pass. The
lowering pass never sees tree-sitter types directly.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Optional, Protocol, Sequence

from returns.result import Failure, Result, Success, safe

from .errors import ParseError


class SyntaxNode(Protocol):
    """Read-only view of one node of a parsed document.

    Rows and columns are 0-based. Columns count characters, not bytes.
    """

    @property
    def kind(self) -> str: ...

    @property
    def text(self) -> str: ...

    @property
    def start_row(self) -> int: ...

    @property
    def start_column(self) -> int: ...

    @property
    def end_row(self) -> int: ...

    @property
    def parent(self) -> Optional["SyntaxNode"]: ...

    @property
    def children(self) -> Sequence["SyntaxNode"]: ...

    @property
    def named_children(self) -> Sequence["SyntaxNode"]: ...

    def named_child(self, index: int) -> Optional["SyntaxNode"]: ...


class TreeSitterNode:
    """SyntaxNode adapter over a tree-sitter node and its source bytes."""

    __slots__ = ("_node", "_source")

    def __init__(self, node: Any, source: bytes):
        self._node = node
        self._source = source

    def _wrap(self, node: Any) -> Optional["TreeSitterNode"]:
        if node is None:
            return None
        return TreeSitterNode(node, self._source)

    @property
    def kind(self) -> str:
        return self._node.type

    @property
    def text(self) -> str:
        return self._source[self._node.start_byte:self._node.end_byte].decode("utf-8", errors="replace")

    @property
    def start_row(self) -> int:
        return self._node.start_point[0]

    @property
    def start_column(self) -> int:
        start = self._node.start_byte
        line_start = self._source.rfind(b"\n", 0, start) + 1
        return len(self._source[line_start:start].decode("utf-8", errors="replace"))

    @property
    def end_row(self) -> int:
        return self._node.end_point[0]

    @property
    def parent(self) -> Optional["TreeSitterNode"]:
        return self._wrap(self._node.parent)

    @property
    def children(self) -> List["TreeSitterNode"]:
        return [TreeSitterNode(c, self._source) for c in self._node.children]

    @property
    def named_children(self) -> List["TreeSitterNode"]:
        return [TreeSitterNode(c, self._source) for c in self._node.named_children]

    def named_child(self, index: int) -> Optional["TreeSitterNode"]:
        return self._wrap(self._node.named_child(index))

    def __repr__(self) -> str:
        return f"{self.kind}@{self.start_row}:{self.start_column}"


@dataclass(frozen=True)
class ParsedDocument:
    """Result of successfully parsing TLA+ source text.

    Attributes:
        tree: The tree-sitter tree
        source: UTF-8 encoding of `content`, which node byte ranges index
        content: Original content string
        path: Path to the source file (if parsed from file)
    """
    tree: Any
    source: bytes
    content: str
    path: Optional[Path] = None

    @property
    def root(self) -> TreeSitterNode:
        """The root node of the document."""
        return TreeSitterNode(self.tree.root_node, self.source)

    @property
    def has_errors(self) -> bool:
        """Check if the tree contains ERROR or MISSING nodes."""
        return bool(self.tree.root_node.has_error)


class TlaParserWrapper:
    """Wrapper around the tree-sitter TLA+ parser with functional error handling.

    The grammar is loaded lazily so that constructing a wrapper never fails;
    a missing grammar is reported as a ParseError on first use.
    """

    def __init__(self):
        self._parser: Any = None

    def _ensure_initialized(self) -> Result[None, ParseError]:
        """Ensure the tree-sitter parser is initialized.

        Returns:
            Result[None, ParseError]: Success or initialization error
        """
        if self._parser is not None:
            return Success(None)

        try:
            import tree_sitter_tlaplus
            from tree_sitter import Language, Parser

            self._parser = Parser(Language(tree_sitter_tlaplus.language()))
            return Success(None)

        except ImportError as e:
            return Failure(ParseError(
                message=f"TLA+ grammar not available: {e}. Install tree-sitter-tlaplus."
            ))

    @safe((ValueError, RuntimeError))
    def _parse_source_internal(self, source: bytes) -> Any:
        """Run the parser over `source`.

        Note:
            @safe converts the listed exceptions to Result[Any, Exception]
        """
        return self._parser.parse(source)

    def parse_content(self, content: str, path: Optional[Path] = None) -> Result[ParsedDocument, ParseError]:
        """Parse TLA+ source content.

        A tree containing ERROR nodes is still a successful parse; only a
        failure to produce any tree is an error.

        Args:
            content: TLA+ source text to parse
            path: Optional path for error context

        Returns:
            Result[ParsedDocument, ParseError]: Parsed document or error
        """
        init_result = self._ensure_initialized()
        if isinstance(init_result, Failure):
            return init_result

        try:
            source = content.encode("utf-8")
        except UnicodeEncodeError as e:
            return Failure(ParseError(message=f"Input is not encodable as UTF-8: {e}", path=path))

        parse_result = self._parse_source_internal(source)
        if isinstance(parse_result, Failure):
            return Failure(ParseError(message=f"Unknown parser error: {parse_result.failure()}", path=path))

        tree = parse_result.unwrap()
        if tree is None:
            return Failure(ParseError(message="Unknown parser error", path=path))

        return Success(ParsedDocument(tree=tree, source=source, content=content, path=path))


_default_parser: Optional[TlaParserWrapper] = None


def parse_tla_content(content: str, path: Optional[Path] = None) -> Result[ParsedDocument, ParseError]:
    """Parse TLA+ content using a shared parser instance.

    Args:
        content: TLA+ source text to parse
        path: Optional path for error context

    Returns:
        Result[ParsedDocument, ParseError]: Parsed document or error
    """
    global _default_parser
    if _default_parser is None:
        _default_parser = TlaParserWrapper()
    return _default_parser.parse_content(content, path)
