# =============================================================================
# tlafmt - TLA+ Specification Formatter
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2025 Michael Gardner, A Bit of Help, Inc.
# See LICENSE file in the project root.
# =============================================================================

"""
Type-safe formatter options model using Pydantic.

This module defines the structure of the formatter configuration,
providing type safety and automatic JSON validation. The defaults
reproduce the canonical layout: 80 column header and divider lines,
4 spaces per indentation level.
"""

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


LINE_WIDTH = 80
INDENT_WIDTH = 4


class FormatOptions(BaseModel):
    """Root configuration for the formatter."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    line_width: int = Field(LINE_WIDTH, ge=20, description="Total width of module header and divider lines")
    indent_width: int = Field(INDENT_WIDTH, ge=1, le=16, description="Spaces per indentation level")
    diagnostics: bool = Field(True, description="Log unformatted and erroneous syntax nodes")

    @property
    def indent_unit(self) -> str:
        """The text rendered for one level of indentation."""
        return " " * self.indent_width

    @classmethod
    def load(cls, path: Path) -> "FormatOptions":
        """Load formatter options from a JSON file.

        Args:
            path: Path to JSON configuration file

        Returns:
            FormatOptions: Validated options

        Raises:
            ValidationError: If JSON doesn't match schema
            OSError: If the file exists but cannot be read
        """
        if not path.exists():
            # Return default options if file doesn't exist
            return cls()

        return cls.model_validate_json(path.read_text(encoding="utf-8"))

    @classmethod
    def load_from_path_or_default(cls, path: Optional[Path], default_filename: str = "tlafmt.json") -> "FormatOptions":
        """Load options from specified path or look for default file.

        Args:
            path: Optional path to options file
            default_filename: Default filename to look for in current directory

        Returns:
            FormatOptions: Loaded or default options
        """
        if path:
            return cls.load(path)

        default_path = Path(default_filename)
        if default_path.exists():
            return cls.load(default_path)

        return cls()
