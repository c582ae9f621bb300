# =============================================================================
# tlafmt - TLA+ Specification Formatter
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2025 Michael Gardner, A Bit of Help, Inc.
# See LICENSE file in the project root.
# =============================================================================

"""
Error types for functional error handling using Either.

This module defines all error types used throughout tlafmt.
Public functions return Result/IOResult containers - anticipated failures
never propagate as exceptions. The lowering pass raises StructuralFault
internally, which is converted at the public boundary.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from returns.io import IOResult
from returns.result import Result


# =============================================================================
# Base Error Types
# =============================================================================

@dataclass(frozen=True)
class TlafmtError:
    """Base error type for all tlafmt errors."""
    message: str


# =============================================================================
# File Operation Errors
# =============================================================================

@dataclass(frozen=True)
class FileError(TlafmtError):
    """File operation error."""
    path: Path
    operation: Literal["read", "write", "replace"]
    original_error: str | None = None
    permission_error: bool = False
    not_found: bool = False


# =============================================================================
# Parsing Errors
# =============================================================================

@dataclass(frozen=True)
class ParseError(TlafmtError):
    """The tree provider could not produce a syntax tree."""
    path: Path | None = None


# =============================================================================
# Formatting Errors
# =============================================================================

@dataclass(frozen=True)
class SinkError(TlafmtError):
    """Writing rendered output to the sink failed; output may be partial."""
    original_error: str | None = None


@dataclass(frozen=True)
class StructuralError(TlafmtError):
    """The syntax tree has a shape the lowering pass cannot recover from."""
    kind: Literal["module_header", "step_or_stutter", "nesting"]
    row: int = 0
    column: int = 0


# =============================================================================
# Configuration Errors
# =============================================================================

@dataclass(frozen=True)
class ConfigError(TlafmtError):
    """Configuration error."""
    config_file: Path | None = None


# =============================================================================
# Lowering Fault
# =============================================================================

class StructuralFault(Exception):
    """Raised inside the lowering pass to abort the current format call."""

    def __init__(self, error: StructuralError):
        super().__init__(error.message)
        self.error = error


# =============================================================================
# Type Aliases for Common Either Types
# =============================================================================

# Reading input returns Either[FileError, str]
FileEither = IOResult[str, FileError]

# Formatting to an external sink returns Either[TlafmtError, None]
FormatIOEither = IOResult[None, TlafmtError]

# Formatting into memory returns Either[TlafmtError, str]
FormatEither = Result[str, TlafmtError]


# =============================================================================
# Error Helpers
# =============================================================================

def file_not_found(path: Path, operation: Literal["read", "write", "replace"] = "read") -> FileError:
    """Create a file not found error."""
    return FileError(
        message=f"File not found: {path}",
        path=path,
        operation=operation,
        not_found=True
    )


def permission_denied(path: Path, operation: Literal["read", "write", "replace"]) -> FileError:
    """Create a permission denied error."""
    return FileError(
        message=f"Permission denied: {operation} {path}",
        path=path,
        operation=operation,
        permission_error=True
    )


def module_header_malformed(row: int, column: int) -> StructuralError:
    """Create an error for a header line that is not followed by a name and a closing line."""
    return StructuralError(
        message=f"Invalid module header at line {row + 1}",
        kind="module_header",
        row=row,
        column=column
    )


def step_or_stutter_malformed(row: int, column: int) -> StructuralError:
    """Create an error for a `[Next]_vars` sequence missing a part."""
    return StructuralError(
        message=f"Invalid step-or-stutter sequence at line {row + 1}",
        kind="step_or_stutter",
        row=row,
        column=column
    )


def nesting_too_deep(row: int = 0, column: int = 0) -> StructuralError:
    """Create an error for input nested beyond the supported depth."""
    return StructuralError(
        message=f"Nesting too deep to format at line {row + 1}",
        kind="nesting",
        row=row,
        column=column
    )
