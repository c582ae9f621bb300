# =============================================================================
# tlafmt - TLA+ Specification Formatter
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2025 Michael Gardner, A Bit of Help, Inc.
# See LICENSE file in the project root.
# =============================================================================

"""
Synchronous file operations with functional error handling.

All functions return IOResult types - no exceptions propagate for
filesystem failures.
"""

import os
import sys
import tempfile
from pathlib import Path
from typing import Callable, Literal, Union

from returns.io import IOResult, impure_safe

from .errors import FileEither, FileError, file_not_found, permission_denied


def read_text(
    path: Union[str, Path],
    encoding: str = 'utf-8',
) -> FileEither:
    """
    Read a file with explicit error handling.

    Args:
        path: Path to file to read
        encoding: Text encoding

    Returns:
        IOResult[str, FileError]: File contents or specific error
    """
    path = Path(path)

    @impure_safe
    def _read() -> str:
        # No try/except needed - decorator will catch exceptions
        with path.open(encoding=encoding, newline='') as f:
            return f.read()

    # Map IOFailure[Exception] -> IOFailure[FileError]
    return _read().alt(_map_error(path, "read"))


def read_stdin() -> FileEither:
    """
    Read all of standard input.

    Returns:
        IOResult[str, FileError]: Input text or error
    """
    @impure_safe
    def _read() -> str:
        return sys.stdin.read()

    return _read().alt(_map_error(Path("<stdin>"), "read"))


def replace_atomic(
    path: Union[str, Path],
    content: str,
    encoding: str = 'utf-8'
) -> IOResult[None, FileError]:
    """
    Replace a file's content so readers never observe a partial write.

    The content is written to a temporary file in the same directory, which
    is then renamed over `path`. On failure the temporary file is removed and
    `path` is left untouched.

    Args:
        path: Path to file to replace
        content: New content
        encoding: Text encoding

    Returns:
        IOResult[None, FileError]: Success or specific error
    """
    path = Path(path)

    @impure_safe
    def _replace() -> None:
        fd, tmp_name = tempfile.mkstemp(prefix=".tlafmt", suffix=".tmp", dir=path.parent)
        try:
            with os.fdopen(fd, 'w', encoding=encoding, newline='') as f:
                f.write(content)
                f.flush()
                os.fsync(f.fileno())
            if path.exists():
                os.chmod(tmp_name, path.stat().st_mode & 0o7777)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    # Map IOFailure[Exception] -> IOFailure[FileError]
    return _replace().alt(_map_error(path, "replace"))


# Error mapping
def _map_error(
    path: Path,
    operation: Literal["read", "write", "replace"],
) -> Callable[[Exception], FileError]:
    """Map exceptions to FileError for the given operation."""
    def mapper(exc: Exception) -> FileError:
        if isinstance(exc, FileNotFoundError):
            return file_not_found(path, operation)
        elif isinstance(exc, PermissionError):
            return permission_denied(path, operation)
        elif isinstance(exc, UnicodeDecodeError):
            return FileError(
                message=f"Encoding error reading {path}: {exc}",
                path=path,
                operation=operation,
                original_error=str(exc)
            )
        else:
            return FileError(
                message=f"Failed to {operation} {path}: {exc}",
                path=path,
                operation=operation,
                original_error=str(exc)
            )
    return mapper
