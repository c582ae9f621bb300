# =============================================================================
# tlafmt - TLA+ Specification Formatter
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2025 Michael Gardner, A Bit of Help, Inc.
# See LICENSE file in the project root.
# =============================================================================

"""tlafmt test suite.

Test Organization:
    - unit/: Fast, isolated tests; lowering runs over hand-built trees
    - integration/: Real tree-sitter parsing, the CLI and property tests
    - conftest.py: Shared pytest fixtures and configuration
    - tree_builders.py: Fake syntax nodes for lowering tests

Running Tests:
    # All tests
    pytest

    # Unit tests only (fast)
    pytest tests/unit/

    # Skip the property tests
    pytest -m "not slow"
"""
