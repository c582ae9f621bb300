# =============================================================================
# tlafmt - TLA+ Specification Formatter
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2025 Michael Gardner, A Bit of Help, Inc.
# See LICENSE file in the project root.
# =============================================================================

"""Integration tests for tlafmt.

These tests parse real TLA+ through tree-sitter-tlaplus and run the
complete pipeline, from the CLI down to rendered text.

Markers:
    - @pytest.mark.integration: All tests in this package
    - @pytest.mark.slow: Hypothesis property tests
"""
