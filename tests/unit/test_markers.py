# =============================================================================
# tlafmt - TLA+ Specification Formatter
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2025 Michael Gardner, A Bit of Help, Inc.
# See LICENSE file in the project root.
# =============================================================================

"""Tests for the shared pytest configuration."""

import pytest


class TestMarkers:
    """Test custom markers are registered exactly once."""

    @pytest.mark.parametrize("name", ["integration", "slow"])
    def test_marker_registered_once(self, pytestconfig, name):
        """Test a marker has a single registration."""
        lines = [line for line in pytestconfig.getini("markers") if line.split(":")[0] == name]
        assert len(lines) == 1
