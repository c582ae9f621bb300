# =============================================================================
# tlafmt - TLA+ Specification Formatter
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2025 Michael Gardner, A Bit of Help, Inc.
# See LICENSE file in the project root.
# =============================================================================

"""Property-based tests: formatting is total and stable."""

from __future__ import annotations

import pytest
from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st
from returns.result import Failure, Success

from tlafmt.errors import ParseError, StructuralError
from tlafmt.formatter import format_text
from tlafmt.options import FormatOptions

pytestmark = [pytest.mark.integration, pytest.mark.slow]


QUIET = FormatOptions(diagnostics=False)

TLA_ALPHABET = "abxyzAN01 \n\t()[]{}<>=/\\~'-:,.|@!*\"_"

OPERATORS = ["+", "-", "=", "/=", "<", "\\in", "\\cup", "/\\", "\\/"]


def _assert_total(text: str) -> None:
    result = format_text(text, QUIET)
    if isinstance(result, Failure):
        assert isinstance(result.failure(), (ParseError, StructuralError))
    else:
        assert isinstance(result, Success)
        assert isinstance(result.unwrap(), str)


@settings(suppress_health_check=[HealthCheck.too_slow], deadline=None, max_examples=75)
@given(st.text(max_size=200))
def test_arbitrary_text_never_raises(text: str) -> None:
    """Any input yields formatted text or a declared error."""
    _assert_total(text)


@settings(suppress_health_check=[HealthCheck.too_slow], deadline=None, max_examples=75)
@given(st.text(alphabet=TLA_ALPHABET, max_size=160))
def test_module_body_never_raises(body: str) -> None:
    """Arbitrary module bodies yield formatted text or a declared error."""
    _assert_total(f"---- MODULE Fuzz ----\n{body}\n====\n")


definition = st.tuples(
    st.sampled_from(["a", "b", "x", "y"]),
    st.sampled_from(OPERATORS),
    st.sampled_from(["a", "b", "1", "42"]),
    st.integers(min_value=0, max_value=3),
)


@settings(suppress_health_check=[HealthCheck.too_slow], deadline=None, max_examples=40)
@given(st.lists(definition, min_size=1, max_size=6))
def test_definitions_idempotent(definitions) -> None:
    """Formatting well-formed definitions twice changes nothing."""
    lines = ["---- MODULE Gen ----"]
    for i, (lhs, op, rhs, blank) in enumerate(definitions):
        lines.extend([""] * blank)
        lines.append(f"Op{i}  ==   {lhs}  {op}   {rhs}")
    lines.append("====")

    once = format_text("\n".join(lines) + "\n", QUIET).unwrap()
    twice = format_text(once + "\n", QUIET).unwrap()

    assert twice == once
    assert "\n\n\n" not in once
