"""Reusable test helpers for source conformance testing.

Source authors can import these to run declarative cases under pytest:
    from discovery_sources.conformance.pytest_helpers import (
        assert_source_test_passes,
        source_test_params,
    )

    @pytest.mark.parametrize("case", source_test_params(CASES))
    def test_my_source(case):
        assert_source_test_passes(MySource(), case)
"""
from __future__ import annotations

from typing import Any, List, Optional, Sequence

import pytest

from discovery_sources.conformance.cases import SourceTest
from discovery_sources.conformance.runner import run_source_test
from discovery_sources.conformance.validators import CaseResult
from discovery_sources.source import QueryContext


def source_test_params(tests: Sequence[SourceTest]) -> List[Any]:
    """Wrap cases as pytest params so each case runs as its own test."""
    return [pytest.param(test, id=test.name) for test in tests]


def assert_source_test_passes(
    source: Any,
    test: SourceTest,
    context: Optional[QueryContext] = None,
) -> CaseResult:
    """Assert a source satisfies one conformance case.

    Misconfigured cases fail the test through ``pytest.fail``; source
    contract violations raise ``AssertionError`` listing every violation.
    """
    result = run_source_test(source, test, context)
    if result.passed:
        return result

    harness = [v for v in result.violations if v.check == "harness"]
    if harness:
        pytest.fail(f"Case {test.name!r} is misconfigured: {harness[0].message}")

    violations = [f"  {v.check}: {v.message}" for v in result.violations]
    raise AssertionError(
        f"Source {type(source).__name__} failed case {test.name!r}:\n"
        + "\n".join(violations)
    )


def assert_source_test_fails(
    source: Any,
    test: SourceTest,
    check: Optional[str] = None,
) -> CaseResult:
    """Assert a case DOES NOT pass (expected violation).

    Args:
        check: If given, at least one violation must come from this check.
    """
    result = run_source_test(source, test)
    if result.passed:
        raise AssertionError(
            f"Case {test.name!r} was expected to fail but passed."
        )
    if check is not None and not any(v.check == check for v in result.violations):
        raise AssertionError(
            f"Case {test.name!r} failed, but not on {check!r}: "
            f"{[v.check for v in result.violations]}"
        )
    return result
