"""Dispatch and execution of declarative conformance cases.

Usage::

    from discovery_sources.conformance import run_source_tests

    suite = run_source_tests(ColourNameSource(), cases)
    assert suite.success
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence, Tuple

from discovery_sources.conformance.cases import SourceTest
from discovery_sources.conformance.validators import (
    CaseResult,
    Violation,
    check_error,
    check_items,
)
from discovery_sources.models import (
    HarnessError,
    Item,
    QueryMethod,
    SearchNotSupportedError,
    UnsupportedMethodError,
)
from discovery_sources.source import QueryContext, SearchableSource, missing_members

logger = logging.getLogger("discovery_sources.conformance")


@dataclass(frozen=True)
class SuiteResult:
    """Aggregate results of a conformance run."""

    results: Tuple[CaseResult, ...]
    total: int
    passed: int
    failed: int

    @property
    def success(self) -> bool:
        """Whether all cases passed."""
        return self.failed == 0


def dispatch(
    source: Any,
    method: QueryMethod,
    scope: str,
    query: str = "",
    context: Optional[QueryContext] = None,
) -> Tuple[List[Item], Optional[BaseException]]:
    """Invoke the source capability matching *method*.

    GET results are wrapped in a one-element list so every method yields a
    list. Anything the source raises is returned as the error (with an
    empty item list) rather than propagated.

    Raises:
        SearchNotSupportedError: If *method* is SEARCH and the source does
            not implement :class:`SearchableSource`. The error lists the
            members the source lacks.
        UnsupportedMethodError: If *method* is not GET, LIST or SEARCH.
    """
    if context is None:
        context = QueryContext()

    if method not in (QueryMethod.GET, QueryMethod.LIST, QueryMethod.SEARCH):
        raise UnsupportedMethodError(method)
    if method == QueryMethod.SEARCH and not isinstance(source, SearchableSource):
        raise SearchNotSupportedError(source, missing_members(source))

    try:
        if method == QueryMethod.LIST:
            return list(source.list(context, scope)), None
        if method == QueryMethod.SEARCH:
            return list(source.search(context, scope, query)), None
        item = source.get(context, scope, query)
    except Exception as e:
        logger.debug("%r on scope %r raised %r", method, scope, e)
        return [], e
    return ([item] if item is not None else []), None


def _result(test: SourceTest, violations: Sequence[Violation]) -> CaseResult:
    fatal = any(v.fatal for v in violations)
    result = CaseResult(
        name=test.name,
        passed=len(violations) == 0,
        violations=tuple(violations),
        fatal=fatal,
    )
    if result.passed:
        logger.debug("PASS %s", test.name)
    else:
        logger.warning(
            "FAIL %s: %s",
            test.name,
            "; ".join(v.message for v in violations),
        )
    return result


def run_source_test(
    source: Any,
    test: SourceTest,
    context: Optional[QueryContext] = None,
) -> CaseResult:
    """Run one case against *source* and collect every violation.

    Misconfigured cases (unknown method, SEARCH against a non-searchable
    source) yield a single fatal ``harness`` violation.
    """
    try:
        items, error = dispatch(
            source, test.method, test.item_scope, test.query, context
        )
    except HarnessError as e:
        return _result(test, [Violation("harness", str(e), fatal=True)])

    violations: List[Violation] = []

    if test.expected_error is not None:
        violations.extend(check_error(test.expected_error, error))
        if any(v.fatal for v in violations):
            return _result(test, violations)
    elif error is not None:
        violations.append(
            Violation("unexpected_error", f"unexpected error: {error}", fatal=True)
        )
        return _result(test, violations)

    if test.expected_items is not None:
        violations.extend(check_items(test.expected_items, items))

    return _result(test, violations)


def run_source_tests(
    source: Any,
    tests: Sequence[SourceTest],
    context: Optional[QueryContext] = None,
) -> SuiteResult:
    """Run every case against *source*; a failing case never stops the rest."""
    results = tuple(run_source_test(source, test, context) for test in tests)
    passed = sum(1 for r in results if r.passed)
    return SuiteResult(
        results=results,
        total=len(results),
        passed=passed,
        failed=len(results) - passed,
    )
