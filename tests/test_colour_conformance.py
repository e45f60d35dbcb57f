"""Conformance tests for the colour name source.

Covers:
- GET: known colour, unknown colour (NOTFOUND), unknown scope (NOSCOPE)
- LIST: full table (147 items), unknown scope (NOSCOPE)
- SEARCH: partial match, no match, unknown scope
- Bundled fixture cases run through the same harness
"""
from __future__ import annotations

from typing import Any, FrozenSet, List

import pytest

from discovery_sources import (
    ColourNameSource,
    Item,
    QueryContext,
    QueryErrorType,
    QueryMethod,
)
from discovery_sources.conformance import (
    ExpectedError,
    ExpectedItems,
    SourceTest,
    load_source_tests,
    run_source_tests,
)
from discovery_sources.conformance.pytest_helpers import (
    assert_source_test_passes,
    source_test_params,
)

GET_TESTS: List[SourceTest] = [
    SourceTest(
        name="Getting a known colour",
        item_scope="global",
        query="GreenYellow",
        method=QueryMethod.GET,
        expected_items=ExpectedItems(
            num_items=1,
            expected_attributes=[{"name": "GreenYellow"}],
        ),
    ),
    SourceTest(
        name="Getting an unknown colour",
        item_scope="global",
        query="UpsideDownBlack",
        method=QueryMethod.GET,
        expected_error=ExpectedError(
            type=QueryErrorType.NOTFOUND,
            error_string_regex="not recognized",
            scope="global",
        ),
    ),
    SourceTest(
        name="Getting an unknown scope",
        item_scope="wonkySpace",
        query="Red",
        method=QueryMethod.GET,
        expected_error=ExpectedError(
            type=QueryErrorType.NOSCOPE,
            error_string_regex="colours are only supported",
            scope="wonkySpace",
        ),
    ),
    SourceTest(
        name="Getting a colour with sequence attributes",
        item_scope="global",
        query="Tomato",
        method=QueryMethod.GET,
        expected_items=ExpectedItems(
            num_items=1,
            expected_attributes=[
                {"name": "Tomato", "hex": "#FF6347", "rgb": [255, 99, 71]}
            ],
        ),
    ),
]

LIST_TESTS: List[SourceTest] = [
    SourceTest(
        name="Using correct scope",
        item_scope="global",
        method=QueryMethod.LIST,
        expected_items=ExpectedItems(num_items=147),
    ),
    SourceTest(
        name="Using incorrect scope",
        item_scope="somethingElse",
        method=QueryMethod.LIST,
        expected_error=ExpectedError(
            type=QueryErrorType.NOSCOPE,
            error_string_regex="colours are only supported",
            scope="somethingElse",
        ),
    ),
]

SEARCH_TESTS: List[SourceTest] = [
    SourceTest(
        name="Searching for blue",
        item_scope="global",
        query="blue",
        method=QueryMethod.SEARCH,
        expected_items=ExpectedItems(
            num_items=20,
            expected_attributes=[{"name": "AliceBlue"}, {"name": "Blue"}],
        ),
    ),
    SourceTest(
        name="Searching in an unknown scope",
        item_scope="wonkySpace",
        query="blue",
        method=QueryMethod.SEARCH,
        expected_error=ExpectedError(
            type=QueryErrorType.NOSCOPE,
            scope="wonkySpace",
        ),
    ),
]


@pytest.mark.parametrize("case", source_test_params(GET_TESTS))
def test_get(case: SourceTest) -> None:
    assert_source_test_passes(ColourNameSource(), case)


@pytest.mark.parametrize("case", source_test_params(LIST_TESTS))
def test_list(case: SourceTest) -> None:
    assert_source_test_passes(ColourNameSource(), case)


@pytest.mark.parametrize("case", source_test_params(SEARCH_TESTS))
def test_search(case: SourceTest) -> None:
    assert_source_test_passes(ColourNameSource(), case)


@pytest.mark.parametrize("category", ["get", "list", "search"])
def test_bundled_fixtures(category: str) -> None:
    suite = run_source_tests(ColourNameSource(), load_source_tests(category, "colour"))
    failures = [r for r in suite.results if not r.passed]
    assert suite.success, f"Failed cases: {failures}"


# ---------------------------------------------------------------------------
# Search capability gating
# ---------------------------------------------------------------------------


class LookupOnlyColours:
    """Colour source exposing GET and LIST but not SEARCH."""

    def __init__(self) -> None:
        self._inner = ColourNameSource()

    def type(self) -> str:
        return self._inner.type()

    def name(self) -> str:
        return "lookup-only-colours"

    def scopes(self) -> FrozenSet[str]:
        return self._inner.scopes()

    def weight(self) -> int:
        return self._inner.weight()

    def get(self, context: QueryContext, scope: str, query: str) -> Item:
        return self._inner.get(context, scope, query)

    def list(self, context: QueryContext, scope: str) -> List[Item]:
        return self._inner.list(context, scope)


def test_lookup_only_source_passes_get_and_list() -> None:
    suite = run_source_tests(LookupOnlyColours(), GET_TESTS + LIST_TESTS)
    assert suite.success


def test_search_against_lookup_only_source_is_misconfiguration() -> None:
    suite = run_source_tests(LookupOnlyColours(), SEARCH_TESTS)
    assert suite.failed == len(SEARCH_TESTS)
    for result in suite.results:
        assert result.fatal
        assert [v.check for v in result.violations] == ["harness"]


def test_wrong_expectations_surface_every_violation() -> None:
    case = SourceTest(
        name="Deliberately wrong",
        item_scope="global",
        query="Nope",
        method=QueryMethod.GET,
        expected_error=ExpectedError(
            type=QueryErrorType.NOSCOPE,
            scope="elsewhere",
            error_string_regex="only supported",
        ),
    )
    suite: Any = run_source_tests(ColourNameSource(), [case])
    checks = [v.check for v in suite.results[0].violations]
    assert checks == ["error_type", "error_scope", "error_string"]
