"""Conformance harness for discovery sources.

Run the bundled suite: pytest --pyargs discovery_sources.conformance

pytest integration lives in
:mod:`discovery_sources.conformance.pytest_helpers` so that importing this
package does not require pytest.
"""
from discovery_sources.conformance.cases import (
    ExpectedError,
    ExpectedItems,
    SourceTest,
)
from discovery_sources.conformance.loader import (
    FixtureCase,
    load_fixtures,
    load_source_tests,
)
from discovery_sources.conformance.runner import (
    SuiteResult,
    dispatch,
    run_source_test,
    run_source_tests,
)
from discovery_sources.conformance.validators import (
    CaseDocumentResult,
    CaseResult,
    ModelViolation,
    SchemaViolation,
    Violation,
    attribute_values_equal,
    check_error,
    check_items,
    validate_case_document,
)

__all__ = [
    "CaseDocumentResult",
    "CaseResult",
    "ExpectedError",
    "ExpectedItems",
    "FixtureCase",
    "ModelViolation",
    "SchemaViolation",
    "SourceTest",
    "SuiteResult",
    "Violation",
    "attribute_values_equal",
    "check_error",
    "check_items",
    "dispatch",
    "load_fixtures",
    "load_source_tests",
    "run_source_test",
    "run_source_tests",
    "validate_case_document",
]
