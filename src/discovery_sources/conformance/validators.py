"""Result verification for source conformance cases.

This module provides the checks the runner applies to whatever a source
returned:

1. Attribute value comparison (exact, with ordered-sequence handling)
2. Error expectation matching (kind, scope, message pattern)
3. Item set validation (count, structure, expected attributes)

It also validates declarative case documents in two layers (Pydantic model,
then optional JSON Schema), degrading gracefully if jsonschema is
unavailable unless strict=True is specified.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from pydantic import ValidationError as PydanticValidationError

from discovery_sources.conformance.cases import (
    ExpectedError,
    ExpectedItems,
    SourceTest,
)
from discovery_sources.models import (
    AttributeNotFoundError,
    Item,
    QueryError,
    validate_item,
)
from discovery_sources.schemas import load_schema


@dataclass(frozen=True)
class Violation:
    """A single failed check within a conformance case.

    A fatal violation means later checks for the same case were skipped
    because they would be meaningless.
    """

    check: str
    message: str
    fatal: bool = False


@dataclass(frozen=True)
class CaseResult:
    """Verdict for one conformance case."""

    name: str
    passed: bool
    violations: Tuple[Violation, ...]
    fatal: bool


@dataclass(frozen=True)
class ModelViolation:
    """A violation detected by Pydantic model validation of a case document."""

    field: str
    message: str
    violation_type: str
    input_value: object


@dataclass(frozen=True)
class SchemaViolation:
    """A violation detected by JSON Schema validation of a case document."""

    json_path: str
    message: str
    validator: str
    validator_value: object
    schema_path: Tuple[Union[str, int], ...]


@dataclass(frozen=True)
class CaseDocumentResult:
    """Result of dual-layer validation of a case document."""

    valid: bool
    model_violations: Tuple[ModelViolation, ...]
    schema_violations: Tuple[SchemaViolation, ...]
    schema_check_skipped: bool


_CASE_SCHEMA_NAME = "source_test"


# ---------------------------------------------------------------------------
# Attribute comparison
# ---------------------------------------------------------------------------


def _is_sequence(value: object) -> bool:
    return isinstance(value, (list, tuple))


def attribute_values_equal(expected: Any, actual: Any) -> bool:
    """Compare an expected attribute value with the value an item carries.

    Sequences are equal when both sides are sequences of the same length
    whose elements are pairwise equal in order. Mappings are equal when both
    sides have the same keys and every value is equal under these same
    rules. Anything else must have the same type and compare equal, so
    ``"1"`` and ``1`` differ, as do ``True`` and ``1``.
    """
    if _is_sequence(expected):
        if not _is_sequence(actual) or len(expected) != len(actual):
            return False
        return all(
            attribute_values_equal(e, a) for e, a in zip(expected, actual)
        )
    if isinstance(expected, Mapping):
        if not isinstance(actual, Mapping) or expected.keys() != actual.keys():
            return False
        return all(attribute_values_equal(expected[k], actual[k]) for k in expected)
    if type(expected) is not type(actual):
        return False
    return bool(expected == actual)


# ---------------------------------------------------------------------------
# Error matching
# ---------------------------------------------------------------------------


def check_error(
    expected: ExpectedError,
    error: Optional[BaseException],
) -> Tuple[Violation, ...]:
    """Check a raised error against an error expectation.

    Kind, scope and message are reported independently. A missing error or
    an error that is not a :class:`QueryError` stops the comparison.
    """
    if error is None:
        return (Violation("missing_error", "expected error but got None"),)

    if not isinstance(error, QueryError):
        return (
            Violation(
                "error_shape",
                f"error raised was type {type(error).__name__} ({error}), "
                f"expected QueryError",
                fatal=True,
            ),
        )

    violations: List[Violation] = []

    if error.error_type != expected.type:
        violations.append(
            Violation(
                "error_type",
                f"error type was {error.error_type.value}, "
                f"expected {expected.type.value}",
            )
        )

    if expected.scope and expected.scope != error.scope:
        violations.append(
            Violation(
                "error_scope",
                f"error scope was {error.scope!r}, expected {expected.scope!r}",
            )
        )

    if expected.error_string_regex is not None:
        if re.search(expected.error_string_regex, error.error_string) is None:
            violations.append(
                Violation(
                    "error_string",
                    f"error string did not match regex "
                    f"{expected.error_string_regex!r}, "
                    f"raw value: {error.error_string!r}",
                )
            )

    return tuple(violations)


# ---------------------------------------------------------------------------
# Item set validation
# ---------------------------------------------------------------------------


def check_items(
    expected: ExpectedItems,
    items: Sequence[Any],
) -> Tuple[Violation, ...]:
    """Check returned items against an items expectation.

    A count mismatch is fatal. Otherwise every item is checked for
    structural soundness and ``expected_attributes[i]`` is compared key by
    key against ``items[i]``.
    """
    if len(items) != expected.num_items:
        return (
            Violation(
                "item_count",
                f"expected {expected.num_items} items, got {len(items)}",
                fatal=True,
            ),
        )

    violations: List[Violation] = []

    for index, item in enumerate(items):
        for problem in validate_item(item):
            violations.append(
                Violation("item_validity", f"item {index}: {problem}")
            )

    for index, expected_attributes in enumerate(expected.expected_attributes):
        item = items[index]
        if not isinstance(item, Item):
            continue
        for key, expected_value in expected_attributes.items():
            try:
                value = item.attributes.get(key)
            except AttributeNotFoundError as e:
                violations.append(
                    Violation("attribute_missing", f"item {index}: {e}")
                )
                continue

            if not attribute_values_equal(expected_value, value):
                violations.append(
                    Violation(
                        "attribute_value",
                        f"item {index}: expected attribute {key!r} to be "
                        f"{expected_value!r}, got {value!r}",
                    )
                )

    return tuple(violations)


# ---------------------------------------------------------------------------
# Case document validation
# ---------------------------------------------------------------------------


def _validate_with_model(payload: Dict[str, Any]) -> Tuple[ModelViolation, ...]:
    """Validate a case document using the SourceTest model.

    Returns:
        Tuple of ModelViolation instances (empty if valid).
    """
    try:
        SourceTest.model_validate(payload)
        return ()
    except PydanticValidationError as e:
        violations = []
        for error in e.errors():
            field_path = ".".join(str(loc) for loc in error["loc"])
            violations.append(
                ModelViolation(
                    field=field_path,
                    message=error["msg"],
                    violation_type=error["type"],
                    input_value=error.get("input"),
                )
            )
        return tuple(violations)


def _validate_with_schema(
    payload: Dict[str, Any],
    strict: bool,
) -> Tuple[Tuple[SchemaViolation, ...], bool]:
    """Validate a case document using the committed JSON Schema.

    Args:
        payload: The case document to validate.
        strict: If True, raise ImportError when jsonschema is unavailable.
                If False, skip validation and return empty violations.

    Returns:
        Tuple of (violations, skipped).

    Raises:
        ImportError: If strict=True and jsonschema is unavailable.
    """
    try:
        from jsonschema import Draft202012Validator
    except ImportError:
        if strict:
            raise ImportError(
                "jsonschema is required for strict case validation. "
                "Install with: pip install 'discovery-sources[conformance]'"
            )
        return ((), True)

    schema = load_schema(_CASE_SCHEMA_NAME)

    validator = Draft202012Validator(schema)
    errors = list(validator.iter_errors(payload))

    violations = []
    for error in errors:
        json_path = "$" + "".join(
            f"[{p}]" if isinstance(p, int) else f".{p}"
            for p in error.absolute_path
        )
        violations.append(
            SchemaViolation(
                json_path=json_path,
                message=error.message,
                validator=str(error.validator),
                validator_value=error.validator_value,
                schema_path=tuple(error.absolute_schema_path),
            )
        )

    return (tuple(violations), False)


def validate_case_document(
    payload: Dict[str, Any],
    strict: bool = False,
) -> CaseDocumentResult:
    """Validate a declarative case document before it is loaded.

    Args:
        payload: The case document (one SourceTest as a JSON object).
        strict: If True, require jsonschema and fail if unavailable.

    Returns:
        CaseDocumentResult with validation status and any violations found.

    Raises:
        ImportError: If strict=True and jsonschema is unavailable.
    """
    model_violations = _validate_with_model(payload)
    schema_violations, schema_skipped = _validate_with_schema(payload, strict)

    valid = len(model_violations) == 0 and (
        len(schema_violations) == 0 or schema_skipped
    )

    return CaseDocumentResult(
        valid=valid,
        model_violations=model_violations,
        schema_violations=schema_violations,
        schema_check_skipped=schema_skipped,
    )
