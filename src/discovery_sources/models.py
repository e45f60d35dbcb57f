"""Core data models for discovery-sources.

Items, attribute maps and the structured query error that every source
speaks, plus the package exception hierarchy.
"""
from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any, Dict, Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict, Field


class QueryMethod(str, Enum):
    """The three access patterns a source can be asked to serve."""

    GET = "GET"
    LIST = "LIST"
    SEARCH = "SEARCH"


class QueryErrorType(str, Enum):
    """Kinds of structured error a source may report."""

    OTHER = "OTHER"
    NOTFOUND = "NOTFOUND"
    NOSCOPE = "NOSCOPE"
    TIMEOUT = "TIMEOUT"


# Custom Exceptions
class DiscoverySourcesError(Exception):
    """Base exception for all library errors."""
    pass


class AttributeNotFoundError(DiscoverySourcesError, KeyError):
    """An attribute key is not present on an item."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"attribute {key!r} not found")

    def __str__(self) -> str:
        return str(self.args[0])


class HarnessError(DiscoverySourcesError):
    """A conformance test case is misconfigured.

    Raised for problems with the test definition rather than with the
    source under test.
    """
    pass


class UnsupportedMethodError(HarnessError):
    """A test case names a method the harness cannot dispatch."""

    def __init__(self, method: object) -> None:
        self.method = method
        super().__init__(
            f"Test method invalid: {method!r}. "
            f"Should be one of: {[m.value for m in QueryMethod]}"
        )


class SearchNotSupportedError(HarnessError):
    """A SEARCH case was run against a source without search."""

    def __init__(self, source: object, missing: Sequence[str] = ()) -> None:
        self.source = source
        self.missing = tuple(missing)
        detail = f" (missing: {', '.join(self.missing)})" if self.missing else ""
        super().__init__(
            f"Supplied source {type(source).__name__} does not implement "
            f"SearchableSource{detail}. Cannot execute search tests against "
            f"this source"
        )


class QueryError(DiscoverySourcesError):
    """Structured error raised by a source for a failed query."""

    def __init__(
        self,
        error_type: QueryErrorType,
        error_string: str,
        scope: str = "",
        source_name: Optional[str] = None,
        item_type: Optional[str] = None,
    ) -> None:
        self.error_type = error_type
        self.error_string = error_string
        self.scope = scope
        self.source_name = source_name
        self.item_type = item_type
        super().__init__(error_string)

    def __str__(self) -> str:
        if self.scope:
            return f"{self.error_type.value} ({self.scope}): {self.error_string}"
        return f"{self.error_type.value}: {self.error_string}"

    def __repr__(self) -> str:
        """Human-readable representation."""
        return (
            f"QueryError(type={self.error_type.value}, "
            f"scope={self.scope!r}, "
            f"error_string={self.error_string!r})"
        )


class ItemAttributes(BaseModel):
    """Attribute map of an item.

    Values are scalars or ordered sequences of scalars. Nested mappings are
    reachable with dotted keys through :meth:`get`.
    """

    model_config = ConfigDict(frozen=True)

    attr_struct: Dict[str, Any] = Field(
        default_factory=dict,
        description="Attribute name to value",
    )

    def get(self, key: str) -> Any:
        """Return the value stored under *key*.

        Raises:
            AttributeNotFoundError: If *key* (or any segment of a dotted
                key) is not present.
        """
        if key in self.attr_struct:
            return self.attr_struct[key]

        current: Any = self.attr_struct
        for part in key.split("."):
            if not isinstance(current, Mapping) or part not in current:
                raise AttributeNotFoundError(key)
            current = current[part]
        return current

    def __len__(self) -> int:
        return len(self.attr_struct)


class Item(BaseModel):
    """A resolved entity returned by a source."""

    model_config = ConfigDict(frozen=True)

    type: str = Field(..., description="Type of the item, e.g. 'colour'")
    unique_attribute: str = Field(
        ...,
        description="Attribute key whose value uniquely identifies the item",
    )
    scope: str = Field(..., description="Scope the item was found in")
    attributes: ItemAttributes = Field(
        default_factory=ItemAttributes,
        description="Attributes of the item",
    )

    def unique_attribute_value(self) -> str:
        """Return the identifier of the item as a string."""
        value = self.attributes.get(self.unique_attribute)
        return str(value)

    def __repr__(self) -> str:
        """Human-readable representation."""
        try:
            identifier = self.unique_attribute_value()
        except AttributeNotFoundError:
            identifier = "?"
        return f"Item(type={self.type}, scope={self.scope}, id={identifier})"


def validate_item(item: Any) -> Tuple[str, ...]:
    """Check an item for structural soundness.

    Returns:
        Tuple of human-readable problems (empty if the item is valid).
    """
    if not isinstance(item, Item):
        return (f"expected Item, got {type(item).__name__}",)

    problems = []
    if not item.type:
        problems.append("item has empty type")
    if not item.unique_attribute:
        problems.append("item has empty unique_attribute")
    if not item.scope:
        problems.append("item has empty scope")
    if len(item.attributes) == 0:
        problems.append("item has no attributes")
    elif item.unique_attribute:
        try:
            value = item.attributes.get(item.unique_attribute)
        except AttributeNotFoundError:
            problems.append(
                f"unique attribute {item.unique_attribute!r} is missing "
                f"from attributes"
            )
        else:
            if value is None or str(value) == "":
                problems.append(
                    f"unique attribute {item.unique_attribute!r} is empty"
                )
    return tuple(problems)
