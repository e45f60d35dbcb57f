"""Declarative conformance case models.

A :class:`SourceTest` names the scope, query and method to run against a
source and declares exactly one expected outcome: an error or a set of
items.
"""
from __future__ import annotations

import re
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from discovery_sources.models import QueryErrorType, QueryMethod


class ExpectedError(BaseModel):
    """Error a case expects the source to raise."""

    model_config = ConfigDict(frozen=True)

    type: QueryErrorType = Field(..., description="Expected error kind")
    scope: Optional[str] = Field(
        None,
        description="Scope the error should come from (None or empty = unchecked)",
    )
    error_string_regex: Optional[str] = Field(
        None,
        description="Pattern searched for in the error string (None = unchecked)",
    )

    @field_validator("error_string_regex")
    @classmethod
    def _compiles(cls, v: Optional[str]) -> Optional[str]:
        if v is not None:
            try:
                re.compile(v)
            except re.error as e:
                raise ValueError(f"invalid error_string_regex {v!r}: {e}") from e
        return v


class ExpectedItems(BaseModel):
    """Items a case expects the source to return."""

    model_config = ConfigDict(frozen=True)

    num_items: int = Field(..., ge=0, description="Exact number of items expected")
    expected_attributes: List[Dict[str, Any]] = Field(
        default_factory=list,
        description=(
            "Partial attribute maps checked in order against the returned "
            "items; may be shorter than the item list"
        ),
    )

    @model_validator(mode="after")
    def _attributes_within_count(self) -> "ExpectedItems":
        if len(self.expected_attributes) > self.num_items:
            raise ValueError(
                f"expected_attributes has {len(self.expected_attributes)} "
                f"entries but num_items is {self.num_items}"
            )
        return self


class SourceTest(BaseModel):
    """A single declarative conformance case."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Case name used in reports")
    item_scope: str = Field(..., description="Scope passed to the source")
    query: str = Field(
        default="",
        description="Query passed to GET and SEARCH; ignored by LIST",
    )
    method: QueryMethod = Field(..., description="Access method to exercise")
    expected_error: Optional[ExpectedError] = Field(
        None, description="Expected error, None means no error"
    )
    expected_items: Optional[ExpectedItems] = Field(
        None, description="Expected items, None means items are not checked"
    )

    @model_validator(mode="after")
    def _single_outcome(self) -> "SourceTest":
        if self.expected_error is not None and self.expected_items is not None:
            raise ValueError(
                f"Case {self.name!r} declares both expected_error and "
                f"expected_items; a case expects one outcome"
            )
        return self
