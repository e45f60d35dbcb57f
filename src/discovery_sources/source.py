"""Source capability contracts.

A source answers GET and LIST queries for one logical dataset and may
additionally answer SEARCH. The optional capability is detected at runtime
with ``isinstance(source, SearchableSource)``.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, List, Optional, Protocol, runtime_checkable

from discovery_sources.models import Item


@dataclass(frozen=True)
class QueryContext:
    """Per-call context handed to every source method.

    The conformance harness passes it through untouched; honouring the
    timeout is up to the source.
    """

    timeout: Optional[float] = None
    labels: Dict[str, str] = field(default_factory=dict)


@runtime_checkable
class Source(Protocol):
    """Minimum capability set of a discovery source."""

    def type(self) -> str: ...

    def name(self) -> str: ...

    def scopes(self) -> FrozenSet[str]: ...

    def weight(self) -> int: ...

    def get(self, context: QueryContext, scope: str, query: str) -> Item: ...

    def list(self, context: QueryContext, scope: str) -> List[Item]: ...


@runtime_checkable
class SearchableSource(Source, Protocol):
    """A source that can also answer partial-match queries."""

    def search(
        self, context: QueryContext, scope: str, query: str
    ) -> List[Item]: ...


SEARCHABLE_SOURCE_MEMBERS = (
    "type",
    "name",
    "scopes",
    "weight",
    "get",
    "list",
    "search",
)


def missing_members(source: object) -> List[str]:
    """Names of SearchableSource methods *source* does not provide."""
    return [
        member
        for member in SEARCHABLE_SOURCE_MEMBERS
        if not callable(getattr(source, member, None))
    ]
