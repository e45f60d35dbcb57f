"""Shared pytest fixtures for all tests."""
from __future__ import annotations

from typing import Any, Dict, FrozenSet, List

import pytest

from discovery_sources import (
    ColourNameSource,
    Item,
    ItemAttributes,
    QueryContext,
    QueryError,
    QueryErrorType,
)


def make_item(scope: str = "global", **attributes: Any) -> Item:
    """Build a ``thing`` item keyed on ``name`` with the given attributes."""
    attr_struct: Dict[str, Any] = {"name": "widget"}
    attr_struct.update(attributes)
    return Item(
        type="thing",
        unique_attribute="name",
        scope=scope,
        attributes=ItemAttributes(attr_struct=attr_struct),
    )


class StaticSource:
    """Non-searchable source returning canned results.

    ``get_result`` / ``list_result`` may be an exception instance, which is
    raised instead of returned.
    """

    def __init__(self, get_result: Any = None, list_result: Any = None) -> None:
        self.get_result = get_result
        self.list_result = list_result if list_result is not None else []
        self.calls: List[tuple] = []

    def type(self) -> str:
        return "thing"

    def name(self) -> str:
        return "static-source"

    def scopes(self) -> FrozenSet[str]:
        return frozenset({"global"})

    def weight(self) -> int:
        return 1

    def get(self, context: QueryContext, scope: str, query: str) -> Item:
        self.calls.append(("get", context, scope, query))
        if isinstance(self.get_result, BaseException):
            raise self.get_result
        return self.get_result  # type: ignore[no-any-return]

    def list(self, context: QueryContext, scope: str) -> List[Item]:
        self.calls.append(("list", context, scope))
        if isinstance(self.list_result, BaseException):
            raise self.list_result
        return self.list_result  # type: ignore[no-any-return]


class SearchableStaticSource(StaticSource):
    """StaticSource that also answers SEARCH with ``search_result``."""

    def __init__(self, search_result: Any = None, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.search_result = search_result if search_result is not None else []

    def search(self, context: QueryContext, scope: str, query: str) -> List[Item]:
        self.calls.append(("search", context, scope, query))
        if isinstance(self.search_result, BaseException):
            raise self.search_result
        return self.search_result  # type: ignore[no-any-return]


@pytest.fixture
def colour_source() -> ColourNameSource:
    return ColourNameSource()


@pytest.fixture
def item_factory() -> Any:
    return make_item


@pytest.fixture
def widget() -> Item:
    return make_item(tags=["a", "b"], size=3)


@pytest.fixture
def static_source_factory() -> Any:
    return StaticSource


@pytest.fixture
def searchable_source_factory() -> Any:
    return SearchableStaticSource


@pytest.fixture
def notfound_error() -> QueryError:
    return QueryError(QueryErrorType.NOTFOUND, "widget 'x' not recognized", scope="global")
