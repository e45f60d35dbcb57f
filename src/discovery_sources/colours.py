"""Colour name source.

Resolves CSS colour names (``"GreenYellow"``, ``"SteelBlue"``, ...) to
``colour`` items carrying the name, the hex code and the RGB triple.
Colours are not partitioned, so the source only answers for the
``global`` scope unless configured otherwise.
"""
from __future__ import annotations

import importlib.resources
import json
import logging
from types import MappingProxyType
from typing import Dict, FrozenSet, Iterable, List, Mapping, Optional

from discovery_sources.models import (
    Item,
    ItemAttributes,
    QueryError,
    QueryErrorType,
)
from discovery_sources.source import QueryContext

logger = logging.getLogger("discovery_sources.colours")

COLOUR_ITEM_TYPE: str = "colour"
SOURCE_NAME: str = "colour-name-source"
DEFAULT_SCOPES: FrozenSet[str] = frozenset({"global"})

_DATA_FILE = "colours.json"


def load_colour_table() -> Dict[str, str]:
    """Load the bundled colour name to hex code table."""
    data_path = (
        importlib.resources.files("discovery_sources") / "data" / _DATA_FILE
    )
    table: Dict[str, str] = json.loads(data_path.read_text(encoding="utf-8"))
    return table


def hex_to_rgb(hex_code: str) -> List[int]:
    """Convert ``#RRGGBB`` to ``[r, g, b]``.

    Raises:
        ValueError: If *hex_code* is not a six digit hex colour.
    """
    digits = hex_code.lstrip("#")
    if len(digits) != 6:
        raise ValueError(f"Invalid hex colour: {hex_code!r}")
    return [int(digits[i:i + 2], 16) for i in (0, 2, 4)]


class ColourNameSource:
    """Source for named colours.

    Implements GET (exact, case-sensitive name), LIST (every colour) and
    SEARCH (case-insensitive substring of the name).

    Args:
        scopes: Scopes the source answers for. Any other scope is rejected
            with a NOSCOPE error.
        colours: Optional replacement for the bundled name to hex table.
    """

    def __init__(
        self,
        scopes: Iterable[str] = DEFAULT_SCOPES,
        colours: Optional[Mapping[str, str]] = None,
    ) -> None:
        self._scopes: FrozenSet[str] = frozenset(scopes)
        table = dict(colours) if colours is not None else load_colour_table()
        self._colours: Mapping[str, str] = MappingProxyType(table)

    def type(self) -> str:
        return COLOUR_ITEM_TYPE

    def name(self) -> str:
        return SOURCE_NAME

    def scopes(self) -> FrozenSet[str]:
        return self._scopes

    def weight(self) -> int:
        return 100

    def get(self, context: QueryContext, scope: str, query: str) -> Item:
        """Return the colour named exactly *query*."""
        self._check_scope(scope)
        logger.debug("GET colour %r in scope %r", query, scope)

        hex_code = self._colours.get(query)
        if hex_code is None:
            raise QueryError(
                QueryErrorType.NOTFOUND,
                f"colour {query!r} not recognized",
                scope=scope,
                source_name=SOURCE_NAME,
                item_type=COLOUR_ITEM_TYPE,
            )
        return self._make_item(query, hex_code, scope)

    def list(self, context: QueryContext, scope: str) -> List[Item]:
        """Return every known colour."""
        self._check_scope(scope)
        logger.debug("LIST colours in scope %r", scope)
        return [
            self._make_item(colour, hex_code, scope)
            for colour, hex_code in self._colours.items()
        ]

    def search(
        self, context: QueryContext, scope: str, query: str
    ) -> List[Item]:
        """Return colours whose name contains *query*, ignoring case.

        No match is an empty result, not an error.
        """
        self._check_scope(scope)
        logger.debug("SEARCH colours matching %r in scope %r", query, scope)
        needle = query.lower()
        return [
            self._make_item(colour, hex_code, scope)
            for colour, hex_code in self._colours.items()
            if needle in colour.lower()
        ]

    def _check_scope(self, scope: str) -> None:
        if scope not in self._scopes:
            raise QueryError(
                QueryErrorType.NOSCOPE,
                f"colours are only supported in scope(s): "
                f"{', '.join(sorted(self._scopes))}",
                scope=scope,
                source_name=SOURCE_NAME,
                item_type=COLOUR_ITEM_TYPE,
            )

    @staticmethod
    def _make_item(colour: str, hex_code: str, scope: str) -> Item:
        return Item(
            type=COLOUR_ITEM_TYPE,
            unique_attribute="name",
            scope=scope,
            attributes=ItemAttributes(
                attr_struct={
                    "name": colour,
                    "hex": hex_code,
                    "rgb": hex_to_rgb(hex_code),
                }
            ),
        )
