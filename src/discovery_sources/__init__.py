"""
discovery-sources: lookup sources for a discovery framework, with a
declarative conformance harness.

A source resolves a query within a scope to a structured :class:`Item`, or
raises a :class:`QueryError`. The conformance harness runs declarative
:class:`~discovery_sources.conformance.SourceTest` cases against any source
and reports every contract violation it finds.

Example:
    >>> from discovery_sources import ColourNameSource, QueryContext
    >>> source = ColourNameSource()
    >>> source.get(QueryContext(), "global", "GreenYellow").attributes.get("hex")
    '#ADFF2F'

Conformance:
    Run the bundled suite with ``pytest --pyargs discovery_sources.conformance``
    or build your own cases and use
    ``discovery_sources.conformance.pytest_helpers``.
"""

__version__ = "1.0.0"

# Core data models
from discovery_sources.models import (
    AttributeNotFoundError,
    DiscoverySourcesError,
    HarnessError,
    Item,
    ItemAttributes,
    QueryError,
    QueryErrorType,
    QueryMethod,
    SearchNotSupportedError,
    UnsupportedMethodError,
    validate_item,
)

# Source contracts
from discovery_sources.source import (
    QueryContext,
    SearchableSource,
    Source,
)

# Colour source
from discovery_sources.colours import (
    COLOUR_ITEM_TYPE,
    DEFAULT_SCOPES,
    ColourNameSource,
    hex_to_rgb,
    load_colour_table,
)

__all__ = [
    # Core data models
    "AttributeNotFoundError",
    "DiscoverySourcesError",
    "HarnessError",
    "Item",
    "ItemAttributes",
    "QueryError",
    "QueryErrorType",
    "QueryMethod",
    "SearchNotSupportedError",
    "UnsupportedMethodError",
    "validate_item",
    # Source contracts
    "QueryContext",
    "SearchableSource",
    "Source",
    # Colour source
    "COLOUR_ITEM_TYPE",
    "DEFAULT_SCOPES",
    "ColourNameSource",
    "hex_to_rgb",
    "load_colour_table",
]
