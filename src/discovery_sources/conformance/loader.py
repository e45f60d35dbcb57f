"""Canonical fixture loading for source conformance testing.

Provides FixtureCase (frozen dataclass) and load_fixtures() for data-driven
conformance tests. Reads from the bundled manifest.json and the case JSON
files it references.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

from discovery_sources.conformance.cases import SourceTest

_FIXTURES_DIR = Path(__file__).parent / "fixtures"
_MANIFEST_PATH = _FIXTURES_DIR / "manifest.json"

_VALID_CATEGORIES = frozenset({"get", "list", "search"})


@dataclass(frozen=True)
class FixtureCase:
    """A single fixture case loaded from the manifest."""

    id: str
    source: str
    notes: str
    test: SourceTest


def _read_manifest() -> Dict[str, Any]:
    with open(_MANIFEST_PATH, "r", encoding="utf-8") as fh:
        manifest: Dict[str, Any] = json.load(fh)
    return manifest


def load_fixtures(category: str, source: Optional[str] = None) -> List[FixtureCase]:
    """Load canonical fixture cases for a category.

    Args:
        category: One of ``"get"``, ``"list"`` or ``"search"``.
        source: If given, only cases written for this source (e.g.
            ``"colour"``) are returned.

    Returns:
        List of :class:`FixtureCase` instances with parsed :class:`SourceTest`
        documents, in manifest order.

    Raises:
        ValueError: If *category* is not one of the recognised categories.
        FileNotFoundError: If the manifest or a referenced fixture file is missing.
        pydantic.ValidationError: If a fixture file is not a valid case document.
    """
    if category not in _VALID_CATEGORIES:
        raise ValueError(
            f"Unknown fixture category: {category!r}. "
            f"Valid categories: {sorted(_VALID_CATEGORIES)}"
        )

    manifest = _read_manifest()
    fixtures: List[FixtureCase] = []

    entries: List[Dict[str, Any]] = manifest["fixtures"]
    for entry in entries:
        fixture_path: str = entry["path"]
        # Filter by category prefix in path
        if not fixture_path.startswith(category + "/"):
            continue
        if source is not None and entry["source"] != source:
            continue

        full_path = _FIXTURES_DIR / fixture_path
        if not full_path.exists():
            raise FileNotFoundError(
                f"Fixture file referenced in manifest does not exist: {full_path}"
            )

        with open(full_path, "r", encoding="utf-8") as fh:
            payload: Any = json.load(fh)

        fixtures.append(
            FixtureCase(
                id=entry["id"],
                source=entry["source"],
                notes=entry["notes"],
                test=SourceTest.model_validate(payload),
            )
        )

    return fixtures


def load_source_tests(category: str, source: Optional[str] = None) -> List[SourceTest]:
    """Shortcut for ``[case.test for case in load_fixtures(...)]``."""
    return [case.test for case in load_fixtures(category, source)]
