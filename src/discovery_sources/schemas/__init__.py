"""Committed JSON Schemas for declarative case documents.

Regenerate with ``python -m discovery_sources.schemas.generate``.
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List

_SCHEMA_DIR = Path(__file__).parent
_SUFFIX = ".schema.json"


def list_schemas() -> List[str]:
    """Names of every committed schema, e.g. ``["source_test"]``."""
    return sorted(p.name[: -len(_SUFFIX)] for p in _SCHEMA_DIR.glob(f"*{_SUFFIX}"))


def load_schema(name: str) -> Dict[str, Any]:
    """Load a committed schema by name.

    Raises:
        FileNotFoundError: If no schema called *name* is committed.
    """
    path = _SCHEMA_DIR / f"{name}{_SUFFIX}"
    if not path.is_file():
        raise FileNotFoundError(
            f"No case schema named {name!r}. Available: {list_schemas()}"
        )
    schema: Dict[str, Any] = json.loads(path.read_text(encoding="utf-8"))
    return schema
