"""Build-time JSON Schema generation for declarative case documents.

Run: python -m discovery_sources.schemas.generate [--check]
"""
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Type

from pydantic import BaseModel

from discovery_sources.conformance.cases import SourceTest

SCHEMA_DIR = Path(__file__).parent

# Case files are input documents, so schemas use validation mode
PYDANTIC_MODELS: List[tuple[str, Type[BaseModel]]] = [
    ("source_test", SourceTest),
]


def generate_schema(name: str, model: Type[BaseModel]) -> Dict[str, Any]:
    """Generate JSON Schema for a Pydantic model with $schema and $id set."""
    schema = model.model_json_schema(mode="validation")
    schema["$schema"] = "https://json-schema.org/draft/2020-12/schema"
    schema["$id"] = f"discovery-sources/{name}"
    return schema


def schema_to_json(schema: Dict[str, Any]) -> str:
    """Serialize schema to a deterministic JSON string with trailing newline."""
    return json.dumps(schema, indent=2, sort_keys=True) + "\n"


def generate_all_schemas() -> Dict[str, Dict[str, Any]]:
    return {name: generate_schema(name, model) for name, model in PYDANTIC_MODELS}


def write_all_schemas(schemas: Dict[str, Dict[str, Any]]) -> None:
    for name, schema in schemas.items():
        path = SCHEMA_DIR / f"{name}.schema.json"
        path.write_text(schema_to_json(schema), encoding="utf-8")
        print(f"Generated {path}")


def check_drift() -> int:
    """Check if generated schemas match committed files.

    Returns:
        0 if all schemas match, 1 if any drift detected
    """
    schemas = generate_all_schemas()
    drift_detected = False

    for name, schema in schemas.items():
        path = SCHEMA_DIR / f"{name}.schema.json"
        if not path.exists():
            print(f"ERROR: Missing schema file: {path}", file=sys.stderr)
            drift_detected = True
            continue
        if path.read_text(encoding="utf-8") != schema_to_json(schema):
            print(f"ERROR: Schema drift detected in {path}", file=sys.stderr)
            drift_detected = True

    expected_files = {f"{name}.schema.json" for name in schemas}
    actual_files = {p.name for p in SCHEMA_DIR.glob("*.schema.json")}
    for orphan in sorted(actual_files - expected_files):
        print(f"Orphaned schema {orphan}", file=sys.stderr)
        drift_detected = True

    if drift_detected:
        print("\nSchema drift detected. Run without --check to regenerate.", file=sys.stderr)
        return 1

    print(f"All {len(schemas)} schemas are up to date.")
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Generate JSON schemas for discovery-sources case documents"
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Check for schema drift without writing files (CI mode)",
    )
    args = parser.parse_args()

    if args.check:
        return check_drift()

    schemas = generate_all_schemas()
    write_all_schemas(schemas)
    print(f"\nSuccessfully generated {len(schemas)} schemas.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
