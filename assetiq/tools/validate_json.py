from __future__ import annotations

import argparse
import importlib.resources as resources
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import jsonschema

from assetiq.schema_constants import (
    SCHEMA_RESOURCE_NAME,
    SCHEMA_RESOURCE_PACKAGE,
    SCHEMA_VERSION,
)

EXPECTED_SCHEMA_VERSION = SCHEMA_VERSION


class StrictJsonError(ValueError):
    """Raised when JSON is invalid or contains forbidden constants (NaN/Infinity)."""


class SchemaVersionMismatch(ValueError):
    """Raised when meta.schema_version does not match EXPECTED_SCHEMA_VERSION."""


@dataclass(frozen=True)
class ValidationResult:
    ok: bool
    schema_version: str
    prediction_count: int


def _reject_nonfinite_constants(value: str) -> Any:
    # stdlib json would otherwise turn these into floats
    raise StrictJsonError(f"Forbidden JSON constant encountered: {value}")


def load_schema() -> dict[str, Any]:
    """The bundled health report schema, read from package resources."""
    text = resources.files(SCHEMA_RESOURCE_PACKAGE).joinpath(SCHEMA_RESOURCE_NAME).read_text(encoding="utf-8")
    return parse_strict_json(text)


def parse_strict_json(text: str) -> dict[str, Any]:
    try:
        data = json.loads(text, parse_constant=_reject_nonfinite_constants)
    except json.JSONDecodeError as e:
        raise StrictJsonError(f"Invalid JSON: {e.msg} (line {e.lineno}, col {e.colno})") from e

    if not isinstance(data, dict):
        raise StrictJsonError("Top-level JSON must be an object.")
    return data


def _extract_schema_version(data: dict[str, Any]) -> str:
    meta = data.get("meta")
    if not isinstance(meta, dict):
        raise SchemaVersionMismatch("Missing or invalid 'meta' object.")
    v = meta.get("schema_version")
    if not isinstance(v, str) or not v.strip():
        raise SchemaVersionMismatch("Missing or invalid 'meta.schema_version' (must be a non-empty string).")
    return v.strip()


def validate_payload(
    data: dict[str, Any],
    *,
    expected_schema_version: str = EXPECTED_SCHEMA_VERSION,
) -> ValidationResult:
    # version lock first so a newer report fails with a readable message
    actual = _extract_schema_version(data)
    if actual != expected_schema_version:
        raise SchemaVersionMismatch(
            f"Schema version mismatch: expected '{expected_schema_version}', got '{actual}'."
        )

    jsonschema.validate(instance=data, schema=load_schema())

    return ValidationResult(
        ok=True,
        schema_version=actual,
        prediction_count=len(data["report"]["predictions"]),
    )


def validate_json(
    path: str | Path,
    *,
    expected_schema_version: str = EXPECTED_SCHEMA_VERSION,
) -> ValidationResult:
    """
    Validate an AssetIQ health report JSON file by:
      1) strict JSON parse (reject NaN/Infinity)
      2) hard-lock meta.schema_version to the expected version
      3) JSON Schema validation (bundled schema)
    """
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(str(p))

    data = parse_strict_json(p.read_text(encoding="utf-8"))
    return validate_payload(data, expected_schema_version=expected_schema_version)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="assetiq-validate", description="Validate an AssetIQ health report JSON.")
    parser.add_argument("path", help="Path to JSON report file")
    args = parser.parse_args(argv)

    try:
        result = validate_json(args.path)
    except (FileNotFoundError, ValueError, jsonschema.ValidationError) as e:
        print(f"ERROR: {e}")
        return 1

    print(f"OK: JSON validation passed (strict + schema {result.schema_version}, {result.prediction_count} predictions).")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
