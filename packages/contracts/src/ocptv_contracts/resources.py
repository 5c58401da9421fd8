from __future__ import annotations

import json
from importlib.resources import files
from typing import Any, Final

from .errors import ContractsResourceError

PKG: Final[str] = "ocptv_contracts"

OUTPUT_SCHEMA_REL: Final[str] = "schema/jsonschema/output.schema.json"
SCHEMA_VERSION_REL: Final[str] = "schema/VERSION"


def traversable(rel_path: str):
    return files(PKG).joinpath(rel_path)


def read_text(rel_path: str) -> str:
    try:
        return traversable(rel_path).read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise ContractsResourceError(f"Missing contracts resource: {rel_path}") from e
    except Exception as e:
        # pragma: no cover
        raise ContractsResourceError(
            f"Failed reading contracts resource: {rel_path}: {e}"
        ) from e


def read_json(rel_path: str) -> dict[str, Any]:
    raw = read_text(rel_path)
    try:
        obj = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ContractsResourceError(
            f"Invalid JSON in contracts resource: {rel_path}: {e}"
        ) from e
    if not isinstance(obj, dict):
        raise ContractsResourceError(
            f"Expected JSON object in {rel_path}, got {type(obj).__name__}"
        )
    return obj


def output_schema() -> dict[str, Any]:
    """
    JSON Schema for a single output line
    """
    return read_json(OUTPUT_SCHEMA_REL)


def schema_version_text() -> str:
    """
    Output format version as written in the resource, e.g. "2.0"
    """
    return read_text(SCHEMA_VERSION_REL).strip()


def parse_schema_version(text: str) -> tuple[int, int]:
    """
    Parse "<major>.<minor>" into a tuple of non-negative ints.
    """
    major_s, sep, minor_s = text.strip().partition(".")
    if not sep:
        raise ContractsResourceError(
            f"schema/VERSION must look like '<major>.<minor>', got: {text!r}"
        )
    try:
        major, minor = int(major_s), int(minor_s)
    except ValueError as e:
        raise ContractsResourceError(
            f"schema/VERSION must contain integers, got: {text!r}"
        ) from e
    if major < 0 or minor < 0:
        raise ContractsResourceError(f"schema/VERSION must be >= 0.0, got: {text!r}")
    return major, minor
