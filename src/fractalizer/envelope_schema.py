"""JSON schema checks for rendered envelopes."""

from __future__ import annotations

import json
from functools import lru_cache
from importlib import resources
from typing import Any, Iterable, List

from jsonschema import Draft202012Validator, ValidationError

SCHEMA_RESOURCE = "envelope.schema.json"


@lru_cache(maxsize=1)
def load_envelope_schema() -> dict:
    text = resources.files("fractalizer.schemas").joinpath(SCHEMA_RESOURCE).read_text(encoding="utf-8")
    return json.loads(text)


def format_error_path(error: ValidationError) -> str:
    if not error.absolute_path:
        return "$"
    parts: Iterable[str] = ("$", *map(str, error.absolute_path))
    return ".".join(parts)


def envelope_errors(envelope: Any, schema: dict | None = None) -> List[str]:
    """
    Validate an envelope and return every violation as "<json path>: <message>".

    An empty list means the envelope is valid.
    """
    validator = Draft202012Validator(schema or load_envelope_schema())
    errors = sorted(validator.iter_errors(envelope), key=lambda e: list(map(str, e.absolute_path)))
    return [f"{format_error_path(e)}: {e.message}" for e in errors]
