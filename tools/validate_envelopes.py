#!/usr/bin/env python3
"""Validate exported Fractalizer envelopes against the published JSON schema."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from fractalizer.envelope_schema import envelope_errors, load_envelope_schema


def _load_schema(path: Path | None) -> dict:
    if path is None:
        return load_envelope_schema()
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise RuntimeError(f"Unable to read schema file {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise RuntimeError(f"Schema file {path} is not valid JSON: {exc}") from exc


def _load_envelope(path: Path) -> dict:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise RuntimeError(f"Unable to read envelope {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise RuntimeError(f"Envelope {path} is not valid JSON: {exc}") from exc


def validate_envelopes(exports_dir: Path, schema_path: Path | None, fail_fast: bool) -> int:
    if not exports_dir.exists():
        print(f"[fractalizer] No exports directory found at {exports_dir}", file=sys.stderr)
        return 2

    files = sorted(exports_dir.glob("*.json"))
    if not files:
        print(f"[fractalizer] No envelope JSON files found in {exports_dir}", file=sys.stderr)
        return 2

    schema = _load_schema(schema_path)
    failures = 0
    processed = 0

    for path in files:
        processed += 1
        try:
            errors = envelope_errors(_load_envelope(path), schema)
        except RuntimeError as exc:
            errors = [str(exc)]

        if errors:
            failures += 1
            print(f"[FAIL] {path}", file=sys.stderr)
            for item in errors:
                print(f"  - {item}", file=sys.stderr)
            if fail_fast:
                break

    passed = processed - failures
    print(f"Validated {passed}/{len(files)} envelopes in {exports_dir}")
    if processed != len(files):
        print(f"  Processed {processed} files before exiting early")

    return 0 if failures == 0 else 1


def main() -> int:
    parser = argparse.ArgumentParser(description="Validate exported envelopes against the JSON schema.")
    parser.add_argument(
        "--exports-dir",
        type=Path,
        default=Path("exports"),
        help="Directory containing exported *.json envelopes (default: exports/)",
    )
    parser.add_argument(
        "--schema",
        type=Path,
        help="Path to an envelope JSON schema (default: the packaged schema)",
    )
    parser.add_argument(
        "--fail-fast",
        action="store_true",
        help="Stop after the first validation failure",
    )

    args = parser.parse_args()
    try:
        return validate_envelopes(args.exports_dir, args.schema, args.fail_fast)
    except RuntimeError as exc:
        print(f"[fractalizer] {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
