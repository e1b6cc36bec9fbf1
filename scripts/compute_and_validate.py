#!/usr/bin/env python3
"""
Utility to compute statistics for a GFF source and validate them against schema.json.

This is primarily used by CI but can also be executed locally:

    python scripts/compute_and_validate.py annotation.gff3
"""

from __future__ import annotations

import json
from pathlib import Path
import sys

from jsonschema import Draft7Validator

from gffinfo import compute_gff_stats, load_gff

SCHEMA_PATH = Path(__file__).resolve().parent.parent / "schema.json"
OUTPUT_PATH = Path("stats_ci.json")


def main(sources: list[str]) -> None:
    print(f"Computing stats for {', '.join(sources) or 'stdin'}")
    stats = compute_gff_stats(load_gff(sources))

    OUTPUT_PATH.write_text(json.dumps(stats, indent=2))
    print(f"Wrote statistics to {OUTPUT_PATH}")

    schema = json.loads(SCHEMA_PATH.read_text())
    Draft7Validator(schema).validate(stats)
    print(f"Validation succeeded using schema at {SCHEMA_PATH}")


if __name__ == "__main__":
    try:
        main(sys.argv[1:])
    except Exception as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise
