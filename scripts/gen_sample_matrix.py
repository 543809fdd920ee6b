#!/usr/bin/env python3
"""Synthetic character-matrix generator for performance runs and demos.

Generates files in the layout the importer expects:
- Row 1: header (taxon column label + character names)
- Row 2: state definitions (discrete only), e.g. "absent;present;reduced"
- Row 3+: one taxon per row

Discrete cells mix state labels, numeric indices, "?", "NA" and "&"
polymorphisms; continuous cells mix values, ranges ("1.2-1.5") and missing.
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

import numpy as np
import pandas as pd

STATE_WORDS = [
    "absent", "present", "reduced", "enlarged", "fused", "separate",
    "round", "oval", "straight", "curved", "smooth", "serrated",
]


def generate_discrete_rows(taxa: int, chars: int, max_states: int = 4, seed: int = 42) -> list[list[str]]:
    """Build a discrete matrix as rows of text."""
    rng = np.random.default_rng(seed)
    header = ["Taxon"] + [f"Character {c + 1}" for c in range(chars)]
    state_lists: list[list[str]] = []
    for _ in range(chars):
        k = int(rng.integers(2, max_states + 1))
        words = rng.choice(STATE_WORDS, size=min(k, len(STATE_WORDS)), replace=False).tolist()
        state_lists.append(words)
    state_row = [""] + [";".join(states) for states in state_lists]

    rows = [header, state_row]
    for t in range(taxa):
        row = [f"Taxon_{t + 1:05d}"]
        for states in state_lists:
            roll = rng.random()
            if roll < 0.05:
                row.append("?")
            elif roll < 0.08:
                row.append("NA")
            elif roll < 0.15:
                picks = rng.choice(len(states), size=2, replace=False)
                row.append("&".join(states[i] for i in sorted(picks)))
            elif roll < 0.55:
                row.append(str(int(rng.integers(0, len(states)))))
            else:
                row.append(str(rng.choice(states)))
        rows.append(row)
    return rows


def generate_continuous_rows(taxa: int, chars: int, seed: int = 42) -> list[list[str]]:
    """Build a continuous matrix as rows of text."""
    rng = np.random.default_rng(seed)
    header = ["Taxon"] + [f"Measure {c + 1}" for c in range(chars)]
    rows = [header]
    means = rng.uniform(1.0, 500.0, chars)
    for t in range(taxa):
        row = [f"Taxon_{t + 1:05d}"]
        for c in range(chars):
            roll = rng.random()
            value = round(float(rng.normal(means[c], means[c] * 0.1)), 2)
            if roll < 0.05:
                row.append("?")
            elif roll < 0.08:
                row.append("-")
            elif roll < 0.25:
                row.append(f"{value}-{round(value * 1.1, 2)}")
            else:
                row.append(str(value))
        rows.append(row)
    return rows


def write_matrix(output_path: Path, rows: list[list[str]]) -> None:
    """Write rows as .xlsx (openpyxl) or delimited text depending on the suffix."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    df = pd.DataFrame(rows)
    if output_path.suffix.lower() in (".xlsx", ".xlsm"):
        with pd.ExcelWriter(output_path, engine="openpyxl") as writer:
            df.to_excel(writer, sheet_name="Matrix", header=False, index=False)
    else:
        sep = "\t" if output_path.suffix.lower() in (".tsv", ".tab") else ","
        df.to_csv(output_path, sep=sep, header=False, index=False)


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Generate synthetic character matrices",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s data/discrete.xlsx --taxa 500 --chars 120
  %(prog)s data/continuous.csv --kind continuous --taxa 2000 --chars 30
        """,
    )
    parser.add_argument("output", type=Path, help="Output file (.xlsx, .csv, .tsv)")
    parser.add_argument("--kind", choices=["discrete", "continuous"], default="discrete")
    parser.add_argument("--taxa", type=int, default=1_000, help="Number of taxa (default: 1,000)")
    parser.add_argument("--chars", type=int, default=50, help="Number of characters (default: 50)")
    parser.add_argument("--max-states", type=int, default=4, help="Max states per discrete character")
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    args = parser.parse_args()

    if args.taxa <= 0 or args.chars <= 0:
        print("Error: --taxa and --chars must be positive", file=sys.stderr)
        return 1
    if not 2 <= args.max_states <= len(STATE_WORDS):
        print(f"Error: --max-states must be between 2 and {len(STATE_WORDS)}", file=sys.stderr)
        return 1

    if args.kind == "discrete":
        rows = generate_discrete_rows(args.taxa, args.chars, args.max_states, args.seed)
    else:
        rows = generate_continuous_rows(args.taxa, args.chars, args.seed)
    write_matrix(args.output, rows)
    print(f"Created {args.kind} matrix: {args.output}")
    print(f"  Taxa: {args.taxa:,}  Characters: {args.chars}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
