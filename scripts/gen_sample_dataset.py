#!/usr/bin/env python3
"""Sample dataset generation script.

Generates a synthetic sales-like CSV for trying the explorer CLI and for manual
performance checks:
- text columns (product, region, channel)
- numeric columns (quantity, unit_price, revenue)
- a date column rendered as text
- an optional share of blank cells to exercise missing-value handling
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any

import numpy as np
import pandas as pd

PRODUCTS = ["Widget", "Gadget", "Gizmo", "Doohickey", "Sprocket", "Flange"]
REGIONS = ["EU", "US", "APAC", "LATAM"]
CHANNELS = ["online", "retail", "partner"]


def generate_sample_data(rows: int, seed: int = 42, blank_ratio: float = 0.0) -> pd.DataFrame:
    """Generate a synthetic sales DataFrame.

    Args:
        rows: Number of data rows to generate
        seed: Random seed for reproducible data
        blank_ratio: Share of cells (outside the first row) blanked out

    Returns:
        DataFrame with mixed text / numeric columns
    """
    np.random.seed(seed)

    quantity = np.random.randint(1, 50, rows)
    unit_price = np.round(np.random.uniform(1.0, 250.0, rows), 2)
    dates = pd.date_range("2024-01-01", periods=365, freq="D")

    data: dict[str, list[Any]] = {
        "order_id": list(range(1, rows + 1)),
        "product": np.random.choice(PRODUCTS, rows).tolist(),
        "region": np.random.choice(REGIONS, rows).tolist(),
        "channel": np.random.choice(CHANNELS, rows).tolist(),
        "order_date": pd.Series(np.random.choice(dates, rows)).dt.strftime("%Y-%m-%d").tolist(),
        "quantity": quantity.tolist(),
        "unit_price": unit_price.tolist(),
        "revenue": np.round(quantity * unit_price, 2).tolist(),
    }
    df = pd.DataFrame(data)

    if blank_ratio > 0 and rows > 1:
        # 先頭行は型推定に使われるので空欄にしない
        mask = np.random.uniform(0, 1, df.shape) < blank_ratio
        mask[0, :] = False
        df = df.mask(mask)
    return df


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Generate a synthetic CSV dataset for the dataset explorer",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s sales.csv
  %(prog)s large.csv --rows 100000 --blank-ratio 0.05 --seed 7
        """,
    )
    parser.add_argument("output", type=Path, help="Output CSV path")
    parser.add_argument("--rows", type=int, default=10_000, help="Number of data rows (default: 10,000)")
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    parser.add_argument("--blank-ratio", type=float, default=0.0, help="Share of blank cells (default: 0)")
    args = parser.parse_args()

    if args.rows <= 0:
        print("Error: --rows must be positive", file=sys.stderr)
        return 1
    if not 0 <= args.blank_ratio < 1:
        print("Error: --blank-ratio must be in [0, 1)", file=sys.stderr)
        return 1

    df = generate_sample_data(args.rows, args.seed, args.blank_ratio)
    args.output.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(args.output, index=False)
    print(f"Created CSV file: {args.output}")
    print(f"  Rows: {args.rows:,}")
    print(f"  Columns: {len(df.columns)} ({', '.join(df.columns)})")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
