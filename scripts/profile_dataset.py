#!/usr/bin/env python3
"""
Profile the missingness structure of a CSV dataset.

Usage:
    python scripts/profile_dataset.py --csv data/clindata_miss.csv
    python scripts/profile_dataset.py --csv data.csv --config configs/profile.yaml
    python scripts/profile_dataset.py --csv data.csv --no-sort --no-transform --device cuda
"""

import argparse
import sys
from pathlib import Path

import numpy as np
import pandas as pd

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from dimple.config.schema import DimpleConfig
from dimple.config.load import load_config, apply_overrides
from dimple.analysis.report import profile_dataset
from dimple.core.exceptions import ConfigError, SchemaError


def parse_args():
    parser = argparse.ArgumentParser(description="Profile missing data structure of a CSV file")
    parser.add_argument("--csv", type=str, required=True, help="Path to CSV file")
    parser.add_argument("--config", type=str, default=None, help="Path to YAML config file")
    parser.add_argument("--device", type=str, default=None, help="Override device (cpu/cuda)")
    parser.add_argument("--no-sort", action="store_true", help="Keep original row order in the matrix view")
    parser.add_argument("--no-transform", action="store_true", help="Do not standardize the matrix view")
    parser.add_argument("--na-value", type=float, default=None, help="Extra numeric code meaning missing")
    parser.add_argument("--quiet", action="store_true", help="Only print the final tables")
    return parser.parse_args()


def main():
    args = parse_args()
    
    try:
        config = load_config(args.config) if args.config else DimpleConfig()
        config = apply_overrides(
            config,
            device=args.device,
            matrixplot_sort=False if args.no_sort else None,
            plot_transform=False if args.no_transform else None,
            verbose=not args.quiet,
        )
    except ConfigError as e:
        print(f"Config error: {e}")
        sys.exit(1)
    
    path = Path(args.csv)
    df = pd.read_csv(path)
    if args.na_value is not None:
        df = df.replace(args.na_value, np.nan)
    
    try:
        report = profile_dataset(df, config=config, dataset_id=path.stem)
    except SchemaError as e:
        print(f"Schema error: {e}")
        print(f"Non-numeric columns: {', '.join(e.columns)}")
        sys.exit(1)
    
    print("\n" + "=" * 60)
    print(f"MISSINGNESS PROFILE: {path.name}")
    print("=" * 60)
    print(f"  Rows: {report.rows}  Columns: {report.columns}  Complete cases: {report.complete_cases}")
    print(f"  Total NA: {report.total_na} ({report.fraction_missingness*100:.2f}%)")
    
    print("\nMissing fraction per variable:")
    print(report.fraction_missingness_per_variable.round(3).to_string())
    
    print("\nMissing data patterns:")
    print(report.md_pattern.to_frame().to_string())
    
    print("\nmin_PDM thresholds:")
    print(report.min_pdm_thresholds.to_frame().to_string())
    
    if report.vars_above_half:
        print(f"\nVariables with >= {config.profile.high_missingness_cutoff:.0%} missingness: {', '.join(report.vars_above_half)}")
    
    if report.dendrogram is not None:
        print(f"\nCo-missingness leaf order: {', '.join(report.dendrogram.leaf_order)}")
    else:
        print(f"\nCo-missingness clustering: {report.dendrogram_error}")


if __name__ == "__main__":
    main()
