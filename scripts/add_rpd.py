#!/usr/bin/env python3
"""Re-score an NEH benchmark table (``raw.csv``) against best-known makespans.

Both the accelerated makespan and the recomputed one get a relative percent
deviation column; instances where the two disagree are listed.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if SRC.exists():
    sys.path.insert(0, str(SRC))

import pandas as pd

from pfsp_neh.instance import load_best_known
from pfsp_neh.reporting import enrich_neh_results, summarise_results


def main() -> None:
    parser = argparse.ArgumentParser(description="Add RPD columns for both NEH makespans to a raw.csv")
    parser.add_argument("--results", type=str, required=True, help="raw.csv written by run_experiments.py")
    parser.add_argument("--bks-file", type=str, required=True, help="CSV with columns 'instance' and 'best_makespan'")
    parser.add_argument("--output", type=str, default=None, help="Defaults to raw_with_rpd.csv next to --results")
    parser.add_argument("--summary", type=str, default=None, help="Optional path for a one-row summary CSV")
    args = parser.parse_args()

    results_path = Path(args.results)
    df = pd.read_csv(results_path)
    enriched = enrich_neh_results(df, load_best_known(args.bks_file))

    output_path = Path(args.output) if args.output else results_path.with_name("raw_with_rpd.csv")
    enriched.to_csv(output_path, index=False)
    print(f"Wrote {len(enriched)} instances to {output_path}")

    missing = enriched.loc[enriched["rpd"].isna(), "instance"].tolist()
    if missing:
        print(f"[warn] no best-known makespan for: {', '.join(map(str, missing))}")
    drift = enriched.loc[~enriched["consistent"], ["instance", "makespan", "neh_makespan"]]
    for row in drift.itertuples(index=False):
        print(f"[warn] {row.instance}: accelerated {row.makespan} != recomputed {row.neh_makespan}")
    if enriched["rpd"].notna().any():
        print(f"mean RPD: {enriched['rpd'].mean():.3f}% (recomputed: {enriched['neh_rpd'].mean():.3f}%)")

    if args.summary:
        summarise_results(enriched).to_csv(args.summary, index=False)


if __name__ == "__main__":
    main()
