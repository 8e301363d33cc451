"""Reporting helpers for NEH benchmark results."""

from __future__ import annotations

from typing import Mapping

import pandas as pd

from .runner import BenchmarkResult


def add_rpd_column(
    df: pd.DataFrame,
    best_known: Mapping[str, float] | None = None,
    makespan_column: str = "makespan",
    rpd_column: str = "rpd",
) -> pd.DataFrame:
    """Return a copy of *df* with a normalised relative percent deviation column.

    Parameters
    ----------
    df:
        DataFrame with at least ``instance`` and *makespan_column* columns.
    best_known:
        Optional mapping from instance name to best known makespan.  When
        provided, the ``best_known`` column is filled/overwritten with the
        mapped values before computing the deviation.
    makespan_column, rpd_column:
        Which makespan to measure and where to store the result.
    """

    if "instance" not in df.columns:
        raise ValueError("Input DataFrame must contain an 'instance' column")
    if makespan_column not in df.columns:
        raise ValueError(f"Input DataFrame must contain a '{makespan_column}' column")

    result = df.copy()
    if best_known is not None:
        result["best_known"] = result["instance"].map(best_known)
    if "best_known" not in result.columns:
        result["best_known"] = pd.NA
    if rpd_column not in result.columns:
        result[rpd_column] = float("nan")
    result[rpd_column] = result[rpd_column].astype(float)
    known = pd.to_numeric(result["best_known"], errors="coerce")
    mask = known.notna() & (known > 0)
    result.loc[mask, rpd_column] = (
        (result.loc[mask, makespan_column].astype(float) - known[mask]) / known[mask] * 100.0
    )
    return result


def enrich_neh_results(df: pd.DataFrame, best_known: Mapping[str, float] | None = None) -> pd.DataFrame:
    """Deviation columns for both makespans of a benchmark table (``raw.csv``).

    Adds ``rpd`` (accelerated value), ``neh_rpd`` (recomputed value) and
    ``makespan_gap``, and refreshes ``consistent`` from the two makespans.
    """

    if "neh_makespan" not in df.columns:
        raise ValueError("Input DataFrame must contain a 'neh_makespan' column; expected NEH benchmark results")
    result = add_rpd_column(df, best_known)
    result = add_rpd_column(result, None, makespan_column="neh_makespan", rpd_column="neh_rpd")
    result["makespan_gap"] = result["makespan"].astype(float) - result["neh_makespan"].astype(float)
    result["consistent"] = result["makespan_gap"] == 0
    return result


def summarise_results(df: pd.DataFrame) -> pd.DataFrame:
    """One-row aggregate over all benchmarked instances."""

    required = {"instance", "makespan", "elapsed_avg_us"}
    missing = required.difference(df.columns)
    if missing:
        raise ValueError(f"DataFrame missing required columns: {', '.join(sorted(missing))}")
    summary = {
        "instances": int(df["instance"].nunique()),
        "makespan_mean": float(df["makespan"].mean()),
        "elapsed_avg_us_mean": float(df["elapsed_avg_us"].mean()),
    }
    if "elapsed_max_us" in df.columns:
        summary["elapsed_max_us"] = float(df["elapsed_max_us"].max())
    if "consistent" in df.columns:
        summary["all_consistent"] = bool(df["consistent"].all())
    if "rpd" in df.columns and df["rpd"].notna().any():
        summary["rpd_mean"] = float(df["rpd"].mean())
    return pd.DataFrame([summary])


def format_instance_report(res: BenchmarkResult) -> str:
    """Text block for one instance: both makespans and the timing spread."""

    return "\n".join([
        f"Instance name: {res.instance}",
        f"\tNEH makespan: {res.neh_makespan}",
        f"\tNEH makespan with Taillard's acceleration: {res.makespan}",
        f"\telapsed avg: {res.elapsed_avg_us:.0f}us",
        f"\telapsed min: {res.elapsed_min_us:.0f}us",
        f"\telapsed max: {res.elapsed_max_us:.0f}us",
    ])
