"""Repeated-run benchmark harness for the NEH engine."""
from __future__ import annotations

import time
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

import pandas as pd

from .instance import Instance
from .makespan import calculate_makespan
from .neh import solve
from .numeric import get_numeric_type


@dataclass
class BenchmarkResult:
    instance: str
    n: int
    m: int
    runs: int
    permutation: List[int]
    makespan: float          # accelerated value recorded by the builder
    neh_makespan: float      # recomputed with the plain recurrence
    elapsed_avg_us: float
    elapsed_min_us: float
    elapsed_max_us: float

    @property
    def consistent(self) -> bool:
        return self.makespan == self.neh_makespan


def benchmark_instance(
    inst: Instance,
    runs: int = 1,
    dtype=None,
    logger: Optional[Callable[[Dict[str, Any]], None]] = None,
) -> BenchmarkResult:
    """Solve ``inst`` ``runs`` times; every run gets freshly built jobs.

    Only the solve itself is timed.  The last run's solution is verified with
    :func:`calculate_makespan`.
    """
    if runs < 1:
        raise ValueError(f"runs must be >= 1, got {runs}")
    spec = get_numeric_type(dtype if dtype is not None else inst.p_times.dtype)
    p_times = inst.p_times.astype(spec.dtype, copy=False)
    timings: List[float] = []
    for run_idx in range(runs):
        jobs = Instance(name=inst.name, p_times=p_times).to_jobs()
        t0 = time.perf_counter_ns()
        solution = solve(jobs, inst.n, inst.m, dtype=spec.dtype,
                         logger=logger if run_idx == runs - 1 else None)
        timings.append((time.perf_counter_ns() - t0) / 1000.0)

    return BenchmarkResult(
        instance=inst.name,
        n=int(inst.n),
        m=int(inst.m),
        runs=int(runs),
        permutation=[int(j) for j in solution.permutation],
        makespan=solution.makespan.item(),
        neh_makespan=calculate_makespan(solution).item(),
        elapsed_avg_us=sum(timings) / len(timings),
        elapsed_min_us=min(timings),
        elapsed_max_us=max(timings),
    )


def _result_record(name: str, res: BenchmarkResult, best_known: Optional[float]) -> dict:
    rpd = (
        100.0 * (res.makespan - best_known) / best_known
        if (best_known is not None and best_known > 0)
        else None
    )
    return {
        "instance": name,
        "n": res.n,
        "m": res.m,
        "runs": res.runs,
        "makespan": res.makespan,
        "neh_makespan": res.neh_makespan,
        "consistent": res.consistent,
        "best_known": best_known,
        "rpd": rpd,
        "elapsed_avg_us": res.elapsed_avg_us,
        "elapsed_min_us": res.elapsed_min_us,
        "elapsed_max_us": res.elapsed_max_us,
        "permutation": " ".join(map(str, res.permutation)),
    }


def benchmark_all(
    instances: Dict[str, Instance],
    runs: int = 1,
    dtype=None,
    workers: int = 1,
    logger_factory: Optional[Callable[[str], Callable[[Dict[str, Any]], None]]] = None,
) -> Dict[str, BenchmarkResult]:
    """Benchmark every instance, keyed like ``instances``.

    With ``workers > 1`` instances are solved in a process pool, one
    independent solve per worker; ``logger_factory`` is ignored in that case
    because trace callbacks do not cross process boundaries.
    """
    names = list(instances)
    if workers > 1:
        with ProcessPoolExecutor(max_workers=workers) as executor:
            futures = [executor.submit(benchmark_instance, instances[name], runs, dtype) for name in names]
            return {name: f.result() for name, f in zip(names, futures)}
    results: Dict[str, BenchmarkResult] = {}
    for name in names:
        logger = logger_factory(name) if logger_factory else None
        results[name] = benchmark_instance(instances[name], runs=runs, dtype=dtype, logger=logger)
    return results


def results_to_frame(results: Dict[str, BenchmarkResult], instances: Dict[str, Instance]) -> pd.DataFrame:
    records = [
        _result_record(name, res, instances[name].best_makespan if name in instances else None)
        for name, res in results.items()
    ]
    return pd.DataFrame.from_records(records)


def run_experiments(
    instances: Dict[str, Instance],
    runs: int = 1,
    dtype=None,
    workers: int = 1,
    stream_progress: bool = True,
    logger_factory: Optional[Callable[[str], Callable[[Dict[str, Any]], None]]] = None,
) -> pd.DataFrame:
    """Benchmark every instance and return one row per instance."""
    results = benchmark_all(instances, runs=runs, dtype=dtype, workers=workers, logger_factory=logger_factory)
    if stream_progress:
        for name, res in results.items():
            print(f"{name} | n={res.n} m={res.m} -> {res.makespan} "
                  f"(avg {res.elapsed_avg_us:.0f}us over {res.runs} runs)", flush=True)
    return results_to_frame(results, instances)
