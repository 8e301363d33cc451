# src/pfsp_neh/neh.py
"""NEH construction driven by Taillard's accelerated insertion."""
from __future__ import annotations
from typing import Any, Callable, Dict, Optional, Sequence
from .errors import EmptyOrMismatchedInput, InvalidInstance
from .insertion import try_shift_improve
from .matrices import CompletionMatrices
from .model import Job, Solution
from .numeric import get_numeric_type

Logger = Callable[[Dict[str, Any]], None]


def validate_input(jobs: Sequence[Job], number_jobs: int, number_machines: int) -> None:
    if number_jobs <= 1:
        raise InvalidInstance(f"number_jobs must be > 1, got {number_jobs}")
    if number_machines <= 1:
        raise InvalidInstance(f"number_machines must be > 1, got {number_machines}")
    if len(jobs) != number_jobs:
        raise EmptyOrMismatchedInput(f"Expected {number_jobs} jobs, got {len(jobs)}")
    for pos, job in enumerate(jobs):
        if len(job.processing_times) != number_machines:
            raise InvalidInstance(
                f"Job at position {pos} (id={job.id}) has {len(job.processing_times)} "
                f"processing times, expected {number_machines}"
            )


def sort_jobs(jobs: Sequence[Job]) -> list:
    """Descending total processing time; equal totals keep their input order."""
    return sorted(jobs, key=lambda job: job.total_processing_time, reverse=True)


def solve(
    jobs: Sequence[Job],
    number_jobs: int,
    number_machines: int,
    dtype=None,
    logger: Optional[Logger] = None,
    log_every: int = 10,
) -> Solution:
    """Build an NEH sequence for ``jobs``.

    Raises :class:`InvalidInstance` or :class:`EmptyOrMismatchedInput` before
    any computation when the preconditions do not hold.
    """
    validate_input(jobs, number_jobs, number_machines)
    if dtype is None:
        dtype = jobs[0].processing_times.dtype
    spec = get_numeric_type(dtype)
    for pos, job in enumerate(jobs):
        if job.processing_times.dtype != spec.dtype:
            raise InvalidInstance(
                f"Job at position {pos} (id={job.id}) holds {job.processing_times.dtype.name} "
                f"processing times, expected {spec.dtype.name}"
            )

    matrices = CompletionMatrices.allocate(number_jobs, number_machines, spec.dtype)
    solution = Solution(number_jobs=number_jobs, number_machines=number_machines)
    if logger: logger({"event": "neh_start", "n": int(number_jobs), "m": int(number_machines), "dtype": spec.key})

    order = sort_jobs(jobs)
    solution.jobs.append(order[0])
    for index in range(1, len(order)):
        solution.jobs.append(order[index])
        best_index, best_makespan = try_shift_improve(solution, index, matrices, spec.max_value)
        if logger and (index % max(1, log_every) == 0):
            logger({"event": "neh_step", "k": int(index), "job": order[index].id, "pos": int(best_index), "value": best_makespan.item()})

    if logger: logger({"event": "neh_done", "makespan": solution.makespan.item(), "permutation": solution.permutation})
    return solution
