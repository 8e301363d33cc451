"""Job and Solution records used by the NEH engine.

``Job`` is immutable: its processing times are stored in a read-only numpy
array and the total is computed once at construction.  ``Solution`` grows by
one job per insertion step and becomes terminal once it holds
``number_jobs`` jobs.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional

import numpy as np

from .numeric import get_numeric_type


@dataclass(frozen=True, eq=False)
class Job:
    """One unit of work.

    Attributes:
        processing_times: Per-machine durations in machine order (read-only).
        total_processing_time: Sum of ``processing_times``.
        id: Position of the job in the input, if known.
    """

    processing_times: np.ndarray
    total_processing_time: object
    id: Optional[int] = None

    @classmethod
    def from_times(cls, times: Iterable, id: Optional[int] = None, dtype=None) -> "Job":
        spec = get_numeric_type(dtype)
        p = np.array(list(times), dtype=spec.dtype)
        p.setflags(write=False)
        total = spec.zero
        for t in p:
            total = total + t
        return cls(processing_times=p, total_processing_time=total, id=id)

    @property
    def number_machines(self) -> int:
        return int(self.processing_times.shape[0])

    def __repr__(self) -> str:
        return f"Job(id={self.id}, times={self.processing_times.tolist()})"


@dataclass
class Solution:
    """Candidate permutation under construction.

    ``makespan`` is the accelerated evaluator's value for the completed
    sequence; it is only set at the final insertion step.
    """

    number_jobs: int
    number_machines: int
    jobs: List[Job] = field(default_factory=list)
    makespan: Optional[object] = None

    @property
    def is_complete(self) -> bool:
        return len(self.jobs) == self.number_jobs

    @property
    def permutation(self) -> List[Optional[int]]:
        """Job ids in sequence order."""
        return [job.id for job in self.jobs]


def jobs_from_matrix(p_times: np.ndarray, dtype=None) -> List[Job]:
    """Build jobs from a ``(machines, jobs)`` processing-time matrix."""
    return [Job.from_times(p_times[:, j], id=j, dtype=dtype) for j in range(p_times.shape[1])]
