# src/pfsp_neh/makespan.py
"""Plain completion-time recurrence, independent of the acceleration matrices."""
from __future__ import annotations
from typing import Sequence, Union
import numpy as np
from .model import Job, Solution


def _completion_time(times: np.ndarray):
    """Last completion time of ``times`` (rows = jobs in sequence order, cols = machines)."""
    n, m = times.shape
    T = np.zeros((n, m), dtype=times.dtype)
    for i in range(n):
        p = times[i]
        for j in range(m):
            a = T[i-1, j] if i > 0 else 0
            b = T[i, j-1] if j > 0 else 0
            T[i, j] = p[j] + (a if a > b else b)
    return T[n-1, m-1]


def calculate_makespan(sequence: Union[Solution, Sequence[Job]]):
    """True makespan of a complete job sequence (or a :class:`Solution`)."""
    jobs = sequence.jobs if isinstance(sequence, Solution) else sequence
    return _completion_time(np.stack([job.processing_times for job in jobs]))


def makespan(order: np.ndarray, p_times: np.ndarray):
    """Makespan of job indices ``order`` against a ``(machines, jobs)`` matrix."""
    order = np.asarray(order, dtype=np.int64)
    return _completion_time(p_times[:, order].T)
