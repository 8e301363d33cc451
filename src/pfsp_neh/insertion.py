# src/pfsp_neh/insertion.py
from __future__ import annotations
from typing import List, Tuple
import numpy as np
from .matrices import CompletionMatrices
from .model import Solution


def insertion_makespans(matrices: CompletionMatrices, index: int) -> np.ndarray:
    """Makespan of placing the new job at each position ``0..index``."""
    rows = slice(0, index + 1)
    return (matrices.f[rows] + matrices.q[rows]).max(axis=1)


def best_insertion(candidates: np.ndarray, max_value) -> Tuple[int, object]:
    """Scan candidates in position order; strict ``<`` keeps the lowest index on ties."""
    best_index = len(candidates) - 1
    best_makespan = max_value
    for i, max_sum in enumerate(candidates):
        if max_sum < best_makespan:
            best_index = i
            best_makespan = max_sum
    return best_index, best_makespan


def rotate_into_place(jobs: List, best_index: int, index: int) -> None:
    """Move ``jobs[index]`` to ``best_index``, shifting ``jobs[best_index:index]`` right by one."""
    if best_index < index:
        jobs.insert(best_index, jobs.pop(index))


def try_shift_improve(solution: Solution, index: int, matrices: CompletionMatrices, max_value) -> Tuple[int, object]:
    """Relocate ``solution.jobs[index]`` to its best position among ``jobs[0:index+1]``.

    On the final step the winning value becomes ``solution.makespan``.
    Returns ``(best_index, best_makespan)``.
    """
    matrices.populate(solution.jobs, index)
    best_index, best_makespan = best_insertion(insertion_makespans(matrices, index), max_value)
    rotate_into_place(solution.jobs, best_index, index)
    if index == solution.number_jobs - 1:
        solution.makespan = best_makespan
    return best_index, best_makespan
