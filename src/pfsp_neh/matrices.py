# src/pfsp_neh/matrices.py
"""Completion-time matrices for Taillard's accelerated insertion.

All three buffers are ``number_jobs x number_machines`` and are allocated once
per solve.  At insertion step ``index`` the prefix is ``jobs[0:index]`` and the
job being inserted sits at ``jobs[index]``; only rows ``0..index`` are
meaningful, the rest is scratch.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Sequence
import numpy as np
from .model import Job


@dataclass
class CompletionMatrices:
    e: np.ndarray
    f: np.ndarray
    q: np.ndarray

    @classmethod
    def allocate(cls, number_jobs: int, number_machines: int, dtype) -> "CompletionMatrices":
        shape = (number_jobs, number_machines)
        return cls(
            e=np.zeros(shape, dtype=dtype),
            f=np.zeros(shape, dtype=dtype),
            q=np.zeros(shape, dtype=dtype),
        )

    @property
    def width(self) -> int:
        return self.e.shape[1]

    def populate(self, jobs: Sequence[Job], index: int) -> None:
        populate_e_mat(jobs, index, self.e)
        populate_f_mat(jobs, index, self.e, self.f)
        populate_q_mat(jobs, index, self.q)


def populate_e_mat(jobs: Sequence[Job], index: int, e_mat: np.ndarray) -> None:
    """Forward completion times of the prefix ``jobs[0:index]``."""
    width = e_mat.shape[1]
    p = jobs[0].processing_times
    # row 0
    e_mat[0, 0] = p[0]
    for j in range(1, width):
        e_mat[0, j] = p[j] + e_mat[0, j-1]
    # rows 1..index-1
    for i in range(1, index):
        p = jobs[i].processing_times
        e_mat[i, 0] = p[0] + e_mat[i-1, 0]
        for j in range(1, width):
            a = e_mat[i-1, j]
            b = e_mat[i, j-1]
            e_mat[i, j] = p[j] + (a if a > b else b)


def populate_f_mat(jobs: Sequence[Job], index: int, e_mat: np.ndarray, f_mat: np.ndarray) -> None:
    """Completion times of ``jobs[index]`` when placed at each position ``0..index``.

    Row ``i`` depends only on row ``i-1`` of ``e_mat``, so rows ``1..index``
    are filled a machine column at a time.
    """
    width = f_mat.shape[1]
    p = jobs[index].processing_times
    # row 0: new job first in sequence
    f_mat[0, 0] = p[0]
    for j in range(1, width):
        f_mat[0, j] = p[j] + f_mat[0, j-1]
    if index == 0:
        return
    rows = slice(1, index + 1)
    prev = slice(0, index)
    f_mat[rows, 0] = p[0] + e_mat[prev, 0]
    for j in range(1, width):
        f_mat[rows, j] = p[j] + np.maximum(e_mat[prev, j], f_mat[rows, j-1])


def populate_q_mat(jobs: Sequence[Job], index: int, q_mat: np.ndarray) -> None:
    """Tail times: ``q_mat[i, j]`` is the time jobs ``i..index-1`` need from machine ``j`` on."""
    width = q_mat.shape[1]
    last = width - 1
    q_mat[index, :] = 0
    if index == 0:
        return
    p = jobs[index-1].processing_times
    q_mat[index-1, last] = p[last]
    for j in range(last - 1, -1, -1):
        q_mat[index-1, j] = p[j] + q_mat[index-1, j+1]
    for i in range(index - 2, -1, -1):
        p = jobs[i].processing_times
        q_mat[i, last] = p[last] + q_mat[i+1, last]
        for j in range(last - 1, -1, -1):
            a = q_mat[i+1, j]
            b = q_mat[i, j+1]
            q_mat[i, j] = p[j] + (a if a > b else b)
