# src/pfsp_neh/instance.py
from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional, Union
import numpy as np
import pandas as pd
from .errors import InstanceFormatError
from .model import Job, jobs_from_matrix
from .numeric import get_numeric_type

PathLike = Union[str, Path]

@dataclass
class Instance:
    name: str
    p_times: np.ndarray  # shape: (machines, jobs)
    best_makespan: Optional[float] = None
    @property
    def m(self) -> int: return self.p_times.shape[0]
    @property
    def n(self) -> int: return self.p_times.shape[1]

    def to_jobs(self) -> List[Job]:
        """Fresh job records in input order (ids are 0-based input positions)."""
        return jobs_from_matrix(self.p_times, dtype=self.p_times.dtype)

def _parse_time(token: str, dtype: np.dtype):
    if np.issubdtype(dtype, np.integer):
        return int(token)
    return float(token)

def _is_float(token: str) -> bool:
    try:
        float(token)
        return True
    except ValueError:
        return False

def parse_instance_text(text: str, name: str = "instance", dtype=None) -> Instance:
    """Parse the textual instance format.

    Line 0 is a header, line 1 holds ``number_jobs number_machines``, line 2 is
    ignored and each following line holds one job's processing times.
    """
    spec = get_numeric_type(dtype)
    lines = text.splitlines()
    if len(lines) < 2:
        raise InstanceFormatError(f"{name}: missing dimensions line")
    dims = lines[1].split()
    if len(dims) < 2:
        raise InstanceFormatError(f"{name}: line 2 must hold number_jobs and number_machines. Got: {lines[1]!r}")
    try:
        n, m = int(dims[0]), int(dims[1])
    except ValueError as e:
        raise InstanceFormatError(f"{name}: dimensions must be integers. Got: {lines[1]!r}") from e

    body = lines[3:3+n]
    if len(body) != n:
        raise InstanceFormatError(f"{name}: expected {n} job lines, found {len(body)}")
    p_times = np.zeros((m, n), dtype=spec.dtype)
    for j, line in enumerate(body):
        tokens = line.split()  # tab-separated in practice; any whitespace accepted
        if len(tokens) != m:
            raise InstanceFormatError(f"{name}: line {j+4} has {len(tokens)} values, expected {m}")
        try:
            row = [_parse_time(t, spec.dtype) for t in tokens]
        except ValueError as e:
            if np.issubdtype(spec.dtype, np.integer) and all(_is_float(t) for t in tokens):
                raise InstanceFormatError(
                    f"{name}: line {j+4} holds fractional processing times; "
                    f"load it with a float type (dtype='float', or --dtype float on the command line)"
                ) from e
            raise InstanceFormatError(f"{name}: line {j+4} holds a non-numeric value") from e
        if any(t < 0 for t in row):
            raise InstanceFormatError(f"{name}: line {j+4} holds a negative processing time")
        p_times[:, j] = row
    return Instance(name=name, p_times=p_times)

def read_raw_instance(path: PathLike, dtype=None) -> Instance:
    path = Path(path)
    with open(path, "r") as f:
        text = f.read()
    return parse_instance_text(text, name=path.stem, dtype=dtype)

def read_instance_names(path: PathLike) -> List[str]:
    """One instance name per line; blank lines are skipped."""
    with open(path, "r") as f:
        return [line.strip() for line in f if line.strip()]

def read_instances(data_dir: PathLike, names: Iterable[str], dtype=None, verbose: bool = False) -> Dict[str, Instance]:
    data_dir = Path(data_dir)
    names = list(names)
    out: Dict[str, Instance] = {}
    for idx, name in enumerate(names, start=1):
        if verbose:
            print(f"[read] {idx}/{len(names)} {name}")
        out[name] = read_raw_instance(data_dir / f"{name}.txt", dtype=dtype)
    return out

def load_best_known(csv_path: PathLike) -> Dict[str, float]:
    df = pd.read_csv(csv_path)
    if not {"instance", "best_makespan"} <= set(df.columns):
        raise ValueError("best_known.csv must have columns: instance,best_makespan")
    return (
        df[["instance", "best_makespan"]]
        .dropna()
        .set_index("instance")["best_makespan"]
        .astype(float)
        .to_dict()
    )

def attach_best_known(instances: Dict[str, Instance], best_known: Mapping[str, float]) -> None:
    for name, val in best_known.items():
        if name in instances:
            instances[name].best_makespan = float(val)
