# src/pfsp_neh/numeric.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Mapping, Union
import numpy as np

@dataclass(frozen=True)
class NumericType:
    key: str
    dtype: np.dtype
    description: str

    @property
    def zero(self):
        return self.dtype.type(0)

    @property
    def max_value(self):
        # "+infinity" for the best-insertion scan: nothing compares above it
        if np.issubdtype(self.dtype, np.floating):
            return self.dtype.type(np.inf)
        return self.dtype.type(np.iinfo(self.dtype).max)

NUMERIC_TYPES: Mapping[str, NumericType] = {
    "int": NumericType(key="int", dtype=np.dtype(np.int64), description="64-bit integer durations (default)."),
    "int32": NumericType(key="int32", dtype=np.dtype(np.int32), description="32-bit integer durations."),
    "float": NumericType(key="float", dtype=np.dtype(np.float64), description="Double precision durations."),
    "float32": NumericType(key="float32", dtype=np.dtype(np.float32), description="Single precision durations."),
}

DEFAULT_NUMERIC_TYPE = "int"

def get_numeric_type(key: Union[str, np.dtype, type, None] = None) -> NumericType:
    """Resolve a registry key or a numpy dtype to its :class:`NumericType`."""
    if key is None:
        return NUMERIC_TYPES[DEFAULT_NUMERIC_TYPE]
    if isinstance(key, str) and key in NUMERIC_TYPES:
        return NUMERIC_TYPES[key]
    try:
        dtype = np.dtype(key)
    except TypeError:
        dtype = None
    if dtype is not None:
        for spec in NUMERIC_TYPES.values():
            if spec.dtype == dtype:
                return spec
    raise KeyError(f"Unknown numeric type '{key}'. Available: {', '.join(sorted(NUMERIC_TYPES))}")

def describe_numeric_types() -> str:
    lines = ["Numeric types:"]
    lines += [f"  - {t.key} ({t.dtype.name}): {t.description}" for t in NUMERIC_TYPES.values()]
    return "\n".join(lines)
