"""NEH heuristic for the Permutation Flow Shop with Taillard's acceleration.

This package contains the constructive engine (job model, completion-time
matrices, accelerated best-insertion and the NEH driver), an independent
makespan calculator, and the boundary helpers for reading instances,
benchmarking repeated solves and reporting results.
"""

from .errors import EmptyOrMismatchedInput, InstanceFormatError, InvalidInstance, NEHError
from .numeric import NUMERIC_TYPES, NumericType, describe_numeric_types, get_numeric_type
from .model import Job, Solution, jobs_from_matrix
from .matrices import CompletionMatrices
from .insertion import try_shift_improve
from .neh import solve
from .makespan import calculate_makespan, makespan
from .instance import Instance, read_instance_names, read_instances, read_raw_instance
from .runner import BenchmarkResult, benchmark_instance, run_experiments
from .reporting import add_rpd_column, enrich_neh_results, format_instance_report, summarise_results

__all__ = [
    "NEHError",
    "InvalidInstance",
    "EmptyOrMismatchedInput",
    "InstanceFormatError",
    "NUMERIC_TYPES",
    "NumericType",
    "get_numeric_type",
    "describe_numeric_types",
    "Job",
    "Solution",
    "jobs_from_matrix",
    "CompletionMatrices",
    "try_shift_improve",
    "solve",
    "calculate_makespan",
    "makespan",
    "Instance",
    "read_raw_instance",
    "read_instance_names",
    "read_instances",
    "BenchmarkResult",
    "benchmark_instance",
    "run_experiments",
    "add_rpd_column",
    "enrich_neh_results",
    "summarise_results",
    "format_instance_report",
]
