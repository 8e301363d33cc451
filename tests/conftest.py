"""Pytest configuration: put ``src`` on sys.path and share small fixtures."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

_src = Path(__file__).resolve().parents[1] / "src"
if str(_src) not in sys.path:
    sys.path.insert(0, str(_src))

from pfsp_neh.model import Job  # noqa: E402


@pytest.fixture
def three_jobs() -> list:
    """J1=[5,3], J2=[9,2], J3=[4,6] with ids 1..3, in input order."""
    return [
        Job.from_times([5, 3], id=1),
        Job.from_times([9, 2], id=2),
        Job.from_times([4, 6], id=3),
    ]


@pytest.fixture
def instance_text() -> str:
    return "instance header\n3 2\nprocessing times:\n5\t3\n9\t2\n4\t6\n"
