"""Loader tests: instance text format, instance lists and best-known CSVs."""

from __future__ import annotations

import numpy as np
import pytest

from pfsp_neh.errors import InstanceFormatError
from pfsp_neh.instance import (
    Instance,
    attach_best_known,
    load_best_known,
    parse_instance_text,
    read_instance_names,
    read_instances,
    read_raw_instance,
)
from pfsp_neh.neh import solve


def test_read_raw_instance(tmp_path, instance_text):
    path = tmp_path / "tiny.txt"
    path.write_text(instance_text)
    inst = read_raw_instance(path)
    assert inst.name == "tiny"
    assert (inst.n, inst.m) == (3, 2)
    assert inst.p_times.dtype == np.int64
    assert inst.p_times[:, 0].tolist() == [5, 3]
    assert inst.p_times[:, 2].tolist() == [4, 6]


def test_loaded_instance_solves(instance_text):
    inst = parse_instance_text(instance_text)
    jobs = inst.to_jobs()
    assert [j.id for j in jobs] == [0, 1, 2]
    sol = solve(jobs, inst.n, inst.m)
    assert sol.permutation == [0, 2, 1]
    assert sol.makespan == 20


def test_float_instance():
    inst = parse_instance_text("h\n2 3\nh\n1.5 2 0.25\n3\t1\t2.5\n", dtype="float")
    assert inst.p_times.dtype == np.float64
    assert inst.p_times[:, 0].tolist() == [1.5, 2.0, 0.25]


def test_extra_trailing_lines_are_ignored():
    inst = parse_instance_text("h\n2 2\nh\n1 2\n3 4\n\nsomething else\n")
    assert (inst.n, inst.m) == (2, 2)


@pytest.mark.parametrize(
    "content",
    [
        "only header\n",                      # no dimensions line
        "h\n3\nh\n1 2\n",                     # one dimension
        "h\nthree 2\nh\n1 2\n",               # non-integer dimension
        "h\n2 2\nh\n1 2\n",                   # missing job line
        "h\n2 2\nh\n1 2\n3 4 5\n",            # wrong token count
        "h\n2 2\nh\n1 x\n3 4\n",              # non-numeric value
        "h\n2 2\nh\n1 -2\n3 4\n",             # negative processing time
        "h\n2 2\nh\n1 2.5\n3 4\n",            # float in an integer instance
    ],
)
def test_parse_errors(content: str):
    with pytest.raises(InstanceFormatError):
        parse_instance_text(content)


def test_read_instance_names_and_instances(tmp_path, instance_text):
    (tmp_path / "a.txt").write_text(instance_text)
    (tmp_path / "b.txt").write_text("h\n2 2\nh\n1 2\n3 4\n")
    (tmp_path / "instances.txt").write_text("a\n\nb\n")
    names = read_instance_names(tmp_path / "instances.txt")
    assert names == ["a", "b"]
    insts = read_instances(tmp_path, names)
    assert list(insts) == ["a", "b"]
    assert insts["b"].n == 2


def test_missing_instance_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_instances(tmp_path, ["nope"])


def test_best_known_roundtrip(tmp_path):
    csv = tmp_path / "bk.csv"
    csv.write_text("instance,best_makespan\na,20\nc,99\n")
    bk = load_best_known(csv)
    assert bk == {"a": 20.0, "c": 99.0}
    insts = {"a": Instance(name="a", p_times=np.ones((2, 2), dtype=np.int64))}
    attach_best_known(insts, bk)
    assert insts["a"].best_makespan == 20.0


def test_best_known_requires_columns(tmp_path):
    csv = tmp_path / "bk.csv"
    csv.write_text("name,value\na,20\n")
    with pytest.raises(ValueError):
        load_best_known(csv)


def test_fractional_times_point_to_float_type():
    content = "h\n2 2\nh\n1 2.5\n3 4\n"
    with pytest.raises(InstanceFormatError, match="--dtype float"):
        parse_instance_text(content)
    inst = parse_instance_text(content, dtype="float")
    assert inst.p_times[1, 0] == 2.5


def test_non_numeric_message_unchanged():
    with pytest.raises(InstanceFormatError, match="non-numeric"):
        parse_instance_text("h\n2 2\nh\n1 x\n3 4\n")
