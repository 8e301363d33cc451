from __future__ import annotations

import runpy
import sys
from pathlib import Path

import numpy as np
import pandas as pd
import pytest

from pfsp_neh.instance import Instance, parse_instance_text
from pfsp_neh.reporting import add_rpd_column, enrich_neh_results, format_instance_report, summarise_results
from pfsp_neh.runner import benchmark_all, benchmark_instance, run_experiments


@pytest.fixture
def instances(instance_text):
    tiny = parse_instance_text(instance_text, name="tiny")
    tiny.best_makespan = 20.0
    rng = np.random.default_rng(11)
    other = Instance(name="rand", p_times=rng.integers(1, 50, size=(4, 8)).astype(np.int64))
    return {"tiny": tiny, "rand": other}


def test_benchmark_instance(instances):
    res = benchmark_instance(instances["tiny"], runs=3)
    assert res.runs == 3
    assert res.makespan == 20
    assert res.neh_makespan == 20
    assert res.consistent
    assert res.permutation == [0, 2, 1]
    assert res.elapsed_min_us <= res.elapsed_avg_us <= res.elapsed_max_us


def test_benchmark_instance_as_float(instances):
    res = benchmark_instance(instances["tiny"], dtype="float")
    assert res.makespan == 20.0
    assert isinstance(res.makespan, float)


def test_benchmark_rejects_zero_runs(instances):
    with pytest.raises(ValueError):
        benchmark_instance(instances["tiny"], runs=0)


def test_run_experiments_frame(instances, capsys):
    df = run_experiments(instances, runs=2, stream_progress=True)
    assert list(df["instance"]) == ["tiny", "rand"]
    assert df["consistent"].all()
    tiny = df.set_index("instance").loc["tiny"]
    assert tiny["makespan"] == 20
    assert tiny["rpd"] == pytest.approx(0.0)
    assert tiny["permutation"] == "0 2 1"
    assert "tiny | n=3 m=2 -> 20" in capsys.readouterr().out


def test_trace_logger_factory(instances):
    traces = {}
    def factory(name):
        traces[name] = []
        return traces[name].append
    benchmark_all(instances, runs=2, logger_factory=factory)
    assert traces["tiny"][0]["event"] == "neh_start"
    assert traces["tiny"][-1] == {"event": "neh_done", "makespan": 20, "permutation": [0, 2, 1]}


def test_add_rpd_column():
    df = pd.DataFrame({"instance": ["a", "b", "c"], "makespan": [110, 50, 10]})
    out = add_rpd_column(df, {"a": 100, "b": 50})
    assert out.loc[0, "rpd"] == pytest.approx(10.0)
    assert out.loc[1, "rpd"] == pytest.approx(0.0)
    assert pd.isna(out.loc[2, "rpd"])
    assert "rpd" not in df.columns


def test_add_rpd_column_requires_columns():
    with pytest.raises(ValueError):
        add_rpd_column(pd.DataFrame({"makespan": [1]}))


def test_summarise_results(instances):
    df = run_experiments(instances, stream_progress=False)
    summary = summarise_results(df)
    assert summary.loc[0, "instances"] == 2
    assert bool(summary.loc[0, "all_consistent"])
    assert summary.loc[0, "rpd_mean"] == pytest.approx(0.0)


def test_format_instance_report(instances):
    text = format_instance_report(benchmark_instance(instances["tiny"]))
    lines = text.splitlines()
    assert lines[0] == "Instance name: tiny"
    assert lines[1] == "\tNEH makespan: 20"
    assert lines[2] == "\tNEH makespan with Taillard's acceleration: 20"
    assert lines[3].startswith("\telapsed avg: ")


def test_benchmark_single_run_is_verified(instances):
    res = benchmark_instance(instances["rand"], runs=1)
    assert res.runs == 1
    assert res.elapsed_min_us == res.elapsed_avg_us == res.elapsed_max_us
    assert res.consistent


def test_enrich_neh_results():
    df = pd.DataFrame({
        "instance": ["a", "b", "c"],
        "makespan": [110, 50, 10],
        "neh_makespan": [110, 55, 10],
        "consistent": [True, True, True],
    })
    out = enrich_neh_results(df, {"a": 100, "b": 50})
    assert out.loc[0, "rpd"] == pytest.approx(10.0)
    assert out.loc[1, "neh_rpd"] == pytest.approx(10.0)
    assert pd.isna(out.loc[2, "neh_rpd"])
    assert out["consistent"].tolist() == [True, False, True]
    assert out.loc[1, "makespan_gap"] == pytest.approx(-5.0)


def test_enrich_neh_results_requires_neh_columns():
    with pytest.raises(ValueError, match="neh_makespan"):
        enrich_neh_results(pd.DataFrame({"instance": ["a"], "makespan": [1]}))


def test_add_rpd_script(instances, tmp_path, monkeypatch, capsys):
    raw = tmp_path / "raw.csv"
    run_experiments(instances, stream_progress=False).to_csv(raw, index=False)
    bks = tmp_path / "bk.csv"
    bks.write_text("instance,best_makespan\ntiny,16\n")
    summary = tmp_path / "summary.csv"
    script = Path(__file__).resolve().parents[1] / "scripts" / "add_rpd.py"
    monkeypatch.setattr(sys, "argv", ["add_rpd.py", "--results", str(raw), "--bks-file", str(bks), "--summary", str(summary)])
    runpy.run_path(str(script), run_name="__main__")

    out = pd.read_csv(tmp_path / "raw_with_rpd.csv").set_index("instance")
    assert out.loc["tiny", "rpd"] == pytest.approx(25.0)
    assert out.loc["tiny", "neh_rpd"] == pytest.approx(25.0)
    assert pd.isna(out.loc["rand", "rpd"])
    assert summary.exists()
    printed = capsys.readouterr().out
    assert "no best-known makespan for: rand" in printed
    assert "mean RPD: 25.000%" in printed
