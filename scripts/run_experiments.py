# scripts/run_experiments.py
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

# make src importable
THIS_FILE = Path(__file__).resolve()
ROOT = THIS_FILE.parents[1]
SRC_DIR = ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from pfsp_neh.instance import read_instance_names, read_instances, load_best_known, attach_best_known
from pfsp_neh.numeric import NUMERIC_TYPES, describe_numeric_types, get_numeric_type
from pfsp_neh.reporting import format_instance_report, summarise_results
from pfsp_neh.runner import benchmark_all, results_to_frame


def make_trace_factory(trace_dir: Path, handles: list):
    trace_dir.mkdir(parents=True, exist_ok=True)
    def _factory(instance_name: str):
        safe = instance_name.replace("/", "_")
        f = (trace_dir / f"trace_{safe}.jsonl").open("w", encoding="utf-8")
        handles.append(f)
        def _logger(ev: dict):
            f.write(json.dumps(ev) + "\n"); f.flush()
        return _logger
    return _factory


def main():
    p = argparse.ArgumentParser(description="Run the NEH heuristic (Taillard's acceleration) over a list of instances")
    # data
    p.add_argument("--data-dir", type=str, default="data")
    p.add_argument("--instances-file", type=str, default="instances.txt",
                   help="File with one instance name per line (relative to --data-dir unless absolute)")
    p.add_argument("--instances", type=str, default="", help="Comma-separated instance names to run (subset)")
    p.add_argument("--list-instances", action="store_true")
    p.add_argument("--best-known", type=str, default="", help="CSV with columns instance,best_makespan")
    # runtime
    p.add_argument("--runs", type=int, default=1, help="repeated solves per instance (timing)")
    p.add_argument("--dtype", type=str, default="int", choices=sorted(NUMERIC_TYPES))
    p.add_argument("--workers", type=int, default=1, help="solve instances in a process pool")
    p.add_argument("--outdir", type=str, default="results")
    p.add_argument("--trace", action="store_true", help="write JSONL solve traces into OUTDIR/traces/")
    p.add_argument("--verbose", action="store_true")
    args = p.parse_args()

    data_dir = Path(args.data_dir)
    list_path = Path(args.instances_file)
    if not list_path.is_absolute():
        list_path = data_dir / list_path
    names = read_instance_names(list_path)

    if args.list_instances:
        print("Instances:", ", ".join(names))
        print(f"Total: {len(names)}")
        print(describe_numeric_types())
        return

    if args.instances.strip():
        wanted = {s.strip() for s in args.instances.split(",")}
        names = [n for n in names if n in wanted]
        if args.verbose:
            print(f"[*] Subset selected: {', '.join(names)}")

    spec = get_numeric_type(args.dtype)
    insts = read_instances(data_dir, names, dtype=spec.dtype, verbose=args.verbose)

    bk = {}
    if args.best_known:
        try:
            bk = load_best_known(args.best_known)
        except Exception as e:
            print(f"[warn] Could not load best-known from {args.best_known}: {e}")
    attach_best_known(insts, bk)

    outdir = Path(args.outdir); outdir.mkdir(parents=True, exist_ok=True)
    handles: list = []
    factory = make_trace_factory(outdir / "traces", handles) if args.trace else None
    try:
        results = benchmark_all(insts, runs=args.runs, dtype=spec.dtype, workers=args.workers, logger_factory=factory)
    finally:
        for f in handles:
            f.close()

    for name, res in results.items():
        print(format_instance_report(res))
        if not res.consistent:
            print(f"[warn] {name}: accelerated makespan {res.makespan} != recomputed {res.neh_makespan}")

    df = results_to_frame(results, insts)
    df.to_csv(outdir / "raw.csv", index=False)
    summarise_results(df).to_csv(outdir / "summary.csv", index=False)

    meta = {
        "args": vars(args),
        "n_instances": len(insts),
        "dtype": spec.dtype.name,
        "best_known_loaded": bool(bk),
    }
    with open(outdir / "meta.json", "w") as f:
        json.dump(meta, f, indent=2)

if __name__ == "__main__":
    main()
