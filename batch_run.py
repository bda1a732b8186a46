#!/usr/bin/env python3
"""
Batch benchmark runner.

Use this for offline comparisons where you want to:

- Sweep over many maze shapes / wall densities / planners / seeds.
- Run one random-mode benchmark per configuration (no PNG output).
- Collect all metrics into a single CSV file for analysis.

High-level behavior
-------------------

1. Build the parameter grid from batch_config.PARAM_GRID.
2. For each combination:
   - Generate a maze with MazeGrid.generate(cols, rows, wall_density, seed).
   - Build the graph and run BenchmarkHarness in random mode.
   - Build the same summary dict as main.py.
3. Flatten the summary dict + parameters into a single row.
4. Append rows to `outputs_batch/batch_results.csv`.

Runs are executed sequentially in this process.

If the CSV already exists its header is reused and new rows are appended
with the same column order.

Usage
-----

From the repo root:

    python batch_run.py

Then plot with plot_utils.py or load the CSV with pandas.
"""

from __future__ import annotations

import csv
import itertools
import logging
import random
from pathlib import Path
from typing import Dict, Any, Iterator, List, Optional

from batch_config import PARAM_GRID, OUTPUT_DIR, OUTPUT_CSV
from benchmark import BenchmarkHarness
from config import Config
from graph_builder import build_graph
from maze import MazeGrid

logger = logging.getLogger(__name__)


def iter_param_combinations(grid: Dict[str, List[Any]]) -> Iterator[Dict[str, Any]]:
    """Yield dicts for each combination in the parameter grid."""
    keys = list(grid.keys())
    value_lists = [grid[k] for k in keys]
    for combo in itertools.product(*value_lists):
        yield dict(zip(keys, combo))


def flatten_dict(
    d: Dict[str, Any],
    parent_key: str = "",
    sep: str = ".",
) -> Dict[str, Any]:
    """
    Turn nested dicts into a flat dict with dotted keys:

        {"a": {"b": 1}, "c": 2}  ->  {"a.b": 1, "c": 2}
    """
    items: Dict[str, Any] = {}
    for k, v in d.items():
        new_key = f"{parent_key}{sep}{k}" if parent_key else k
        if isinstance(v, dict):
            items.update(flatten_dict(v, new_key, sep=sep))
        else:
            items[new_key] = v
    return items


def run_single_experiment(
    purpose: str,                # meta label, only copied into the CSV
    cols: int,
    rows: int,
    wall_density: float,
    attempts: int,
    searches: int,
    path_algo_name: str,
    seed: int,
) -> Dict[str, Any]:
    """Run ONE random-mode benchmark and return a flat dict of metrics."""
    cfg = Config(
        attempts=attempts,
        searches=searches,
        seed=seed,
        path_algo_name=path_algo_name,
    )

    # the maze depends only on (cols, rows, wall_density, seed) so every
    # planner in the grid sees the same mazes and the same sampled points
    maze = MazeGrid.generate(cols, rows, wall_density, random.Random(seed))
    graph = build_graph(maze, cfg.interior_only)

    harness = BenchmarkHarness.from_config(cfg, maze, graph)
    report = harness.run()
    return flatten_dict(harness.summarize(report))


def run_one(params: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    """
    Run one combination and merge {params..., metrics...}.
    Failures are logged and reported as None so the batch keeps going.
    """
    params = dict(params)

    try:
        metrics = run_single_experiment(**params)
    except Exception:
        logger.exception("run_single_experiment failed for params=%s", params)
        return None

    return {**params, **metrics}


def read_header(out_path: Path) -> Optional[List[str]]:
    if not out_path.exists():
        return None
    with out_path.open("r", newline="") as f:
        reader = csv.reader(f)
        try:
            header = next(reader)
        except StopIteration:
            return None
    return header or None


def main_batch(
    grid: Dict[str, List[Any]] = PARAM_GRID,
    out_dir: str | Path = OUTPUT_DIR,
) -> Optional[Path]:
    combos = list(iter_param_combinations(grid))
    total = len(combos)
    if total == 0:
        print("No parameter combinations to run. Check PARAM_GRID.")
        return None

    print(f"Total experiments to run: {total}")

    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    out_path = out_dir / OUTPUT_CSV

    fieldnames = read_header(out_path)
    if fieldnames is not None:
        print(f"Appending to existing CSV: {out_path} ({len(fieldnames)} columns)")

    done = 0
    for params in combos:
        row = run_one(params)
        if row is None:
            continue

        if fieldnames is None:
            # first successful row defines the schema, 'purpose' first
            fieldnames = sorted(row.keys())
            if "purpose" in fieldnames:
                fieldnames.remove("purpose")
                fieldnames = ["purpose"] + fieldnames
            with out_path.open("w", newline="") as f:
                writer = csv.DictWriter(f, fieldnames=fieldnames, extrasaction="ignore")
                writer.writeheader()
                writer.writerow(row)
        else:
            with out_path.open("a", newline="") as f:
                writer = csv.DictWriter(f, fieldnames=fieldnames, extrasaction="ignore")
                writer.writerow(row)

        done += 1
        if done % 10 == 0 or done == total:
            print(f"Completed {done}/{total} experiments")

    print(f"All done. Results in {out_path}")
    return out_path


if __name__ == "__main__":
    logging.basicConfig(level=logging.WARNING)
    main_batch()
