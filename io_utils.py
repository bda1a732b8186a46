# io_utils.py
from dataclasses import asdict
from pathlib import Path
from datetime import datetime
import csv
import json
from typing import Any, Iterable, List
from config import Config
from maze import MazeGrid
import uuid

RECORD_FIELDS: List[str] = [
    "index", "iteration", "from_x", "from_y", "to_x", "to_y",
    "path_len", "elapsed", "attempts",
]


def make_run_dir(
    cfg: Config,
    maze: MazeGrid,
    base: str = "outputs",
) -> Path:
    """
    Create and return a unique directory for this benchmark run.

    Parameters
    ----------
    cfg : Config
        Run parameters (attempts, seed, planner, ...).
    maze : MazeGrid
        The maze being benchmarked; its size goes into the folder name.
    base : str, optional
        Base directory under which the run folder is created, by default "outputs".

    Folder naming
    -------------
    The folder name encodes the maze size, the planner, attempts per timed
    block and the seed, followed by a timestamp and a short UUID so
    repeated runs never overwrite each other:

        outputs/run_C41xR21_AStar_A10_seed1_20261019-213012-ab12cd34/

    Returns
    -------
    Path
        The full path to the newly created run directory.
    """
    base_path = Path(base)
    base_path.mkdir(parents=True, exist_ok=True)

    parts = [
        f"C{maze.cols}xR{maze.rows}",
        cfg.path_algo_name,
        f"A{cfg.attempts}",
        f"seed{cfg.seed}",
    ]
    base_name = "run_" + "_".join(parts)

    ts = datetime.now().strftime("%Y%m%d-%H%M%S")
    uid = uuid.uuid4().hex[:8]
    run_dir = base_path / f"{base_name}_{ts}-{uid}"

    # exist_ok=False => raise if directory somehow already exists
    run_dir.mkdir(exist_ok=False)
    return run_dir


def save_config(cfg: Config, run_dir: Path, filename: str = "config.json") -> Path:
    """Serialize the Config of this run into JSON (point pairs become nested lists)."""
    data: dict[str, Any] = asdict(cfg)
    out_path = run_dir / filename
    with out_path.open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)
    return out_path


def save_summary(summary: dict[str, Any], run_dir: Path, filename: str = "summary.json") -> Path:
    """
    Save the summary metrics for a run as a JSON file.

    The structure is nested ("grid.cols", "pathfinding.avg_runtime", ...);
    batch_run.flatten_dict() turns it into CSV columns.
    """
    out_path = run_dir / filename
    with out_path.open("w", encoding="utf-8") as f:
        json.dump(summary, f, indent=2)
    return out_path


def save_records_csv(records: Iterable, run_dir: Path, filename: str = "records.csv") -> Path:
    """One CSV row per SearchRecord (see benchmark.SearchRecord.as_row)."""
    out_path = run_dir / filename
    with out_path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=RECORD_FIELDS)
        writer.writeheader()
        for r in records:
            writer.writerow(r.as_row())
    return out_path
