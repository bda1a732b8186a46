"""
Command-line entry point for the maze pathfinding benchmark.

Typical usage:

    # random mode: report 20 successful searches, 10 searches per timed block
    python main.py -i resources/maze.txt -s 20 -a 10 --seed 1

    # points mode: 5 timed blocks of 100 searches for each pair
    python main.py -i resources/maze.txt -t 5 -a 100 -p 1:1,39:19 -p 1:19,39:1

    # also write config.json / summary.json / records.csv (+ maze.png)
    python main.py -i resources/maze.txt -s 5 --output-dir outputs --plot
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from benchmark import BenchmarkHarness, BenchmarkReport
from config import Config, PointPair, Pos
from graph_builder import build_graph
from io_utils import make_run_dir, save_config, save_records_csv, save_summary
from maze import MalformedInput, MazeGrid
from pathfinding import PATHFINDING_ALGOS

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------
# Argument types
# ---------------------------------------------------------------------

def positive_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {text!r}")
    if value < 1:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value}")
    return value


def _parse_point(text: str) -> Pos:
    parts = [p for p in text.split(":") if p.strip()]
    if len(parts) != 2:
        raise argparse.ArgumentTypeError(f"Point should have 2 elements: {text!r}")
    try:
        x, y = int(parts[0]), int(parts[1])
    except ValueError:
        raise argparse.ArgumentTypeError(f"Point coordinates must be integers: {text!r}")
    if x < 0 or y < 0:
        raise argparse.ArgumentTypeError(f"Point coordinates must be non-negative: {text!r}")
    return x, y


def parse_point_pair(text: str) -> PointPair:
    """'X1:Y1,X2:Y2' -> ((X1, Y1), (X2, Y2))"""
    parts = [p for p in text.split(",") if p.strip()]
    if len(parts) != 2:
        raise argparse.ArgumentTypeError(f"Points should have 2 elements: {text!r}")
    return _parse_point(parts[0]), _parse_point(parts[1])


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="maze-bench",
        description="Benchmark shortest-path search on a grid maze.",
    )
    parser.add_argument("-i", "--input", metavar="FILE", required=True,
                        help="maze text file ('#' = wall, anything else = open)")
    parser.add_argument("-a", "--attempts", metavar="NUMBER", type=positive_int, default=1,
                        help="searches per timed block (default: 1)")
    parser.add_argument("-t", "--tries", metavar="NUMBER", type=positive_int, default=1,
                        help="timed blocks per point pair (default: 1)")
    parser.add_argument("-s", "--searches", metavar="NUMBER", type=positive_int, default=1,
                        help="successful random searches to report (default: 1)")
    parser.add_argument("-p", "--point", metavar="FromX:FromY,ToX:ToY", dest="points",
                        type=parse_point_pair, action="append",
                        help="explicit point pair; repeat for several pairs")
    parser.add_argument("--seed", type=int, default=None,
                        help="seed for random point sampling")
    parser.add_argument("--algo", dest="path_algo_name", default="AStar",
                        choices=sorted(PATHFINDING_ALGOS),
                        help="pathfinding algorithm (default: AStar)")
    parser.add_argument("--raw", dest="raw_result", action="store_true",
                        help="time the raw (cost, nodes) search result")
    parser.add_argument("--full-scan", dest="interior_only", action="store_false",
                        help="use every cell as an edge-scan origin, not only row>=1, col>=1")
    parser.add_argument("--output-dir", default=None,
                        help="write config/summary/records under a new run directory here")
    parser.add_argument("--plot", action="store_true",
                        help="with --output-dir, also draw the maze (and first path) to maze.png")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="log maze loading at INFO")
    return parser


def config_from_args(args: argparse.Namespace) -> Config:
    return Config(
        input=args.input,
        attempts=args.attempts,
        tries=args.tries,
        searches=args.searches,
        points=args.points,
        seed=args.seed,
        path_algo_name=args.path_algo_name,
        raw_result=args.raw_result,
        interior_only=args.interior_only,
        # main() prints the records itself
        log_events=False,
    )


# ---------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    cfg = config_from_args(args)

    try:
        maze = MazeGrid.load_file(cfg.input)
    except MalformedInput as e:
        parser.error(str(e))
    logger.info("Loaded %dx%d maze from %s", maze.cols, maze.rows, cfg.input)

    graph = build_graph(maze, cfg.interior_only)
    harness = BenchmarkHarness.from_config(cfg, maze, graph)
    harness.planner.reset_stats()

    if cfg.points is not None:
        pairs = []
        for pair in harness.iter_points(cfg.points):
            for record in pair.records:
                print(record.describe())
            line = pair.describe()
            if line is not None:
                print(line)
            pairs.append(pair)
        report = BenchmarkReport(mode="points", pairs=pairs)
    else:
        records = []
        for record in harness.iter_random():
            print(record.describe())
            records.append(record)
        report = BenchmarkReport(
            mode="random", records=records, iterations=harness.iterations_used
        )

    if args.output_dir:
        run_dir = make_run_dir(cfg, maze, base=args.output_dir)
        save_config(cfg, run_dir)
        save_summary(harness.summarize(report), run_dir)
        save_records_csv(report.all_records, run_dir)

        if args.plot:
            from viz import draw_maze

            first_path = None
            if report.all_records:
                r = report.all_records[0]
                first_path = harness.planner.plan(maze, graph, r.source, r.target)
            draw_maze(maze, run_dir / "maze.png", path=first_path, title=cfg.input)

        print(f"Run directory: {run_dir}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
