# benchmark.py
"""
Benchmark harness for the pathfinding planners.

Two modes, selected by whether explicit point pairs are given:

- points mode: for every (from, to) pair, run `tries` timed blocks of
  `attempts` back-to-back searches and report min / max / avg per pair;
- random mode: sample (from, to) uniformly from the grid up to
  `searches * 10` times, time every search that finds a path (plus
  `attempts - 1` repeats) and stop after `searches` hits.

Durations are time.perf_counter() differences in seconds. The harness never
prints; records are logged and returned to the caller.
"""
from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from time import perf_counter
from typing import Any, Dict, Iterator, List, Optional, Sequence, Union

import networkx as nx

from config import Config, Pos, PointPair
from graph_builder import build_graph
from maze import MazeGrid
from pathfinding import PathfindingAlgorithm, SearchResult, get_algorithm

logger = logging.getLogger(__name__)

# random mode samples at most this many pairs per requested search
RANDOM_BUDGET_FACTOR = 10


def format_duration(seconds: float) -> str:
    if seconds >= 1.0:
        return f"{seconds:.3f}s"
    if seconds >= 1e-3:
        return f"{seconds * 1e3:.3f}ms"
    if seconds >= 1e-6:
        return f"{seconds * 1e6:.3f}µs"
    return f"{seconds * 1e9:.0f}ns"


def format_points(source: Pos, target: Pos) -> str:
    return f"{source[0]}:{source[1]},{target[0]}:{target[1]}"


@dataclass(frozen=True)
class SearchRecord:
    """One timed block that produced a path."""
    source: Pos
    target: Pos
    path_len: int       # node count, start and goal included
    elapsed: float      # seconds for the whole block
    attempts: int
    index: int          # try index (points mode) / found count (random mode)
    iteration: Optional[int] = None  # sampling iteration (random mode only)

    def describe(self) -> str:
        head = f"#{self.index}"
        if self.iteration is not None:
            head += f" ({self.iteration})"
        return (
            f"{head} | Duration: {format_duration(self.elapsed)} "
            f"| Points: {format_points(self.source, self.target)} "
            f"| Path: {self.path_len} | Attempts: {self.attempts}"
        )

    def as_row(self) -> Dict[str, Any]:
        return {
            "index": self.index,
            "iteration": self.iteration,
            "from_x": self.source[0],
            "from_y": self.source[1],
            "to_x": self.target[0],
            "to_y": self.target[1],
            "path_len": self.path_len,
            "elapsed": self.elapsed,
            "attempts": self.attempts,
        }


@dataclass
class PairSummary:
    """All tries for one (from, to) pair in points mode."""
    source: Pos
    target: Pos
    tries: int
    records: List[SearchRecord] = field(default_factory=list)

    @property
    def durations(self) -> List[float]:
        return [r.elapsed for r in self.records]

    @property
    def found(self) -> bool:
        return bool(self.records)

    @property
    def min(self) -> Optional[float]:
        return min(self.durations) if self.records else None

    @property
    def max(self) -> Optional[float]:
        return max(self.durations) if self.records else None

    @property
    def avg(self) -> Optional[float]:
        # midpoint of the extremes, not the mean of the samples
        if not self.records:
            return None
        return (self.min + self.max) / 2

    @property
    def diff(self) -> Optional[float]:
        if not self.records:
            return None
        return self.max - self.min

    def describe(self) -> Optional[str]:
        if not self.records:
            return None
        return (
            f"Avg: {format_duration(self.avg)} | Min: {format_duration(self.min)} "
            f"| Max: {format_duration(self.max)} | Diff: {format_duration(self.diff)}"
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "points": format_points(self.source, self.target),
            "tries": self.tries,
            "found": len(self.records),
            "durations": self.durations,
            "min": self.min,
            "max": self.max,
            "avg": self.avg,
            "diff": self.diff,
        }


@dataclass
class BenchmarkReport:
    mode: str  # "points" or "random"
    pairs: List[PairSummary] = field(default_factory=list)
    records: List[SearchRecord] = field(default_factory=list)
    iterations: int = 0  # random mode: pairs sampled

    @property
    def all_records(self) -> List[SearchRecord]:
        if self.mode == "points":
            return [r for p in self.pairs for r in p.records]
        return list(self.records)


@dataclass
class BenchmarkHarness:
    maze: MazeGrid
    graph: nx.Graph
    planner: PathfindingAlgorithm

    attempts: int = 1
    tries: int = 1
    searches: int = 1

    rng: random.Random = field(default_factory=random.Random)
    raw_result: bool = False

    # log records at INFO instead of DEBUG
    log_events: bool = False

    # random mode: sampling iterations consumed by the last run
    iterations_used: int = field(default=0, init=False)

    @classmethod
    def from_config(
        cls,
        cfg: Config,
        maze: MazeGrid,
        graph: Optional[nx.Graph] = None,
    ) -> "BenchmarkHarness":
        return cls(
            maze=maze,
            graph=graph if graph is not None else build_graph(maze, cfg.interior_only),
            planner=get_algorithm(cfg.path_algo_name),
            attempts=cfg.attempts,
            tries=cfg.tries,
            searches=cfg.searches,
            rng=random.Random(cfg.seed),
            raw_result=cfg.raw_result,
            log_events=cfg.log_events,
        )

    # ---------- logging helper ---------- #

    def _log(self, msg: str) -> None:
        logger.log(logging.INFO if self.log_events else logging.DEBUG, msg)

    # ---------- search ---------- #

    def find_path(
        self, source: Pos, target: Pos
    ) -> Union[SearchResult, List[int], None]:
        if self.raw_result:
            return self.planner.plan_raw(self.maze, self.graph, source, target)
        return self.planner.plan(self.maze, self.graph, source, target)

    def random_pos(self) -> Pos:
        return self.rng.randrange(self.maze.cols), self.rng.randrange(self.maze.rows)

    # ---------- points mode ---------- #

    def iter_points(self, points: Sequence[PointPair]) -> Iterator[PairSummary]:
        for source, target in points:
            summary = PairSummary(source=source, target=target, tries=self.tries)
            for i in range(self.tries):
                path = None
                t0 = perf_counter()
                for _ in range(self.attempts):
                    path = self.find_path(source, target)
                elapsed = perf_counter() - t0

                if path is not None:
                    record = SearchRecord(
                        source=source,
                        target=target,
                        path_len=len(path),
                        elapsed=elapsed,
                        attempts=self.attempts,
                        index=i,
                    )
                    summary.records.append(record)
                    self._log(record.describe())

            if summary.found:
                self._log(summary.describe())
            else:
                self._log(f"No path for {format_points(source, target)}")
            yield summary

    def run_points(self, points: Sequence[PointPair]) -> List[PairSummary]:
        return list(self.iter_points(points))

    # ---------- random mode ---------- #

    def iter_random(self) -> Iterator[SearchRecord]:
        found = 0
        self.iterations_used = 0
        for i in range(self.searches * RANDOM_BUDGET_FACTOR):
            self.iterations_used = i + 1
            source = self.random_pos()
            target = self.random_pos()

            t0 = perf_counter()
            path = self.find_path(source, target)
            if path is None:
                continue
            # reachability is already known; repeats are not re-checked
            for _ in range(1, self.attempts):
                path = self.find_path(source, target)
            elapsed = perf_counter() - t0

            record = SearchRecord(
                source=source,
                target=target,
                path_len=len(path),
                elapsed=elapsed,
                attempts=self.attempts,
                index=found,
                iteration=i,
            )
            self._log(record.describe())
            yield record

            found += 1
            if found >= self.searches:
                break

        if found < self.searches:
            self._log(
                f"Found {found}/{self.searches} paths in {self.iterations_used} iterations"
            )

    def run_random(self) -> List[SearchRecord]:
        return list(self.iter_random())

    # ---------- dispatch ---------- #

    def run(self, points: Optional[Sequence[PointPair]] = None) -> BenchmarkReport:
        self.planner.reset_stats()
        if points is not None:
            return BenchmarkReport(mode="points", pairs=self.run_points(points))
        records = self.run_random()
        return BenchmarkReport(
            mode="random", records=records, iterations=self.iterations_used
        )

    def summarize(self, report: BenchmarkReport) -> Dict[str, Any]:
        """Nested dict of run metrics, written as summary.json."""
        pa = self.planner
        summary: Dict[str, Any] = {
            "grid": {
                "cols": self.maze.cols,
                "rows": self.maze.rows,
                "walls": self.maze.wall_count,
            },
            "graph": {
                "nodes": self.graph.number_of_nodes(),
                "edges": self.graph.number_of_edges(),
            },
            "benchmark": {
                "mode": report.mode,
                "attempts": self.attempts,
                "tries": self.tries,
                "searches": self.searches,
                "raw_result": self.raw_result,
            },
            "pathfinding": {
                "algorithm": pa.name,
                "call_count": pa.call_count,
                "total_runtime": pa.total_runtime,
                "avg_runtime": (pa.total_runtime / pa.call_count) if pa.call_count else 0.0,
            },
        }

        if report.mode == "points":
            summary["pairs"] = [p.to_dict() for p in report.pairs]
        else:
            durations = [r.elapsed for r in report.records]
            summary["random"] = {
                "found": len(report.records),
                "iterations": report.iterations,
                "budget": self.searches * RANDOM_BUDGET_FACTOR,
                "min": min(durations) if durations else None,
                "max": max(durations) if durations else None,
                "avg_path_len": (
                    sum(r.path_len for r in report.records) / len(report.records)
                    if report.records
                    else None
                ),
            }
        return summary
