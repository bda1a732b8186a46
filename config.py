# config.py
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

Pos = Tuple[int, int]  # (col, row)
PointPair = Tuple[Pos, Pos]


@dataclass
class Config:
    # maze file to benchmark (None when the maze is generated, e.g. batch runs)
    input: Optional[str] = None

    # searches per timed block
    attempts: int = 1
    # timed blocks per point pair (explicit-points mode)
    tries: int = 1
    # successful searches to report (random mode)
    searches: int = 1

    # explicit (from, to) pairs; None selects random sampling
    points: Optional[List[PointPair]] = None

    seed: Optional[int] = None  # None = nondeterministic sampling

    path_algo_name: str = "AStar"
    raw_result: bool = False     # time plan_raw() instead of plan()

    # skip row 0 and column 0 as edge-scan origins (see graph_builder)
    interior_only: bool = True

    log_events: bool = False
