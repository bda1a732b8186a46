# pathfinding/base.py
from dataclasses import dataclass
from typing import List, Optional, Protocol, Tuple

import networkx as nx

from maze import MazeGrid

Pos = Tuple[int, int]


@dataclass(frozen=True)
class SearchResult:
    """Raw search output: total path cost and the node path (start..goal)."""
    cost: float
    nodes: List[int]

    def __len__(self) -> int:
        return len(self.nodes)


class PathfindingAlgorithm(Protocol):
    name: str
    # Optional timing stats (per algorithm implementation)
    total_runtime: float
    call_count: int
    last_runtime: float

    def plan_raw(
        self, maze: MazeGrid, graph: nx.Graph, start: Pos, goal: Pos
    ) -> Optional[SearchResult]:
        ...

    def plan(
        self, maze: MazeGrid, graph: nx.Graph, start: Pos, goal: Pos
    ) -> Optional[List[int]]:
        ...

    def reset_stats(self) -> None:
        ...


def endpoints(maze: MazeGrid, start: Pos, goal: Pos) -> Optional[Tuple[int, int]]:
    """Node indices for start/goal, or None if either lies outside the grid."""
    (sx, sy), (gx, gy) = start, goal
    if not (maze.in_bounds(sx, sy) and maze.in_bounds(gx, gy)):
        return None
    return sy * maze.cols + sx, gy * maze.cols + gx


def reconstruct(parent: dict, node: int) -> List[int]:
    path = [node]
    while node in parent:
        node = parent[node]
        path.append(node)
    path.reverse()
    return path
