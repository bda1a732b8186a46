# pathfinding/astar.py
from __future__ import annotations

from time import perf_counter
from heapq import heappush, heappop
from typing import Callable, Dict, List, Optional, Set, Tuple

import networkx as nx

from maze import MazeGrid
from .base import PathfindingAlgorithm, Pos, SearchResult, endpoints, reconstruct

Heuristic = Callable[[MazeGrid, int, int], float]
EdgeCost = Callable[[int, int], float]


def zero_heuristic(maze: MazeGrid, node: int, goal: int) -> float:
    return 0


def manhattan_heuristic(maze: MazeGrid, node: int, goal: int) -> float:
    x, y = maze.index_to_pos(node)
    gx, gy = maze.index_to_pos(goal)
    return abs(x - gx) + abs(y - gy)


def unit_cost(u: int, v: int) -> float:
    return 1


class AStarPlanner(PathfindingAlgorithm):
    """
    A* over the adjacency graph built by graph_builder.build_graph().

    The default heuristic is constant zero, so the search expands nodes in
    order of path cost exactly like Dijkstra (and, with unit edge costs,
    returns the same path lengths as BFS). Pass manhattan_heuristic for an
    informed search; the loop itself does not change.

    The goal test happens when a node is popped from the open set, not when
    it is first discovered.
    """

    name = "AStar"

    def __init__(
        self,
        heuristic: Heuristic = zero_heuristic,
        edge_cost: EdgeCost = unit_cost,
        name: Optional[str] = None,
    ) -> None:
        self.heuristic = heuristic
        self.edge_cost = edge_cost
        if name is not None:
            self.name = name

        # timing stats
        self.total_runtime: float = 0.0
        self.call_count: int = 0
        self.last_runtime: float = 0.0

    # ---- stats API ----

    def reset_stats(self) -> None:
        self.total_runtime = 0.0
        self.call_count = 0
        self.last_runtime = 0.0

    def _update_stats(self, dt: float) -> None:
        self.last_runtime = dt
        self.total_runtime += dt
        self.call_count += 1

    # ---- main planning API ----

    def plan(
        self, maze: MazeGrid, graph: nx.Graph, start: Pos, goal: Pos
    ) -> Optional[List[int]]:
        """
        Node indices from start to goal (inclusive), or None if either point
        is out of bounds or the goal is unreachable.
        """
        result = self.plan_raw(maze, graph, start, goal)
        if result is None:
            return None
        return result.nodes

    def plan_raw(
        self, maze: MazeGrid, graph: nx.Graph, start: Pos, goal: Pos
    ) -> Optional[SearchResult]:
        """
        Search and return SearchResult(cost, nodes), or None.

        Every call updates call_count, total_runtime and last_runtime. That
        bookkeeping (one perf_counter() pair plus three attribute writes)
        runs inside the call, so it is part of any duration measured around
        plan_raw() or plan().
        """
        t0 = perf_counter()
        try:
            ends = endpoints(maze, start, goal)
            if ends is None:
                return None
            return self._search(maze, graph, *ends)
        finally:
            self._update_stats(perf_counter() - t0)

    def _search(
        self, maze: MazeGrid, graph: nx.Graph, source: int, target: int
    ) -> Optional[SearchResult]:
        h = self.heuristic
        cost = self.edge_cost
        adj = graph.adj

        # open set: (f, g, node)
        open_heap: List[Tuple[float, float, int]] = []
        heappush(open_heap, (h(maze, source, target), 0, source))

        g_cost: Dict[int, float] = {source: 0}
        parent: Dict[int, int] = {}
        closed: Set[int] = set()

        while open_heap:
            _, g_cur, cur = heappop(open_heap)

            if cur == target:
                return SearchResult(cost=g_cur, nodes=reconstruct(parent, cur))
            if cur in closed:
                continue
            closed.add(cur)

            for nxt in adj[cur]:
                if nxt in closed:
                    continue
                new_g = g_cur + cost(cur, nxt)
                if nxt not in g_cost or new_g < g_cost[nxt]:
                    g_cost[nxt] = new_g
                    parent[nxt] = cur
                    heappush(open_heap, (new_g + h(maze, nxt, target), new_g, nxt))

        # no path
        return None


ALGORITHM = AStarPlanner()
