# pathfinding/bfs.py
from collections import deque
from time import perf_counter
from typing import Dict, List, Optional

import networkx as nx

from maze import MazeGrid
from .base import PathfindingAlgorithm, Pos, SearchResult, endpoints, reconstruct


class BFSPlanner(PathfindingAlgorithm):
    name = "BFS"

    def __init__(self) -> None:
        self.total_runtime = 0.0
        self.call_count = 0
        self.last_runtime = 0.0

    def reset_stats(self) -> None:
        self.total_runtime = 0.0
        self.call_count = 0
        self.last_runtime = 0.0

    def plan(
        self, maze: MazeGrid, graph: nx.Graph, start: Pos, goal: Pos
    ) -> Optional[List[int]]:
        result = self.plan_raw(maze, graph, start, goal)
        return None if result is None else result.nodes

    def plan_raw(
        self, maze: MazeGrid, graph: nx.Graph, start: Pos, goal: Pos
    ) -> Optional[SearchResult]:
        """
        Breadth-first search over the graph edges (every edge costs 1).
        Returns None if either point is out of bounds or the goal is unreachable.
        Stats are updated inside the call, so timings around it include them.
        """
        t0 = perf_counter()

        ends = endpoints(maze, start, goal)
        result: Optional[SearchResult] = None

        if ends is not None:
            source, target = ends
            if source == target:
                result = SearchResult(cost=0, nodes=[source])
            else:
                adj = graph.adj
                q = deque([source])
                parent: Dict[int, int] = {}
                seen = {source}

                while q and result is None:
                    cur = q.popleft()
                    for nxt in adj[cur]:
                        if nxt in seen:
                            continue
                        seen.add(nxt)
                        parent[nxt] = cur
                        if nxt == target:
                            nodes = reconstruct(parent, nxt)
                            result = SearchResult(cost=len(nodes) - 1, nodes=nodes)
                            break
                        q.append(nxt)

        dt = perf_counter() - t0
        self._update_stats(dt)
        return result

    def _update_stats(self, dt: float) -> None:
        self.last_runtime = dt
        self.total_runtime += dt
        self.call_count += 1


ALGORITHM = BFSPlanner()
