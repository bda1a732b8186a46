# graph_builder.py
from __future__ import annotations

import logging
from typing import Iterator, Tuple

import networkx as nx

from maze import MazeGrid

logger = logging.getLogger(__name__)


def scan_origins(maze: MazeGrid, interior_only: bool = True) -> Iterator[Tuple[int, int]]:
    """
    Cells used as edge-scan origins.

    With interior_only (the default) row 0 and column 0 are skipped: they
    only receive edges as the neighbour of a cell at row >= 1 and col >= 1,
    so e.g. the corner (0, 0) is never connected. interior_only=False scans
    every cell.
    """
    first = 1 if interior_only else 0
    for row in range(first, maze.rows):
        for col in range(first, maze.cols):
            yield col, row


def build_graph(maze: MazeGrid, interior_only: bool = True) -> nx.Graph:
    """
    Undirected graph with one node per tile (node id == tile index, walls
    included as isolated nodes) and unit-cost edges between 4-adjacent
    open cells.
    """
    graph = nx.Graph(cols=maze.cols, rows=maze.rows)

    for i in range(len(maze.tiles)):
        graph.add_node(i)
    # networkx keeps insertion order; the search relies on node == index
    for expected, node in enumerate(graph.nodes):
        if node != expected:
            raise RuntimeError(
                f"Expects node to be equal of its index: {node} -> {expected}"
            )

    for col, row in scan_origins(maze, interior_only):
        cell = maze.get_cell(col, row)
        if cell is None:
            continue
        ci, wall = cell
        if wall:
            continue

        for nc, nr in ((col, row - 1), (col, row + 1), (col - 1, row), (col + 1, row)):
            neighbor = maze.get_cell(nc, nr)
            if neighbor is None:
                continue
            ni, n_wall = neighbor
            if not n_wall:
                # re-adding an existing edge is a no-op on nx.Graph
                graph.add_edge(ci, ni)

    logger.debug(
        "Built graph for %dx%d maze: %d nodes, %d edges",
        maze.cols,
        maze.rows,
        graph.number_of_nodes(),
        graph.number_of_edges(),
    )
    return graph
