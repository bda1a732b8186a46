import random

import networkx as nx
import pytest

from graph_builder import build_graph, scan_origins
from maze import MazeGrid


def _adjacent_open_pairs(maze):
    for row in range(maze.rows):
        for col in range(maze.cols):
            for nc, nr in ((col + 1, row), (col, row + 1)):
                if not maze.in_bounds(nc, nr):
                    continue
                if maze.is_wall(col, row) or maze.is_wall(nc, nr):
                    continue
                yield (col, row), (nc, nr)


def _is_origin(pos):
    col, row = pos
    return col >= 1 and row >= 1


def _index(maze, pos):
    return maze.get_index(*pos)


@pytest.fixture(params=range(5))
def random_maze(request):
    rng = random.Random(request.param)
    return MazeGrid.generate(rng.randint(1, 12), rng.randint(1, 12), 0.3, rng)


def test_node_count_matches_tiles(random_maze):
    graph = build_graph(random_maze)
    assert graph.number_of_nodes() == random_maze.cols * random_maze.rows
    assert list(graph.nodes) == list(range(len(random_maze.tiles)))


def test_open_3x3_edges():
    maze = MazeGrid.load("...\n...\n...\n")
    graph = build_graph(maze)
    assert graph.number_of_edges() == 8
    # corner (0, 0) is never a scan origin nor a neighbour of one
    assert graph.degree(0) == 0
    # top row and left column are not connected among themselves
    assert not graph.has_edge(1, 2)
    assert not graph.has_edge(3, 6)
    # but they hang off the interior cells
    assert graph.has_edge(1, 4)
    assert graph.has_edge(3, 4)


def test_full_scan_connects_every_adjacent_pair():
    maze = MazeGrid.load("...\n...\n...\n")
    graph = build_graph(maze, interior_only=False)
    assert graph.number_of_edges() == 12
    assert graph.degree(0) == 2


def test_edge_rule_on_random_mazes(random_maze):
    graph = build_graph(random_maze)

    expected = set()
    for a, b in _adjacent_open_pairs(random_maze):
        if _is_origin(a) or _is_origin(b):
            expected.add(frozenset((_index(random_maze, a), _index(random_maze, b))))

    actual = {frozenset(e) for e in graph.edges}
    assert actual == expected


def test_walls_are_isolated(random_maze):
    graph = build_graph(random_maze)
    for i, wall in enumerate(random_maze.tiles):
        if wall:
            assert graph.degree(i) == 0


def test_repeated_edge_adds_collapse(resource_maze, monkeypatch):
    calls = []
    add_edge = nx.Graph.add_edge

    def recording_add_edge(self, u, v, **attr):
        calls.append((u, v))
        return add_edge(self, u, v, **attr)

    monkeypatch.setattr(nx.Graph, "add_edge", recording_add_edge)
    graph = build_graph(resource_maze)

    pairs = [frozenset(c) for c in calls]
    distinct = set(pairs)
    # interior pairs are reached from both of their cells
    assert len(pairs) > len(distinct)
    seen = set(calls)
    assert any((v, u) in seen for u, v in calls)
    assert graph.number_of_edges() == len(distinct)
    assert {frozenset(e) for e in graph.edges} == distinct


def test_rebuild_is_identical(bordered_maze):
    a = build_graph(bordered_maze)
    b = build_graph(bordered_maze)
    assert set(a.edges) == set(b.edges)


def test_scan_origins_skip_first_row_and_column():
    maze = MazeGrid.load("...\n...\n")
    assert list(scan_origins(maze)) == [(1, 1), (2, 1)]
    assert len(list(scan_origins(maze, interior_only=False))) == 6


def test_single_row_maze_has_no_edges():
    graph = build_graph(MazeGrid.load(".....\n"))
    assert graph.number_of_nodes() == 5
    assert graph.number_of_edges() == 0
