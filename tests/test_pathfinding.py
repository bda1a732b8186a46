import random
from time import perf_counter

import networkx as nx
import pytest

from graph_builder import build_graph
from maze import MazeGrid
from pathfinding import PATHFINDING_ALGOS, SearchResult, get_algorithm
from pathfinding.astar import AStarPlanner, manhattan_heuristic, zero_heuristic
from pathfinding.bfs import BFSPlanner


OPEN_3X3 = "...\n...\n...\n"


def _shortest_len(graph, source, target):
    try:
        return nx.shortest_path_length(graph, source, target)
    except nx.NetworkXNoPath:
        return None


def _assert_valid_path(graph, path, source, target):
    assert path[0] == source
    assert path[-1] == target
    for u, v in zip(path, path[1:]):
        assert graph.has_edge(u, v)


def test_registry_contents():
    assert {"AStar", "AStarManhattan", "BFS"} <= set(PATHFINDING_ALGOS)
    assert get_algorithm("AStar").heuristic is zero_heuristic


def test_unknown_algorithm():
    with pytest.raises(ValueError, match="Unknown pathfinding algorithm"):
        get_algorithm("Dijkstra2000")


def test_open_3x3_corner_to_corner_full_scan():
    maze = MazeGrid.load(OPEN_3X3)
    graph = build_graph(maze, interior_only=False)
    path = AStarPlanner().plan(maze, graph, (0, 0), (2, 2))
    assert len(path) == 5
    _assert_valid_path(graph, path, 0, 8)


def test_open_3x3_corner_is_isolated_by_default():
    maze = MazeGrid.load(OPEN_3X3)
    graph = build_graph(maze)
    planner = AStarPlanner()
    assert planner.plan(maze, graph, (0, 0), (2, 2)) is None
    assert len(planner.plan(maze, graph, (1, 1), (2, 2))) == 3
    # top-left corner of the interior to the far corner through the middle
    assert len(planner.plan(maze, graph, (1, 0), (2, 2))) == 4


def test_wall_row_blocks_path():
    maze = MazeGrid.load(
        ".....\n"
        ".....\n"
        "#####\n"
        ".....\n"
    )
    graph = build_graph(maze)
    assert AStarPlanner().plan(maze, graph, (2, 1), (2, 3)) is None
    assert BFSPlanner().plan(maze, graph, (2, 1), (2, 3)) is None


@pytest.mark.parametrize(
    "start,goal",
    [((7, 0), (1, 1)), ((1, 1), (0, 5)), ((1, 1), (7, 5)), ((-1, 1), (1, 1)), ((1, 1), (1, -1))],
)
def test_out_of_bounds_is_no_path(bordered_maze, bordered_graph, start, goal):
    for planner in (AStarPlanner(), BFSPlanner()):
        assert planner.plan(bordered_maze, bordered_graph, start, goal) is None
        assert planner.plan_raw(bordered_maze, bordered_graph, start, goal) is None


def test_detour_around_inner_wall(bordered_maze, bordered_graph):
    # row 2 is "# ##  #": (2, 2) and (3, 2) are walls
    path = AStarPlanner().plan(bordered_maze, bordered_graph, (2, 1), (2, 3))
    assert len(path) == 5
    _assert_valid_path(bordered_graph, path, 9, 23)


def test_same_start_and_goal(bordered_maze, bordered_graph):
    assert AStarPlanner().plan(bordered_maze, bordered_graph, (1, 1), (1, 1)) == [8]
    assert BFSPlanner().plan(bordered_maze, bordered_graph, (1, 1), (1, 1)) == [8]


def test_wall_endpoint_is_unreachable(bordered_maze, bordered_graph):
    assert AStarPlanner().plan(bordered_maze, bordered_graph, (1, 1), (2, 2)) is None


def test_raw_result_carries_cost(bordered_maze, bordered_graph):
    planner = AStarPlanner()
    raw = planner.plan_raw(bordered_maze, bordered_graph, (1, 1), (5, 3))
    assert isinstance(raw, SearchResult)
    assert raw.cost == len(raw) - 1 == 6
    assert planner.plan(bordered_maze, bordered_graph, (1, 1), (5, 3)) == raw.nodes


@pytest.mark.parametrize("seed", range(6))
def test_optimal_against_networkx(seed):
    rng = random.Random(seed)
    maze = MazeGrid.generate(15, 12, 0.25, rng)
    graph = build_graph(maze)
    planners = [AStarPlanner(), AStarPlanner(heuristic=manhattan_heuristic), BFSPlanner()]

    for _ in range(40):
        start = (rng.randrange(maze.cols), rng.randrange(maze.rows))
        goal = (rng.randrange(maze.cols), rng.randrange(maze.rows))
        source, target = maze.get_index(*start), maze.get_index(*goal)
        expected = _shortest_len(graph, source, target)

        for planner in planners:
            path = planner.plan(maze, graph, start, goal)
            if expected is None:
                assert path is None
            else:
                assert len(path) - 1 == expected
                _assert_valid_path(graph, path, source, target)


def test_heuristic_is_pluggable(bordered_maze, bordered_graph):
    calls = []

    def counting(maze, node, goal):
        calls.append((node, goal))
        return 0

    planner = AStarPlanner(heuristic=counting)
    path = planner.plan(bordered_maze, bordered_graph, (1, 1), (5, 3))
    assert len(path) == 7
    assert calls and all(goal == 26 for _, goal in calls)


def test_manhattan_heuristic_values(bordered_maze):
    assert manhattan_heuristic(bordered_maze, 8, 26) == 6
    assert zero_heuristic(bordered_maze, 8, 26) == 0


def test_edge_cost_is_pluggable(bordered_maze, bordered_graph):
    planner = AStarPlanner(edge_cost=lambda u, v: 3)
    raw = planner.plan_raw(bordered_maze, bordered_graph, (1, 1), (3, 1))
    assert raw.cost == 6
    assert len(raw) == 3


def test_no_state_between_calls(bordered_maze, bordered_graph):
    planner = AStarPlanner()
    first = planner.plan(bordered_maze, bordered_graph, (1, 1), (5, 3))
    planner.plan(bordered_maze, bordered_graph, (5, 1), (1, 3))
    assert planner.plan(bordered_maze, bordered_graph, (1, 1), (5, 3)) == first


def test_stats_are_tracked(bordered_maze, bordered_graph):
    planner = AStarPlanner()
    planner.plan(bordered_maze, bordered_graph, (1, 1), (5, 3))
    planner.plan(bordered_maze, bordered_graph, (9, 9), (5, 3))
    assert planner.call_count == 2
    assert planner.total_runtime >= planner.last_runtime >= 0.0
    planner.reset_stats()
    assert planner.call_count == 0
    assert planner.total_runtime == 0.0


@pytest.mark.parametrize("planner", [AStarPlanner(), BFSPlanner()])
def test_stats_are_recorded_inside_the_timed_call(planner, bordered_maze, bordered_graph):
    planner.reset_stats()
    t0 = perf_counter()
    planner.plan(bordered_maze, bordered_graph, (1, 1), (5, 3))
    outer = perf_counter() - t0
    assert planner.call_count == 1
    assert 0.0 <= planner.last_runtime <= outer

    # out-of-bounds calls return early but are still counted
    assert planner.plan(bordered_maze, bordered_graph, (99, 0), (1, 1)) is None
    assert planner.call_count == 2
