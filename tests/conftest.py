from pathlib import Path

import pytest

from graph_builder import build_graph
from maze import MazeGrid

RESOURCES = Path(__file__).resolve().parent.parent / "resources"


@pytest.fixture
def maze_path():
    return RESOURCES / "maze.txt"


@pytest.fixture
def resource_maze(maze_path):
    return MazeGrid.load_file(maze_path)


@pytest.fixture
def bordered_maze():
    # 7x5, walls on the border and one wall inside
    return MazeGrid.load(
        "#######\n"
        "#     #\n"
        "# ##  #\n"
        "#     #\n"
        "#######\n"
    )


@pytest.fixture
def bordered_graph(bordered_maze):
    return build_graph(bordered_maze)
