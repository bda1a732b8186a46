# viz.py
from __future__ import annotations
from typing import Optional, Sequence
from pathlib import Path

import numpy as np
import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt
from matplotlib.patches import Patch

from maze import MazeGrid


def maze_image(maze: MazeGrid) -> np.ndarray:
    """(rows, cols, 3) RGB array: walls dark gray, open cells light background."""
    bgcolor = np.array([0.96, 0.96, 0.96])
    wall_color = np.array([0.30, 0.30, 0.30])

    walls = np.array(maze.tiles, dtype=bool).reshape(maze.rows, maze.cols)
    img = np.zeros((maze.rows, maze.cols, 3), dtype=float)
    img[:, :, :] = bgcolor
    img[walls] = wall_color
    return img


def draw_maze(
    maze: MazeGrid,
    out_path: str | Path,
    path: Optional[Sequence[int]] = None,
    title: str = "Maze",
) -> Path:
    """
    Draw the maze (row 0 at the top, as in the text file) and optionally a
    path of node indices on top of it.
    """
    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)

    rows, cols = maze.rows, maze.cols
    fig, ax = plt.subplots(figsize=(max(3.0, cols / 4.0), max(3.0, rows / 4.0)))
    ax.imshow(maze_image(maze), origin="upper")

    handles = [Patch(facecolor=(0.30, 0.30, 0.30), edgecolor="black", label="wall")]

    if path:
        xs, ys = zip(*(maze.index_to_pos(i) for i in path))
        (h_path,) = ax.plot(xs, ys, color="#1f77b4", linewidth=1.5, label="path")
        h_start = ax.scatter([xs[0]], [ys[0]], marker="o", s=60, c="#2ca02c",
                             edgecolors="white", linewidths=0.7, label="start", zorder=3)
        h_goal = ax.scatter([xs[-1]], [ys[-1]], marker="*", s=120, c="#d62728",
                            edgecolors="white", linewidths=0.7, label="goal", zorder=3)
        handles = [h_path, h_start, h_goal] + handles

    ax.set_xlim(-0.5, cols - 0.5)
    ax.set_ylim(rows - 0.5, -0.5)
    ax.set_aspect("equal")
    ax.set_xticks([])
    ax.set_yticks([])

    fig.suptitle(title, fontsize=14, y=0.98)
    fig.legend(
        handles=handles,
        loc="upper center",
        bbox_to_anchor=(0.5, 0.94),
        ncol=len(handles),
        fontsize=9,
        frameon=False,
    )
    fig.tight_layout(rect=[0.0, 0.0, 1.0, 0.92])

    fig.savefig(out_path, dpi=150)
    plt.close(fig)
    return out_path
